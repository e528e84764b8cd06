"""
Regional rollup — folds state aggregates into the five regions and places
city markers for the map view.

Coverage of a region is the percentage of its member states that have at
least one observation.  Every region has a fixed, non-empty state list, so
coverage is always defined (0.0 for a region without data).

Public API:
    rollup_regions(state_aggs, region_membership) → list[RegionAggregate]
    region_for_state(state_code) → str | None
    city_markers(state_aggs, cities) → list[CityMarker]
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from analysis.calculations import StateAggregate, _safe_mean, _safe_percentage
from config.regions import CITY_COORDINATES, REGIONS, STATE_REGION
from output.style import marker_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionAggregate:
    """Per-region rollup of its member states."""

    name: str
    states: tuple[str, ...]
    active_states: int
    total_states: int
    product_count: int
    retailer_count: int
    avg_price: float
    coverage: float


@dataclass(frozen=True)
class CityMarker:
    """A map marker for one reference city whose state has data."""

    city: str
    state_code: str
    latitude: float
    longitude: float
    region: str | None
    product_count: int
    retailer_count: int
    avg_price: float
    color: str


def region_for_state(state_code: str) -> str | None:
    """Region name for a state code, None for unknown codes."""
    return STATE_REGION.get(state_code)


def rollup_regions(
    state_aggs: Sequence[StateAggregate],
    region_membership: dict[str, tuple[str, ...]] = REGIONS,
) -> list[RegionAggregate]:
    """
    Build one RegionAggregate per region in *region_membership*.

    Args:
        state_aggs: Output of ``state_aggregates``.
        region_membership: region name → member state codes.

    Returns:
        Regions sorted by product count descending; ties keep the order of
        *region_membership*.  Regions without data are included with zero
        counts.
    """
    by_state = {agg.state_code: agg for agg in state_aggs}

    regions: list[RegionAggregate] = []
    for name, members in region_membership.items():
        present = [by_state[code] for code in members if code in by_state]
        active = [agg for agg in present if agg.count > 0]

        retailers = dict.fromkeys(
            retailer for agg in present for retailer in agg.retailers
        )
        priced_count = sum(agg.priced_count for agg in present)
        price_total = sum(agg.price_total for agg in present)

        regions.append(RegionAggregate(
            name=name,
            states=tuple(members),
            active_states=len(active),
            total_states=len(members),
            product_count=sum(agg.count for agg in present),
            retailer_count=len(retailers),
            avg_price=_safe_mean(price_total, priced_count),
            coverage=_safe_percentage(len(active), len(members)),
        ))

    regions.sort(key=lambda region: region.product_count, reverse=True)

    active_regions = sum(1 for region in regions if region.product_count > 0)
    logger.info(f"Regional rollup: {active_regions} of {len(regions)} regions with data")
    return regions


def city_markers(
    state_aggs: Sequence[StateAggregate],
    cities: Sequence[tuple[str, str, float, float]] = CITY_COORDINATES,
) -> list[CityMarker]:
    """
    Join the reference city table against state aggregates.

    Each city carries the numbers of its whole state.  Cities whose state has
    no observations are left out.  Marker colour follows the state's average
    price.
    """
    by_state = {agg.state_code: agg for agg in state_aggs}

    markers: list[CityMarker] = []
    for city, state_code, latitude, longitude in cities:
        agg = by_state.get(state_code)
        if agg is None or agg.count == 0:
            continue
        markers.append(CityMarker(
            city=city,
            state_code=state_code,
            latitude=latitude,
            longitude=longitude,
            region=region_for_state(state_code),
            product_count=agg.count,
            retailer_count=agg.distinct_retailers,
            avg_price=agg.avg_price,
            color=marker_color(agg.avg_price),
        ))

    logger.debug(f"City markers: {len(markers)} of {len(cities)} reference cities have data")
    return markers
