"""
Per-group analysis view: breakdowns, distribution and insights for one
ProductGroup.

Every number is derived from the group's members only.  An empty or
price-less group yields zero-valued fields and empty lists, never an error.
"""

import logging
from dataclasses import dataclass, field

from analysis.calculations import (
    HistogramBucket,
    RetailerAggregate,
    StateAggregate,
    _priced,
    _safe_percentage,
    median_price,
    price_histogram,
    retailer_aggregates,
    state_aggregates,
)
from analysis.product_groups import ProductGroup
from config.schema import TOTAL_STATES
from processing.models import ProductObservation

logger = logging.getLogger(__name__)

LISTING_SIZE = 5
EXPANSION_CANDIDATES = 3


@dataclass(frozen=True)
class GroupInsights:
    """Headline findings for the insights panel."""

    cheapest_state: str | None = None
    cheapest_state_avg: float = 0.0
    interstate_spread: float = 0.0
    top_state: str | None = None
    top_state_share: float = 0.0
    best_retailer: str | None = None
    best_retailer_avg: float = 0.0
    best_price_location: str = ""
    priciest_location: str = ""
    expansion_candidates: tuple[str, ...] = ()


@dataclass(frozen=True)
class GroupAnalysis:
    """Everything the analysis view shows for one group."""

    group: ProductGroup
    state_breakdown: list[StateAggregate] = field(default_factory=list)
    retailer_ranking: list[RetailerAggregate] = field(default_factory=list)
    histogram: list[HistogramBucket] = field(default_factory=list)
    total_variance: float = 0.0
    median_price: float = 0.0
    national_coverage: float = 0.0
    cheapest_listings: list[ProductObservation] = field(default_factory=list)
    priciest_listings: list[ProductObservation] = field(default_factory=list)
    insights: GroupInsights = field(default_factory=GroupInsights)


def analyze_group(group: ProductGroup) -> GroupAnalysis:
    """
    Build the analysis view for *group*.

    Args:
        group: A ProductGroup from ``build_product_groups``.

    Returns:
        GroupAnalysis with state and retailer breakdowns, the 5-bucket
        histogram, lower-median price, coverage over the 27 states, the five
        cheapest/priciest listings and the insights panel.
    """
    members = group.members
    priced = _priced(members)
    prices = [price for _, price in priced]

    breakdown = state_aggregates(members)
    ranking = retailer_aggregates(members)

    by_price = sorted(priced, key=lambda pair: pair[1])
    cheapest_listings = [obs for obs, _ in by_price[:LISTING_SIZE]]
    by_price_desc = sorted(priced, key=lambda pair: pair[1], reverse=True)
    priciest_listings = [obs for obs, _ in by_price_desc[:LISTING_SIZE]]

    analysis = GroupAnalysis(
        group=group,
        state_breakdown=breakdown,
        retailer_ranking=ranking,
        histogram=price_histogram(members),
        total_variance=(max(prices) - min(prices)) if prices else 0.0,
        median_price=median_price(prices),
        national_coverage=_safe_percentage(group.state_count, TOTAL_STATES),
        cheapest_listings=cheapest_listings,
        priciest_listings=priciest_listings,
        insights=_build_insights(group, breakdown, ranking),
    )

    logger.debug(
        f"Analysed group '{group.group_key}': {len(members)} observations, "
        f"{len(breakdown)} states, {len(ranking)} retailers"
    )
    return analysis


def _build_insights(
    group: ProductGroup,
    breakdown: list[StateAggregate],
    ranking: list[RetailerAggregate],
) -> GroupInsights:
    """Derive the insights panel from the group's breakdowns."""
    if not breakdown:
        return GroupInsights()

    priced_states = [agg for agg in breakdown if agg.priced_count > 0]
    cheapest = min(priced_states, key=lambda agg: agg.avg_price) if priced_states else None
    spread = 0.0
    if priced_states:
        averages = [agg.avg_price for agg in priced_states]
        spread = max(averages) - min(averages)

    top = breakdown[0]
    best = ranking[0] if ranking else None

    return GroupInsights(
        cheapest_state=cheapest.state_code if cheapest else None,
        cheapest_state_avg=cheapest.avg_price if cheapest else 0.0,
        interstate_spread=spread,
        top_state=top.state_code,
        top_state_share=_safe_percentage(top.count, group.total_products),
        best_retailer=best.retailer if best else None,
        best_retailer_avg=best.avg_price if best else 0.0,
        best_price_location=group.min_price_location,
        priciest_location=group.max_price_location,
        expansion_candidates=tuple(agg.state_code for agg in breakdown[-EXPANSION_CANDIDATES:]),
    )
