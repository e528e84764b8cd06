"""
Pure aggregation functions over observation sequences.

Each function takes an ordered sequence of ProductObservation records and
returns value objects ready for the grid, map and analysis views.  No side
effects, no I/O.

Numeric semantics shared by every function:
- Prices are parsed as decimals; negative or non-finite prices are left out
  of price statistics (they still count as observations).
- Empty input or an empty price set → 0.0 for avg/min/max/median.
- Division by zero → 0.0.
- Ties for cheapest/priciest → first observation in iteration order.
- Distinct counts compare retailer names / state codes by value.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from config.normalization_rules import PRICE_HISTOGRAM_BUCKETS
from config.regions import STATE_NAMES, STATE_REGION
from processing.models import ProductObservation
from processing.numeric_converter import parse_price

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PriceSummary:
    """Statistical summary of one set of observations."""

    count: int = 0
    avg_price: float = 0.0
    min_price: float = 0.0
    max_price: float = 0.0
    median_price: float = 0.0
    distinct_retailers: int = 0
    distinct_states: int = 0
    cheapest: ProductObservation | None = None
    priciest: ProductObservation | None = None

    @property
    def price_variation(self) -> float:
        return self.max_price - self.min_price


@dataclass(frozen=True)
class StateAggregate:
    """Per-state rollup.  ``price_total``/``priced_count`` feed regional means."""

    state_code: str
    state_name: str
    region: str | None
    count: int
    priced_count: int
    price_total: float
    avg_price: float
    min_price: float
    max_price: float
    retailers: tuple[str, ...] = ()

    @property
    def distinct_retailers(self) -> int:
        return len(self.retailers)


@dataclass(frozen=True)
class RetailerAggregate:
    """Per-retailer-chain rollup (chain = name before the first ' - ')."""

    retailer: str
    count: int
    avg_price: float
    min_price: float
    max_price: float
    locations: int


@dataclass(frozen=True)
class HistogramBucket:
    """One half-open [lower, upper) price bucket; upper=None is unbounded."""

    label: str
    lower: float
    upper: float | None
    count: int

    def contains(self, price: float) -> bool:
        return price >= self.lower and (self.upper is None or price < self.upper)


@dataclass(frozen=True)
class DatasetOverview:
    """Headline numbers for the whole (filtered) dataset."""

    total_products: int = 0
    avg_price: float = 0.0
    total_stores: int = 0
    total_states: int = 0


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _safe_mean(total: float, count: int) -> float:
    """total / count, or 0.0 when count is 0."""
    if count == 0:
        return 0.0
    return total / count


def _safe_percentage(numerator: float, denominator: float) -> float:
    """
    Calculate percentage, handling division by zero.

    Returns:
        (numerator / denominator) * 100, or 0.0 if denominator is 0
    """
    if denominator == 0 or math.isnan(denominator):
        return 0.0
    return (numerator / denominator) * 100


def observation_price(observation: ProductObservation) -> float | None:
    """The observation's unit price if usable for statistics, else None."""
    return parse_price(observation.unit_price)


def _priced(
    observations: Sequence[ProductObservation],
) -> list[tuple[ProductObservation, float]]:
    """(observation, price) pairs for observations with a usable price."""
    pairs = []
    for observation in observations:
        price = observation_price(observation)
        if price is not None:
            pairs.append((observation, price))
    return pairs


def _distinct(values) -> list:
    """Unique values in first-seen order."""
    return list(dict.fromkeys(values))


def retailer_chain(retailer_name: str) -> str:
    """'Carrefour - Pinheiros' → 'Carrefour'."""
    return retailer_name.split(" - ")[0]


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def median_price(prices: Sequence[float]) -> float:
    """
    Lower median of *prices*.

    For an even number of prices the lower of the two middle values is
    returned, e.g. [5, 10, 15, 20] → 10.  Empty input → 0.0.
    """
    if not prices:
        return 0.0
    ordered = sorted(prices)
    return ordered[(len(ordered) - 1) // 2]


def aggregate(observations: Sequence[ProductObservation]) -> PriceSummary:
    """
    Summarise prices, retailers and states of a set of observations.

    Args:
        observations: Ordered observations (may be empty).

    Returns:
        PriceSummary.  All price fields are 0.0 and cheapest/priciest None
        when no observation carries a usable price.
    """
    priced = _priced(observations)
    prices = [price for _, price in priced]

    distinct_retailers = len(_distinct(obs.retailer_name for obs in observations))
    distinct_states = len(_distinct(obs.state_code for obs in observations))

    if not priced:
        return PriceSummary(
            count=len(observations),
            distinct_retailers=distinct_retailers,
            distinct_states=distinct_states,
        )

    min_value = min(prices)
    max_value = max(prices)
    cheapest = next(obs for obs, price in priced if price == min_value)
    priciest = next(obs for obs, price in priced if price == max_value)

    return PriceSummary(
        count=len(observations),
        avg_price=_safe_mean(sum(prices), len(prices)),
        min_price=min_value,
        max_price=max_value,
        median_price=median_price(prices),
        distinct_retailers=distinct_retailers,
        distinct_states=distinct_states,
        cheapest=cheapest,
        priciest=priciest,
    )


def state_aggregates(
    observations: Sequence[ProductObservation],
    state_names: dict[str, str] = STATE_NAMES,
) -> list[StateAggregate]:
    """
    Roll observations up per state code.

    Args:
        observations: Ordered observations.
        state_names: state code → display name (unknown codes show the code).

    Returns:
        One StateAggregate per state present, sorted by observation count
        descending; equal counts keep first-seen order.
    """
    buckets: dict[str, list[ProductObservation]] = {}
    for observation in observations:
        buckets.setdefault(observation.state_code, []).append(observation)

    aggregates: list[StateAggregate] = []
    for state_code, members in buckets.items():
        prices = [price for _, price in _priced(members)]
        aggregates.append(StateAggregate(
            state_code=state_code,
            state_name=state_names.get(state_code, state_code),
            region=STATE_REGION.get(state_code),
            count=len(members),
            priced_count=len(prices),
            price_total=sum(prices),
            avg_price=_safe_mean(sum(prices), len(prices)),
            min_price=min(prices) if prices else 0.0,
            max_price=max(prices) if prices else 0.0,
            retailers=tuple(_distinct(obs.retailer_name for obs in members)),
        ))

    aggregates.sort(key=lambda agg: agg.count, reverse=True)

    logger.debug(f"State aggregates: {len(aggregates)} states from {len(observations)} observations")
    return aggregates


def retailer_aggregates(observations: Sequence[ProductObservation]) -> list[RetailerAggregate]:
    """
    Roll observations up per retailer chain.

    Returns:
        One RetailerAggregate per chain, cheapest average first; equal
        averages keep first-seen order.
    """
    buckets: dict[str, list[ProductObservation]] = {}
    for observation in observations:
        buckets.setdefault(retailer_chain(observation.retailer_name), []).append(observation)

    aggregates: list[RetailerAggregate] = []
    for chain, members in buckets.items():
        prices = [price for _, price in _priced(members)]
        locations = _distinct(f"{obs.city} - {obs.state_code}" for obs in members)
        aggregates.append(RetailerAggregate(
            retailer=chain,
            count=len(members),
            avg_price=_safe_mean(sum(prices), len(prices)),
            min_price=min(prices) if prices else 0.0,
            max_price=max(prices) if prices else 0.0,
            locations=len(locations),
        ))

    aggregates.sort(key=lambda agg: agg.avg_price)
    return aggregates


def price_histogram(
    observations: Sequence[ProductObservation],
    buckets: list[tuple[str, float, float | None]] = PRICE_HISTOGRAM_BUCKETS,
) -> list[HistogramBucket]:
    """
    Count observations per fixed price bucket.

    Buckets are half-open [lower, upper); the last is unbounded above.
    Observations without a usable price fall in no bucket.
    """
    prices = [price for _, price in _priced(observations)]

    histogram: list[HistogramBucket] = []
    for label, lower, upper in buckets:
        empty = HistogramBucket(label=label, lower=lower, upper=upper, count=0)
        count = sum(1 for price in prices if empty.contains(price))
        histogram.append(HistogramBucket(label=label, lower=lower, upper=upper, count=count))

    return histogram


def dataset_overview(observations: Sequence[ProductObservation]) -> DatasetOverview:
    """
    Headline metrics: observation count, mean price, distinct stores
    (retailer + city) and distinct states.
    """
    prices = [price for _, price in _priced(observations)]
    stores = _distinct((obs.retailer_name, obs.city) for obs in observations)
    states = _distinct(obs.state_code for obs in observations)

    return DatasetOverview(
        total_products=len(observations),
        avg_price=_safe_mean(sum(prices), len(prices)),
        total_stores=len(stores),
        total_states=len(states),
    )
