"""
Filter engine — narrows the observation set before grouping.

Filters compose with logical AND.  Every selector accepts the "all" sentinel
to disable it; the free-text search is disabled when blank.  The relative
order of the surviving observations is the input order.

The category of an observation is derived from its description by an
ordered keyword classifier (first matching rule wins).  Order matters:
"Doce de Leite Cremoso com Queijo" is "Doce de Leite", not "Queijo", only
because the dulce-de-leite rule is checked first.

Public API:
    classify_category(description) → str
    filter_observations(observations, criteria) → list[ProductObservation]
    filter_options(observations) → FilterOptions
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from config.normalization_rules import (
    ALL,
    CATEGORY_RULES,
    DEFAULT_CATEGORY,
    HIGH_BAND_LOWER,
    LOW_BAND_UPPER,
)
from config.schema import VALID_STATE_CODES
from processing.models import ProductObservation
from processing.numeric_converter import parse_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterCriteria:
    """User-selected filters, passed explicitly into every dashboard pass."""

    category: str = ALL
    state: str = ALL
    retailer: str = ALL
    price_band: str = ALL
    search: str = ""

    @property
    def is_active(self) -> bool:
        return (
            any(value != ALL for value in (self.category, self.state, self.retailer, self.price_band))
            or bool(self.search.strip())
        )


@dataclass(frozen=True)
class FilterOptions:
    """Choices for each selector, "all" first."""

    categories: tuple[str, ...] = (ALL,)
    states: tuple[str, ...] = (ALL,)
    retailers: tuple[str, ...] = (ALL,)


def classify_category(description: str) -> str:
    """
    Map a description to its product category.

    Matching is a case-insensitive substring test on the raw description
    (accents kept).  Unmatched descriptions are "Outros".
    """
    text = (description or "").lower()
    for category, keywords in CATEGORY_RULES:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def in_price_band(price: float | None, band: str) -> bool:
    """
    Price band membership.

    low: < 8, medium: 8 to 15 inclusive, high: > 15.  "all" and unknown band
    names accept everything; a missing price matches no specific band.
    """
    if band == "low":
        return price is not None and price < LOW_BAND_UPPER
    if band == "medium":
        return price is not None and LOW_BAND_UPPER <= price <= HIGH_BAND_LOWER
    if band == "high":
        return price is not None and price > HIGH_BAND_LOWER
    return True


def filter_observations(
    observations: Sequence[ProductObservation],
    criteria: FilterCriteria,
) -> list[ProductObservation]:
    """
    Apply every active predicate of *criteria*.

    Args:
        observations: Ordered observations.
        criteria: Category, state, retailer substring, price band and free
                  text search.

    Returns:
        The observations matching all predicates, in input order.
    """
    retailer_needle = criteria.retailer.lower()
    search_needle = criteria.search.strip().lower()

    filtered: list[ProductObservation] = []
    for observation in observations:
        if criteria.category != ALL and classify_category(observation.description) != criteria.category:
            continue
        if criteria.state != ALL and observation.state_code != criteria.state:
            continue
        if criteria.retailer != ALL and retailer_needle not in observation.retailer_name.lower():
            continue
        if criteria.price_band != ALL and not in_price_band(parse_price(observation.unit_price), criteria.price_band):
            continue
        if search_needle and not _matches_search(observation, search_needle):
            continue
        filtered.append(observation)

    if criteria.is_active:
        logger.info(f"Filters kept {len(filtered)} of {len(observations)} observations ({criteria})")

    return filtered


def filter_options(observations: Sequence[ProductObservation]) -> FilterOptions:
    """
    Selector choices derived from the data.

    Categories and retailers (first word of the retailer name) in first-seen
    order; states present in the data and valid, sorted alphabetically.
    """
    categories = dict.fromkeys(classify_category(obs.description) for obs in observations)
    valid_states = set(VALID_STATE_CODES)
    states = sorted({obs.state_code for obs in observations if obs.state_code in valid_states})
    retailers = dict.fromkeys(
        obs.retailer_name.split(" ")[0] for obs in observations if obs.retailer_name.strip()
    )

    return FilterOptions(
        categories=(ALL, *categories),
        states=(ALL, *states),
        retailers=(ALL, *retailers),
    )


def _matches_search(observation: ProductObservation, needle: str) -> bool:
    return (
        needle in observation.description.lower()
        or needle in observation.retailer_name.lower()
        or needle in observation.city.lower()
    )
