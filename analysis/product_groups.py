"""
Product groups — clusters of observations with their price statistics.

Clusters come from the similarity grouper; statistics from the aggregator.
Groups are rebuilt from scratch on every pass and never mutated.

Public API:
    build_product_groups(observations) → list[ProductGroup]
    sort_groups(groups, sort_by) → list[ProductGroup]
"""

import logging
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from analysis.calculations import aggregate
from analysis.filters import classify_category
from processing.grouper import group_observations
from processing.models import ProductObservation

logger = logging.getLogger(__name__)


class GroupSort(str, Enum):
    """Grid sort options."""

    NAME = "name"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    MARKETS = "markets"
    VARIATION = "variation"


@dataclass(frozen=True)
class ProductGroup:
    """Observations treated as one product, with derived statistics."""

    group_key: str
    description: str
    members: tuple[ProductObservation, ...]
    category: str
    min_price: float
    max_price: float
    avg_price: float
    market_count: int
    state_count: int
    cheapest: ProductObservation | None
    priciest: ProductObservation | None
    representative: ProductObservation

    @property
    def price_variation(self) -> float:
        return self.max_price - self.min_price

    @property
    def total_products(self) -> int:
        return len(self.members)

    @property
    def min_price_location(self) -> str:
        return self.cheapest.location_label if self.cheapest else ""

    @property
    def max_price_location(self) -> str:
        return self.priciest.location_label if self.priciest else ""


def build_product_groups(observations: Sequence[ProductObservation]) -> list[ProductGroup]:
    """
    Group observations and attach statistics to every group.

    Args:
        observations: Ordered observations (usually already filtered).

    Returns:
        One ProductGroup per cluster, in cluster discovery order.
    """
    groups: list[ProductGroup] = []

    for cluster in group_observations(observations):
        members = cluster.members
        summary = aggregate(members)
        first = members[0]
        representative = next((obs for obs in members if obs.has_image), first)

        groups.append(ProductGroup(
            group_key=cluster.key,
            description=first.description,
            members=members,
            category=classify_category(first.description),
            min_price=summary.min_price,
            max_price=summary.max_price,
            avg_price=summary.avg_price,
            market_count=summary.distinct_retailers,
            state_count=summary.distinct_states,
            cheapest=summary.cheapest,
            priciest=summary.priciest,
            representative=representative,
        ))

    logger.info(f"Built {len(groups)} product groups from {len(observations)} observations")
    return groups


def sort_groups(
    groups: Sequence[ProductGroup],
    sort_by: GroupSort | str = GroupSort.NAME,
) -> list[ProductGroup]:
    """
    Order groups for the grid.  The sort is stable.

    Raises:
        ValueError: if *sort_by* is not a GroupSort value.
    """
    sort_by = GroupSort(sort_by)

    if sort_by is GroupSort.PRICE_ASC:
        return sorted(groups, key=lambda g: g.avg_price)
    if sort_by is GroupSort.PRICE_DESC:
        return sorted(groups, key=lambda g: g.avg_price, reverse=True)
    if sort_by is GroupSort.MARKETS:
        return sorted(groups, key=lambda g: g.market_count, reverse=True)
    if sort_by is GroupSort.VARIATION:
        return sorted(groups, key=lambda g: g.price_variation, reverse=True)
    return sorted(groups, key=lambda g: _collation_key(g.description))


def _collation_key(text: str) -> tuple[str, str]:
    """
    Accent- and case-insensitive primary key, raw text as tie-break.

    Approximates a pt-BR locale compare for letters only: punctuation and
    digits keep code-point order, where a locale collator would order them
    differently.
    """
    decomposed = unicodedata.normalize("NFD", text)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, text
