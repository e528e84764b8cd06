"""
Dashboard data orchestrator.

Runs one full aggregation pass for the current filter/sort selection:
Filter → Group → Aggregate → Rollup.  The selection is passed in explicitly;
nothing is cached or kept between calls, so every call is re-entrant and the
same inputs always give the same output.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from analysis.calculations import (
    DatasetOverview,
    StateAggregate,
    dataset_overview,
    state_aggregates,
)
from analysis.filters import (
    FilterCriteria,
    FilterOptions,
    filter_observations,
    filter_options,
)
from analysis.product_groups import (
    GroupSort,
    ProductGroup,
    build_product_groups,
    sort_groups,
)
from analysis.regional import CityMarker, RegionAggregate, city_markers, rollup_regions
from processing.models import ProductObservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardData:
    """All view data for one filter/sort selection."""

    criteria: FilterCriteria
    sort_by: GroupSort
    observations: list[ProductObservation] = field(default_factory=list)
    groups: list[ProductGroup] = field(default_factory=list)
    states: list[StateAggregate] = field(default_factory=list)
    regions: list[RegionAggregate] = field(default_factory=list)
    markers: list[CityMarker] = field(default_factory=list)
    overview: DatasetOverview = field(default_factory=DatasetOverview)
    options: FilterOptions = field(default_factory=FilterOptions)

    @property
    def is_empty(self) -> bool:
        return not self.observations


def build_dashboard(
    observations: Sequence[ProductObservation],
    criteria: FilterCriteria = FilterCriteria(),
    sort_by: GroupSort | str = GroupSort.NAME,
) -> DashboardData:
    """
    Compute every dashboard view for one selection.

    Args:
        observations: The full, validated observation list (stable order).
        criteria: Filter selection.
        sort_by: Grid sort option.

    Returns:
        DashboardData.  Filter options are derived from the unfiltered input
        so selectors keep offering every choice.

    Raises:
        ValueError: if *sort_by* is not a known sort option.
    """
    sort_by = GroupSort(sort_by)

    filtered = filter_observations(observations, criteria)
    groups = sort_groups(build_product_groups(filtered), sort_by)
    states = state_aggregates(filtered)
    regions = rollup_regions(states)

    data = DashboardData(
        criteria=criteria,
        sort_by=sort_by,
        observations=filtered,
        groups=groups,
        states=states,
        regions=regions,
        markers=city_markers(states),
        overview=dataset_overview(filtered),
        options=filter_options(observations),
    )

    logger.info(
        f"Dashboard pass: {len(filtered)}/{len(observations)} observations, "
        f"{len(groups)} groups, {len(states)} states"
    )
    return data
