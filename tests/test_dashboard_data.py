"""
Tests for analysis/dashboard_data.py — one full Filter → Group → Aggregate →
Rollup pass.
"""

import pytest

from analysis.dashboard_data import build_dashboard
from analysis.filters import FilterCriteria
from analysis.product_groups import GroupSort
from processing.models import ProductObservation


def _make_observation(description, price, state, retailer="Extra", city="") -> ProductObservation:
    return ProductObservation(
        product_id=f"{description}-{state}-{price}",
        description=description,
        unit_price=price,
        retailer_name=retailer,
        state_code=state,
        city=city,
    )


@pytest.fixture
def observations() -> list[ProductObservation]:
    return [
        _make_observation("Leite Condensado 395g", 8.50, "SP", city="São Paulo"),
        _make_observation("Leite Condensado Lata", 9.00, "SP", retailer="Carrefour", city="São Paulo"),
        _make_observation("Queijo Minas", 12.00, "MG", city="Belo Horizonte"),
    ]


class TestBuildDashboard:
    def test_default_pass(self, observations):
        data = build_dashboard(observations)

        assert len(data.observations) == 3
        assert [g.total_products for g in data.groups] == [2, 1]
        assert [(s.state_code, s.count) for s in data.states] == [("SP", 2), ("MG", 1)]
        assert data.regions[0].name == "Sudeste"
        assert data.regions[0].coverage == 50.0
        assert {m.city for m in data.markers} == {"São Paulo", "Belo Horizonte"}
        assert data.overview.total_products == 3
        assert data.overview.total_states == 2

    def test_groups_sorted(self, observations):
        data = build_dashboard(observations, sort_by=GroupSort.PRICE_DESC)
        assert [g.avg_price for g in data.groups] == pytest.approx([12.0, 8.75])

    def test_sort_accepts_string(self, observations):
        data = build_dashboard(observations, sort_by="markets")
        assert data.sort_by is GroupSort.MARKETS
        assert data.groups[0].market_count == 2

    def test_filters_applied_before_grouping(self, observations):
        data = build_dashboard(observations, FilterCriteria(state="SP"))
        assert len(data.groups) == 1
        assert data.groups[0].avg_price == pytest.approx(8.75)
        assert [s.state_code for s in data.states] == ["SP"]

    def test_options_from_unfiltered_input(self, observations):
        data = build_dashboard(observations, FilterCriteria(state="SP"))
        assert data.options.states == ("all", "MG", "SP")

    def test_no_match_is_empty_not_error(self, observations):
        data = build_dashboard(observations, FilterCriteria(search="iogurte"))
        assert data.is_empty
        assert data.groups == []
        assert data.overview.avg_price == 0.0
        assert len(data.regions) == 5

    def test_empty_input(self):
        data = build_dashboard([])
        assert data.is_empty
        assert data.markers == []

    def test_idempotent(self, observations):
        criteria = FilterCriteria(price_band="medium")
        assert build_dashboard(observations, criteria) == build_dashboard(observations, criteria)

    def test_unknown_sort_raises(self, observations):
        with pytest.raises(ValueError):
            build_dashboard(observations, sort_by="newest")
