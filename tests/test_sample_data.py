"""
Tests for processing/sample_data.py
"""

from config.schema import VALID_STATE_CODES
from processing.sample_data import generate_sample_observations


class TestGenerateSampleObservations:
    def test_default_count(self):
        assert len(generate_sample_observations()) == 50

    def test_same_seed_same_data(self):
        assert generate_sample_observations(seed=3) == generate_sample_observations(seed=3)

    def test_different_seed_different_prices(self):
        first = [obs.unit_price for obs in generate_sample_observations(seed=1)]
        second = [obs.unit_price for obs in generate_sample_observations(seed=2)]
        assert first != second

    def test_observations_are_valid(self):
        for obs in generate_sample_observations(count=20):
            assert obs.state_code in VALID_STATE_CODES
            assert 5.0 <= obs.unit_price <= 25.0
            assert obs.description
            assert obs.retailer_name

    def test_cycles_products_and_locations(self):
        observations = generate_sample_observations(count=10)
        assert len({obs.description for obs in observations}) == 5
        assert {obs.state_code for obs in observations} == {"SP", "RJ", "MG", "CE", "PE"}

    def test_zero_count(self):
        assert generate_sample_observations(count=0) == []
