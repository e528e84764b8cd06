"""
Tests for processing/record_validator.py

Covers: valid rows → observations, each rejection reason, state-code
cleaning, optional price parsing, image placeholders and missing columns.
"""

import pandas as pd
import pytest

from processing.models import ProductObservation
from processing.record_validator import validate_records


# ---------------------------------------------------------------------------
# Helper to build a minimal DataFrame for testing
# ---------------------------------------------------------------------------

def _make_df(overrides: dict | None = None, rows: int = 1) -> pd.DataFrame:
    """Build a DataFrame of valid catalog rows, optionally overridden."""
    base = {
        "product_id": [f"P{i}" for i in range(rows)],
        "description": ["Leite Condensado 395g"] * rows,
        "unit_price": ["8,50"] * rows,
        "retailer_name": ["Carrefour - Pinheiros"] * rows,
        "state_code": ["SP"] * rows,
        "city": ["São Paulo"] * rows,
        "image_ref": ["abc.png"] * rows,
    }
    if overrides:
        for key, value in overrides.items():
            if isinstance(value, list):
                base[key] = value
            else:
                base[key] = [value] * rows
    return pd.DataFrame(base)


class TestValidRows:
    def test_builds_observation(self):
        result = validate_records(_make_df())

        assert len(result.observations) == 1
        obs = result.observations[0]
        assert isinstance(obs, ProductObservation)
        assert obs.unit_price == 8.5
        assert obs.state_code == "SP"
        assert obs.retailer_name == "Carrefour - Pinheiros"
        assert obs.product_id == "P0"

    def test_source_order_kept(self):
        df = _make_df({"description": ["A", "B", "C"]}, rows=3)
        result = validate_records(df)
        assert [obs.description for obs in result.observations] == ["A", "B", "C"]

    def test_state_code_cleaned(self):
        result = validate_records(_make_df({"state_code": " sp "}))
        assert result.observations[0].state_code == "SP"

    def test_zero_price_is_valid(self):
        result = validate_records(_make_df({"unit_price": "0"}))
        assert result.observations[0].unit_price == 0.0

    def test_optional_prices_parsed(self):
        df = _make_df({"unit_original_price": "R$ 10,90", "unit_min_price": "abc"})
        obs = validate_records(df).observations[0]
        assert obs.unit_original_price == pytest.approx(10.9)
        assert obs.unit_min_price is None

    def test_missing_optional_columns_default(self):
        obs = validate_records(_make_df()).observations[0]
        assert obs.neighborhood == ""
        assert obs.merchant_id == ""
        assert obs.unit_original_price is None

    @pytest.mark.parametrize("placeholder", ["N/A", "", "  ", "none"])
    def test_image_placeholder_becomes_none(self, placeholder):
        obs = validate_records(_make_df({"image_ref": placeholder})).observations[0]
        assert obs.image_ref is None
        assert obs.has_image is False


class TestRejectedRows:
    def test_invalid_state(self):
        result = validate_records(_make_df({"state_code": "XX"}))
        assert result.observations == []
        assert result.rejected[0].reason == "Invalid state code 'XX'"

    def test_invalid_price(self):
        result = validate_records(_make_df({"unit_price": "abc"}))
        assert result.rejected[0].reason == "Invalid unit price 'abc'"

    def test_negative_price(self):
        result = validate_records(_make_df({"unit_price": "-1"}))
        assert len(result.rejected) == 1

    def test_missing_description(self):
        result = validate_records(_make_df({"description": "  "}))
        assert result.rejected[0].reason == "Missing description"

    def test_missing_retailer(self):
        result = validate_records(_make_df({"retailer_name": ""}))
        assert result.rejected[0].reason == "Missing retailer"

    def test_row_index_and_values_reported(self):
        df = _make_df({"state_code": ["SP", "ZZ", "MG"]}, rows=3)
        result = validate_records(df)
        assert len(result.observations) == 2
        assert result.rejected[0].row_index == 1
        assert result.rejected[0].values["state_code"] == "ZZ"
        assert result.total_rows == 3


class TestEdgeCases:
    def test_empty_dataframe(self):
        df = _make_df(rows=0)
        result = validate_records(df)
        assert result.observations == []
        assert result.rejected == []

    def test_missing_required_column_raises(self):
        df = _make_df().drop(columns=["unit_price"])
        with pytest.raises(ValueError, match="unit_price"):
            validate_records(df)
