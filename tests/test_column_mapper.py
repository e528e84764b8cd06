"""
Tests for processing/column_mapper.py and utils/fuzzy_match.py

Covers: exact canonical names, Portuguese/legacy aliases, fuzzy matches,
unmapped headers, duplicate claims and the rename map.
"""

from processing.column_mapper import ColumnMappingResult, map_columns
from utils.fuzzy_match import best_match


class TestExactMatches:
    def test_canonical_names_map_to_themselves(self):
        result = map_columns(["description", "unit_price", "state_code"])
        assert result.mapping == {
            "description": "description",
            "unit_price": "unit_price",
            "state_code": "state_code",
        }
        assert result.unmapped == []

    def test_case_and_whitespace_insensitive(self):
        result = map_columns(["  Description ", "UNIT_PRICE"])
        assert result.mapping["  Description "] == "description"
        assert result.mapping["UNIT_PRICE"] == "unit_price"

    def test_exact_confidence_is_100(self):
        result = map_columns(["city"])
        assert result.confidence["city"] == 100


class TestKnownRenames:
    def test_portuguese_headers(self):
        result = map_columns(["mercado", "uf", "logo_url", "cidade", "bairro"])
        assert result.mapping == {
            "mercado": "retailer_name",
            "uf": "state_code",
            "logo_url": "image_ref",
            "cidade": "city",
            "bairro": "neighborhood",
        }

    def test_accented_alias(self):
        result = map_columns(["Preço"])
        assert result.mapping["Preço"] == "unit_price"


class TestFuzzyMatches:
    def test_space_instead_of_underscore(self):
        result = map_columns(["unit original price"])
        assert result.mapping["unit original price"] == "unit_original_price"

    def test_small_typo(self):
        result = map_columns(["retailer_nme"])
        assert result.mapping["retailer_nme"] == "retailer_name"
        assert 80 <= result.confidence["retailer_nme"] < 100

    def test_unrelated_header_unmapped(self):
        result = map_columns(["warehouse_temperature"])
        assert result.mapping["warehouse_temperature"] is None
        assert result.unmapped == ["warehouse_temperature"]

    def test_blank_header_unmapped(self):
        result = map_columns([""])
        assert result.unmapped == [""]


class TestDuplicates:
    def test_second_claim_is_unmapped(self):
        result = map_columns(["mercado", "retailer_name"])
        assert result.mapping["mercado"] == "retailer_name"
        assert result.mapping["retailer_name"] is None
        assert "retailer_name" in result.unmapped


class TestRenameMap:
    def test_only_mapped_headers(self):
        result = ColumnMappingResult(mapping={"uf": "state_code", "junk": None})
        assert result.rename_map == {"uf": "state_code"}


class TestBestMatch:
    def test_returns_canonical_and_score(self):
        canonical, score = best_match("price unit", {"unit_price": "unit_price"})
        assert canonical == "unit_price"
        assert score == 100

    def test_below_threshold(self):
        assert best_match("zzz", {"unit_price": "unit_price"}) == (None, 0)

    def test_empty_inputs(self):
        assert best_match("", {"a": "a"}) == (None, 0)
        assert best_match("a", {}) == (None, 0)
