"""
Tests for processing/normalizer.py

Covers: each removal step of the description normalizer, their order,
blank input, determinism and idempotence.
"""

import pytest

from processing.normalizer import normalize_description


class TestBasicNormalization:
    def test_lowercase_and_accents(self):
        assert normalize_description("REQUEIJÃO Cremoso") == "requeijao cremoso"

    def test_empty_and_whitespace(self):
        assert normalize_description("") == ""
        assert normalize_description("   ") == ""
        assert normalize_description(None) == ""

    def test_whitespace_collapsed(self):
        assert normalize_description("  Leite    Condensado  ") == "leite condensado"


class TestUnitRemoval:
    @pytest.mark.parametrize("raw", [
        "Leite Condensado 395g",
        "Leite Condensado 395 g",
        "Leite Condensado 395GR",
        "Leite Condensado 1 kg",
        "Leite Condensado 200ml",
        "Leite Condensado 1 litro",
    ])
    def test_quantity_tokens_removed(self, raw):
        assert normalize_description(raw) == "leite condensado"

    def test_unit_word_without_number_kept(self):
        # a unit needs a leading number to count as a quantity
        assert normalize_description("Queijo g") == "queijo g"


class TestPackagingAndModifiers:
    @pytest.mark.parametrize("raw", [
        "Leite Condensado Lata",
        "Leite Condensado Caixa",
        "Leite Condensado Tetra Pack",
        "Leite Condensado TetraPack",
        "Leite Condensado Pct",
    ])
    def test_packaging_words_removed(self, raw):
        assert normalize_description(raw) == "leite condensado"

    def test_modifiers_removed(self):
        assert normalize_description("Manteiga Tradicional") == "manteiga"
        assert normalize_description("Doce de Leite Premium") == "doce de leite"

    def test_brand_removed(self):
        assert normalize_description("Leite Condensado Camponesa 395g") == "leite condensado"

    def test_packaging_only_as_whole_word(self):
        # "latas" and "undo" are not packaging words
        assert normalize_description("Queijo Latas") == "queijo latas"


class TestDigitsAndPunctuation:
    def test_percent_and_digits_removed(self):
        assert normalize_description("Creme de Leite 25% Gordura") == "creme de leite gordura"

    def test_punctuation_removed(self):
        assert normalize_description("Queijo Minas (Frescal)!") == "queijo minas frescal"

    def test_hyphenated_words_join(self):
        assert normalize_description("Semi-Desnatado") == "semidesnatado"


class TestProperties:
    @pytest.mark.parametrize("raw", [
        "Leite Condensado Camponesa 395g",
        "Requeijão Cremoso Pote 200g",
        "Creme de Leite 25% Gordura",
        "Doce de Leite Tradicional Vidro 400g",
        "Queijo Minas (Frescal)!",
    ])
    def test_deterministic(self, raw):
        assert normalize_description(raw) == normalize_description(raw)

    @pytest.mark.parametrize("raw", [
        "Leite Condensado Camponesa 395g",
        "Requeijão Cremoso Pote 200g",
        "Creme de Leite 25% Gordura",
        "Doce de Leite Tradicional Vidro 400g",
        "Manteiga com Sal 500 g",
    ])
    def test_idempotent(self, raw):
        once = normalize_description(raw)
        assert normalize_description(once) == once

    def test_word_glued_to_digit_survives_first_pass(self):
        # "un1" is not a whole word until the digit goes, after the
        # packaging step has already run.
        once = normalize_description("Manteiga un1")
        assert once == "manteiga un"
        assert normalize_description(once) == "manteiga"
