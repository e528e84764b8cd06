"""
Tests for processing/grouper.py

Covers: the word-overlap similarity test, exact bucketing, similarity
merging, discovery order, order-dependent (non-transitive) merging and
membership stability under permutation.
"""

from itertools import permutations

import pytest

from processing.grouper import are_descriptions_similar, group_observations
from processing.models import ProductObservation


def _make_observation(description: str, product_id: str = "", **overrides) -> ProductObservation:
    fields = {
        "product_id": product_id or description,
        "description": description,
        "unit_price": 10.0,
        "retailer_name": "Extra",
        "state_code": "SP",
        "city": "São Paulo",
    }
    fields.update(overrides)
    return ProductObservation(**fields)


def _membership(clusters) -> set[frozenset[str]]:
    return {frozenset(obs.product_id for obs in cluster.members) for cluster in clusters}


# ═══════════════════════════════════════════════════════════════════════════
# Similarity test
# ═══════════════════════════════════════════════════════════════════════════

class TestAreDescriptionsSimilar:
    def test_subset_with_two_words_is_similar(self):
        assert are_descriptions_similar("leite condensado lata", "leite condensado") is True

    def test_different_single_words(self):
        assert are_descriptions_similar("queijo", "manteiga") is False

    def test_identical_single_word(self):
        assert are_descriptions_similar("manteiga", "manteiga") is True

    def test_below_threshold(self):
        # shorter has 3 words, 2 match → 0.67
        assert are_descriptions_similar("leite condensado cremoso", "leite condensado integral") is False

    def test_four_of_five_meets_threshold(self):
        assert are_descriptions_similar(
            "queijo minas frescal light zero", "queijo minas frescal light sem"
        ) is True

    def test_one_letter_words_ignored(self):
        # "a" and "b" are dropped, leaving one shared word out of one
        assert are_descriptions_similar("queijo a", "queijo b") is True

    def test_empty_key_never_similar(self):
        assert are_descriptions_similar("", "leite") is False
        assert are_descriptions_similar("x", "x") is False

    def test_single_word_needs_exact_word(self):
        assert are_descriptions_similar("leite", "leite condensado") is True
        assert are_descriptions_similar("leite", "queijo minas") is False

    def test_membership_not_multiset(self):
        assert are_descriptions_similar("leite leite", "leite condensado") is True


# ═══════════════════════════════════════════════════════════════════════════
# Grouping
# ═══════════════════════════════════════════════════════════════════════════

class TestGroupObservations:
    def test_empty_input(self):
        assert group_observations([]) == []

    def test_exact_keys_bucket_together(self):
        observations = [
            _make_observation("Manteiga 200g", "1"),
            _make_observation("Manteiga Pote", "2"),
            _make_observation("Queijo Minas", "3"),
        ]
        clusters = group_observations(observations)
        assert [cluster.key for cluster in clusters] == ["manteiga", "queijo minas"]
        assert _membership(clusters) == {frozenset({"1", "2"}), frozenset({"3"})}

    def test_similar_keys_merge_into_anchor(self):
        observations = [
            _make_observation("Leite Condensado Cremoso", "1"),
            _make_observation("Queijo Minas", "2"),
            _make_observation("Leite Condensado", "3"),
        ]
        clusters = group_observations(observations)
        assert len(clusters) == 2
        assert clusters[0].key == "leite condensado cremoso"
        assert [obs.product_id for obs in clusters[0].members] == ["1", "3"]

    def test_every_observation_in_exactly_one_cluster(self):
        observations = [_make_observation(desc, str(i)) for i, desc in enumerate([
            "Leite Condensado 395g", "Leite Condensado Lata", "Queijo Minas",
            "Manteiga", "Manteiga com Sal", "Doce de Leite",
        ])]
        clusters = group_observations(observations)
        ids = [obs.product_id for cluster in clusters for obs in cluster.members]
        assert sorted(ids) == sorted(obs.product_id for obs in observations)

    def test_merge_is_order_dependent(self):
        a = _make_observation("Leite Condensado Cremoso", "a")
        b = _make_observation("Leite Condensado", "b")
        c = _make_observation("Leite Condensado Integral", "c")

        # a absorbs b; c is not similar to a and stays apart
        assert _membership(group_observations([a, b, c])) == {
            frozenset({"a", "b"}), frozenset({"c"}),
        }
        # b comes first and absorbs both
        assert _membership(group_observations([b, a, c])) == {frozenset({"a", "b", "c"})}

    def test_absorbed_cluster_never_anchors(self):
        a = _make_observation("Leite Condensado Cremoso", "a")
        b = _make_observation("Leite Condensado", "b")
        c = _make_observation("Leite Condensado Integral", "c")
        clusters = group_observations([a, b, c])
        assert [cluster.key for cluster in clusters] == [
            "leite condensado cremoso", "leite condensado integral",
        ]


class TestMembershipUnderPermutation:
    @pytest.fixture
    def observations(self) -> list[ProductObservation]:
        return [
            _make_observation("Leite Condensado 395g", "1", unit_price=8.5),
            _make_observation("Leite Condensado Lata", "2", unit_price=9.0),
            _make_observation("Queijo Minas", "3", state_code="MG", unit_price=12.0),
            _make_observation("Manteiga com Sal 200g", "4"),
        ]

    def test_same_member_sets_for_every_order(self, observations):
        expected = _membership(group_observations(observations))
        for ordering in permutations(observations):
            assert _membership(group_observations(list(ordering))) == expected

    def test_expected_groups(self, observations):
        assert _membership(group_observations(observations)) == {
            frozenset({"1", "2"}), frozenset({"3"}), frozenset({"4"}),
        }
