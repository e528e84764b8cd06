"""
Similarity grouper — clusters observations that describe the same product.

Two phases:
  1. Exact bucketing: observations with equal normalized keys form one
     cluster.  Clusters are kept in the order their key was first seen.
  2. Similarity merge: walking clusters in discovery order, each cluster not
     yet absorbed takes over every later-or-earlier cluster that is still
     free and whose key is similar to its own.  Absorbed clusters never act
     as the absorbing side.

The merge is single-pass and not transitive: if A~B and B~C but not A~C,
whether C joins A's group depends on input order.  Input order therefore
matters and must be a stable sequence (list order, never set/hash order).

Public API:
    group_observations(observations) → list[ObservationCluster]
    are_descriptions_similar(key_a, key_b) → bool
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from config.normalization_rules import (
    MAX_IGNORED_WORD_LENGTH,
    MIN_SHARED_WORDS,
    SIMILARITY_THRESHOLD,
)
from processing.models import ProductObservation
from processing.normalizer import normalize_description

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObservationCluster:
    """Observations considered the same product, anchored on one key."""

    key: str
    members: tuple[ProductObservation, ...]


def are_descriptions_similar(key_a: str, key_b: str) -> bool:
    """
    Word-overlap similarity test between two normalized keys.

    Words of one character are ignored.  The key with fewer words is the
    "shorter" one (ties: key_a).  The keys are similar when at least 80% of
    the shorter key's words appear in the longer key AND at least
    min(2, len(shorter)) words match.  An empty word list is never similar.

    Examples:
        ("leite condensado lata", "leite condensado") → True   (2/2)
        ("queijo", "manteiga")                        → False  (0/1)
    """
    words_a = _significant_words(key_a)
    words_b = _significant_words(key_b)

    if not words_a or not words_b:
        return False

    if len(words_a) <= len(words_b):
        shorter, longer = words_a, words_b
    else:
        shorter, longer = words_b, words_a

    longer_set = set(longer)
    matching = sum(1 for word in shorter if word in longer_set)
    similarity = matching / len(shorter)

    return (
        similarity >= SIMILARITY_THRESHOLD
        and matching >= min(MIN_SHARED_WORDS, len(shorter))
    )


def group_observations(
    observations: Sequence[ProductObservation],
) -> list[ObservationCluster]:
    """
    Cluster observations by normalized description.

    Args:
        observations: Ordered observations (order decides anchors and merge
                      precedence).

    Returns:
        Clusters in the discovery order of their anchor key.  Every input
        observation appears in exactly one cluster.  Empty input gives [].
    """
    if not observations:
        return []

    exact_clusters = _bucket_by_key(observations)
    keys = list(exact_clusters)

    merged_keys: set[str] = set()
    clusters: list[ObservationCluster] = []
    merge_count = 0

    for anchor_key in keys:
        if anchor_key in merged_keys:
            continue

        merged_keys.add(anchor_key)
        members = list(exact_clusters[anchor_key])

        for other_key in keys:
            if other_key in merged_keys:
                continue
            if are_descriptions_similar(anchor_key, other_key):
                members.extend(exact_clusters[other_key])
                merged_keys.add(other_key)
                merge_count += 1
                logger.debug(f"Merged '{other_key}' into '{anchor_key}'")

        clusters.append(ObservationCluster(key=anchor_key, members=tuple(members)))

    logger.info(
        f"Grouping complete: {len(observations)} observations, "
        f"{len(keys)} exact keys, {merge_count} similarity merges, "
        f"{len(clusters)} groups"
    )

    return clusters


def _bucket_by_key(
    observations: Sequence[ProductObservation],
) -> dict[str, list[ProductObservation]]:
    """Phase 1: exact-key buckets in first-seen key order."""
    buckets: dict[str, list[ProductObservation]] = {}
    for observation in observations:
        key = normalize_description(observation.description)
        buckets.setdefault(key, []).append(observation)
    return buckets


def _significant_words(key: str) -> list[str]:
    return [word for word in key.split() if len(word) > MAX_IGNORED_WORD_LENGTH]
