"""
Aggregate Stats Tests

Tests for the streaming per-series aggregate.

To run these tests:
    pytest tests/progress/models/test_aggregate_stats.py -v
"""

import random

import pytest

from core.constants import ShotType
from progress.models.aggregate_stats import AggregateStats


@pytest.mark.unit
def test_fold_of_three_scores():
    """
    Test [70, 80, 90].

    Should give average 80, best 90, count 3.
    """
    stats = AggregateStats.from_scores("u1", ShotType.DERECHA, [70, 80, 90])

    assert stats.count == 3
    assert stats.average_score == 80
    assert stats.best_score == 90
    assert list(stats.recent_scores) == [70, 80, 90]


@pytest.mark.unit
def test_recent_ring_keeps_last_five():
    """
    Test the recent-scores ring.
    """
    stats = AggregateStats.from_scores("u1", ShotType.DERECHA, range(10, 80, 10))

    assert list(stats.recent_scores) == [30, 40, 50, 60, 70]
    assert stats.count == 7


@pytest.mark.unit
def test_empty_aggregate():
    """
    Test an aggregate with no scores.
    """
    stats = AggregateStats("u1", ShotType.SAQUE)

    assert stats.is_empty
    assert stats.average_score == 0.0
    assert stats.best_score is None


@pytest.mark.unit
def test_mean_is_exact_for_long_histories():
    """
    Test that the mean equals sum/count for many records.

    Should not drift the way a running float mean would.
    """
    rng = random.Random(7)
    scores = [rng.randint(0, 100) for _ in range(5_000)]

    stats = AggregateStats.from_scores("u1", ShotType.VOLEA, scores)

    assert stats.average_score == sum(scores) / len(scores)
    assert stats.best_score == max(scores)


@pytest.mark.unit
def test_copy_is_detached():
    """
    Test that copies do not share the ring.
    """
    stats = AggregateStats.from_scores("u1", ShotType.VOLEA, [50])
    clone = stats.copy()
    clone.add(60)

    assert stats.count == 1
    assert list(stats.recent_scores) == [50]
    assert clone.recent_scores.maxlen == stats.recent_scores.maxlen


@pytest.mark.unit
def test_to_dict():
    """
    Test display dictionary.
    """
    stats = AggregateStats.from_scores("u1", ShotType.REVES, [70, 71, 71])

    data = stats.to_dict()

    assert data["shot_type"] == "reves"
    assert data["display_name"] == "Revés"
    assert data["average_score"] == 70.67
    assert data["best_score"] == 71
    assert data["recent_scores"] == [70, 71, 71]
