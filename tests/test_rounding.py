from __future__ import annotations

from codementor import metrics, recommendations
from codementor.rounding import round_half_up


def test_round_half_up():
    assert round_half_up(102.5) == 103
    assert round_half_up(2.5) == 3
    assert round_half_up(12.5) == 13
    assert round_half_up(74.4) == 74


def test_metrics_and_matcher_share_one_helper():
    assert metrics.round_half_up is round_half_up
    assert recommendations.round_half_up is round_half_up
    assert not hasattr(metrics, "match_skill_profile")
