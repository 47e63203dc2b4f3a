from __future__ import annotations

import pytest

from codementor.catalog import RoleCatalog
from codementor.errors import InvalidArgument
from codementor.models import SkillProficiency
from codementor.recommendations import (
    MATCH_SCORE_CAP,
    compute_job_matches,
    match_skill_profile,
)

FULL_PROFILE = (["Python", "JavaScript", "Java", "C++"], [90, 84, 78, 72])


def _catalog(min_score: int) -> RoleCatalog:
    return RoleCatalog.from_dict(
        {"Go": [{"role": "Platform Engineer", "company": "Gopher Labs", "minScore": min_score}]}
    )


def test_python_at_ninety_keeps_top_two_in_catalog_order():
    matches = compute_job_matches(["Python"], [90])
    assert [(m.role, m.company) for m in matches] == [
        ("Data Scientist", "DataCorp Analytics"),
        ("Machine Learning Engineer", "AI Solutions Ltd"),
    ]
    assert all(m.match_score == 98 for m in matches)


def test_result_never_exceeds_two_and_is_sorted():
    matches = compute_job_matches(*FULL_PROFILE)
    assert len(matches) <= 2
    scores = [m.match_score for m in matches]
    assert scores == sorted(scores, reverse=True)
    assert all(0 <= score <= MATCH_SCORE_CAP for score in scores)


def test_score_is_capped_for_large_ratio():
    matches = compute_job_matches(["Go"], [100], catalog=_catalog(50))
    assert matches[0].match_score == MATCH_SCORE_CAP


def test_threshold_gate_excludes_roles_above_proficiency():
    matches = compute_job_matches(["JavaScript"], [84])
    roles = {m.role for m in matches}
    assert "Full Stack Developer" not in roles
    assert roles == {"Frontend Developer", "React Developer"}


def test_threshold_equal_to_min_score_qualifies():
    matches = compute_job_matches(["Go"], [70], catalog=_catalog(70))
    assert len(matches) == 1


def test_below_every_threshold_returns_empty():
    assert compute_job_matches(["Java", "C++"], [78, 72]) == []


def test_empty_input_returns_empty():
    assert compute_job_matches([], []) == []


def test_unknown_skill_yields_no_matches():
    assert compute_job_matches(["Rust"], [95]) == []


def test_length_mismatch_raises():
    with pytest.raises(InvalidArgument):
        compute_job_matches(["Python", "Java"], [90])


@pytest.mark.parametrize("level", [101, -1, 90.5, True, None])
def test_invalid_proficiency_raises(level):
    with pytest.raises(InvalidArgument):
        compute_job_matches(["Python"], [level])


def test_equal_scores_keep_collection_order_across_skills():
    matches = compute_job_matches(["JavaScript", "Python"], [80, 80])
    assert [m.role for m in matches] == ["Frontend Developer", "Backend Developer"]


def test_recommendation_mentions_skill_and_proficiency():
    match = compute_job_matches(["Python"], [80])[0]
    assert match.role == "Backend Developer"
    assert "Python skills (80%)" in match.recommendation


def test_repeated_calls_are_identical():
    assert compute_job_matches(*FULL_PROFILE) == compute_job_matches(*FULL_PROFILE)


def test_paired_profile_matches_positional_form():
    skills, levels = FULL_PROFILE
    profile = [SkillProficiency(skill=s, proficiency=p) for s, p in zip(skills, levels)]
    assert match_skill_profile(profile) == compute_job_matches(skills, levels)

