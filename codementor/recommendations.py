from __future__ import annotations

from typing import Iterable, Sequence

from codementor.catalog import REFERENCE_CATALOG, RoleCatalog
from codementor.errors import InvalidArgument
from codementor.models import JobMatch, SkillProficiency
from codementor.rounding import round_half_up

MATCH_SCORE_CAP = 98
MAX_MATCHES = 2
RECOMMENDATION_TEMPLATE = (
    "Strong match based on your {skill} skills ({proficiency}%). "
    "Your recent projects and assessments demonstrate the required expertise for this role."
)


def _check_proficiency(skill: str, proficiency: object) -> int:
    if isinstance(proficiency, bool) or not isinstance(proficiency, int):
        raise InvalidArgument(f"proficiency for {skill!r} must be an integer, got {proficiency!r}")
    if not 0 <= proficiency <= 100:
        raise InvalidArgument(f"proficiency for {skill!r} must be in [0, 100], got {proficiency}")
    return proficiency


def match_skill_profile(
    profile: Iterable[SkillProficiency], catalog: RoleCatalog | None = None
) -> list[JobMatch]:
    if catalog is None:
        catalog = REFERENCE_CATALOG
    pairs = [(item.skill, _check_proficiency(item.skill, item.proficiency)) for item in profile]

    matches: list[JobMatch] = []
    for skill, proficiency in pairs:
        for option in catalog.roles_for(skill):
            if proficiency < option.min_score:
                continue
            raw_score = round_half_up(proficiency / option.min_score * 100.0)
            matches.append(
                JobMatch(
                    role=option.role,
                    company=option.company,
                    match_score=min(raw_score, MATCH_SCORE_CAP),
                    recommendation=RECOMMENDATION_TEMPLATE.format(skill=skill, proficiency=proficiency),
                )
            )
    # sort is stable, so equal scores keep collection order
    matches.sort(key=lambda m: m.match_score, reverse=True)
    return matches[:MAX_MATCHES]


def compute_job_matches(
    skills: Sequence[str],
    proficiency_levels: Sequence[int],
    catalog: RoleCatalog | None = None,
) -> list[JobMatch]:
    if len(skills) != len(proficiency_levels):
        raise InvalidArgument(
            f"got {len(skills)} skills but {len(proficiency_levels)} proficiency levels"
        )
    profile = [
        SkillProficiency(skill=skill, proficiency=level)
        for skill, level in zip(skills, proficiency_levels)
    ]
    return match_skill_profile(profile, catalog)
