from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from codementor.config import Settings
from codementor.errors import InvalidArgument
from codementor.models import RoleCatalogEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleCatalog:
    """Skill name -> candidate roles, in catalog order."""

    entries: Mapping[str, tuple[RoleCatalogEntry, ...]]

    def roles_for(self, skill: str) -> tuple[RoleCatalogEntry, ...]:
        return self.entries.get(skill, ())

    @property
    def skills(self) -> list[str]:
        return list(self.entries.keys())

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RoleCatalog:
        if not isinstance(raw, Mapping):
            raise InvalidArgument("role catalog must be a mapping of skill -> roles")
        entries: dict[str, tuple[RoleCatalogEntry, ...]] = {}
        for skill, options in raw.items():
            if not isinstance(options, list):
                raise InvalidArgument(f"roles for {skill!r} must be a list")
            entries[skill] = tuple(_parse_entry(skill, item) for item in options)
        return cls(entries=MappingProxyType(entries))


def _parse_entry(skill: str, item: Mapping[str, Any]) -> RoleCatalogEntry:
    if not isinstance(item, Mapping):
        raise InvalidArgument(f"catalog entry under {skill!r} must be an object")
    role = str(item.get("role") or "").strip()
    company = str(item.get("company") or "").strip()
    min_score = item.get("minScore", item.get("min_score"))
    if not role or not company:
        raise InvalidArgument(f"catalog entry under {skill!r} needs a role and a company")
    if isinstance(min_score, bool) or not isinstance(min_score, int) or not 0 < min_score <= 100:
        raise InvalidArgument(
            f"catalog entry {role!r} under {skill!r} has invalid minScore {min_score!r}"
        )
    return RoleCatalogEntry(role=role, company=company, min_score=min_score)


REFERENCE_CATALOG = RoleCatalog.from_dict(
    {
        "Python": [
            {"role": "Data Scientist", "company": "DataCorp Analytics", "minScore": 85},
            {"role": "Machine Learning Engineer", "company": "AI Solutions Ltd", "minScore": 90},
            {"role": "Backend Developer", "company": "TechStack Inc", "minScore": 80},
        ],
        "JavaScript": [
            {"role": "Frontend Developer", "company": "WebTech Solutions", "minScore": 80},
            {"role": "Full Stack Developer", "company": "Digital Innovations", "minScore": 85},
            {"role": "React Developer", "company": "Modern Apps Inc", "minScore": 82},
        ],
        "Java": [
            {"role": "Software Engineer", "company": "Enterprise Systems", "minScore": 85},
            {"role": "Android Developer", "company": "Mobile Solutions", "minScore": 88},
            {"role": "Backend Developer", "company": "Cloud Services Ltd", "minScore": 82},
        ],
        "C++": [
            {"role": "Systems Engineer", "company": "Hardware Solutions", "minScore": 88},
            {"role": "Game Developer", "company": "Gaming Studios", "minScore": 85},
            {"role": "Embedded Systems Developer", "company": "IoT Technologies", "minScore": 90},
        ],
    }
)


def load_role_catalog(path: Path) -> RoleCatalog:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    catalog = RoleCatalog.from_dict(raw)
    logger.debug("Loaded role catalog from %s with %d skills", path, len(catalog.entries))
    return catalog


def default_catalog(settings: Settings | None = None) -> RoleCatalog:
    if settings is not None and settings.role_catalog_path is not None:
        return load_role_catalog(settings.role_catalog_path)
    return REFERENCE_CATALOG
