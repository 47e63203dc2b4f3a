from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from codementor.errors import InvalidArgument

ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_DIR = ROOT_DIR / "data"
DEFAULT_LEADERBOARD_SIZE = 5
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    role_catalog_path: Path | None = None
    log_level: str = "INFO"
    leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE

    @property
    def demo_data_path(self) -> Path:
        return self.data_dir / "demo_data.json"


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidArgument(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise InvalidArgument(f"{name} must be at least 1, got {value}")
    return value


def load_settings() -> Settings:
    data_dir = os.getenv("CODEMENTOR_DATA_DIR")
    catalog_path = os.getenv("CODEMENTOR_ROLE_CATALOG")
    return Settings(
        data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
        role_catalog_path=Path(catalog_path) if catalog_path else None,
        log_level=(os.getenv("CODEMENTOR_LOG_LEVEL") or "INFO").upper(),
        leaderboard_size=_int_from_env("CODEMENTOR_LEADERBOARD_SIZE", DEFAULT_LEADERBOARD_SIZE),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
