from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from boroughs.domain.models.character import DEFAULT_TUNING, DerivedStatTuning
from boroughs.domain.models.inventory import DEFAULT_INVENTORY_LIMIT


ENV_PREFIX = "BOROUGHS_"
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"
DEFAULT_SAVE_URL = "sqlite:///boroughs_saves.db"
DEFAULT_SAVE_SLOT = "autosave"


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


@dataclass(frozen=True)
class GameConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    save_url: str = DEFAULT_SAVE_URL
    seed: Optional[int] = None
    log_level: str = "WARNING"
    inventory_limit: int = DEFAULT_INVENTORY_LIMIT
    default_slot: str = DEFAULT_SAVE_SLOT
    tuning: DerivedStatTuning = field(default=DEFAULT_TUNING)

    @classmethod
    def from_env(cls) -> "GameConfig":
        seed_raw = (_env("SEED") or "").strip()
        limit_raw = (_env("INVENTORY_LIMIT") or "").strip()
        return cls(
            data_dir=Path(_env("DATA_DIR") or DEFAULT_DATA_DIR),
            save_url=_env("SAVE_URL", DEFAULT_SAVE_URL) or "",
            seed=int(seed_raw) if seed_raw else None,
            log_level=(_env("LOG_LEVEL") or "WARNING").strip().upper(),
            inventory_limit=int(limit_raw) if limit_raw else DEFAULT_INVENTORY_LIMIT,
        )
