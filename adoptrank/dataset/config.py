from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data" / "snapshot"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DataConfig:
    """
    Where the snapshot lives and how derived tables are served.
    """

    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("ADOPTRANK_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    )
    use_read_models: bool = field(
        default_factory=lambda: _env_flag("ADOPTRANK_USE_READ_MODELS", False)
    )
    read_model_ttl_seconds: float = field(
        default_factory=lambda: float(os.getenv("ADOPTRANK_READ_MODEL_TTL", "300"))
    )

    def table_path(self, table: str) -> Path:
        return self.data_dir / f"{table}.csv"


DEFAULT_DATA_CONFIG = DataConfig()
