from __future__ import annotations

import logging
import time
from typing import Dict

import pandas as pd

from ..errors import UpstreamUnavailable
from .config import DEFAULT_DATA_CONFIG, DataConfig
from .view import OPTIONAL_TABLES, TABLE_COLUMNS, DatasetView

logger = logging.getLogger(__name__)


def _read_table(config: DataConfig, table: str) -> pd.DataFrame | None:
    path = config.table_path(table)
    if not path.exists():
        if table in OPTIONAL_TABLES:
            return None
        logger.error("Snapshot table %s not found at %s", table, path)
        raise UpstreamUnavailable(f"Snapshot table '{table}' not found")
    try:
        return pd.read_csv(path)
    except (
        OSError,
        UnicodeDecodeError,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
    ) as exc:
        logger.error("Failed to read snapshot table %s from %s", table, path, exc_info=True)
        raise UpstreamUnavailable(f"Snapshot table '{table}' could not be read") from exc


def load_dataset(config: DataConfig = DEFAULT_DATA_CONFIG) -> DatasetView:
    """
    Materialise the full snapshot from ``config.data_dir``.

    Every table is read before any of them is handed out, so a failure
    part-way through never leaves a half-loaded view behind.
    """
    start = time.time()
    frames: Dict[str, pd.DataFrame] = {}
    for table in TABLE_COLUMNS:
        frame = _read_table(config, table)
        if frame is not None:
            frames[table] = frame

    view = DatasetView.from_frames(frames)
    elapsed_ms = round((time.time() - start) * 1000, 1)
    logger.info("Loaded snapshot from %s in %sms: %s", config.data_dir, elapsed_ms, view.row_counts())
    return view
