from __future__ import annotations

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler


def min_max_normalize(values: pd.Series) -> pd.Series:
    """Scale *values* to [0, 1] against the whole series.

    A constant (or single-element) series maps every value to 0.0 rather
    than dividing by a zero range. Missing values stay missing and do not
    take part in the min/max.
    """
    result = pd.Series(np.nan, index=values.index, dtype=float)
    present = values.notna()
    if not present.any():
        return result

    raw = values.loc[present].to_numpy(dtype=float).reshape(-1, 1)
    scaled = MinMaxScaler(clip=True).fit_transform(raw).ravel()
    result.loc[present] = scaled
    return result


def normalize_columns(frame: pd.DataFrame, columns: dict[str, str]) -> pd.DataFrame:
    """Return a copy of *frame* with ``norm_*`` columns added.

    *columns* maps source column -> output column. Each column is scaled
    independently over every row of *frame*.
    """
    out = frame.copy()
    for source, target in columns.items():
        out[target] = min_max_normalize(out[source])
    return out
