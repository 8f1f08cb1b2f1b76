from __future__ import annotations

from typing import Protocol

import pandas as pd


class AggregateSource(Protocol):
    """Where county features, breed traits and breed/state shares come from.

    Implementations must return exactly what computing the aggregate from
    the source tables would return.
    """

    def county_features(self) -> pd.DataFrame: ...

    def breed_traits(self) -> pd.DataFrame: ...

    def breed_state_shares(self) -> pd.DataFrame: ...
