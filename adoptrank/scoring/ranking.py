"""
Partitioned ranking.

Every "top N per group" and "rank everything" output goes through here so
they all share one definition of a rank:

* scores are ranked descending, SQL ``RANK()`` style: equal scores share a
  rank and the next distinct score skips ahead (1, 1, 3, ...);
* a tie-break column orders tied rows ascending for output only and never
  changes the rank number;
* rows whose score is missing are not ranked and are dropped.

Output is ordered by partition key(s), rank, then tie-break column(s).
"""
from __future__ import annotations

from typing import Sequence, Union

import pandas as pd

Columns = Union[str, Sequence[str], None]


def _as_list(columns: Columns) -> list[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [columns]
    return list(columns)


def rank_rows(
    df: pd.DataFrame,
    score: str,
    *,
    partition: Columns = None,
    tie_break: Columns = None,
    rank_col: str = "rank",
) -> pd.DataFrame:
    """Return a copy of *df* with *rank_col* added and rows in ranked order.

    With no *partition* the whole frame is one group (global ranking).
    """
    keys = _as_list(partition)
    ties = _as_list(tie_break)

    ranked = df.loc[df[score].notna()].copy()
    if ranked.empty:
        ranked[rank_col] = pd.Series(dtype=int)
        return ranked.reset_index(drop=True)

    if keys:
        ranks = ranked.groupby(keys, sort=False, dropna=False)[score].rank(
            method="min", ascending=False,
        )
    else:
        ranks = ranked[score].rank(method="min", ascending=False)
    ranked[rank_col] = ranks.astype(int)

    order = keys + [rank_col] + ties
    return ranked.sort_values(order, kind="mergesort").reset_index(drop=True)


def top_k_per_partition(
    df: pd.DataFrame,
    score: str,
    k: int,
    *,
    partition: Columns = None,
    tie_break: Columns = None,
    rank_col: str = "rank",
) -> pd.DataFrame:
    """Keep rows with rank <= *k*. Ties at the cut are all kept."""
    ranked = rank_rows(df, score, partition=partition, tie_break=tie_break, rank_col=rank_col)
    return ranked.loc[ranked[rank_col] <= k].reset_index(drop=True)


def top_per_partition(
    df: pd.DataFrame,
    score: str,
    *,
    partition: Columns = None,
    tie_break: Columns = None,
    rank_col: str = "rank",
) -> pd.DataFrame:
    """Rank-1 rows of every partition, ties included."""
    return top_k_per_partition(
        df, score, 1, partition=partition, tie_break=tie_break, rank_col=rank_col,
    )


def first_n(
    df: pd.DataFrame,
    score: str,
    n: int,
    *,
    tie_break: Columns = None,
    rank_col: str = "rank",
) -> pd.DataFrame:
    """The first *n* rows of the global ranking.

    Unlike :func:`top_k_per_partition` this is a row limit, so the
    tie-break decides which tied rows make the cut.
    """
    return rank_rows(df, score, tie_break=tie_break, rank_col=rank_col).head(n)
