"""
Grouped split-apply-combine.

Partition a table by key columns, apply a function to each partition and
recombine the results. Group keys are always kept as ordinary columns, groups
come out sorted by key, and missing key values form a group of their own.
"""

import logging
from typing import Callable, Mapping

import numpy as np
import pandas as pd

from plotprep.tidy.schema import as_column_list, require_columns

logger = logging.getLogger(__name__)


def n_rows(group: pd.DataFrame) -> int:
    """Aggregation that counts the rows of a group."""
    return len(group)


def _groups(df: pd.DataFrame, by: list, sort: bool = True):
    """Yield (key dict, group frame) pairs; a single whole-table group when `by` is empty."""
    if not by:
        yield {}, df
        return
    for key, group in df.groupby(by, sort=sort, dropna=False, observed=True):
        if not isinstance(key, tuple):
            key = (key,)
        yield dict(zip(by, key)), group


def _aggregate(group: pd.DataFrame, name: str, spec):
    if callable(spec):
        return spec(group)
    if isinstance(spec, tuple) and len(spec) == 2:
        column, func = spec
        return group[column].agg(func)
    raise TypeError(f"aggregation '{name}' must be a callable or a (column, func) pair, got {spec!r}")


def summarise(df: pd.DataFrame, by=(), **aggregations) -> pd.DataFrame:
    """
    Reduce each group to a single row.

    Parameters:
    df (pd.DataFrame): Input table
    by: Group column(s); empty summarises the whole table into one row
    **aggregations: name=(column, func) where func is a pandas aggregation
        name ("mean", "sum", ...) or a callable of a Series, or
        name=callable taking the group frame (see `n_rows`)

    Returns:
    pd.DataFrame: Group keys followed by one column per aggregation
    """
    if not aggregations:
        raise ValueError("summarise needs at least one aggregation")
    by = as_column_list(by)
    require_columns(df, by, context="group")
    columns = [spec[0] for spec in aggregations.values() if isinstance(spec, tuple)]
    require_columns(df, columns, context="aggregation")
    clash = set(by) & set(aggregations)
    if clash:
        raise ValueError(f"aggregation names clash with group columns: {sorted(clash)}")

    rows = []
    for keys, group in _groups(df, by):
        row = dict(keys)
        for name, spec in aggregations.items():
            row[name] = _aggregate(group, name, spec)
        rows.append(row)

    logger.debug(f"summarise: {len(df)} rows -> {len(rows)} groups")
    return pd.DataFrame(rows, columns=by + list(aggregations))


def _broadcast(result, group: pd.DataFrame, name: str) -> pd.Series:
    if np.ndim(result) == 0:
        return pd.Series(result, index=group.index)
    values = result.to_numpy() if isinstance(result, pd.Series) else np.asarray(result)
    if len(values) != len(group):
        raise ValueError(f"group_mutate: '{name}' returned {len(values)} values for a group of {len(group)} rows")
    return pd.Series(values, index=group.index)


def group_mutate(df: pd.DataFrame, by, **columns) -> pd.DataFrame:
    """
    Add columns computed within each group.

    Callables receive each group frame and return a scalar (broadcast to the
    group) or a sequence as long as the group. Non-callables are assigned to
    the whole table. Columns are evaluated in keyword order and row order and
    index of the input are preserved.
    """
    by = as_column_list(by)
    require_columns(df, by, context="group")

    work = df.reset_index(drop=True)
    for name, spec in columns.items():
        if not callable(spec):
            work[name] = spec
            continue
        pieces = [_broadcast(spec(group), group, name) for _, group in _groups(work, by, sort=False)]
        work[name] = pd.concat(pieces) if pieces else pd.Series(index=work.index, dtype=float)

    work.index = df.index
    return work


def count(df: pd.DataFrame, by, name: str = "n", sort: bool = False) -> pd.DataFrame:
    """Count rows per group; `sort` orders groups by descending count."""
    by = as_column_list(by)
    require_columns(df, by, context="group")
    if name in by:
        raise ValueError(f"count column name '{name}' clashes with a group column")
    if not by:
        return pd.DataFrame({name: [len(df)]})

    out = df.groupby(by, sort=True, dropna=False, observed=True).size().reset_index(name=name)
    if sort:
        out = out.sort_values(name, ascending=False, kind="mergesort").reset_index(drop=True)
    return out


def _as_frame(result) -> pd.DataFrame:
    if isinstance(result, pd.DataFrame):
        return result.reset_index(drop=True)
    if isinstance(result, pd.Series):
        return pd.DataFrame([result.to_dict()])
    if isinstance(result, Mapping):
        return pd.DataFrame([dict(result)])
    if np.ndim(result) == 0:
        return pd.DataFrame({"V1": [result]})
    raise TypeError(f"cannot combine a result of type {type(result).__name__}")


def split_apply_combine(df: pd.DataFrame, by, func: Callable[[pd.DataFrame], object]) -> pd.DataFrame:
    """
    Apply `func` to each group and stack the results (plyr's ddply).

    `func` may return a DataFrame (any number of rows), a Series or mapping
    (one row), a scalar (stored in column "V1") or None (group dropped). The
    group keys are prepended to every result row.
    """
    by = as_column_list(by)
    require_columns(df, by, context="group")

    pieces = []
    for keys, group in _groups(df, by):
        result = func(group)
        if result is None:
            continue
        frame = _as_frame(result)
        frame = frame.drop(columns=[c for c in by if c in frame.columns])
        for i, column in enumerate(by):
            frame.insert(i, column, [keys[column]] * len(frame))
        pieces.append(frame)

    if not pieces:
        return pd.DataFrame(columns=by)
    return pd.concat(pieces, ignore_index=True)
