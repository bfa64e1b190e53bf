"""
Single-table verbs: filter, select, arrange, mutate, rename.

Every verb takes a DataFrame first and returns a new DataFrame, so they chain
with `DataFrame.pipe`:

    (df.pipe(filter_rows, "year >= 2000")
       .pipe(mutate, rate=lambda d: d["cases"] / d["population"])
       .pipe(arrange, "-rate"))
"""

import logging
import sys

import numpy as np
import pandas as pd

from plotprep.tidy.schema import require_columns

logger = logging.getLogger(__name__)


def _as_mask(df: pd.DataFrame, condition, local_dict=None, global_dict=None) -> pd.Series:
    if isinstance(condition, str):
        mask = df.eval(condition, local_dict=local_dict, global_dict=global_dict)
    elif callable(condition):
        mask = condition(df)
    else:
        mask = condition

    if isinstance(mask, pd.Series):
        mask = mask.reindex(df.index)
    else:
        mask = np.asarray(mask)
        if mask.ndim == 0:
            mask = np.repeat(mask, len(df))
        if len(mask) != len(df):
            raise ValueError(f"condition has length {len(mask)}, expected {len(df)}")
        mask = pd.Series(mask, index=df.index)

    # missing comparisons count as false
    return mask.astype("boolean").fillna(False).astype(bool)


def filter_rows(df: pd.DataFrame, *conditions) -> pd.DataFrame:
    """
    Keep rows where every condition holds.

    A condition is a query string evaluated with `DataFrame.eval`, a callable
    taking the frame and returning a boolean mask, or a boolean Series/array.
    Query strings resolve `@name` against the caller's variables, as
    `DataFrame.query` does.
    """
    caller = sys._getframe(1)
    keep = pd.Series(True, index=df.index)
    for condition in conditions:
        keep &= _as_mask(df, condition, local_dict=caller.f_locals, global_dict=caller.f_globals)
    return df[keep]


def _expand_selection(df: pd.DataFrame, spec) -> list:
    if isinstance(spec, str) and ":" in spec and spec not in df.columns:
        start, end = spec.split(":", 1)
        require_columns(df, [start, end], context="select")
        i, j = df.columns.get_loc(start), df.columns.get_loc(end)
        step = 1 if i <= j else -1
        return list(df.columns[i:j + step if j + step >= 0 else None:step])
    require_columns(df, [spec], context="select")
    return [spec]


def select(df: pd.DataFrame, *columns) -> pd.DataFrame:
    """
    Pick columns by name.

    Accepts plain names, inclusive ranges "first:last" and exclusions "-name"
    (ranges can be excluded too, "-first:last"). When only exclusions are
    given, every other column is kept in its original order.
    """
    include, exclude = [], []
    for spec in columns:
        negate = isinstance(spec, str) and spec.startswith("-") and spec not in df.columns
        names = _expand_selection(df, spec[1:] if negate else spec)
        (exclude if negate else include).extend(names)

    if not include and exclude:
        include = list(df.columns)

    chosen = []
    for c in include:
        if c not in chosen and c not in exclude:
            chosen.append(c)
    return df[chosen]


def arrange(df: pd.DataFrame, *columns) -> pd.DataFrame:
    """Stable sort by columns; "-name" sorts descending. Missing values sort last."""
    if not columns:
        return df
    names, ascending = [], []
    for spec in columns:
        if isinstance(spec, str) and spec.startswith("-") and spec not in df.columns:
            names.append(spec[1:])
            ascending.append(False)
        else:
            names.append(spec)
            ascending.append(True)
    require_columns(df, names, context="arrange")
    return df.sort_values(by=names, ascending=ascending, na_position="last", kind="mergesort")


def mutate(df: pd.DataFrame, **columns) -> pd.DataFrame:
    """
    Add or replace columns.

    Values may be scalars, array-likes or callables of the working frame.
    Columns are evaluated in keyword order, so a later column can use an
    earlier one. A value of None drops the column.
    """
    out = df.copy()
    for name, spec in columns.items():
        if spec is None:
            out = out.drop(columns=[name])
            continue
        out[name] = spec(out) if callable(spec) else spec
    return out


def rename(df: pd.DataFrame, **mapping) -> pd.DataFrame:
    """Rename columns with new_name="old_name" pairs."""
    require_columns(df, list(mapping.values()), context="rename")
    return df.rename(columns={old: new for new, old in mapping.items()})
