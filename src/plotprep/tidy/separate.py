"""
Split one character column into several, or paste several into one.

Typical use is untangling column names that encode two variables, e.g.
"new_sp_m014" -> ("new", "sp", "m014") after a gather.
"""

import logging
import re
from typing import Literal, Sequence

import pandas as pd

from plotprep.settings import get_settings
from plotprep.tidy.schema import as_column_list, require_columns, type_convert

logger = logging.getLogger(__name__)

cfg = get_settings()

DEFAULT_SEP = r"[^0-9A-Za-z]+"


def _split_positions(text: str, positions: Sequence[int]) -> list[str]:
    n = len(text)
    cuts = sorted(min(max(p if p >= 0 else n + p, 0), n) for p in positions)
    bounds = [0] + cuts + [n]
    return [text[start:end] for start, end in zip(bounds[:-1], bounds[1:])]


def _align(pieces: list, n: int, extra: str, fill: str) -> tuple[list, bool, bool]:
    """Pad or trim pieces to exactly n entries; report whether either happened."""
    too_many = len(pieces) > n
    too_few = len(pieces) < n
    if too_many:
        pieces = pieces[:n]
    elif too_few:
        padding = [None] * (n - len(pieces))
        pieces = padding + pieces if fill == "left" else pieces + padding
    return pieces, too_many, too_few


def separate(
    df: pd.DataFrame,
    column,
    into: Sequence[str | None],
    sep: str | Sequence[int] = DEFAULT_SEP,
    remove: bool = True,
    convert: bool = False,
    extra: Literal["warn", "drop", "merge"] = "warn",
    fill: Literal["warn", "right", "left"] = "warn",
) -> pd.DataFrame:
    """
    Turn a single character column into multiple columns.

    Parameters:
    df (pd.DataFrame): Input table
    column: Column to split
    into: Names of the new columns; a None entry drops that piece
    sep: Regular expression to split on, or a sequence of character positions
        (negative positions count from the right)
    remove (bool): Drop the input column
    convert (bool): Turn new columns numeric when all their values parse
    extra: What to do with surplus pieces: "warn" drops them and logs a
        warning, "drop" drops them silently, "merge" splits at most
        len(into) - 1 times
    fill: What to do with too few pieces: "warn" pads on the right and logs a
        warning, "right"/"left" pad on that side silently

    Returns:
    pd.DataFrame: Table with the new columns in place of the original one
    """
    require_columns(df, [column], context="separate")
    into = list(into)
    if not into:
        raise ValueError("separate needs at least one output column in `into`")
    if extra not in ("warn", "drop", "merge"):
        raise ValueError(f"extra must be 'warn', 'drop' or 'merge', got {extra!r}")
    if fill not in ("warn", "right", "left"):
        raise ValueError(f"fill must be 'warn', 'right' or 'left', got {fill!r}")

    n = len(into)
    by_position = not isinstance(sep, str)
    pattern = None if by_position else re.compile(sep)
    maxsplit = n - 1 if extra == "merge" else 0

    rows = []
    too_many_rows, too_few_rows = [], []
    for idx, raw in df[column].items():
        if pd.isna(raw):
            rows.append([None] * n)
            continue
        text = str(raw)
        if by_position:
            pieces = _split_positions(text, list(sep))
        elif maxsplit == 0 and extra == "merge":
            pieces = [text]
        else:
            pieces = pattern.split(text, maxsplit=maxsplit)
        pieces, too_many, too_few = _align(pieces, n, extra, fill)
        if too_many:
            too_many_rows.append(idx)
        if too_few:
            too_few_rows.append(idx)
        rows.append(pieces)

    if too_many_rows and extra == "warn":
        logger.warning(f"separate: too many values in {len(too_many_rows)} rows {too_many_rows[:20]}; extra pieces discarded")
    if too_few_rows and fill == "warn":
        logger.warning(f"separate: too few values in {len(too_few_rows)} rows {too_few_rows[:20]}; filled with missing values on the right")

    pieces_df = pd.DataFrame(rows, index=df.index, columns=range(n), dtype=object)
    new_columns = {}
    for i, name in enumerate(into):
        if name is None:
            continue
        piece = pieces_df[i]
        new_columns[name] = type_convert(piece) if convert else piece

    position = df.columns.get_loc(column)
    if remove:
        before, after = df.iloc[:, :position], df.iloc[:, position + 1:]
    else:
        before, after = df.iloc[:, :position + 1], df.iloc[:, position + 1:]
    clash = set(new_columns) & (set(before.columns) | set(after.columns))
    if clash:
        raise ValueError(f"separate: output columns already exist: {sorted(clash, key=str)}")
    return pd.concat([before, pd.DataFrame(new_columns, index=df.index), after], axis=1)


def unite(
    df: pd.DataFrame,
    column: str,
    columns,
    sep: str | None = None,
    remove: bool = True,
    na_rm: bool = False,
) -> pd.DataFrame:
    """
    Paste together multiple columns into one.

    Missing values render as "NA" unless `na_rm` skips them. The new column
    takes the position of the first united column.
    """
    sep = cfg.unite_sep if sep is None else sep
    columns = as_column_list(columns)
    if not columns:
        raise ValueError("unite needs at least one column to paste together")
    require_columns(df, columns, context="unite")

    # render column by column; a row-wise apply would upcast ints next to floats
    pieces = [[None if pd.isna(v) else str(v) for v in df[c]] for c in columns]

    def paste(parts) -> str:
        if na_rm:
            return sep.join(p for p in parts if p is not None)
        return sep.join("NA" if p is None else p for p in parts)

    united = pd.Series([paste(parts) for parts in zip(*pieces)], index=df.index, dtype=object)

    position = min(df.columns.get_loc(c) for c in columns)
    rest = df.drop(columns=columns) if remove else df
    if column in rest.columns:
        raise ValueError(f"unite: output column '{column}' already exists")
    out = rest.copy()
    insert_at = sum(1 for c in df.columns[:position] if c in out.columns)
    out.insert(insert_at, column, united)
    return out
