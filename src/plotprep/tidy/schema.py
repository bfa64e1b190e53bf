"""
Column contracts for tidy tables.

Helpers to check that a table carries the columns an operation needs and to
pin column dtypes before a table is written out or plotted.
"""

import logging
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)


def as_column_list(columns) -> list:
    """Normalise a single column name or an iterable of names to a list."""
    if columns is None:
        return []
    if isinstance(columns, (str, int)) or not isinstance(columns, Iterable):
        return [columns]
    return list(columns)


def require_columns(df: pd.DataFrame, columns: Iterable, context: str = "table") -> None:
    missing = set(as_column_list(columns)) - set(df.columns)
    if missing:
        raise KeyError(f"Missing expected {context} columns: {sorted(missing, key=str)}")


def enforce_dtypes(df: pd.DataFrame, dtype_dict: dict, skip_missing: bool = True) -> pd.DataFrame:
    """
    Enforce data types on a DataFrame according to a dtype dictionary.

    Parameters:
    df (pd.DataFrame): DataFrame to enforce types on
    dtype_dict (dict): Dictionary mapping column names to dtype strings
    skip_missing (bool): If True, skip columns not in DataFrame (default: True)

    Returns:
    pd.DataFrame: Copy of the DataFrame with enforced types

    Note:
    Datetime columns are parsed with errors coerced to NaT; values that could
    not be parsed are counted and logged rather than raised.
    """
    df = df.copy()
    for col, dtype in dtype_dict.items():
        if col not in df.columns:
            if skip_missing:
                continue
            raise KeyError(f"Column '{col}' not found in DataFrame")

        if str(dtype).startswith('datetime64'):
            converted = pd.to_datetime(df[col], errors='coerce')
            nat_count = (converted.isna() & df[col].notna()).sum()
            if nat_count > 0:
                logger.warning(f"Column '{col}': {nat_count} values could not be converted and set to NaT")
            df[col] = converted
            continue

        try:
            df[col] = df[col].astype(dtype)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not convert column '{col}' to {dtype}: {e}")

    return df


def type_convert(series: pd.Series) -> pd.Series:
    """
    Convert a column of strings to numbers when every non-missing value parses.

    Columns that are not entirely numeric come back unchanged.
    """
    if pd.api.types.is_numeric_dtype(series) or pd.api.types.is_bool_dtype(series):
        return series
    if isinstance(series.dtype, pd.CategoricalDtype):
        series = series.astype(object)
    converted = pd.to_numeric(series, errors='coerce')
    if (converted.isna() & series.notna()).any():
        return series
    return converted
