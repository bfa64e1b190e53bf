"""
Wide <-> long reshaping.

Wide tables keep each measured variable in its own column; long (molten)
tables store the variable name in a key column and its measurement in a value
column, one row per observation-variable pair. Plotting layers that map a
variable to colour or facet need the long form, so these two functions are
the workhorses of the package:

    gather: wide -> long   (tidyr::gather, reshape2::melt)
    spread: long -> wide   (tidyr::spread, reshape2::dcast)

`melt` and `cast` expose the same operations under reshape2-style argument
names.
"""

import logging

import pandas as pd

from plotprep.settings import get_settings
from plotprep.tidy.schema import as_column_list, require_columns, type_convert

logger = logging.getLogger(__name__)

cfg = get_settings()


def gather(
    df: pd.DataFrame,
    key: str | None = None,
    value: str | None = None,
    columns=None,
    id_columns=None,
    na_rm: bool = False,
    convert: bool = False,
    factor_key: bool = False,
) -> pd.DataFrame:
    """
    Collapse measure columns into key-value pairs.

    Parameters:
    df (pd.DataFrame): Wide table
    key (str): Name of the new key column (default from settings, "key")
    value (str): Name of the new value column (default from settings, "value")
    columns: Measure columns to gather. When omitted, every column that is not
        an id column is gathered.
    id_columns: Columns repeated for every gathered row. When omitted, every
        column that is not a measure column is kept as an id.
    na_rm (bool): Drop rows whose value is missing
    convert (bool): Turn the key column numeric when every key parses as a number
    factor_key (bool): Store the key as a categorical ordered like the measure columns

    Returns:
    pd.DataFrame: Long table with id columns, then key, then value. Rows are
    column-major: all rows for the first measure column come first.
    """
    key = key or cfg.key_name
    value = value or cfg.value_name
    columns = as_column_list(columns)
    id_columns = as_column_list(id_columns)
    require_columns(df, columns + id_columns, context="gather")

    overlap = set(columns) & set(id_columns)
    if overlap:
        raise ValueError(f"Columns cannot be both id and measure columns: {sorted(overlap, key=str)}")

    if columns:
        measure = columns
        ids = id_columns or [c for c in df.columns if c not in columns]
    elif id_columns:
        ids = id_columns
        measure = [c for c in df.columns if c not in id_columns]
    else:
        ids = []
        measure = list(df.columns)

    if not measure:
        logger.debug("gather: no measure columns selected, returning input unchanged")
        return df.copy()

    clash = {key, value} & set(ids)
    if clash:
        raise ValueError(f"key/value names clash with id columns: {sorted(clash, key=str)}")
    if key == value:
        raise ValueError(f"key and value columns must have different names, got '{key}' twice")

    long = df.melt(id_vars=ids, value_vars=measure, var_name=key, value_name=value)

    if na_rm:
        keep = long[value].notna()
        logger.debug(f"gather: dropping {(~keep).sum()} rows with missing values")
        long = long[keep].reset_index(drop=True)

    if factor_key:
        long[key] = pd.Categorical(long[key], categories=measure)
    elif convert:
        long[key] = type_convert(long[key])

    return long


def _key_levels(keys: pd.Series) -> list:
    """Distinct key values in output column order."""
    if isinstance(keys.dtype, pd.CategoricalDtype):
        present = set(keys.dropna().unique())
        return [c for c in keys.cat.categories if c in present]
    return sorted(keys.dropna().unique())


def spread(
    df: pd.DataFrame,
    key: str | None = None,
    value: str | None = None,
    fill=None,
    convert: bool = False,
    sep: str | None = None,
) -> pd.DataFrame:
    """
    Spread a key-value pair across multiple columns.

    Rows are identified by every column except `key` and `value`; each
    distinct key becomes a column. Output rows are sorted by the identifier
    columns. `fill` replaces both explicit missing values and missing
    identifier/key combinations.

    Raises:
    ValueError: when two rows share identifiers and key, or the key column
        has missing values.
    """
    key = key or cfg.key_name
    value = value or cfg.value_name
    require_columns(df, [key, value], context="spread")

    if df[key].isna().any():
        raise ValueError(f"Key column '{key}' contains {df[key].isna().sum()} missing values")

    ids = [c for c in df.columns if c not in (key, value)]

    duplicated = df.duplicated(subset=ids + [key], keep=False)
    if duplicated.any():
        rows = df.index[duplicated].tolist()
        raise ValueError(f"Duplicate identifiers for rows {rows}")

    if ids:
        row_id = df.groupby(ids, sort=True, dropna=False, observed=True).ngroup()
        id_frame = df[ids].assign(_row=row_id).drop_duplicates("_row").set_index("_row").sort_index()
    else:
        row_id = pd.Series(0, index=df.index)
        id_frame = pd.DataFrame(index=pd.RangeIndex(1 if len(df) else 0))

    new_columns = {}
    for level in _key_levels(df[key]):
        name = f"{key}{sep}{level}" if sep is not None else str(level)
        if name in ids:
            raise ValueError(f"Spread column '{name}' clashes with an identifier column")
        mask = df[key] == level
        cells = pd.Series(df.loc[mask, value].to_numpy(), index=row_id[mask].to_numpy())
        column = cells.reindex(id_frame.index)
        if fill is not None:
            column = column.fillna(fill)
        if convert:
            column = type_convert(column)
        new_columns[name] = column

    wide = pd.concat([id_frame, pd.DataFrame(new_columns, index=id_frame.index)], axis=1)
    return wide.reset_index(drop=True)


def melt(
    df: pd.DataFrame,
    id_vars=None,
    measure_vars=None,
    var_name: str = "variable",
    value_name: str = "value",
    na_rm: bool = False,
) -> pd.DataFrame:
    """reshape2-style spelling of `gather`."""
    return gather(
        df,
        key=var_name,
        value=value_name,
        columns=measure_vars,
        id_columns=id_vars,
        na_rm=na_rm,
    )


def cast(
    df: pd.DataFrame,
    var_name: str = "variable",
    value_name: str = "value",
    fill=None,
) -> pd.DataFrame:
    """reshape2-style spelling of `spread`."""
    return spread(df, key=var_name, value=value_name, fill=fill)
