"""
Reshape Pipeline

Reads a table, reshapes it between wide and long layouts and writes the
result. Input format is picked from the file suffix (CSV, Parquet, R data),
output format likewise (CSV or Parquet).
"""

from pathlib import Path
import logging

import pandas as pd

from plotprep.io import readers
from plotprep.io.writers import write_table
from plotprep.settings import get_settings
from plotprep.tidy import reshape

cfg = get_settings()
logger = logging.getLogger(__name__)


def _default_out(in_file: Path, suffix: str) -> Path:
    return cfg.processed_dir / f"{Path(in_file).stem}_{suffix}.parquet"


def parse_fill(text: str):
    """Read a fill value given as text: numbers become numbers, anything else stays a string."""
    try:
        return pd.to_numeric(text)
    except (ValueError, TypeError):
        return text


def run_gather_pipeline(
    in_file: Path,
    out_file: Path | None = None,
    key: str | None = None,
    value: str | None = None,
    columns: list[str] | None = None,
    id_columns: list[str] | None = None,
    na_rm: bool = False,
    convert: bool = False,
) -> tuple[pd.DataFrame, Path]:
    """
    Convert a wide table to long format.

    Parameters:
    in_file (Path): Wide input table
    out_file (Path): Output path (default: <processed_dir>/<stem>_long.parquet)
    key, value (str): Names of the key/value columns (defaults from settings)
    columns (list[str]): Measure columns to gather (default: all non-id columns)
    id_columns (list[str]): Identifier columns kept on every row
    na_rm (bool): Drop rows with missing values
    convert (bool): Convert the key column to numbers when possible

    Returns:
    tuple[pd.DataFrame, Path]: Long table and output file path
    """
    if out_file is None:
        out_file = _default_out(in_file, "long")

    logger.info("=== Gather Pipeline ===")
    df = readers.read_table(in_file)
    logger.info(f"Loaded {len(df)} rows x {len(df.columns)} columns from {in_file}")

    long_df = reshape.gather(
        df, key=key, value=value, columns=columns, id_columns=id_columns,
        na_rm=na_rm, convert=convert,
    )
    logger.info(f"Gathered into {len(long_df)} rows")

    write_table(long_df, out_file)
    logger.info(f"Long table saved to {out_file}")
    return long_df, out_file


def run_spread_pipeline(
    in_file: Path,
    out_file: Path | None = None,
    key: str | None = None,
    value: str | None = None,
    fill=None,
    convert: bool = False,
) -> tuple[pd.DataFrame, Path]:
    """
    Convert a long table to wide format.

    Returns:
    tuple[pd.DataFrame, Path]: Wide table and output file path
    """
    if out_file is None:
        out_file = _default_out(in_file, "wide")

    logger.info("=== Spread Pipeline ===")
    df = readers.read_table(in_file)
    logger.info(f"Loaded {len(df)} rows from {in_file}")

    wide_df = reshape.spread(df, key=key, value=value, fill=fill, convert=convert)
    logger.info(f"Spread into {len(wide_df)} rows x {len(wide_df.columns)} columns")

    write_table(wide_df, out_file)
    logger.info(f"Wide table saved to {out_file}")
    return wide_df, out_file
