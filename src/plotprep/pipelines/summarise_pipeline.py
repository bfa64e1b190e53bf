"""
Summarise Pipeline

Grouped split-apply-combine over a table on disk: one output row per
combination of group keys, one column per named aggregation.
"""

from pathlib import Path
import logging

import pandas as pd

from plotprep.io import readers
from plotprep.io.writers import write_table
from plotprep.settings import get_settings
from plotprep.tidy import grouping

cfg = get_settings()
logger = logging.getLogger(__name__)


def parse_aggregation(text: str) -> tuple[str, object]:
    """
    Parse "name=column:func" (or "column:func", named "<column>_<func>").

    "n" alone (or "name=n") counts rows per group.
    """
    name, sep, spec = text.partition("=")
    if not sep:
        name, spec = "", text
    name, spec = name.strip(), spec.strip()

    if spec == "n":
        return name or "n", grouping.n_rows

    column, sep, func = spec.rpartition(":")
    if not sep or not column or not func:
        raise ValueError(f"Invalid aggregation '{text}'; expected name=column:func")
    return name or f"{column}_{func}", (column, func)


def run_summarise_pipeline(
    in_file: Path,
    by: list[str],
    aggregations: list[str],
    out_file: Path | None = None,
) -> tuple[pd.DataFrame, Path]:
    """
    Summarise a table by groups.

    Parameters:
    in_file (Path): Input table
    by (list[str]): Group columns
    aggregations (list[str]): "name=column:func" specs, see `parse_aggregation`
    out_file (Path): Output path (default: <processed_dir>/<stem>_summary.parquet)

    Returns:
    tuple[pd.DataFrame, Path]: Summary table and output file path
    """
    if out_file is None:
        out_file = cfg.processed_dir / f"{Path(in_file).stem}_summary.parquet"

    specs = dict(parse_aggregation(a) for a in aggregations)

    logger.info("=== Summarise Pipeline ===")
    df = readers.read_table(in_file)
    logger.info(f"Loaded {len(df)} rows from {in_file}; grouping by {by}")

    summary = grouping.summarise(df, by=by, **specs)
    logger.info(f"Summarised into {len(summary)} groups")

    write_table(summary, out_file)
    logger.info(f"Summary saved to {out_file}")
    return summary, out_file
