"""
CLI for reshaping tables between wide and long layouts.

    plotprep-reshape gather data/raw/economics.csv --id date --out long.parquet
    plotprep-reshape spread long.parquet --key variable --value value --out wide.csv
"""

import argparse
import logging
from pathlib import Path

from plotprep import logging_setup
from plotprep.pipelines import reshape_pipeline
from plotprep.settings import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    cfg = get_settings()
    p = argparse.ArgumentParser(description="Reshape a table between wide and long layouts")
    p.add_argument("--log_level", default=cfg.log_level, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("gather", help="Wide -> long")
    g.add_argument("input", type=Path, help="Input table (.csv, .parquet, .RData/.rda/.rds)")
    g.add_argument("--out", type=Path, default=None, help="Output table (.csv or .parquet)")
    g.add_argument("--key", default=cfg.key_name, help=f"Name of the key column (default: {cfg.key_name})")
    g.add_argument("--value", default=cfg.value_name, help=f"Name of the value column (default: {cfg.value_name})")
    g.add_argument("--columns", nargs="+", default=None, help="Measure columns to gather")
    g.add_argument("--id", dest="id_columns", nargs="+", default=None, help="Identifier columns")
    g.add_argument("--na_rm", action="store_true", help="Drop rows with missing values")
    g.add_argument("--convert", action="store_true", help="Convert numeric-looking keys to numbers")

    s = sub.add_parser("spread", help="Long -> wide")
    s.add_argument("input", type=Path, help="Input table (.csv, .parquet, .RData/.rda/.rds)")
    s.add_argument("--out", type=Path, default=None, help="Output table (.csv or .parquet)")
    s.add_argument("--key", default=cfg.key_name, help=f"Key column (default: {cfg.key_name})")
    s.add_argument("--value", default=cfg.value_name, help=f"Value column (default: {cfg.value_name})")
    s.add_argument("--fill", type=reshape_pipeline.parse_fill, default=None, help="Value used for missing cells (numeric text is read as a number)")
    s.add_argument("--convert", action="store_true", help="Convert numeric-looking columns to numbers")
    return p


def main(argv=None):
    a = build_parser().parse_args(argv)

    # Initialize logging
    logging_setup.setup_logging(a.log_level)

    if not a.input.exists():
        logger.error(f"Input file not found: {a.input}")
        return 1

    try:
        if a.command == "gather":
            _, out_file = reshape_pipeline.run_gather_pipeline(
                in_file=a.input, out_file=a.out, key=a.key, value=a.value,
                columns=a.columns, id_columns=a.id_columns, na_rm=a.na_rm, convert=a.convert,
            )
        else:
            _, out_file = reshape_pipeline.run_spread_pipeline(
                in_file=a.input, out_file=a.out, key=a.key, value=a.value,
                fill=a.fill, convert=a.convert,
            )
    except Exception as e:
        logger.error(f"Reshape failed: {e}", exc_info=True)
        return 1

    logger.info(f"Wrote {out_file}")
    return 0


if __name__ == "__main__":
    exit(main())
