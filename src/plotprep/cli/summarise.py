"""
CLI for grouped summaries.

    plotprep-summarise data/raw/mpg.csv --by class cyl --agg mean_hwy=hwy:mean --agg n
"""

import argparse
import logging
from pathlib import Path

from plotprep import logging_setup
from plotprep.pipelines import summarise_pipeline
from plotprep.settings import get_settings

logger = logging.getLogger(__name__)


def main(argv=None):
    cfg = get_settings()
    p = argparse.ArgumentParser(description="Summarise a table by groups (split-apply-combine)")
    p.add_argument("input", type=Path, help="Input table (.csv, .parquet, .RData/.rda/.rds)")
    p.add_argument("--by", nargs="*", default=[], help="Group columns (none: summarise the whole table)")
    p.add_argument(
        "--agg", action="append", required=True,
        help="Aggregation as name=column:func (e.g. mean_hwy=hwy:mean), or n to count rows; repeatable",
    )
    p.add_argument("--out", type=Path, default=None, help="Output table (.csv or .parquet)")
    p.add_argument("--log_level", default=cfg.log_level, help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    a = p.parse_args(argv)

    # Initialize logging
    logging_setup.setup_logging(a.log_level)

    if not a.input.exists():
        logger.error(f"Input file not found: {a.input}")
        return 1

    try:
        _, out_file = summarise_pipeline.run_summarise_pipeline(
            in_file=a.input, by=a.by, aggregations=a.agg, out_file=a.out,
        )
    except Exception as e:
        logger.error(f"Summarise failed: {e}", exc_info=True)
        return 1

    logger.info(f"Wrote {out_file}")
    return 0


if __name__ == "__main__":
    exit(main())
