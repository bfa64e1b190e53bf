"""
CLI for fitting a linear model and writing its fortified diagnostics.

    plotprep-fortify-model data/raw/diamonds.parquet --response price --predictors carat cut \
        --out fortified.parquet --coef_out coefficients.csv
"""

import argparse
import logging
from pathlib import Path

from plotprep import logging_setup
from plotprep.pipelines import model_pipeline
from plotprep.settings import get_settings

logger = logging.getLogger(__name__)


def main(argv=None):
    cfg = get_settings()
    p = argparse.ArgumentParser(description="Fit response ~ predictors and write per-observation diagnostics")
    p.add_argument("input", type=Path, help="Input table (.csv, .parquet, .RData/.rda/.rds)")
    p.add_argument("--response", required=True, help="Response column")
    p.add_argument("--predictors", nargs="+", required=True, help="Predictor columns")
    p.add_argument("--out", type=Path, default=None, help="Output table for the fortified model frame")
    p.add_argument("--coef_out", type=Path, default=None, help="Optional output table for coefficients")
    p.add_argument("--log_level", default=cfg.log_level, help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    a = p.parse_args(argv)

    # Initialize logging
    logging_setup.setup_logging(a.log_level)

    if not a.input.exists():
        logger.error(f"Input file not found: {a.input}")
        return 1

    try:
        _, out_file = model_pipeline.run_fortify_model_pipeline(
            in_file=a.input, response=a.response, predictors=a.predictors,
            out_file=a.out, coef_file=a.coef_out,
        )
    except Exception as e:
        logger.error(f"Model pipeline failed: {e}", exc_info=True)
        return 1

    logger.info(f"Wrote {out_file}")
    return 0


if __name__ == "__main__":
    exit(main())
