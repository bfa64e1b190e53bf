"""
Fortify Model Pipeline

Fits response ~ predictors by least squares and writes the fortified model
frame (data plus .hat, .sigma, .cooksd, .fitted, .resid, .stdresid), and
optionally the per-term coefficient table.
"""

from pathlib import Path
import logging

import pandas as pd

from plotprep.fortify import fortify
from plotprep.fortify.models import fit_linear_model, glance_model, tidy_model
from plotprep.io import readers
from plotprep.io.writers import write_table
from plotprep.settings import get_settings

cfg = get_settings()
logger = logging.getLogger(__name__)


def run_fortify_model_pipeline(
    in_file: Path,
    response: str,
    predictors: list[str],
    out_file: Path | None = None,
    coef_file: Path | None = None,
) -> tuple[pd.DataFrame, Path]:
    """
    Fit a linear model and save its fortified diagnostics.

    Parameters:
    in_file (Path): Input table
    response (str): Response column
    predictors (list[str]): Predictor columns
    out_file (Path): Output path (default: <processed_dir>/<stem>_fortified.parquet)
    coef_file (Path): If given, also write the coefficient table here

    Returns:
    tuple[pd.DataFrame, Path]: Fortified model frame and output file path
    """
    if out_file is None:
        out_file = cfg.processed_dir / f"{Path(in_file).stem}_fortified.parquet"

    logger.info("=== Fortify Model Pipeline ===")
    df = readers.read_table(in_file)
    logger.info(f"Loaded {len(df)} rows from {in_file}")

    fit = fit_linear_model(df, response=response, predictors=predictors)
    summary = glance_model(fit).iloc[0]
    logger.info(f"Fitted {response} ~ {' + '.join(predictors)}: R²={summary['r_squared']:.3f}, sigma={summary['sigma']:.3g}, n={summary['nobs']}")

    fortified = fortify(fit)
    write_table(fortified, out_file)
    logger.info(f"Fortified model frame saved to {out_file}")

    if coef_file is not None:
        write_table(tidy_model(fit, conf_int=True), coef_file)
        logger.info(f"Coefficient table saved to {coef_file}")

    return fortified, out_file
