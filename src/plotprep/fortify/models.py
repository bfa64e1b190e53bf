"""
Linear model -> DataFrame adapters.

Three views of a fitted ordinary-least-squares model, each a DataFrame ready
for plotting:

- `augment_model` / `fortify`: the model frame plus per-observation
  diagnostics (.hat, .sigma, .cooksd, .fitted, .resid, .stdresid)
- `tidy_model`: one row per coefficient (estimate, standard error, t test)
- `glance_model`: one row of model-level fit statistics

Models are fitted with scikit-learn's LinearRegression; inference
statistics come from the closed-form OLS formulas using the design matrix
kept on `LinearModelFit`.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.linear_model import LinearRegression

from plotprep.fortify.core import fortify
from plotprep.tidy.schema import as_column_list, require_columns

logger = logging.getLogger(__name__)

INTERCEPT_TERM = "(Intercept)"
DIAGNOSTIC_COLUMNS = [".hat", ".sigma", ".cooksd", ".fitted", ".resid", ".stdresid"]


@dataclass
class LinearModelFit:
    """A fitted LinearRegression together with the data it was fitted on."""

    model: LinearRegression
    data: pd.DataFrame          # rows used for fitting, all original columns
    response: str
    predictors: list
    design: pd.DataFrame        # dummy-coded predictors, no intercept column

    @classmethod
    def from_estimator(cls, model: LinearRegression, data: pd.DataFrame, response: str) -> "LinearModelFit":
        """Wrap an estimator that was fitted on a DataFrame of numeric columns."""
        names = getattr(model, "feature_names_in_", None)
        if names is None:
            raise TypeError("LinearRegression must be fitted on a DataFrame with named columns to be fortified")
        predictors = list(names)
        require_columns(data, [response] + predictors, context="model")
        complete = data[[response] + predictors].notna().all(axis=1)
        frame = data.loc[complete]
        return cls(model, frame, response, predictors, frame[predictors].astype(float))

    @property
    def fit_intercept(self) -> bool:
        return bool(self.model.fit_intercept)

    @property
    def terms(self) -> list:
        return ([INTERCEPT_TERM] if self.fit_intercept else []) + list(self.design.columns)

    @property
    def coefficients(self) -> np.ndarray:
        coef = np.ravel(self.model.coef_)
        if self.fit_intercept:
            return np.concatenate([[float(self.model.intercept_)], coef])
        return coef

    @property
    def y(self) -> np.ndarray:
        return self.data[self.response].to_numpy(dtype=float)

    def design_matrix(self, design: pd.DataFrame | None = None) -> np.ndarray:
        X = (self.design if design is None else design).to_numpy(dtype=float)
        if self.fit_intercept:
            X = np.column_stack([np.ones(len(X)), X])
        return X

    @property
    def nobs(self) -> int:
        return len(self.data)

    @property
    def df_residual(self) -> int:
        return self.nobs - len(self.terms)

    def residuals(self) -> np.ndarray:
        return self.y - self.design_matrix() @ self.coefficients

    def sigma(self) -> float:
        if self.df_residual <= 0:
            return float("nan")
        return float(np.sqrt(np.sum(self.residuals() ** 2) / self.df_residual))

    def _xtx_inv(self) -> np.ndarray:
        X = self.design_matrix()
        return np.linalg.inv(X.T @ X)


def fit_linear_model(data: pd.DataFrame, response: str, predictors, fit_intercept: bool = True) -> LinearModelFit:
    """
    Fit response ~ predictors by ordinary least squares.

    Rows with missing values in any used column are dropped. Categorical and
    string predictors are dummy-coded with their first level as baseline.

    Raises:
    KeyError: if a column is missing
    ValueError: if nothing is left to fit or the design is rank deficient
    """
    predictors = as_column_list(predictors)
    if not predictors:
        raise ValueError("fit_linear_model needs at least one predictor")
    require_columns(data, [response] + predictors, context="model")

    complete = data[[response] + predictors].notna().all(axis=1)
    dropped = int((~complete).sum())
    if dropped:
        logger.info(f"Dropping {dropped} rows with missing values before fitting {response} ~ {' + '.join(map(str, predictors))}")
    frame = data.loc[complete]
    if frame.empty:
        raise ValueError("No complete rows left to fit the model")

    design = pd.get_dummies(frame[predictors], drop_first=True, dtype=float).astype(float)
    model = LinearRegression(fit_intercept=fit_intercept)
    fit = LinearModelFit(model, frame, response, predictors, design)

    X = fit.design_matrix()
    rank = np.linalg.matrix_rank(X)
    if rank < X.shape[1]:
        raise ValueError(f"Design matrix is rank deficient (rank {rank} < {X.shape[1]} terms)")

    model.fit(design, frame[response].astype(float))
    logger.debug(f"Fitted {response} ~ {' + '.join(fit.terms)} on {fit.nobs} rows")
    return fit


def lm_diagnostics(fit: LinearModelFit) -> pd.DataFrame:
    """Per-observation influence and residual diagnostics, indexed like the model frame."""
    X = fit.design_matrix()
    n, p = X.shape
    fitted = X @ fit.coefficients
    resid = fit.y - fitted
    q, _ = np.linalg.qr(X)
    hat = np.sum(q ** 2, axis=1)

    rdf = n - p
    rss = float(np.sum(resid ** 2))
    with np.errstate(divide="ignore", invalid="ignore"):
        s2 = rss / rdf if rdf > 0 else np.nan
        stdresid = resid / np.sqrt(s2 * (1 - hat))
        cooksd = stdresid ** 2 * hat / (p * (1 - hat))
        if rdf > 1:
            loo_sigma = np.sqrt((rss - resid ** 2 / (1 - hat)) / (rdf - 1))
        else:
            loo_sigma = np.full(n, np.nan)

    return pd.DataFrame({
        ".hat": hat,
        ".sigma": loo_sigma,
        ".cooksd": cooksd,
        ".fitted": fitted,
        ".resid": resid,
        ".stdresid": stdresid,
    }, index=fit.data.index)


def augment_model(fit: LinearModelFit, newdata: pd.DataFrame | None = None) -> pd.DataFrame:
    """
    Add model results to data.

    Without `newdata` returns the model frame with the diagnostic columns.
    With `newdata` returns it with `.fitted` and `.se_fit` (standard error of
    the fitted mean).
    """
    if newdata is None:
        return pd.concat([fit.data, lm_diagnostics(fit)], axis=1)

    require_columns(newdata, fit.predictors, context="newdata")
    # dummy-coded predictors do not appear by name in the design
    for c in fit.predictors:
        if c in fit.design.columns:
            continue
        seen = set(fit.data[c].dropna())
        unseen = [v for v in pd.unique(newdata[c].dropna()) if v not in seen]
        if unseen:
            raise ValueError(f"Predictor '{c}' has levels not seen during fitting: {sorted(map(str, unseen))}")

    design = (
        pd.get_dummies(newdata[fit.predictors], dtype=float)
        .reindex(columns=fit.design.columns, fill_value=0.0)
        .astype(float)
    )
    X = fit.design_matrix(design)
    out = newdata.copy()
    out[".fitted"] = X @ fit.coefficients
    out[".se_fit"] = np.sqrt(np.sum((X @ fit._xtx_inv()) * X, axis=1)) * fit.sigma()
    return out


def tidy_model(fit: LinearModelFit, conf_int: bool = False, conf_level: float = 0.95) -> pd.DataFrame:
    """One row per term: estimate, std_error, t statistic and two-sided p-value."""
    if not 0 < conf_level < 1:
        raise ValueError(f"conf_level must be between 0 and 1, got {conf_level}")
    beta = fit.coefficients
    rdf = fit.df_residual
    with np.errstate(divide="ignore", invalid="ignore"):
        se = np.sqrt(np.diag(fit._xtx_inv())) * fit.sigma()
        statistic = beta / se
    p_value = 2 * stats.t.sf(np.abs(statistic), rdf) if rdf > 0 else np.full(len(beta), np.nan)

    out = pd.DataFrame({
        "term": fit.terms,
        "estimate": beta,
        "std_error": se,
        "statistic": statistic,
        "p_value": p_value,
    })
    if conf_int:
        quantile = stats.t.ppf(1 - (1 - conf_level) / 2, rdf) if rdf > 0 else np.nan
        out["conf_low"] = beta - quantile * se
        out["conf_high"] = beta + quantile * se
    return out


def glance_model(fit: LinearModelFit) -> pd.DataFrame:
    """Single-row model summary: R², F test, likelihood and information criteria."""
    y = fit.y
    n = fit.nobs
    p = len(fit.terms)
    rdf = fit.df_residual
    rss = float(np.sum(fit.residuals() ** 2))
    df_int = 1 if fit.fit_intercept else 0
    tss = float(np.sum((y - y.mean()) ** 2)) if fit.fit_intercept else float(np.sum(y ** 2))
    numdf = p - df_int

    with np.errstate(divide="ignore", invalid="ignore"):
        r_squared = 1 - rss / tss
        adj_r_squared = 1 - (1 - r_squared) * ((n - df_int) / rdf) if rdf > 0 else np.nan
        if numdf > 0 and rdf > 0:
            f_stat = ((tss - rss) / numdf) / (rss / rdf)
            f_p = float(stats.f.sf(f_stat, numdf, rdf))
        else:
            f_stat, f_p = np.nan, np.nan
        log_lik = -0.5 * n * (np.log(2 * np.pi) + np.log(rss / n) + 1)

    return pd.DataFrame([{
        "r_squared": r_squared,
        "adj_r_squared": adj_r_squared,
        "sigma": fit.sigma(),
        "statistic": f_stat,
        "p_value": f_p,
        "df": numdf,
        "log_lik": log_lik,
        "aic": -2 * log_lik + 2 * (p + 1),
        "bic": -2 * log_lik + np.log(n) * (p + 1),
        "deviance": rss,
        "df_residual": rdf,
        "nobs": n,
    }])


@fortify.register(LinearModelFit)
def _fortify_linear_model(fit: LinearModelFit, **kwargs) -> pd.DataFrame:
    return augment_model(fit)


@fortify.register(LinearRegression)
def _fortify_linear_regression(model: LinearRegression, data: pd.DataFrame | None = None,
                               response: str | None = None, **kwargs) -> pd.DataFrame:
    if data is None or response is None:
        raise TypeError("Fortifying a LinearRegression needs the data it was fitted on: fortify(model, data=df, response='y')")
    return augment_model(LinearModelFit.from_estimator(model, data, response))
