"""
Quick-look plots for tidy tables and fortified models.

Long tables map the key column to line colour (or to one panel per key);
fortified models get the usual residual diagnostics.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from scipy import stats
from typing import Optional, Tuple

from plotprep.tidy.schema import require_columns


def plot_long(
    df: pd.DataFrame,
    x: str,
    key: str = "key",
    value: str = "value",
    facet: bool = False,
    ncols: int = 3,
    figsize: Optional[Tuple[float, float]] = None,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, np.ndarray]:
    """
    Plot a long-format table as one line per key.

    Args:
        df: Long table (see `plotprep.tidy.gather`)
        x: Column for the horizontal axis
        key: Column identifying each series
        value: Column holding the measurements
        facet: Draw each key in its own panel with a free y scale instead of
               overlaying all series on one axis
        ncols: Number of panel columns when faceting
        figsize: Figure size (width, height)
        title: Overall figure title

    Returns:
        Tuple of (figure, axes array)

    Example:
        >>> long = gather(economics, id_columns="date")
        >>> fig, axes = plot_long(long, x="date", facet=True)
    """
    require_columns(df, [x, key, value], context="plot")
    keys = list(pd.unique(df[key].dropna()))

    if facet:
        ncols = max(1, min(ncols, len(keys)))
        nrows = max(1, int(np.ceil(len(keys) / ncols)))
        fig, axes = plt.subplots(nrows, ncols, figsize=figsize or (4 * ncols, 3 * nrows), squeeze=False)
    else:
        fig, axes = plt.subplots(1, 1, figsize=figsize or (8, 5), squeeze=False)
    axes = axes.ravel()

    for i, k in enumerate(keys):
        series = df[df[key] == k].sort_values(x)
        ax = axes[i] if facet else axes[0]
        ax.plot(series[x], series[value], label=str(k), linewidth=1.2)
        if facet:
            ax.set_title(str(k))

    if facet:
        for ax in axes[len(keys):]:
            ax.axis("off")
    else:
        axes[0].set_xlabel(x)
        axes[0].set_ylabel(value)
        if keys:
            axes[0].legend(title=key, frameon=False)

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig, axes


def plot_model_diagnostics(
    fortified: pd.DataFrame,
    figsize: Tuple[float, float] = (10, 4),
    title: str = "Model Diagnostics",
) -> Tuple[plt.Figure, np.ndarray]:
    """
    Residuals vs fitted and a normal Q-Q plot of standardised residuals.

    Args:
        fortified: Output of `fortify(fit)` with .fitted, .resid and .stdresid
        figsize: Figure size (width, height)
        title: Overall figure title

    Returns:
        Tuple of (figure, axes array)
    """
    require_columns(fortified, [".fitted", ".resid", ".stdresid"], context="fortified model")
    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax = axes[0]
    ax.scatter(fortified[".fitted"], fortified[".resid"], s=10, alpha=0.6)
    ax.axhline(0, linestyle="--", linewidth=1, color="grey")
    ax.set_xlabel("Fitted values")
    ax.set_ylabel("Residuals")
    ax.set_title("Residuals vs Fitted")

    ax = axes[1]
    std = np.sort(fortified[".stdresid"].to_numpy(dtype=float))
    std = std[np.isfinite(std)]
    if std.size:
        probs = (np.arange(1, std.size + 1) - 0.5) / std.size
        theoretical = stats.norm.ppf(probs)
        ax.scatter(theoretical, std, s=10, alpha=0.6)
        lo, hi = theoretical.min(), theoretical.max()
        ax.plot([lo, hi], [lo, hi], linestyle="--", linewidth=1, color="red")
    ax.set_xlabel("Theoretical quantiles")
    ax.set_ylabel("Standardised residuals")
    ax.set_title("Normal Q-Q")

    fig.suptitle(title)
    fig.tight_layout()
    return fig, axes
