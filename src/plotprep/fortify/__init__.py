"""Adapters turning models, maps and other objects into plot-ready DataFrames."""

from plotprep.fortify import maps
from plotprep.fortify.core import fortify, register_adapter
from plotprep.fortify.maps import fortify_geojson
from plotprep.fortify.models import (
    LinearModelFit,
    augment_model,
    fit_linear_model,
    glance_model,
    lm_diagnostics,
    tidy_model,
)

__all__ = [
    "LinearModelFit",
    "augment_model",
    "fit_linear_model",
    "fortify",
    "fortify_geojson",
    "glance_model",
    "lm_diagnostics",
    "maps",
    "register_adapter",
    "tidy_model",
]
