"""Tidy-data preparation for grammar-of-graphics plotting."""

from plotprep.fortify import fortify, register_adapter
from plotprep.tidy import (
    arrange,
    cast,
    count,
    filter_rows,
    gather,
    group_mutate,
    melt,
    mutate,
    rename,
    select,
    separate,
    split_apply_combine,
    spread,
    summarise,
    unite,
)

__all__ = [
    "arrange",
    "cast",
    "count",
    "filter_rows",
    "fortify",
    "gather",
    "group_mutate",
    "melt",
    "mutate",
    "register_adapter",
    "rename",
    "select",
    "separate",
    "split_apply_combine",
    "spread",
    "summarise",
    "unite",
]
