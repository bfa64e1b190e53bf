"""Tidy-data verbs: reshaping, splitting and grouped summaries."""

from plotprep.tidy.grouping import count, group_mutate, n_rows, split_apply_combine, summarise
from plotprep.tidy.reshape import cast, gather, melt, spread
from plotprep.tidy.separate import separate, unite
from plotprep.tidy.verbs import arrange, filter_rows, mutate, rename, select

__all__ = [
    "arrange",
    "cast",
    "count",
    "filter_rows",
    "gather",
    "group_mutate",
    "melt",
    "mutate",
    "n_rows",
    "rename",
    "select",
    "separate",
    "split_apply_combine",
    "spread",
    "summarise",
    "unite",
]
