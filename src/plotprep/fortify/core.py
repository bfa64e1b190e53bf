"""
Object -> DataFrame adapters.

`fortify` is a single-dispatch generic function: plotting code calls
`fortify(obj)` on whatever it was handed and gets back a DataFrame. New
object types opt in by registering an adapter:

    @register_adapter(MyResult)
    def _(result, **kwargs) -> pd.DataFrame:
        return pd.DataFrame({"x": result.x, "y": result.y})
"""

from collections.abc import Mapping
from functools import singledispatch

import pandas as pd

from plotprep.fortify import maps


@singledispatch
def fortify(obj, **kwargs) -> pd.DataFrame:
    if hasattr(obj, "__dataframe__"):
        return pd.api.interchange.from_dataframe(obj)
    raise TypeError(
        f"Don't know how to convert an object of type {type(obj).__name__} to a DataFrame; "
        f"register an adapter with plotprep.fortify.register_adapter({type(obj).__name__})"
    )


def register_adapter(cls):
    """Decorator registering an adapter function for `cls`."""
    return fortify.register(cls)


@fortify.register(pd.DataFrame)
def _fortify_frame(obj: pd.DataFrame, **kwargs) -> pd.DataFrame:
    return obj


@fortify.register(pd.Series)
def _fortify_series(obj: pd.Series, **kwargs) -> pd.DataFrame:
    return obj.to_frame(name=obj.name if obj.name is not None else "value")


@fortify.register(type(None))
def _fortify_none(obj, **kwargs) -> pd.DataFrame:
    return pd.DataFrame()


@fortify.register(Mapping)
def _fortify_mapping(obj: Mapping, **kwargs) -> pd.DataFrame:
    if maps.is_geojson(obj):
        return maps.fortify_geojson(obj, **kwargs)
    record = dict(obj)
    # all scalars: one record, one row
    if record and all(pd.api.types.is_scalar(v) for v in record.values()):
        return pd.DataFrame([record])
    return pd.DataFrame(record)
