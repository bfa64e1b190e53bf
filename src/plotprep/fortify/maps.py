"""
Spatial polygons -> long vertex table.

Flattens GeoJSON-like polygon data into one row per vertex so boundaries can
be drawn as grouped paths/polygons:

    long, lat   vertex coordinates
    order       1.. position of the vertex within its ring
    hole        True for interior rings
    piece       1.. ring number within the feature
    id          feature id (a property value, or the feature index)
    group       "{id}.{piece}", one path per ring
"""

import logging
from collections.abc import Mapping

import pandas as pd

logger = logging.getLogger(__name__)

GEOJSON_TYPES = ("FeatureCollection", "Feature", "Polygon", "MultiPolygon")
VERTEX_COLUMNS = ["long", "lat", "order", "hole", "piece", "id", "group"]


def is_geojson(obj) -> bool:
    return isinstance(obj, Mapping) and obj.get("type") in GEOJSON_TYPES


def _features(obj: Mapping) -> list:
    kind = obj.get("type")
    if kind == "FeatureCollection":
        return list(obj.get("features", []))
    if kind == "Feature":
        return [obj]
    return [{"type": "Feature", "geometry": obj, "properties": {}}]


def _polygons(geometry: Mapping) -> list:
    kind = geometry.get("type")
    if kind == "Polygon":
        return [geometry["coordinates"]]
    if kind == "MultiPolygon":
        return list(geometry["coordinates"])
    raise ValueError(f"Unsupported geometry type '{kind}'; expected Polygon or MultiPolygon")


def fortify_geojson(obj: Mapping, region: str | None = None, include_properties: bool = False) -> pd.DataFrame:
    """
    Convert GeoJSON-like polygons to a long vertex table.

    Parameters:
    obj (Mapping): FeatureCollection, Feature, Polygon or MultiPolygon
    region (str): Feature property used as `id`; defaults to the feature index
    include_properties (bool): Append each feature's properties to its rows

    Returns:
    pd.DataFrame: One row per vertex (see module docstring for columns)
    """
    if not is_geojson(obj):
        raise ValueError(f"Expected a GeoJSON object of type {GEOJSON_TYPES}, got {obj.get('type')!r}")

    rows = []
    property_names = []
    for index, feature in enumerate(_features(obj)):
        properties = feature.get("properties") or {}
        geometry = feature.get("geometry")
        if geometry is None:
            logger.debug(f"Skipping feature {index} without geometry")
            continue

        if region is not None:
            if region not in properties:
                raise KeyError(f"Feature {index} has no property '{region}'")
            feature_id = str(properties[region])
        else:
            feature_id = str(index)

        extra = {}
        if include_properties:
            extra = {k: v for k, v in properties.items() if k not in VERTEX_COLUMNS}
            property_names.extend(k for k in extra if k not in property_names)

        piece = 0
        for polygon in _polygons(geometry):
            for ring_index, ring in enumerate(polygon):
                piece += 1
                group = f"{feature_id}.{piece}"
                for order, position in enumerate(ring, start=1):
                    rows.append({
                        "long": float(position[0]),
                        "lat": float(position[1]),
                        "order": order,
                        "hole": ring_index > 0,
                        "piece": piece,
                        "id": feature_id,
                        "group": group,
                        **extra,
                    })

    logger.debug(f"fortify_geojson: {len(rows)} vertices")
    return pd.DataFrame(rows, columns=VERTEX_COLUMNS + property_names)
