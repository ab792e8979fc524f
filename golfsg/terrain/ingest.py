"""
Terrain ingestion utilities:
- Turn GeoJSON features (dicts or files) and GeoDataFrames into TerrainFeature lists.
- Scrub OSM golf tags into terrain categories and course-boundary flags.
- Locate a course's terrain file on disk.

Acquisition (Overpass queries, caching) happens upstream; these helpers only read
data that is already resident locally.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import geopandas as gpd
import shapely
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from ..exceptions import DataUnavailableError, InvalidInputError
from ..logging import get_logger
from .models import TerrainCategory, TerrainData, TerrainFeature, expand_feature

logger = get_logger(__name__)

CATEGORY_KEYS = ("terrainType", "terrain_type", "terrain", "category", "golf")
BOUNDARY_KEYS = ("is_boundary", "isBoundary", "boundary")

# OSM golf=* values that map onto the ranked categories
OSM_CATEGORY_ALIASES: Dict[str, str] = {
    "water_hazard": TerrainCategory.HAZARD.value,
    "lateral_water_hazard": TerrainCategory.HAZARD.value,
    "penalty_area": TerrainCategory.PENALTY.value,
    "sand_trap": TerrainCategory.BUNKER.value,
    "teebox": TerrainCategory.TEE.value,
}

TERRAIN_FILE_CANDIDATES = (
    Path("geojson") / "terrain.geojson",
    Path("terrain.geojson"),
)


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    if value is None or (isinstance(value, float) and value != value):
        return False
    try:
        return bool(value)
    except TypeError:
        # pandas.NA
        return False


def category_from_properties(props: Mapping[str, Any]) -> Optional[str]:
    """Return the terrain label carried by a feature's properties, if any."""
    for key in CATEGORY_KEYS:
        raw = props.get(key)
        if raw is None or (isinstance(raw, float) and raw != raw):
            continue
        text = str(raw).strip().lower()
        if text:
            return OSM_CATEGORY_ALIASES.get(text, text)
    return None


def is_boundary_from_properties(props: Mapping[str, Any]) -> bool:
    if any(_truthy(props.get(key)) for key in BOUNDARY_KEYS):
        return True
    return str(props.get("leisure") or "").strip().lower() == "golf_course"


def _polygonal(geom: BaseGeometry) -> BaseGeometry:
    """Repair invalid polygons and keep only their areal parts."""
    if geom.is_valid:
        return geom
    logger.warning("Repairing invalid %s geometry", geom.geom_type)
    repaired = shapely.make_valid(geom)
    if repaired.geom_type in ("Polygon", "MultiPolygon"):
        return repaired
    parts = [g for g in getattr(repaired, "geoms", []) if g.geom_type in ("Polygon", "MultiPolygon")]
    return shapely.union_all(parts) if parts else shapely.Polygon()


def features_from_geometry(
    geom: BaseGeometry, props: Optional[Mapping[str, Any]] = None
) -> List[TerrainFeature]:
    props = props or {}
    if geom is None or geom.is_empty or geom.geom_type not in ("Polygon", "MultiPolygon"):
        return []
    name = props.get("name")
    return expand_feature(
        _polygonal(geom),
        category=category_from_properties(props),
        is_boundary=is_boundary_from_properties(props),
        name=str(name) if name is not None and name == name else None,
    )


def features_from_geojson(data: Mapping[str, Any]) -> List[TerrainFeature]:
    """Build terrain features from a GeoJSON FeatureCollection or Feature.

    Point and line features (pins, hole lines, cart paths) are skipped. A feature
    whose geometry cannot be parsed raises InvalidInputError.
    """
    if not isinstance(data, Mapping):
        raise InvalidInputError("Terrain GeoJSON must be an object")
    if data.get("type") == "FeatureCollection":
        raw_features = data.get("features") or []
    elif data.get("type") == "Feature":
        raw_features = [data]
    else:
        raise InvalidInputError("Unsupported GeoJSON structure: expected FeatureCollection or Feature")

    features: List[TerrainFeature] = []
    skipped = 0
    for idx, feat in enumerate(raw_features):
        if not isinstance(feat, Mapping):
            raise InvalidInputError(f"Feature {idx} is not an object")
        geom_raw = feat.get("geometry")
        if not geom_raw:
            skipped += 1
            continue
        try:
            geom = shape(geom_raw)
        except Exception as exc:
            raise InvalidInputError(f"Feature {idx} has malformed geometry: {exc}") from exc
        parts = features_from_geometry(geom, feat.get("properties") or {})
        if not parts:
            skipped += 1
        features.extend(parts)

    logger.debug("Parsed %d terrain polygons (%d features skipped)", len(features), skipped)
    return features


def features_from_geodataframe(gdf: gpd.GeoDataFrame) -> List[TerrainFeature]:
    """Build terrain features from a GeoDataFrame, e.g. the output of an OSM query."""
    if gdf is None or len(gdf) == 0:
        return []
    if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(4326)
    features: List[TerrainFeature] = []
    geom_col = gdf.geometry.name
    for _, row in gdf.iterrows():
        props = {k: v for k, v in row.items() if k != geom_col}
        features.extend(features_from_geometry(row[geom_col], props))
    return features


def terrain_from_geojson(
    data: Mapping[str, Any], course_name: Optional[str] = None, source: Optional[str] = None
) -> TerrainData:
    return TerrainData.from_features(features_from_geojson(data), course_name=course_name, source=source)


def load_terrain_geojson(path: Union[str, Path], course_name: Optional[str] = None) -> TerrainData:
    p = Path(path)
    if not p.exists():
        raise DataUnavailableError(f"Terrain data not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"Terrain file is not valid JSON: {p}") from exc
    terrain = terrain_from_geojson(data, course_name=course_name, source=str(p))
    logger.info(
        "Loaded terrain %s: %d labeled polygons, %d boundary polygons",
        p.name,
        len(terrain.features),
        len(terrain.boundaries),
    )
    return terrain


def load_course_terrain(course_dir: Union[str, Path]) -> TerrainData:
    course_path = Path(course_dir)
    for candidate in TERRAIN_FILE_CANDIDATES:
        path = course_path / candidate
        if path.exists():
            return load_terrain_geojson(path, course_name=course_path.name)
    raise DataUnavailableError(f"terrain.geojson not found in {course_dir}")
