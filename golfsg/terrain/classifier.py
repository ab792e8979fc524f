"""
Point-in-terrain classification.

A point is out of bounds unless some course-boundary polygon covers it. Inside the
course the labeled polygons are scanned in priority order and the first one that
covers the point decides its category; uncovered points are rough. Containment is
boundary-inclusive (`covers`) for both checks.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
import shapely
from shapely.geometry import Point

from ..exceptions import InvalidInputError
from ..logging import get_logger
from .models import TerrainCategory, TerrainData, TerrainFeature

logger = get_logger(__name__)

ROUGH = TerrainCategory.ROUGH.value
OUT_OF_BOUNDS = TerrainCategory.OUT_OF_BOUNDS.value

PointLike = Union[Point, Sequence[float]]


def _as_point(point: PointLike) -> Point:
    """Accept a shapely Point or a (lon, lat) pair."""
    if isinstance(point, Point):
        if point.is_empty:
            raise InvalidInputError("Cannot classify an empty point")
        return point
    try:
        lon, lat = (float(v) for v in point)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Point must be (lon, lat), got {point!r}") from exc
    return Point(lon, lat)


class TerrainClassifier:
    """Classifier bound to one terrain snapshot.

    Geometries are prepared once so a whole hex grid can be classified against the
    same boundary set without recomputing it per cell.
    """

    def __init__(self, terrain: TerrainData):
        self.terrain = terrain
        self._boundary_geoms = np.array([f.geometry for f in terrain.boundaries], dtype=object)
        self._feature_geoms = np.array([f.geometry for f in terrain.features], dtype=object)
        self._categories = [f.category for f in terrain.features]
        if len(self._boundary_geoms):
            shapely.prepare(self._boundary_geoms)
        if len(self._feature_geoms):
            shapely.prepare(self._feature_geoms)
        logger.debug(
            "Prepared terrain classifier: %d features, %d boundaries",
            len(self._feature_geoms),
            len(self._boundary_geoms),
        )

    def in_bounds(self, point: PointLike) -> bool:
        pt = _as_point(point)
        return any(g.covers(pt) for g in self._boundary_geoms)

    def classify(self, point: PointLike) -> str:
        pt = _as_point(point)
        if not any(g.covers(pt) for g in self._boundary_geoms):
            return OUT_OF_BOUNDS
        for geom, category in zip(self._feature_geoms, self._categories):
            if geom.covers(pt):
                return category
        return ROUGH

    def classify_many(self, points: Union[Sequence[Point], np.ndarray]) -> List[str]:
        """Classify a batch of points; accepts Points or an (N, 2) lon/lat array."""
        if isinstance(points, np.ndarray) and points.dtype != object:
            pts = shapely.points(points)
        else:
            pts = np.array([_as_point(p) for p in points], dtype=object)
        n = len(pts)
        result = np.full(n, ROUGH, dtype=object)
        if n == 0:
            return []

        inside = np.zeros(n, dtype=bool)
        for geom in self._boundary_geoms:
            inside |= shapely.covers(geom, pts)
        result[~inside] = OUT_OF_BOUNDS

        pending = inside.copy()
        for geom, category in zip(self._feature_geoms, self._categories):
            idx = np.flatnonzero(pending)
            if idx.size == 0:
                break
            hit = shapely.covers(geom, pts[idx])
            result[idx[hit]] = category
            pending[idx[hit]] = False
        return result.tolist()


def classify(
    point: PointLike,
    features: Union[TerrainData, Iterable[TerrainFeature]],
    boundaries: Optional[Iterable[TerrainFeature]] = None,
) -> str:
    """Return the terrain category covering `point`.

    If `boundaries` is omitted it is derived from the features flagged as course
    boundaries. The input order of `features` never affects the result.
    """
    if isinstance(features, TerrainData):
        terrain = features
        if boundaries is not None:
            terrain = TerrainData(
                features=features.features,
                boundaries=tuple(boundaries),
                course_name=features.course_name,
            )
    else:
        terrain = TerrainData.from_features(features, boundaries)
    return TerrainClassifier(terrain).classify(point)
