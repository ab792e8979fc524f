"""
Geometry helpers shared by the terrain, grid and engine modules.

Coordinates handed to the engine arrive as (latitude, longitude) pairs. Everything
inside the engine works on (longitude, latitude) so that shapely's x/y axes line up
with GeoJSON. Metric work (hex sizing, areas) happens in a local equirectangular
frame centred on a reference point; distances use the haversine formula.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
import shapely
from shapely.geometry import Point, Polygon

from .exceptions import InvalidInputError

EARTH_RADIUS_M = 6371000.0
METERS_PER_DEGREE = EARTH_RADIUS_M * math.pi / 180.0

Coordinate = Union[Sequence[float], Point]


def standardize_point(coord: Coordinate, latlon: bool = True) -> Tuple[float, float]:
    """Return a validated (lon, lat) tuple.

    A shapely Point is assumed to already be (lon, lat). Sequences are read as
    (lat, lon) unless latlon is False.
    """
    if isinstance(coord, Point):
        if coord.is_empty:
            raise InvalidInputError("Empty point")
        lon, lat = float(coord.x), float(coord.y)
    else:
        try:
            first, second = (float(v) for v in coord)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Coordinate must be a pair of numbers, got {coord!r}") from exc
        lat, lon = (first, second) if latlon else (second, first)

    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise InvalidInputError(f"Non-finite coordinate ({lon}, {lat})")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise InvalidInputError(f"Coordinate out of range: lon={lon}, lat={lat}")
    return lon, lat


def haversine_m(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine_m_array(lons: np.ndarray, lats: np.ndarray, lon: float, lat: float) -> np.ndarray:
    """Vectorized haversine distance from many (lon, lat) points to one point."""
    phi1 = np.radians(np.asarray(lats, dtype=float))
    phi2 = math.radians(lat)
    dphi = phi2 - phi1
    dlambda = math.radians(lon) - np.radians(np.asarray(lons, dtype=float))
    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * math.cos(phi2) * np.sin(dlambda / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(np.clip(1 - a, 0.0, None)))
    return EARTH_RADIUS_M * c


@dataclass(frozen=True)
class LocalProjection:
    """Equirectangular plane centred on (origin_lon, origin_lat), units in meters."""

    origin_lon: float
    origin_lat: float

    @property
    def meters_per_degree_lon(self) -> float:
        return METERS_PER_DEGREE * math.cos(math.radians(self.origin_lat))

    def to_meters(self, coords: np.ndarray) -> np.ndarray:
        coords = np.asarray(coords, dtype=float)
        out = np.empty_like(coords)
        out[:, 0] = (coords[:, 0] - self.origin_lon) * self.meters_per_degree_lon
        out[:, 1] = (coords[:, 1] - self.origin_lat) * METERS_PER_DEGREE
        return out

    def to_lonlat(self, coords: np.ndarray) -> np.ndarray:
        coords = np.asarray(coords, dtype=float)
        out = np.empty_like(coords)
        out[:, 0] = self.origin_lon + coords[:, 0] / self.meters_per_degree_lon
        out[:, 1] = self.origin_lat + coords[:, 1] / METERS_PER_DEGREE
        return out

    def geometry_to_meters(self, geom):
        return shapely.transform(geom, self.to_meters)

    def geometry_to_lonlat(self, geom):
        return shapely.transform(geom, self.to_lonlat)


def metric_circle(radius_m: float, segments: int = 64) -> Polygon:
    """Circle around the local origin approximated by `segments` vertices."""
    if not math.isfinite(radius_m) or radius_m <= 0:
        raise InvalidInputError(f"Circle radius must be positive, got {radius_m}")
    quad_segs = max(1, int(segments) // 4)
    return Point(0.0, 0.0).buffer(radius_m, quad_segs=quad_segs)
