"""
Shared course fixtures.

Courses are laid out in meters east/north of a fixed origin and converted to
lon/lat, so test geometry reads like a yardage book.
"""

from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pytest
from shapely.geometry import Point, box

from golfsg.geometry import LocalProjection
from golfsg.terrain.models import TerrainData, TerrainFeature

ORIGIN_LON = -118.4156
ORIGIN_LAT = 34.0460


def _site() -> SimpleNamespace:
    proj = LocalProjection(origin_lon=ORIGIN_LON, origin_lat=ORIGIN_LAT)

    def lonlat(x_m: float, y_m: float):
        lon, lat = proj.to_lonlat(np.array([[x_m, y_m]], dtype=float))[0]
        return float(lon), float(lat)

    def latlon(x_m: float, y_m: float):
        lon, lat = lonlat(x_m, y_m)
        return lat, lon

    def point(x_m: float, y_m: float) -> Point:
        return Point(*lonlat(x_m, y_m))

    def feature(geom_m, category=None, is_boundary=False) -> TerrainFeature:
        return TerrainFeature(proj.geometry_to_lonlat(geom_m), category=category, is_boundary=is_boundary)

    return SimpleNamespace(projection=proj, lonlat=lonlat, latlon=latlon, point=point, feature=feature)


@pytest.fixture
def site() -> SimpleNamespace:
    return _site()


@pytest.fixture
def course_terrain(site) -> TerrainData:
    """Par 3 running west to east with the hole at the origin.

    tee at x=-150..-130, fairway x=-120..-5, green radius 15 m around the hole,
    bunker straddling the fairway's north edge, water east of the green,
    course boundary 300 m out in every direction.
    """
    features = [
        site.feature(box(-300, -300, 300, 300), is_boundary=True),
        site.feature(box(-150, -10, -130, 10), "tee"),
        site.feature(box(-120, -40, -5, 40), "fairway"),
        site.feature(Point(0, 0).buffer(15, quad_segs=16), "green"),
        site.feature(box(-40, 25, -25, 45), "bunker"),
        site.feature(box(30, -60, 80, 60), "hazard"),
    ]
    return TerrainData.from_features(features, course_name="test_par3")


@pytest.fixture
def fairway_terrain(site) -> TerrainData:
    """Tee 140 m west of the hole and one fairway covering everything around the pin."""
    features = [
        site.feature(box(-400, -400, 400, 400), is_boundary=True),
        site.feature(box(-150, -10, -130, 10), "tee"),
        site.feature(box(-120, -100, 100, 100), "fairway"),
    ]
    return TerrainData.from_features(features, course_name="test_fairway")
