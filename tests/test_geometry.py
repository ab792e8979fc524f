import math

import numpy as np
import pytest
from shapely.geometry import Point, box

from golfsg.exceptions import InvalidInputError
from golfsg.geometry import (
    METERS_PER_DEGREE,
    LocalProjection,
    haversine_m,
    haversine_m_array,
    metric_circle,
    standardize_point,
)


def test_standardize_point_orders():
    assert standardize_point((34.05, -118.41)) == (-118.41, 34.05)
    assert standardize_point((-118.41, 34.05), latlon=False) == (-118.41, 34.05)
    # Points are always lon/lat regardless of the flag
    assert standardize_point(Point(-118.41, 34.05)) == (-118.41, 34.05)


@pytest.mark.parametrize(
    "coord",
    [(91.0, 0.0), (0.0, 181.0), (float("nan"), 0.0), (1.0,), (1.0, 2.0, 3.0), "ab", None, Point()],
)
def test_standardize_point_rejects(coord):
    with pytest.raises(InvalidInputError):
        standardize_point(coord)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        standardize_point((100.0, 0.0))


def test_haversine_one_degree_of_latitude():
    assert haversine_m(0.0, 0.0, 0.0, 1.0) == pytest.approx(METERS_PER_DEGREE)
    assert haversine_m(10.0, 20.0, 10.0, 20.0) == 0.0


def test_haversine_array_matches_scalar():
    lons = np.array([-118.41, -118.42, -118.40])
    lats = np.array([34.04, 34.05, 34.06])
    out = haversine_m_array(lons, lats, -118.415, 34.046)
    expected = [haversine_m(lo, la, -118.415, 34.046) for lo, la in zip(lons, lats)]
    assert out == pytest.approx(expected)


def test_local_projection_round_trip_and_scale():
    proj = LocalProjection(origin_lon=-118.4156, origin_lat=34.0460)
    pts = np.array([[0.0, 0.0], [100.0, 0.0], [0.0, 100.0], [-250.0, 75.0]])
    back = proj.to_meters(proj.to_lonlat(pts))
    assert back == pytest.approx(pts, abs=1e-6)

    lon, lat = proj.to_lonlat(np.array([[100.0, 0.0]]))[0]
    assert haversine_m(proj.origin_lon, proj.origin_lat, lon, lat) == pytest.approx(100.0, rel=1e-4)


def test_geometry_projection_preserves_shape():
    proj = LocalProjection(origin_lon=-118.4156, origin_lat=34.0460)
    square = box(-10, -10, 10, 10)
    back = proj.geometry_to_meters(proj.geometry_to_lonlat(square))
    assert back.area == pytest.approx(400.0)


def test_metric_circle():
    circle = metric_circle(30.0, segments=64)
    assert circle.area == pytest.approx(math.pi * 900.0, rel=0.01)
    assert circle.contains(Point(0, 0))
    assert len(circle.exterior.coords) == 65


@pytest.mark.parametrize("radius", [0.0, -1.0, float("inf")])
def test_metric_circle_rejects_bad_radius(radius):
    with pytest.raises(InvalidInputError):
        metric_circle(radius)
