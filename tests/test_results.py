import json

import pytest

from golfsg.engine import compute_strokes_gained_grid
from golfsg.io.results import (
    CELL_PROPERTY_NAMES,
    grid_summary,
    grid_to_feature_collection,
    grid_to_geodataframe,
    save_grid_geojson,
    summarize_by_terrain,
)


@pytest.fixture
def grid(site, course_terrain):
    return compute_strokes_gained_grid(
        site.latlon(-140, 0), site.latlon(-20, 0), site.latlon(0, 0), 10.0, course_terrain,
    )


def test_feature_collection_properties(grid):
    fc = grid_to_feature_collection(grid)
    assert fc["type"] == "FeatureCollection"
    assert len(fc["features"]) == len(grid.cells)

    first = fc["features"][0]
    assert first["geometry"]["type"] == "Polygon"
    assert set(first["properties"]) == set(CELL_PROPERTY_NAMES.values())
    assert first["properties"]["terrainType"] == grid.cells[0].terrain
    assert fc["properties"]["totalWeightedStrokesGained"] == grid.total_weighted_strokes_gained


def test_grid_summary(grid):
    summary = grid_summary(grid)
    assert summary["cellCount"] == len(grid.cells)
    assert summary["terrainTypeStart"] == "tee"
    assert summary["start"] == list(grid.start)
    json.dumps(summary)


def test_geodataframe(grid):
    gdf = grid_to_geodataframe(grid)
    assert len(gdf) == len(grid.cells)
    assert gdf.crs.to_epsg() == 4326
    assert gdf["probability"].sum() == pytest.approx(1.0)
    assert gdf["weightedStrokesGained"].sum() == pytest.approx(grid.total_weighted_strokes_gained)


def test_summarize_by_terrain(grid):
    table = summarize_by_terrain(grid)
    assert list(table.columns) == [
        "terrain", "cells", "probability", "mean_strokes_gained", "weighted_strokes_gained",
    ]
    assert table["cells"].sum() == len(grid.cells)
    assert table["probability"].sum() == pytest.approx(1.0)
    assert table["probability"].is_monotonic_decreasing
    assert table["weighted_strokes_gained"].sum() == pytest.approx(grid.total_weighted_strokes_gained)
    assert set(table["terrain"]) == set(grid.terrain_probabilities())


def test_save_grid_geojson(grid, tmp_path):
    path = save_grid_geojson(grid, tmp_path / "out" / "grid.geojson")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["features"]) == len(grid.cells)
    assert data["properties"]["terrainTypeStart"] == "tee"
