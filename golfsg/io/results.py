"""
Strokes-gained grid export.

Packages a computed grid for consumers like the map UI: GeoJSON with per-cell
properties, a GeoDataFrame for plotting, and a per-terrain summary table.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import geopandas as gpd
import pandas as pd
from shapely.geometry import mapping

from golfsg.engine import HexCell, StrokesGainedGrid
from golfsg.logging import get_logger


logger = get_logger(__name__)

# GeoJSON property names read by the map front end
CELL_PROPERTY_NAMES = {
    "probability": "probability",
    "distance_to_aim": "distanceToAim",
    "distance_to_hole": "distanceToHole",
    "terrain": "terrainType",
    "strokes_remaining": "strokesRemaining",
    "strokes_gained": "strokesGained",
    "weighted_strokes_gained": "weightedStrokesGained",
}


def cell_properties(cell: HexCell) -> Dict[str, Any]:
    return {out: getattr(cell, attr) for attr, out in CELL_PROPERTY_NAMES.items()}


def grid_summary(grid: StrokesGainedGrid) -> Dict[str, Any]:
    """Aggregate scalars for a grid, keyed the way the front end expects."""
    return {
        "start": list(grid.start),
        "aim": list(grid.aim),
        "hole": list(grid.hole),
        "dispersion": grid.dispersion,
        "cellCount": len(grid.cells),
        "edgeLength": grid.edge_length_m,
        "terrainTypeStart": grid.start_terrain,
        "distanceToHoleStart": grid.distance_to_hole_start,
        "strokesRemainingStart": grid.strokes_remaining_start,
        "totalWeightedStrokesGained": grid.total_weighted_strokes_gained,
    }


def grid_to_feature_collection(grid: StrokesGainedGrid) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": mapping(cell.polygon),
            "properties": cell_properties(cell),
        }
        for cell in grid.cells
    ]
    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": grid_summary(grid),
    }


def grid_to_geodataframe(grid: StrokesGainedGrid) -> gpd.GeoDataFrame:
    rows = [cell_properties(cell) for cell in grid.cells]
    geoms = [cell.polygon for cell in grid.cells]
    columns = list(CELL_PROPERTY_NAMES.values())
    return gpd.GeoDataFrame(pd.DataFrame(rows, columns=columns), geometry=geoms, crs="EPSG:4326")


def summarize_by_terrain(grid: StrokesGainedGrid) -> pd.DataFrame:
    """Probability mass and strokes-gained contribution per landing terrain.

    Rows are sorted by probability, largest first.
    """
    columns = ["terrain", "cells", "probability", "mean_strokes_gained", "weighted_strokes_gained"]
    if not grid.cells:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame(
        {
            "terrain": [c.terrain for c in grid.cells],
            "probability": [c.probability for c in grid.cells],
            "strokes_gained": [c.strokes_gained for c in grid.cells],
            "weighted_strokes_gained": [c.weighted_strokes_gained for c in grid.cells],
        }
    )
    summary = (
        df.groupby("terrain", sort=False)
        .agg(
            cells=("probability", "size"),
            probability=("probability", "sum"),
            mean_strokes_gained=("strokes_gained", "mean"),
            weighted_strokes_gained=("weighted_strokes_gained", "sum"),
        )
        .reset_index()
        .sort_values("probability", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
    return summary[columns]


def save_grid_geojson(grid: StrokesGainedGrid, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(grid_to_feature_collection(grid), f, indent=2)
    logger.info("Saved strokes-gained grid GeoJSON: %s (%d cells)", path, len(grid.cells))
    return path
