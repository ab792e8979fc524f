"""
Matplotlib rendering of strokes-gained grids.

Produces a static PNG with the terrain polygons underneath and the hex cells colored
by a per-cell value, plus start/aim/hole markers.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional

import geopandas as gpd
import matplotlib.pyplot as plt

from ..engine import StrokesGainedGrid
from ..io.results import CELL_PROPERTY_NAMES, grid_to_geodataframe
from ..logging import get_logger
from ..terrain.models import TerrainData

logger = get_logger(__name__)

TERRAIN_COLORS = {
    "green": "#4caf50",
    "tee": "#8bc34a",
    "fairway": "#a5d6a7",
    "bunker": "#f0e0a0",
    "hazard": "#64b5f6",
    "penalty": "#e57373",
}
DEFAULT_TERRAIN_COLOR = "#d7d7d7"


def _terrain_frame(terrain: TerrainData) -> gpd.GeoDataFrame:
    return gpd.GeoDataFrame(
        {"category": [f.category for f in terrain.features]},
        geometry=[f.geometry for f in terrain.features],
        crs="EPSG:4326",
    )


def plot_strokes_gained_grid(
    grid: StrokesGainedGrid,
    output_path: str | Path,
    terrain: Optional[TerrainData] = None,
    column: str = "weightedStrokesGained",
    cmap: str = "RdYlGn",
    title: Optional[str] = None,
) -> Path:
    """Render `grid` to a PNG and return the written path."""
    if column not in CELL_PROPERTY_NAMES.values():
        raise ValueError(f"Unknown grid column '{column}'")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 8))
    try:
        if terrain is not None and len(terrain.boundaries) > 0:
            gpd.GeoSeries([f.geometry for f in terrain.boundaries], crs="EPSG:4326").plot(
                ax=ax, color="#eef5e9", edgecolor="gray", linewidth=0.8
            )
        if terrain is not None and len(terrain.features) > 0:
            frame = _terrain_frame(terrain)
            colors = [TERRAIN_COLORS.get(c, DEFAULT_TERRAIN_COLOR) for c in frame["category"]]
            frame.plot(ax=ax, color=colors, alpha=0.6, edgecolor="none")

        cells = grid_to_geodataframe(grid)
        if len(cells) > 0:
            cells.plot(ax=ax, column=column, cmap=cmap, legend=True, alpha=0.85, edgecolor="none")

        for (lon, lat), marker, label in (
            (grid.start, "s", "Start"),
            (grid.aim, "x", "Aim"),
            (grid.hole, "^", "Hole"),
        ):
            ax.plot(lon, lat, marker=marker, color="black", markersize=7, linestyle="none", label=label)

        ax.set_title(
            title
            or f"Expected strokes gained {grid.total_weighted_strokes_gained:+.3f} "
            f"(dispersion {grid.dispersion:.0f} m)"
        )
        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")
        # degrees of longitude shrink with latitude
        ax.set_aspect(1.0 / math.cos(math.radians(grid.aim[1])), adjustable="datalim")
        ax.legend(loc="upper right")
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info("Saved strokes-gained plot: %s", output_path)
    return output_path
