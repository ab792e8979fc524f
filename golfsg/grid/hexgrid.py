"""
Hexagonal tessellation of a region.

The hexagon edge length is chosen from the region's area so that covering it takes
about `max_cells` hexagons. The bounding box is tiled with flat-top hexagons and
only hexagons lying entirely inside the region are kept; nothing is clipped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
import shapely
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from ..exceptions import InvalidInputError
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_CELLS = 2000
HEX_AREA_FACTOR = 3.0 * math.sqrt(3.0) / 2.0  # area of a unit-edge hexagon
MIN_REGION_AREA = 1e-12

# Flat-top unit hexagon, counter-clockwise from the east vertex.
_UNIT_HEX = np.array(
    [(math.cos(math.radians(a)), math.sin(math.radians(a))) for a in range(0, 360, 60)]
)


@dataclass(frozen=True)
class HexGrid:
    cells: Tuple[Polygon, ...]
    edge_length: float
    region: BaseGeometry

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def is_empty(self) -> bool:
        return len(self.cells) == 0

    def centroids(self) -> np.ndarray:
        """(N, 2) array of cell centroids."""
        if self.is_empty:
            return np.empty((0, 2))
        return shapely.get_coordinates(shapely.centroid(np.array(self.cells, dtype=object)))

    def transformed(self, func: Callable[[np.ndarray], np.ndarray]) -> "HexGrid":
        """Map every cell and the region through a coordinate function on (N, 2) arrays."""
        cells = tuple(shapely.transform(np.array(self.cells, dtype=object), func)) if self.cells else ()
        return HexGrid(cells=cells, edge_length=self.edge_length, region=shapely.transform(self.region, func))


def hex_edge_length(area: float, max_cells: int = DEFAULT_MAX_CELLS) -> float:
    """Edge length for which `max_cells` hexagons cover `area`."""
    if max_cells <= 0:
        raise InvalidInputError(f"max_cells must be positive, got {max_cells}")
    if area <= MIN_REGION_AREA:
        return 0.0
    return math.sqrt(area / (max_cells * HEX_AREA_FACTOR))


def hex_centers(bounds: Tuple[float, float, float, float], edge: float) -> np.ndarray:
    """Centers of flat-top hexagons tiling the bounding box (minx, miny, maxx, maxy)."""
    minx, miny, maxx, maxy = bounds
    col_step = 1.5 * edge
    row_step = math.sqrt(3.0) * edge
    n_cols = int(math.ceil((maxx - minx) / col_step)) + 1
    n_rows = int(math.ceil((maxy - miny) / row_step)) + 1

    cols = np.arange(n_cols)
    rows = np.arange(n_rows)
    cx = minx + cols * col_step
    col_grid, row_grid = np.meshgrid(cols, rows, indexing="ij")
    xs = cx[col_grid]
    # odd columns sit half a row higher
    ys = miny + row_grid * row_step + (col_grid % 2) * (row_step / 2.0)
    return np.column_stack([xs.ravel(), ys.ravel()])


def hexagons(centers: np.ndarray, edge: float) -> np.ndarray:
    """Array of hexagon polygons around the given centers."""
    if len(centers) == 0:
        return np.array([], dtype=object)
    rings = centers[:, None, :] + _UNIT_HEX[None, :, :] * edge
    return shapely.polygons(rings)


def build_grid(region: BaseGeometry, max_cells: int = DEFAULT_MAX_CELLS) -> HexGrid:
    """Tessellate `region` into hexagons fully contained in it.

    A region with (near) zero area gives an empty grid.
    """
    if region is None:
        raise InvalidInputError("Grid region is missing")
    if max_cells <= 0:
        raise InvalidInputError(f"max_cells must be positive, got {max_cells}")
    if region.is_empty or region.area <= MIN_REGION_AREA:
        logger.debug("Region has no area; returning empty grid")
        return HexGrid(cells=(), edge_length=0.0, region=region)
    if not region.is_valid:
        raise InvalidInputError("Grid region geometry is invalid")

    edge = hex_edge_length(region.area, max_cells)
    centers = hex_centers(region.bounds, edge)
    candidates = hexagons(centers, edge)

    shapely.prepare(region)
    inside = shapely.contains(region, candidates)
    cells = tuple(candidates[inside])
    logger.debug(
        "Hex grid: edge=%.4f, %d candidates, %d kept (max_cells=%d)",
        edge,
        len(candidates),
        len(cells),
        max_cells,
    )
    return HexGrid(cells=cells, edge_length=edge, region=region)
