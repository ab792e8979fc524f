"""
Strokes-gained grid computation.

Given where the ball lies, where the player aims, where the hole is and how widely
the player's shots scatter, build a hex grid over the aim window, weight every cell
by its landing probability and score it with the strokes model. The probability
weighted sum of per-cell strokes gained is the expected value of the shot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple, Union

from shapely.geometry import Point, Polygon
from shapely.geometry.base import BaseGeometry

from .config.models import EngineConfig
from .exceptions import ConfigurationError, DataUnavailableError, InvalidInputError
from .geometry import (
    Coordinate,
    LocalProjection,
    haversine_m,
    haversine_m_array,
    metric_circle,
    standardize_point,
)
from .grid.hexgrid import build_grid
from .grid.probability import assign_probabilities, validate_dispersion, window_mass
from .logging import get_logger
from .performance_logger import PerformanceTracker
from .strokes.model import StrokesModel, default_strokes_model
from .terrain.classifier import TerrainClassifier
from .terrain.models import TerrainData, TerrainFeature

logger = get_logger(__name__)

TerrainInput = Union[TerrainData, Iterable[TerrainFeature], None]


@dataclass(frozen=True)
class HexCell:
    polygon: Polygon
    centroid: Tuple[float, float]  # (lon, lat)
    probability: float
    distance_to_aim: float
    distance_to_hole: float
    terrain: str
    strokes_remaining: float
    strokes_gained: float
    weighted_strokes_gained: float


@dataclass(frozen=True)
class StartState:
    """Where the ball currently lies."""
    terrain: str
    distance_to_hole: float
    strokes_remaining: float


@dataclass(frozen=True)
class StrokesGainedGrid:
    cells: Tuple[HexCell, ...]
    start: Tuple[float, float]
    aim: Tuple[float, float]
    hole: Tuple[float, float]
    dispersion: float
    aim_window: BaseGeometry
    edge_length_m: float
    start_terrain: str
    distance_to_hole_start: float
    strokes_remaining_start: float
    total_weighted_strokes_gained: float
    timings: Dict[str, float] = field(default_factory=dict, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def probability_total(self) -> float:
        return float(sum(c.probability for c in self.cells))

    @property
    def expected_strokes_remaining(self) -> float:
        """Probability-weighted strokes remaining after the shot."""
        return float(sum(c.probability * c.strokes_remaining for c in self.cells))

    def terrain_probabilities(self) -> Dict[str, float]:
        mass: Dict[str, float] = {}
        for cell in self.cells:
            mass[cell.terrain] = mass.get(cell.terrain, 0.0) + cell.probability
        return mass


def _terrain_snapshot(terrain: TerrainInput) -> TerrainData:
    if terrain is None:
        raise DataUnavailableError("Terrain data is not available for this course yet")
    if isinstance(terrain, TerrainData):
        return terrain
    return TerrainData.from_features(terrain)


def evaluate_start(
    start: Tuple[float, float],
    hole: Tuple[float, float],
    classifier: TerrainClassifier,
    strokes_model: StrokesModel,
) -> StartState:
    """Classify the lie and estimate strokes remaining from (lon, lat) `start`."""
    terrain = classifier.classify(Point(*start))
    distance = haversine_m(start[0], start[1], hole[0], hole[1])
    return StartState(
        terrain=terrain,
        distance_to_hole=distance,
        strokes_remaining=strokes_model.strokes_remaining(distance, terrain),
    )


def compute_strokes_gained_grid(
    start: Coordinate,
    aim: Coordinate,
    hole: Coordinate,
    dispersion: float,
    terrain: TerrainInput,
    strokes_model: Optional[StrokesModel] = None,
    config: Optional[EngineConfig] = None,
    latlon: bool = True,
) -> StrokesGainedGrid:
    """Expected strokes gained by aiming at `aim` from `start`.

    Coordinates are (lat, lon) pairs unless `latlon` is False; shapely Points are
    always (lon, lat). `dispersion` is the standard deviation of the shot pattern in
    meters. Any failure aborts the whole computation.
    """
    snapshot = _terrain_snapshot(terrain)
    model = strokes_model if strokes_model is not None else default_strokes_model()
    config = config if config is not None else EngineConfig()
    config.validate()
    sigma = validate_dispersion(dispersion)

    start_ll = standardize_point(start, latlon)
    aim_ll = standardize_point(aim, latlon)
    hole_ll = standardize_point(hole, latlon)

    tracker = PerformanceTracker()
    classifier = TerrainClassifier(snapshot)

    with tracker.time_operation("start"):
        start_state = evaluate_start(start_ll, hole_ll, classifier, model)

    with tracker.time_operation("grid"):
        radius_m = config.window_sigmas * sigma
        projection = LocalProjection(origin_lon=aim_ll[0], origin_lat=aim_ll[1])
        metric_grid = build_grid(metric_circle(radius_m, config.circle_segments), config.max_cells)
        if metric_grid.is_empty:
            raise InvalidInputError(f"Aim window of radius {radius_m:.3f} m produced no grid cells")
        grid = metric_grid.transformed(projection.to_lonlat)

    with tracker.time_operation("probability"):
        prob_field = assign_probabilities(grid, aim_ll, sigma)

    with tracker.time_operation("strokes"):
        centroids = grid.centroids()
        distances_to_hole = haversine_m_array(centroids[:, 0], centroids[:, 1], hole_ll[0], hole_ll[1])
        terrains = classifier.classify_many(centroids)
        missing = model.missing_categories(terrains)
        if missing:
            raise ConfigurationError(
                f"Strokes model has no coefficients for terrain: {', '.join(map(str, missing))}"
            )
        strokes_remaining = model.strokes_remaining_many(distances_to_hole, terrains)
        strokes_gained = start_state.strokes_remaining - strokes_remaining - 1.0
        weighted = strokes_gained * prob_field.probabilities

    total = float(weighted.sum())
    if not math.isfinite(total):
        raise ConfigurationError("Strokes model produced a non-finite expected value")

    cells = tuple(
        HexCell(
            polygon=grid.cells[i],
            centroid=(float(centroids[i, 0]), float(centroids[i, 1])),
            probability=float(prob_field.probabilities[i]),
            distance_to_aim=float(prob_field.distances[i]),
            distance_to_hole=float(distances_to_hole[i]),
            terrain=terrains[i],
            strokes_remaining=float(strokes_remaining[i]),
            strokes_gained=float(strokes_gained[i]),
            weighted_strokes_gained=float(weighted[i]),
        )
        for i in range(len(grid.cells))
    )

    tracker.log_summary("Strokes-gained grid")
    logger.info(
        "SG grid: %d cells, start=%s %.1fm (%.3f strokes), window %.1fm (%.1f%% 1-D mass), total SG %.4f",
        len(cells),
        start_state.terrain,
        start_state.distance_to_hole,
        start_state.strokes_remaining,
        radius_m,
        window_mass(config.window_sigmas) * 100,
        total,
    )

    return StrokesGainedGrid(
        cells=cells,
        start=start_ll,
        aim=aim_ll,
        hole=hole_ll,
        dispersion=sigma,
        aim_window=grid.region,
        edge_length_m=metric_grid.edge_length,
        start_terrain=start_state.terrain,
        distance_to_hole_start=start_state.distance_to_hole,
        strokes_remaining_start=start_state.strokes_remaining,
        total_weighted_strokes_gained=total,
        timings={t.name: t.total_time for t in tracker.timers.values()},
    )


def expected_strokes_gained(
    start: Coordinate,
    aim: Coordinate,
    hole: Coordinate,
    dispersion: float,
    terrain: TerrainInput,
    **kwargs,
) -> float:
    """Scalar shortcut for `compute_strokes_gained_grid(...).total_weighted_strokes_gained`."""
    grid = compute_strokes_gained_grid(start, aim, hole, dispersion, terrain, **kwargs)
    return grid.total_weighted_strokes_gained
