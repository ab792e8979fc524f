"""
Landing probabilities over a hex grid.

Each cell is weighted by a zero-mean normal density evaluated at the distance from
its centroid to the aim point, and the weights are normalized to sum to one. The
density is the one-dimensional normal pdf at the radial distance, not a 2-D
isotropic Gaussian.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..exceptions import InvalidInputError
from ..geometry import haversine_m_array
from ..logging import get_logger
from .hexgrid import HexGrid

logger = get_logger(__name__)


def validate_dispersion(dispersion: float) -> float:
    try:
        value = float(dispersion)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Dispersion must be a number, got {dispersion!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"Dispersion must be a positive number of meters, got {dispersion}")
    return value


def normal_pdf(distance, stddev: float, mean: float = 0.0):
    coefficient = 1.0 / (stddev * math.sqrt(2.0 * math.pi))
    exponent = -((np.asarray(distance, dtype=float) - mean) ** 2) / (2.0 * stddev ** 2)
    return coefficient * np.exp(exponent)


def normal_cdf(x: float, mean: float = 0.0, stddev: float = 1.0) -> float:
    return 0.5 * (1.0 + math.erf((x - mean) / (stddev * math.sqrt(2.0))))


def window_mass(sigmas: float) -> float:
    """Share of a 1-D normal lying within +/- `sigmas` standard deviations."""
    return math.erf(sigmas / math.sqrt(2.0))


@dataclass(frozen=True)
class ProbabilityField:
    """Per-cell distances to the aim point (m) and normalized probabilities."""

    distances: np.ndarray
    probabilities: np.ndarray

    def __len__(self) -> int:
        return len(self.probabilities)

    @property
    def total(self) -> float:
        return float(self.probabilities.sum())


def assign_probabilities(
    grid: HexGrid, aim: Tuple[float, float], dispersion: float
) -> ProbabilityField:
    """Probability of landing in each cell of a lon/lat grid when aiming at `aim` (lon, lat)."""
    sigma = validate_dispersion(dispersion)
    if grid.is_empty:
        raise InvalidInputError("Cannot assign probabilities over an empty grid")

    centroids = grid.centroids()
    distances = haversine_m_array(centroids[:, 0], centroids[:, 1], aim[0], aim[1])
    raw = normal_pdf(distances, sigma)
    total = float(raw.sum())
    if not math.isfinite(total) or total <= 0.0:
        raise InvalidInputError(
            f"Probability mass vanished over {len(raw)} cells (dispersion={sigma})"
        )

    probabilities = raw / total
    probabilities.setflags(write=False)
    distances.setflags(write=False)
    logger.debug("Probability field: %d cells, raw mass %.6g", len(probabilities), total)
    return ProbabilityField(distances=distances, probabilities=probabilities)
