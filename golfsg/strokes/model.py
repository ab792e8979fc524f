"""Expected strokes-to-hole polynomials keyed by terrain category."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np
from numpy.polynomial import polynomial as P

from ..exceptions import ConfigurationError, InvalidInputError
from ..terrain.models import TerrainCategory, normalize_category

# Distances are metres; coefficients are [c0, c1, c2, ...] for sum(c_i * d**i).
# Illustrative defaults, not fitted to measured data. A course can supply its own
# coefficients through strokes_model.json. The green curve turns down past ~50 m.
DEFAULT_COEFFICIENTS: Dict[str, Tuple[float, ...]] = {
    TerrainCategory.GREEN.value: (1.0, 0.085, -0.0016, 0.00001),
    TerrainCategory.TEE.value: (2.5, 0.0035, 0.000003),
    TerrainCategory.FAIRWAY.value: (2.35, 0.004, 0.000006),
    TerrainCategory.ROUGH.value: (2.55, 0.0045, 0.000006),
    TerrainCategory.BUNKER.value: (2.6, 0.005, 0.000006),
    TerrainCategory.HAZARD.value: (3.35, 0.004, 0.000006),
    TerrainCategory.PENALTY.value: (3.45, 0.004, 0.000006),
    TerrainCategory.OUT_OF_BOUNDS.value: (4.0, 0.0035, 0.000003),
}


def _coerce_coefficients(category: str, raw: Sequence) -> Tuple[float, ...]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise ConfigurationError(f"Coefficients for '{category}' must be a list of numbers")
    try:
        coeffs = tuple(float(c) for c in raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Coefficients for '{category}' must be numeric") from exc
    if not coeffs:
        raise ConfigurationError(f"Coefficients for '{category}' are empty")
    if not all(math.isfinite(c) for c in coeffs):
        raise ConfigurationError(f"Coefficients for '{category}' must be finite")
    return coeffs


@dataclass(frozen=True)
class StrokesModel:
    coefficients: Mapping[str, Tuple[float, ...]] = field(
        default_factory=lambda: dict(DEFAULT_COEFFICIENTS)
    )

    def __post_init__(self) -> None:
        cleaned: Dict[str, Tuple[float, ...]] = {}
        for key, raw in dict(self.coefficients).items():
            category = normalize_category(key)
            if category is None:
                raise ConfigurationError("Strokes model has a blank category key")
            cleaned[category] = _coerce_coefficients(category, raw)
        object.__setattr__(self, "coefficients", MappingProxyType(cleaned))

    @staticmethod
    def from_dict(data: Mapping[str, Sequence]) -> "StrokesModel":
        if not isinstance(data, Mapping):
            raise ConfigurationError("Strokes model must be a mapping of category -> coefficients")
        # Allow {"coefficients": {...}} as well as a bare mapping
        if "coefficients" in data and isinstance(data["coefficients"], Mapping):
            data = data["coefficients"]
        return StrokesModel(coefficients=dict(data))

    @property
    def categories(self) -> List[str]:
        return list(self.coefficients.keys())

    def covers(self, category: str) -> bool:
        return normalize_category(category) in self.coefficients

    def missing_categories(self, categories: Iterable[str]) -> List[str]:
        missing: List[str] = []
        for c in categories:
            key = normalize_category(c)
            if key not in self.coefficients and key not in missing:
                missing.append(key)
        return missing

    def coefficients_for(self, category: str) -> Tuple[float, ...]:
        key = normalize_category(category)
        try:
            return self.coefficients[key]
        except KeyError:
            raise ConfigurationError(
                f"Strokes model has no coefficients for terrain '{key}'"
            ) from None

    def strokes_remaining(self, distance_to_hole: float, category: str) -> float:
        coeffs = self.coefficients_for(category)
        d = float(distance_to_hole)
        if not math.isfinite(d) or d < 0:
            raise InvalidInputError(f"Distance to hole must be a non-negative number, got {distance_to_hole}")
        return float(P.polyval(d, coeffs))

    def strokes_remaining_many(self, distances: Sequence[float], categories: Sequence[str]) -> np.ndarray:
        d = np.asarray(distances, dtype=float)
        cats = np.asarray(categories, dtype=object)
        if d.shape != cats.shape:
            raise InvalidInputError("distances and categories must have the same length")
        if d.size and (not np.all(np.isfinite(d)) or d.min() < 0):
            raise InvalidInputError("Distances to hole must be non-negative numbers")
        out = np.empty(d.shape, dtype=float)
        for category in dict.fromkeys(cats.tolist()):
            mask = cats == category
            out[mask] = P.polyval(d[mask], self.coefficients_for(category))
        return out


def default_strokes_model() -> StrokesModel:
    return StrokesModel(coefficients=dict(DEFAULT_COEFFICIENTS))
