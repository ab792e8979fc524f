"""
Terrain categories and the immutable feature snapshot consumed by the classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from ..exceptions import InvalidInputError


class TerrainCategory(str, Enum):
    GREEN = "green"
    TEE = "tee"
    BUNKER = "bunker"
    FAIRWAY = "fairway"
    HAZARD = "hazard"
    PENALTY = "penalty"
    ROUGH = "rough"
    OUT_OF_BOUNDS = "out_of_bounds"

    def __str__(self) -> str:
        return self.value


# Highest priority first. Labels not listed here fall into the unranked tier.
TERRAIN_PRIORITY: Tuple[str, ...] = (
    TerrainCategory.GREEN.value,
    TerrainCategory.TEE.value,
    TerrainCategory.BUNKER.value,
    TerrainCategory.FAIRWAY.value,
    TerrainCategory.HAZARD.value,
    TerrainCategory.PENALTY.value,
)
UNRANKED_TIER = len(TERRAIN_PRIORITY)


def terrain_rank(category: Optional[str]) -> Tuple[int, str]:
    """Total order over terrain labels: listed categories, then unranked labels by name.

    Unlabeled features (None) sort after everything.
    """
    if category is None:
        return (UNRANKED_TIER + 1, "")
    try:
        return (TERRAIN_PRIORITY.index(category), category)
    except ValueError:
        return (UNRANKED_TIER, category)


def normalize_category(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, TerrainCategory):
        return value.value
    text = str(value).strip().lower()
    return text or None


@dataclass(frozen=True)
class TerrainFeature:
    """A single labeled polygon. MultiPolygons are split by `expand_feature`."""

    geometry: Polygon
    category: Optional[str] = None
    is_boundary: bool = False
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.geometry, Polygon):
            raise InvalidInputError(
                f"TerrainFeature needs a Polygon, got {getattr(self.geometry, 'geom_type', type(self.geometry).__name__)}"
            )
        object.__setattr__(self, "category", normalize_category(self.category))

    @property
    def rank(self) -> Tuple[int, str]:
        return terrain_rank(self.category)


def expand_feature(
    geometry: BaseGeometry,
    category: Optional[str] = None,
    is_boundary: bool = False,
    name: Optional[str] = None,
) -> List[TerrainFeature]:
    """Split a Polygon/MultiPolygon into single-polygon features with shared properties.

    Non-areal, empty and zero-area geometries yield nothing.
    """
    if geometry is None or geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        parts = [geometry]
    elif isinstance(geometry, MultiPolygon):
        parts = list(geometry.geoms)
    else:
        return []
    parts = [p for p in parts if not p.is_empty and p.area > 0]
    return [TerrainFeature(p, category=category, is_boundary=is_boundary, name=name) for p in parts]


@dataclass(frozen=True)
class TerrainData:
    """Immutable terrain snapshot for one course.

    `features` holds every labeled polygon in priority order, however it was
    passed in; unlabeled polygons are dropped. `boundaries` holds the
    course-boundary polygons. An empty snapshot is valid.
    """

    features: Tuple[TerrainFeature, ...] = ()
    boundaries: Tuple[TerrainFeature, ...] = ()
    course_name: Optional[str] = None
    source: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        labeled = [f for f in self.features if f.category is not None]
        # Sorting on geometry WKB as the last key keeps equal-rank ties independent of input order.
        labeled.sort(key=lambda f: (f.rank, f.geometry.wkb))
        object.__setattr__(self, "features", tuple(labeled))
        object.__setattr__(self, "boundaries", tuple(self.boundaries))

    @staticmethod
    def from_features(
        features: Iterable[TerrainFeature],
        boundaries: Optional[Iterable[TerrainFeature]] = None,
        course_name: Optional[str] = None,
        source: Optional[str] = None,
    ) -> "TerrainData":
        features = list(features)
        if boundaries is None:
            boundaries = [f for f in features if f.is_boundary]
        return TerrainData(
            features=tuple(features),
            boundaries=tuple(boundaries),
            course_name=course_name,
            source=source,
        )

    def categories(self) -> List[str]:
        seen: List[str] = []
        for feature in self.features:
            if feature.category not in seen:
                seen.append(feature.category)
        return seen

    def __len__(self) -> int:
        return len(self.features)
