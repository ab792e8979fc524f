from .models import (
    TERRAIN_PRIORITY,
    TerrainCategory,
    TerrainData,
    TerrainFeature,
    expand_feature,
    terrain_rank,
)
from .classifier import TerrainClassifier, classify

__all__ = [
    "TERRAIN_PRIORITY",
    "TerrainCategory",
    "TerrainData",
    "TerrainFeature",
    "TerrainClassifier",
    "classify",
    "expand_feature",
    "terrain_rank",
]
