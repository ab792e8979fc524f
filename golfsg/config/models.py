from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping
import inspect

from ..exceptions import ConfigurationError


@dataclass
class EngineConfig:
    """Tunables for building a strokes-gained grid."""
    max_cells: int = 2000
    # aim window radius in dispersion units
    window_sigmas: float = 3.0
    # vertices used to approximate the aim-window circle
    circle_segments: int = 64

    def validate(self) -> None:
        if self.max_cells <= 0:
            raise ConfigurationError("max_cells must be positive")
        if self.window_sigmas <= 0:
            raise ConfigurationError("window_sigmas must be positive")
        if self.circle_segments < 8:
            raise ConfigurationError("circle_segments must be at least 8")

    @staticmethod
    def from_dict(data: Dict) -> "EngineConfig":
        if data is not None and not isinstance(data, Mapping):
            raise ConfigurationError(f"Engine config must be an object, got {type(data).__name__}")
        sig = inspect.signature(EngineConfig)
        valid_keys = {p.name for p in sig.parameters.values()}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_keys}
        try:
            config = EngineConfig(
                max_cells=int(filtered.get("max_cells", 2000)),
                window_sigmas=float(filtered.get("window_sigmas", 3.0)),
                circle_segments=int(filtered.get("circle_segments", 64)),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid engine config: {exc}") from exc
        config.validate()
        return config
