from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from .models import EngineConfig
from ..exceptions import ConfigurationError
from ..logging import get_logger
from ..strokes.model import StrokesModel, default_strokes_model

logger = get_logger(__name__)


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc


def _first_existing(base: Path, names: list[str]) -> Optional[Path]:
    for name in names:
        for path in (base / "config" / name, base / name):
            if path.exists():
                return path
    return None


def load_engine_config(course_dir: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Load sg_config.json from a course directory, or fall back to defaults."""
    if course_dir is None:
        return EngineConfig()
    path = _first_existing(Path(course_dir), ["sg_config.json"])
    if path is None:
        logger.debug("sg_config.json not found in %s; using defaults", course_dir)
        return EngineConfig()
    return EngineConfig.from_dict(_read_json(path))


def load_strokes_model(source: Optional[Union[str, Path]] = None) -> StrokesModel:
    """Load a strokes model from a JSON file or a course directory.

    With no source, or a course directory without strokes_model.json, the bundled
    default coefficients are used. A file path that does not exist is an error.
    """
    if source is None:
        return default_strokes_model()
    p = Path(source)
    if p.is_dir():
        found = _first_existing(p, ["strokes_model.json"])
        if found is None:
            logger.info("strokes_model.json not found in %s; using default coefficients", p)
            return default_strokes_model()
        p = found
    elif not p.exists():
        raise ConfigurationError(f"Strokes model file not found: {p}")

    model = StrokesModel.from_dict(_read_json(p))
    logger.info("Loaded strokes model %s: %s", p.name, ", ".join(model.categories))
    return model
