from .model import DEFAULT_COEFFICIENTS, StrokesModel, default_strokes_model

__all__ = ["DEFAULT_COEFFICIENTS", "StrokesModel", "default_strokes_model"]
