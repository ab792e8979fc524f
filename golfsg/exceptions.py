class StrokesGainedError(Exception):
    """Base for all strokes-gained engine errors."""


class ConfigurationError(StrokesGainedError):
    """Strokes model or engine configuration cannot serve the request."""


class InvalidInputError(StrokesGainedError, ValueError):
    """Caller supplied a dispersion, coordinate or geometry the engine rejects."""


class DataUnavailableError(StrokesGainedError):
    """Terrain data for the requested course is not loaded yet."""
