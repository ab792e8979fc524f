from __future__ import annotations

from argparse import ArgumentParser, ArgumentTypeError
from typing import Optional, Tuple


def add_log_level_argument(parser: ArgumentParser) -> None:
    """Add a standard --log-level flag to an ArgumentParser."""
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )


def add_course_dir_argument(parser: ArgumentParser, default: Optional[str] = None) -> None:
    """Add a standard --course-dir flag to an ArgumentParser."""
    parser.add_argument(
        "--course-dir",
        default=default,
        help="Course directory containing terrain.geojson and optional config/ files",
    )


def parse_latlon(value: str) -> Tuple[float, float]:
    """argparse type for 'LAT,LON' strings."""
    parts = [item.strip() for item in (value or "").split(",") if item.strip()]
    if len(parts) != 2:
        raise ArgumentTypeError(f"expected LAT,LON but got '{value}'")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise ArgumentTypeError(f"expected numeric LAT,LON but got '{value}'") from None
