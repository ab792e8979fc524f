"""Utility package for shared helpers used by CLI scripts."""

from .cli import add_log_level_argument, add_course_dir_argument, parse_latlon
from .io import write_json, write_table_csv

__all__ = [
    "add_log_level_argument",
    "add_course_dir_argument",
    "parse_latlon",
    "write_json",
    "write_table_csv",
]
