#!/usr/bin/env python3
"""
Strokes-Gained Grid Runner

Computes the expected strokes gained of one aim point and writes the hex grid as
GeoJSON, a per-terrain summary CSV and optionally a PNG.

Example:
    python scripts/sg/run_sg_grid.py --course-dir courses/rancho_park \
        --start 34.045387,-118.417563 --aim 34.046485,-118.415429 \
        --hole 34.046848,-118.414270 --dispersion 10 --png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from golfsg.config.loaders import load_engine_config, load_strokes_model
from golfsg.engine import compute_strokes_gained_grid
from golfsg.exceptions import StrokesGainedError
from golfsg.io.results import grid_summary, save_grid_geojson, summarize_by_terrain
from golfsg.logging import get_logger, init_logging
from golfsg.terrain.ingest import load_course_terrain, load_terrain_geojson
from utils.cli import add_course_dir_argument, add_log_level_argument, parse_latlon
from utils.io import write_json, write_table_csv

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a strokes-gained hex grid for one aim point")
    parser.add_argument("--start", type=parse_latlon, required=True, help="Ball position as LAT,LON")
    parser.add_argument("--aim", type=parse_latlon, required=True, help="Aim point as LAT,LON")
    parser.add_argument("--hole", type=parse_latlon, required=True, help="Pin position as LAT,LON")
    parser.add_argument("--dispersion", type=float, required=True, help="Shot dispersion (std dev, meters)")
    parser.add_argument("--terrain", default=None, help="Terrain GeoJSON (overrides --course-dir terrain)")
    add_course_dir_argument(parser)
    parser.add_argument("--strokes-model", default=None, help="Strokes model JSON (category -> coefficients)")
    parser.add_argument("--max-cells", type=int, default=None, help="Override the hex cell budget")
    parser.add_argument("--output-dir", default="outputs/sg", help="Directory for result files")
    parser.add_argument("--png", action="store_true", help="Also render a PNG of the grid")
    add_log_level_argument(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(args.log_level)

    if not args.terrain and not args.course_dir:
        logger.error("Provide --terrain or --course-dir")
        return 2

    try:
        terrain = load_terrain_geojson(args.terrain) if args.terrain else load_course_terrain(args.course_dir)
        config = load_engine_config(args.course_dir)
        if args.max_cells is not None:
            config.max_cells = args.max_cells
        strokes_model = load_strokes_model(args.strokes_model or args.course_dir)

        grid = compute_strokes_gained_grid(
            args.start,
            args.aim,
            args.hole,
            args.dispersion,
            terrain,
            strokes_model=strokes_model,
            config=config,
        )
    except StrokesGainedError as e:
        logger.error("Strokes-gained computation failed: %s", e)
        return 1

    output_dir = Path(args.output_dir)
    save_grid_geojson(grid, output_dir / "sg_grid.geojson")
    write_json(output_dir / "sg_summary.json", grid_summary(grid))
    write_table_csv(output_dir / "sg_terrain_summary.csv", summarize_by_terrain(grid))

    if args.png:
        from golfsg.viz.matplotlib_viz import plot_strokes_gained_grid

        plot_strokes_gained_grid(grid, output_dir / "sg_grid.png", terrain=terrain)

    print(f"Total weighted strokes gained: {grid.total_weighted_strokes_gained:+.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
