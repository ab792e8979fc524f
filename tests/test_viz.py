import matplotlib

matplotlib.use("Agg")

import pytest

from golfsg.engine import compute_strokes_gained_grid
from golfsg.viz.matplotlib_viz import plot_strokes_gained_grid


@pytest.fixture
def grid(site, course_terrain):
    return compute_strokes_gained_grid(
        site.latlon(-140, 0), site.latlon(-20, 0), site.latlon(0, 0), 10.0, course_terrain,
    )


def test_plot_writes_png(grid, course_terrain, tmp_path):
    path = plot_strokes_gained_grid(grid, tmp_path / "plots" / "sg.png", terrain=course_terrain)
    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_plot_without_terrain(grid, tmp_path):
    path = plot_strokes_gained_grid(grid, tmp_path / "sg.png", column="probability", title="Landing")
    assert path.stat().st_size > 0


def test_plot_rejects_unknown_column(grid, tmp_path):
    with pytest.raises(ValueError):
        plot_strokes_gained_grid(grid, tmp_path / "sg.png", column="yardage")
