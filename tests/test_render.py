from __future__ import annotations

import io

import matplotlib.pyplot as plt
import numpy as np
import pytest

from genericplotter.config import resolve_settings
from genericplotter.data import load_dataset
from genericplotter.errors import RenderError
from genericplotter.plot import build_scales, draw_plot, render_png, write_png


def _decode(data: bytes) -> np.ndarray:
    return plt.imread(io.BytesIO(data), format="png")


def _render(path, xsize, ysize, **kwargs) -> bytes:
    ds = load_dataset(path, 0, 1)
    xs, ys = build_scales(ds, xsize, ysize)
    return render_png(ds, xs, ys, **kwargs)


def _is_marker(pixel) -> bool:
    r, g, b = pixel[:3]
    return b - r > 0.3


@pytest.mark.parametrize("size", [(100, 100), (800, 600), (333, 77), (1, 1)])
def test_png_has_exact_canvas_size(three_points, size):
    data = _render(three_points, *size, xdesc="x", ydesc="y", title="t")
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    img = _decode(data)
    assert img.shape[:2] == (size[1], size[0])


def test_markers_land_on_scaled_pixels(three_points):
    img = _decode(_render(three_points, 100, 100))
    # (3, 4) maps to pixel (50, 50), i.e. PNG row 100 - 50
    window = img[48:52, 48:52].reshape(-1, img.shape[2])
    assert any(_is_marker(p) for p in window)
    # (5, 6) maps to the top-right corner
    corner = img[0:2, 98:100].reshape(-1, img.shape[2])
    assert any(_is_marker(p) for p in corner)
    # nothing is drawn away from the points, axes and labels
    np.testing.assert_allclose(img[25, 75, :3], [1.0, 1.0, 1.0])


def test_constant_column_is_drawn_on_midline(write_data):
    path = write_data("1 7\n2 7\n3 7\n")
    img = _decode(_render(path, 100, 80))
    # every point sits on y = 40, i.e. PNG row 40
    row = img[38:42, 45:55].reshape(-1, img.shape[2])
    assert any(_is_marker(p) for p in row)


def test_rendering_is_deterministic(three_points):
    first = _render(three_points, 120, 90, xdesc="time", ydesc="value", title="run")
    second = _render(three_points, 120, 90, xdesc="time", ydesc="value", title="run")
    assert first == second


def test_labels_are_drawn_literally(three_points):
    data = _render(three_points, 200, 150, xdesc="$cost", ydesc="50% of $x_i")
    assert _decode(data).shape[:2] == (150, 200)


def test_oversized_canvas_is_a_render_error(three_points):
    with pytest.raises(RenderError):
        _render(three_points, 2**24, 1)


def test_write_png_to_unwritable_location(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")
    with pytest.raises(RenderError, match="cannot write"):
        write_png(blocker / "out.png", b"\x89PNG")


def test_draw_plot_writes_file(three_points, tmp_path, defaults_cfg):
    target = tmp_path / "nested" / "plot.png"
    settings = resolve_settings(three_points, target, 0, 1, xsize=64, ysize=48, cfg=defaults_cfg)
    out = draw_plot(settings)
    assert out == target
    assert _decode(target.read_bytes()).shape[:2] == (48, 64)


def test_range_near_float_limits_renders(write_data):
    path = write_data("-1e308 1\n0 2\n1e308 3\n")
    img = _decode(_render(path, 100, 100))
    assert img.shape[:2] == (100, 100)
    # (0, 2) is the middle of both axes
    window = img[48:52, 48:52].reshape(-1, img.shape[2])
    assert any(_is_marker(p) for p in window)
