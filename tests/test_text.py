from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from plugins.group_pic import constants
from plugins.group_pic.canvas import Canvas
from plugins.group_pic.constants import DISCORD_COLOR
from plugins.group_pic.errors import FontLoadError
from plugins.group_pic.text import layout_glyphs, load_font, render_header


def _is_background(arr: np.ndarray) -> bool:
    return bool((arr == np.array(DISCORD_COLOR, dtype=np.uint8)).all())


def test_font_is_cached() -> None:
    assert load_font(font_size=30) is load_font(font_size=30)
    assert load_font(font_size=30) is not load_font(font_size=31)


def test_malformed_font_file(tmp_path: Path) -> None:
    bad = tmp_path / "broken.ttf"
    bad.write_bytes(b"\x00\x01not a font at all")
    with pytest.raises(FontLoadError):
        constants.get_font(bad, 20)


def test_missing_font_file(tmp_path: Path) -> None:
    with pytest.raises(FontLoadError):
        constants.get_font(tmp_path / "missing.ttf", 20)


def test_empty_header_leaves_band_untouched() -> None:
    canvas = Canvas(640, 64)
    run = render_header(canvas, 64, "")
    assert run.glyphs == []
    assert run.width == 0
    assert _is_background(np.asarray(canvas.image))


def test_header_draws_only_inside_band() -> None:
    canvas = Canvas(640, 200)
    render_header(canvas, 64, "niji3rd-live-day1")
    arr = np.asarray(canvas.image)
    assert not _is_background(arr[:64])
    assert _is_background(arr[64:])


def test_header_is_roughly_centered() -> None:
    canvas = Canvas(640, 64)
    render_header(canvas, 64, "IIII", font_size=40)
    arr = np.asarray(canvas.image)
    inked = np.nonzero((arr != np.array(DISCORD_COLOR, dtype=np.uint8)).any(axis=2))
    xs = inked[1]
    assert xs.min() > 200
    assert xs.max() < 440


def test_text_pixels_blend_towards_foreground() -> None:
    canvas = Canvas(300, 64)
    render_header(canvas, 64, "H", font_size=48)
    arr = np.asarray(canvas.image).reshape(-1, 4)
    brightest = arr[arr[:, 0].argmax()]
    assert tuple(brightest) == (240, 240, 240, 255)
    # every touched pixel lies between background and foreground
    assert arr[:, 0].min() >= 48 and arr[:, 0].max() <= 240
    assert (arr[:, 3] == 255).all()


def test_layout_keeps_order_and_advances() -> None:
    font = load_font(font_size=32)
    run = layout_glyphs("ab c", font)
    assert [g.chars for g in run.glyphs] == ["a", "b", " ", "c"]
    origins = [g.origin_x for g in run.glyphs]
    assert origins == sorted(origins)
    assert origins[0] == 0.0
    assert run.glyphs[0].drawable
    assert not run.glyphs[2].drawable
    assert run.width == round(origins[-1])
    ascent, descent = font.getmetrics()
    assert run.height == ascent + descent


def test_emoji_take_space_but_render_nothing() -> None:
    font = load_font(font_size=32)
    run = layout_glyphs("a😀b", font)
    assert [g.chars for g in run.glyphs] == ["a", "😀", "b"]
    assert not run.glyphs[1].drawable
    assert run.glyphs[2].origin_x > run.glyphs[1].origin_x

    canvas = Canvas(400, 64)
    render_header(canvas, 64, "😀👍", font_size=32)
    assert _is_background(np.asarray(canvas.image))


def test_overflowing_text_is_truncated() -> None:
    canvas = Canvas(128, 40)
    render_header(canvas, 40, "a very long header that cannot possibly fit", font_size=80)
    assert canvas.size == (128, 40)


def test_given_font_is_used_as_loaded() -> None:
    small = load_font(font_size=20)
    large = load_font(font_size=50)
    small_run = render_header(Canvas(300, 64), 64, "W", font=small)
    large_run = render_header(Canvas(300, 64), 64, "W", font=large)
    assert small_run.glyphs[0].height < large_run.glyphs[0].height
