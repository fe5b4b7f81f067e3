"""
标题文字排版与光栅化

单行、从左到右排版，不自动换行；超出标题栏的部分直接截断。
每个字形单独光栅化为覆盖率矩阵，再以 "over" 方式混合到画布上。
emoji 不绘制（不支持彩色字体），但保留其占位宽度。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import emoji
import numpy as np
from PIL import Image, ImageDraw
from PIL.ImageFont import FreeTypeFont

from .canvas import Canvas
from .constants import HEADER_FONT_SIZE, TEXT_COLOR, get_font


@dataclass(frozen=True)
class Glyph:
    """
    排版后的单个字形

    Fields:
        chars: 对应的字符（emoji 序列作为一个整体）
        origin_x: 笔位横坐标（相对排版原点）
        x, y: 像素包围盒左上角（相对排版原点，y=0 为 ascent 顶线）
        coverage: (h, w) 覆盖率矩阵，None 表示不绘制（空白、emoji）
    """
    chars: str
    origin_x: float
    x: int = 0
    y: int = 0
    coverage: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    @property
    def width(self) -> int:
        return 0 if self.coverage is None else self.coverage.shape[1]

    @property
    def height(self) -> int:
        return 0 if self.coverage is None else self.coverage.shape[0]

    @property
    def drawable(self) -> bool:
        return self.coverage is not None


@dataclass(frozen=True)
class GlyphRun:
    glyphs: List[Glyph]
    ascent: int
    descent: int

    @property
    def width(self) -> int:
        """首尾字形笔位之差"""
        if not self.glyphs:
            return 0
        return int(round(self.glyphs[-1].origin_x - self.glyphs[0].origin_x))

    @property
    def height(self) -> int:
        # Pillow 的 descent 为正值
        return self.ascent + self.descent


def load_font(font_path: Optional[Path] = None, font_size: int = HEADER_FONT_SIZE) -> FreeTypeFont:
    return get_font(font_path, font_size)


def _split_text(text: str) -> List[Tuple[str, bool]]:
    """按字符切分为 (字符, 是否 emoji)，emoji（含 ZWJ 组合）保持为一个单元"""
    return [
        (token.chars, not isinstance(token.value, str))
        for token in emoji.analyze(text, non_emoji=True, join_emoji=True)
    ]


def _rasterize(chars: str, font: FreeTypeFont):
    """返回 (left, top, coverage)，字形没有可绘制像素时 coverage 为 None"""
    left, top, right, bottom = font.getbbox(chars)
    w, h = right - left, bottom - top
    if w <= 0 or h <= 0:
        return left, top, None

    mask = Image.new("L", (w, h), 0)
    ImageDraw.Draw(mask).text((-left, -top), chars, font=font, fill=255)
    coverage = np.asarray(mask, dtype=np.float64) / 255.0
    if not coverage.any():
        return left, top, None
    return left, top, coverage


def layout_glyphs(text: str, font: FreeTypeFont) -> GlyphRun:
    """将文字排成一行字形序列"""
    ascent, descent = font.getmetrics()
    glyphs: List[Glyph] = []
    consumed = ""
    for chars, is_emoji in _split_text(text):
        origin_x = font.getlength(consumed) if consumed else 0.0
        consumed += chars

        if is_emoji:
            glyphs.append(Glyph(chars=chars, origin_x=origin_x))
            continue

        left, top, coverage = _rasterize(chars, font)
        glyphs.append(Glyph(
            chars=chars,
            origin_x=origin_x,
            x=int(round(origin_x)) + left,
            y=top,
            coverage=coverage,
        ))
    return GlyphRun(glyphs=glyphs, ascent=ascent, descent=descent)


def render_header(
    canvas: Canvas,
    header_band_height: int,
    text: str,
    font_size: int = HEADER_FONT_SIZE,
    font: Optional[FreeTypeFont] = None,
    color: Sequence[int] = TEXT_COLOR,
) -> GlyphRun:
    """
    在画布顶部 header_band_height 高的区域内居中绘制 text

    Args:
        canvas: 目标画布
        header_band_height: 标题栏高度
        text: 标题文字，可以为空
        font_size: 字号，仅在 font 为 None 时使用
        font: 已按字号加载的字体，None 表示加载默认字体
        color: 文字颜色 RGB

    Returns:
        实际使用的字形序列
    """
    if font is None:
        font = load_font(font_size=font_size)

    run = layout_glyphs(text, font)
    band_w = canvas.width
    band_h = min(header_band_height, canvas.height)
    x_offset = (band_w - run.width) // 2
    y_offset = (header_band_height - run.height) // 2

    for glyph in run.glyphs:
        if not glyph.drawable:
            continue
        gx = x_offset + glyph.x
        gy = y_offset + glyph.y

        # 截断到标题栏范围内
        x0, y0 = max(gx, 0), max(gy, 0)
        x1, y1 = min(gx + glyph.width, band_w), min(gy + glyph.height, band_h)
        if x0 >= x1 or y0 >= y1:
            continue
        coverage = glyph.coverage[y0 - gy:y1 - gy, x0 - gx:x1 - gx]
        canvas.blend_mask(x0, y0, coverage, color)
    return run
