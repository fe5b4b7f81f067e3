"""头像圆形遮罩"""

from typing import Optional, Tuple

import numpy as np
from PIL import Image

from .constants import DISCORD_COLOR, TILE_SIZE


def circle_outside_mask(
    size: Tuple[int, int], radius: int, center: Optional[Tuple[int, int]] = None
) -> np.ndarray:
    """
    返回圆外像素的布尔矩阵 (h, w)

    (x-cx)² + (y-cy)² >= r² 即视为圆外，全程整数运算。
    """
    w, h = size
    cx, cy = center if center is not None else (w // 2, h // 2)
    ys, xs = np.ogrid[:h, :w]
    dist2 = (xs.astype(np.int64) - cx) ** 2 + (ys.astype(np.int64) - cy) ** 2
    return dist2 >= radius * radius


def apply_circle_mask(
    tile: Image.Image,
    radius: int = TILE_SIZE // 2,
    background: Tuple[int, int, int, int] = DISCORD_COLOR,
    center: Optional[Tuple[int, int]] = None,
) -> Image.Image:
    """
    将圆外像素替换为背景色（原地修改并返回 tile）

    tile 应已归一化为正方形 RGBA 图片，重复调用结果不变。
    """
    outside = circle_outside_mask(tile.size, radius, center)
    if outside.any():
        mask = Image.fromarray(outside.astype(np.uint8) * 255)
        tile.paste(background, (0, 0, tile.width, tile.height), mask)
    return tile
