"""
合照画布

封装一张 RGBA 图片，提供整块覆盖（头像）与逐像素混合（文字）两种写入方式。
越界写入说明排版计算有误，直接抛出 CanvasBoundsError，不做裁剪。
"""

from io import BytesIO
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
from PIL import Image

from .constants import DISCORD_COLOR
from .errors import CanvasBoundsError, CompositorIOError

Color = Tuple[int, int, int, int]


def _over(dst, src, alpha):
    """dst*(1-a) + src*a，8 位整数四舍五入"""
    return (dst * (255 - alpha) + src * alpha + 127) // 255


class Canvas:
    def __init__(self, width: int, height: int, background: Color = DISCORD_COLOR):
        self.background = tuple(background)
        self.image = Image.new("RGBA", (width, height), self.background)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def _check_bounds(self, x: int, y: int, w: int, h: int):
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise CanvasBoundsError(
                f"绘制区域 ({x}, {y}, {w}x{h}) 超出画布 {self.width}x{self.height}"
            )

    def blit(self, dst_x: int, dst_y: int, src: Image.Image):
        """将 src 整块覆盖到 (dst_x, dst_y)，不做透明混合"""
        self._check_bounds(dst_x, dst_y, src.width, src.height)
        if src.mode != "RGBA":
            src = src.convert("RGBA")
        self.image.paste(src, (dst_x, dst_y))

    def blend_pixel(self, x: int, y: int, color: Sequence[int]):
        """按 color 的第 4 分量作为不透明度，将颜色叠加到 (x, y)"""
        self._check_bounds(x, y, 1, 1)
        r, g, b, alpha = color
        src = (r, g, b, 255)
        dst = self.image.getpixel((x, y))
        self.image.putpixel((x, y), tuple(_over(d, s, alpha) for d, s in zip(dst, src)))

    def blend_mask(self, x: int, y: int, coverage: np.ndarray, color: Sequence[int]):
        """
        blend_pixel 的批量版本

        Args:
            x, y: coverage 左上角在画布中的位置
            coverage: (h, w) 浮点矩阵，取值 [0, 1]
            color: 前景 RGB
        """
        h, w = coverage.shape
        if w == 0 or h == 0:
            return
        self._check_bounds(x, y, w, h)

        box = (x, y, x + w, y + h)
        dst = np.asarray(self.image.crop(box), dtype=np.int64)
        alpha = np.rint(np.clip(coverage, 0.0, 1.0) * 255).astype(np.int64)[..., None]
        src = np.array(tuple(color[:3]) + (255,), dtype=np.int64)
        out = _over(dst, src, alpha).astype(np.uint8)
        self.image.paste(Image.fromarray(out), box)

    def save(self, file_path: Union[str, Path]) -> Path:
        """保存为 PNG"""
        path = Path(file_path)
        try:
            self.image.save(path, format="PNG")
        except (OSError, ValueError) as e:
            # 宽或高为 0 的画布 Pillow 会报 ValueError
            raise CompositorIOError(f"合照保存失败: {path}: {e}") from e
        return path

    def to_bytes(self) -> bytes:
        """输出为 PNG 字节流（不写入磁盘）"""
        buffer = BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()
