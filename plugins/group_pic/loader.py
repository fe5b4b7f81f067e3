"""头像图片加载与尺寸归一化"""

from pathlib import Path
from typing import Union

from nonebot.log import logger
from PIL import Image, UnidentifiedImageError

from .constants import TILE_SIZE
from .errors import CompositorIOError, DecodeError


def load_and_normalize(file_path: Union[str, Path], tile_size: int = TILE_SIZE) -> Image.Image:
    """
    读取头像文件，转为 RGBA 并缩放为 tile_size × tile_size

    Args:
        file_path: 图片路径，任意 Pillow 支持的格式
        tile_size: 目标边长

    Returns:
        RGBA 模式的 `PIL.Image.Image`，无透明通道的图片视为完全不透明

    Raises:
        CompositorIOError: 路径不存在、不是文件或无法读取
        DecodeError: 文件不是图片或数据损坏
    """
    path = Path(file_path)
    if not path.is_file():
        raise CompositorIOError(f"头像文件不存在: {path}")

    try:
        with Image.open(path) as src_img:
            tile = src_img.convert("RGBA")
    except UnidentifiedImageError as e:
        raise DecodeError(f"文件不是图片: {path}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"图片尺寸过大: {path}: {e}") from e
    except (FileNotFoundError, PermissionError, IsADirectoryError) as e:
        raise CompositorIOError(f"无法读取头像文件: {path}: {e}") from e
    except (OSError, ValueError, SyntaxError) as e:
        # 截断/损坏的图片在解码阶段才会报错
        raise DecodeError(f"图片解码失败: {path}: {e}") from e

    if tile.size != (tile_size, tile_size):
        logger.debug(f"缩放头像 {path.name}: {tile.size} -> {tile_size}x{tile_size}")
        tile = tile.resize((tile_size, tile_size), Image.Resampling.LANCZOS)
    return tile
