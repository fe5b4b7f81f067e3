"""group_pic 插件常量定义模块"""

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from nonebot.log import logger

from .errors import FontLoadError

if TYPE_CHECKING:
    from PIL.ImageFont import FreeTypeFont


# 插件信息
PLUGIN_PATH: Path = Path(__file__).parent.resolve()
PLUGIN_VERSION: str = "0.3.0"
PLUGIN_ID: str = "group_pic"

# 配色（与聊天客户端深色主题背景一致）
DISCORD_COLOR: Tuple[int, int, int, int] = (48, 48, 54, 255)
TEXT_COLOR: Tuple[int, int, int] = (240, 240, 240)

# 合照尺寸常量
TILE_SIZE: int = 128
HEADER_HEIGHT: int = 64
HEADER_FONT_SIZE: int = 54
MIN_COLUMNS: int = 5


# 延迟加载字体，进程内按 (路径, 字号) 缓存
_font_cache: Dict[Tuple[Optional[str], int], "FreeTypeFont"] = {}


def get_font(font_path: Optional[Path] = None, size: int = HEADER_FONT_SIZE) -> "FreeTypeFont":
    """
    获取标题字体（延迟加载）

    Args:
        font_path: 字体文件路径，None 表示使用 Pillow 内置字体
        size: 字号

    Raises:
        FontLoadError: 字体文件损坏/不存在，或 Pillow 未启用 FreeType
    """
    key = (str(font_path) if font_path is not None else None, size)
    font = _font_cache.get(key)
    if font is not None:
        return font

    from PIL import ImageFont

    try:
        if font_path is None:
            logger.debug(f"加载内置字体资源，字号 {size}")
            font = ImageFont.load_default(size=size)
        else:
            logger.debug(f"加载字体资源: {font_path}，字号 {size}")
            font = ImageFont.truetype(str(font_path), size)
    except (OSError, ValueError) as e:
        raise FontLoadError(f"字体加载失败: {font_path or '内置字体'}: {e}") from e

    # 没有 FreeType 时 load_default 只能给出位图字体，无法按字号取字形轮廓
    if not isinstance(font, ImageFont.FreeTypeFont):
        raise FontLoadError("当前 Pillow 未启用 FreeType，无法加载可缩放字体")

    _font_cache[key] = font
    return font
