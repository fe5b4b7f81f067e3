"""group_pic 插件配置"""

from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel
from nonebot import get_plugin_config


class Config(BaseModel):
    """group_pic 插件配置"""

    # 头像格子边长（像素）
    group_pic_tile_size: int = 128
    # 标题栏高度（像素）
    group_pic_header_height: int = 64
    # 标题字号
    group_pic_font_size: int = 54
    # 标题字体文件，留空则使用 Pillow 内置字体
    group_pic_font_path: Optional[Path] = None
    # 圆形遮罩半径，留空则为格子边长的一半
    group_pic_mask_radius: Optional[int] = None
    # 自动排版时每行最少头像数
    group_pic_min_columns: int = 5

    # 配色
    group_pic_background: Tuple[int, int, int, int] = (48, 48, 54, 255)
    group_pic_text_color: Tuple[int, int, int] = (240, 240, 240)

    @property
    def mask_radius(self) -> int:
        if self.group_pic_mask_radius is None:
            return self.group_pic_tile_size // 2
        return self.group_pic_mask_radius


try:
    plugin_config = get_plugin_config(Config)
except ValueError:
    # 允许在非 NoneBot 环境下 import（例如命令行/单测）
    plugin_config = Config()
