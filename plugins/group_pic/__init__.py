"""
group_pic - 合照生成插件

把一组头像裁成圆形，按网格排列在标题栏下方，输出一张 PNG。
本插件只提供绘图能力，不注册命令；由其他插件下载好头像后调用。
"""

from nonebot import logger
from nonebot.plugin import PluginMetadata

from .canvas import Canvas
from .compositor import (
    collect_avatar_files,
    compose_group_picture,
    generate_group_picture,
    generate_group_picture_async,
)
from .config import Config
from .config import plugin_config as plugin_config
from .constants import PLUGIN_ID, PLUGIN_VERSION
from .errors import (
    CanvasBoundsError,
    CompositorError,
    CompositorIOError,
    DecodeError,
    FontLoadError,
)
from .layout import LayoutPlan, compute_layout

__all__ = [
    "Canvas",
    "CanvasBoundsError",
    "CompositorError",
    "CompositorIOError",
    "DecodeError",
    "FontLoadError",
    "LayoutPlan",
    "PLUGIN_ID",
    "PLUGIN_VERSION",
    "collect_avatar_files",
    "compose_group_picture",
    "compute_layout",
    "generate_group_picture",
    "generate_group_picture_async",
    "plugin_config",
]

# 插件元数据
__plugin_meta__ = PluginMetadata(
    name="合照",
    description="将一组头像拼成带标题的圆形头像合照",
    usage=(
        "供其他插件调用：\n"
        "  await generate_group_picture_async(头像目录, 输出路径, columns=None, header_text=标题)"
    ),
    type="library",
    config=Config,
    extra={
        "version": PLUGIN_VERSION,
    },
)

logger.info(f"group_pic 插件 v{PLUGIN_VERSION} 加载完成")
