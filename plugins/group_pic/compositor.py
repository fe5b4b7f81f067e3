"""
合照生成入口

generate_group_picture 为同步阻塞调用（CPU 密集）。
在事件循环中请使用 generate_group_picture_async，它会把整个流程放到线程中执行。
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Union

from nonebot.log import logger

from .canvas import Canvas
from .config import Config, plugin_config
from .errors import CompositorError, CompositorIOError
from .layout import compute_layout
from .loader import load_and_normalize
from .mask import apply_circle_mask
from .text import load_font, render_header

PathLike = Union[str, Path]


def get_sort_key(file_path: Path):
    """排序键：纯数字文件名按数值排在前面，其余按文件名"""
    stem = file_path.stem
    if stem.isdigit():
        return (0, int(stem), file_path.name)
    return (1, 0, file_path.name)


def collect_avatar_files(avatars_directory: PathLike) -> List[Path]:
    """列出目录下的全部头像文件，顺序即合照中的排列顺序"""
    directory = Path(avatars_directory)
    if not directory.is_dir():
        raise CompositorIOError(f"头像目录不存在: {directory}")
    try:
        files = [p for p in directory.iterdir() if p.is_file()]
    except OSError as e:
        raise CompositorIOError(f"扫描头像目录失败: {directory}: {e}") from e
    files.sort(key=get_sort_key)
    return files


def compose_group_picture(
    avatar_paths: Sequence[PathLike],
    header_text: str = "",
    columns: Optional[int] = None,
    config: Optional[Config] = None,
) -> Canvas:
    """
    按给定顺序将头像拼成合照，返回画布（不写盘）

    所有文件（字体、头像）在分配画布之前读取完毕，任一失败则整体失败。
    """
    if config is None:
        config = plugin_config
    tile_size = config.group_pic_tile_size

    plan = compute_layout(
        len(avatar_paths),
        columns,
        header_height=config.group_pic_header_height,
        tile_size=tile_size,
        min_columns=config.group_pic_min_columns,
    )
    logger.debug(
        f"合照排版: {plan.item_count} 个头像, 每行 {plan.row_width} 个, "
        f"共 {plan.row_count} 行, 画布 {plan.canvas_width}x{plan.canvas_height}"
    )

    font = load_font(config.group_pic_font_path, config.group_pic_font_size)
    tiles = [load_and_normalize(path, tile_size) for path in avatar_paths]

    canvas = Canvas(plan.canvas_width, plan.canvas_height, config.group_pic_background)
    render_header(
        canvas,
        plan.header_height,
        header_text,
        font_size=config.group_pic_font_size,
        font=font,
        color=config.group_pic_text_color,
    )

    for (x, y), tile in zip(plan.placements(), tiles):
        apply_circle_mask(tile, config.mask_radius, config.group_pic_background)
        canvas.blit(x, y, tile)
    return canvas


def generate_group_picture(
    avatars_directory: PathLike,
    output_path: PathLike,
    columns: Optional[int] = None,
    header_text: str = "",
    config: Optional[Config] = None,
) -> Path:
    """
    读取头像目录生成合照并保存为 PNG

    Args:
        avatars_directory: 头像目录，每个文件一张头像
        output_path: 输出文件路径
        columns: 每行头像数，None 表示自动
        header_text: 标题文字
        config: 插件配置，None 表示使用全局配置

    Returns:
        输出文件路径

    Raises:
        CompositorError: 任一环节失败，此时不会写出文件
    """
    try:
        avatar_files = collect_avatar_files(avatars_directory)
        canvas = compose_group_picture(avatar_files, header_text, columns, config)
        path = canvas.save(output_path)
    except CompositorError as e:
        logger.error(f"生成合照失败 ({avatars_directory}): {e}")
        raise

    logger.info(f"合照已生成: {path} ({len(avatar_files)} 个头像, {canvas.width}x{canvas.height})")
    return path


async def generate_group_picture_async(
    avatars_directory: PathLike,
    output_path: PathLike,
    columns: Optional[int] = None,
    header_text: str = "",
    config: Optional[Config] = None,
) -> Path:
    """在线程中执行 generate_group_picture，避免阻塞事件循环"""
    return await asyncio.to_thread(
        generate_group_picture,
        avatars_directory,
        output_path,
        columns,
        header_text,
        config,
    )
