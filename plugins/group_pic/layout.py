"""
合照排版计算

标题栏在顶部，下面按行优先顺序排列等大的头像格子。
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import HEADER_HEIGHT, MIN_COLUMNS, TILE_SIZE

Position = Tuple[int, int]


@dataclass(frozen=True)
class LayoutPlan:
    """一次合照生成的排版结果（只读）"""
    item_count: int
    row_width: int
    row_count: int
    header_height: int
    tile_size: int = TILE_SIZE

    @property
    def canvas_width(self) -> int:
        return self.tile_size * self.row_width

    @property
    def canvas_height(self) -> int:
        return self.header_height + self.tile_size * self.row_count

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas_width, self.canvas_height

    def placement(self, index: int) -> Position:
        """第 index 个头像（从 0 开始）左上角在画布中的坐标"""
        if not 0 <= index < self.item_count:
            raise IndexError(f"头像序号 {index} 超出范围 [0, {self.item_count})")
        x = (index % self.row_width) * self.tile_size
        y = (index // self.row_width) * self.tile_size + self.header_height
        return x, y

    def placements(self) -> List[Position]:
        return [self.placement(i) for i in range(self.item_count)]


def auto_row_width(item_count: int, min_columns: int = MIN_COLUMNS) -> int:
    """尽量排成正方形，但每行不少于 min_columns 个"""
    # ceil(sqrt(n))，用整数平方根避免浮点误差
    side = math.isqrt(item_count - 1) + 1 if item_count > 0 else 0
    return max(side, min_columns)


def compute_layout(
    item_count: int,
    row_width: Optional[int] = None,
    header_height: int = HEADER_HEIGHT,
    tile_size: int = TILE_SIZE,
    min_columns: int = MIN_COLUMNS,
) -> LayoutPlan:
    """
    根据头像数量计算画布尺寸与每个头像的位置

    Args:
        item_count: 头像数量，可以为 0（只有标题栏）
        row_width: 每行头像数，None 表示自动
        header_height: 标题栏高度
        tile_size: 头像格子边长
        min_columns: 自动排版时每行最少头像数
    """
    if item_count < 0:
        raise ValueError(f"头像数量不能为负数: {item_count}")
    if tile_size <= 0:
        raise ValueError(f"格子边长必须为正数: {tile_size}")
    if header_height < 0:
        raise ValueError(f"标题栏高度不能为负数: {header_height}")

    if row_width is None:
        row_width = auto_row_width(item_count, min_columns)
    elif row_width <= 0:
        raise ValueError(f"每行头像数必须为正数: {row_width}")

    row_count = -(-item_count // row_width)
    return LayoutPlan(
        item_count=item_count,
        row_width=row_width,
        row_count=row_count,
        header_height=header_height,
        tile_size=tile_size,
    )
