"""group_pic 插件异常定义"""


class CompositorError(Exception):
    """合照生成失败的基类，任何子类都会终止本次生成"""


class CompositorIOError(CompositorError, OSError):
    """文件不存在、不可读或输出路径不可写"""


class DecodeError(CompositorError):
    """文件不是支持的图片格式，或图片数据损坏"""


class FontLoadError(CompositorError):
    """字体资源无法加载"""


class CanvasBoundsError(CompositorError, IndexError):
    """绘制区域超出画布，说明排版计算有误"""
