"""
FastAPI 依赖项。

get_decoder 返回 FIT 解码函数；测试中通过 app.dependency_overrides 替换为桩解码器。
"""

from .activities.fit_parser import parse_fit_bytes


def get_decoder():
    """FastAPI 依赖项：获取 FIT 解码函数 (bytes, file_name) -> ActivityDocument。"""
    return parse_fit_bytes
