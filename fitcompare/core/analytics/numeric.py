"""数值过滤工具：统一剔除缺失值、NaN 与 ±Infinity。

SummaryProjector 与 ComparisonAggregator 的所有极值/均值计算都经过这里，
缺失值既不参与 min/max，也不会被当作 0。
"""

import math
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np


def _as_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def is_finite(value: Any) -> bool:
    return math.isfinite(_as_float(value))


def to_array(values: Iterable[Any]) -> np.ndarray:
    """转换为 float64 数组，非数值位置为 NaN，长度不变。"""
    return np.asarray([_as_float(v) for v in values], dtype=np.float64)


def finite_values(values: Iterable[Any]) -> np.ndarray:
    arr = to_array(values)
    return arr[np.isfinite(arr)]


def finite_bounds(values: Iterable[Any]) -> Optional[Tuple[float, float]]:
    """返回有限值的 (min, max)；没有任何有限值时返回 None。"""
    arr = finite_values(values)
    if arr.size == 0:
        return None
    return float(arr.min()), float(arr.max())


def finite_max(values: Iterable[Any]) -> Optional[float]:
    bounds = finite_bounds(values)
    return bounds[1] if bounds else None


def finite_mean(values: Iterable[Any]) -> Optional[float]:
    arr = finite_values(values)
    if arr.size == 0:
        return None
    return float(arr.mean())


def to_json_safe(values: Iterable[Any]) -> List[Optional[float]]:
    """非有限值转为 None（JSON null），其余保持原值。"""
    return [v if is_finite(v) else None for v in values]
