"""
曲线构建：record 序列 -> 横坐标标签 + 四条指标曲线。

- 标签：time 模式为 HH:MM:SS，distance 模式为 "x.xx km"；
- 速度保留两位小数，海拔由千米换算为米并取整，心率与踏频原样输出；
- 缺失值以 NaN 占位，不删除 record，保证所有序列与标签等长。
"""

import math
from typing import Dict, List, Optional, Sequence

from ..activities.models import CoordinateMode, Metric, Record
from ..core.analytics.numeric import is_finite
from ..core.analytics.time_utils import format_time
from ..core.analytics.units import METRIC_TABLE, format_distance
from .schemas import PerFileSeriesSet


def _label(record: Record, coordinate: CoordinateMode) -> str:
    if coordinate == CoordinateMode.DISTANCE:
        return format_distance(record.distance) if is_finite(record.distance) else ""
    return format_time(record.elapsed_time)


def build_labels(records: Sequence[Record], coordinate: CoordinateMode) -> List[str]:
    return [_label(record, coordinate) for record in records]


def _metric_value(record: Record, metric: Metric) -> float:
    raw = getattr(record, METRIC_TABLE[metric].field)
    if not is_finite(raw):
        return math.nan
    value = float(raw)
    if metric == Metric.SPEED:
        return round(value, 2)
    if metric == Metric.ALTITUDE:
        return float(round(value * 1000))
    return value


def build_series(records: Sequence[Record]) -> Dict[Metric, List[float]]:
    return {
        metric: [_metric_value(record, metric) for record in records]
        for metric in Metric
    }


def build_series_set(
    file_name: str,
    records: Sequence[Record],
    coordinate: CoordinateMode,
    sport: Optional[str] = None,
) -> PerFileSeriesSet:
    return PerFileSeriesSet(
        file_name=file_name,
        sport=sport,
        coordinate=coordinate,
        labels=build_labels(records, coordinate),
        series=build_series(records),
    )
