"""
跨文件叠加：按指标合并每个文件的曲线。

参考横坐标取所有文件中最长的标签序列（等长时取先出现的）；
各文件曲线原样输出，不插值、不截断、不重采样，对齐交给展示层。
纵轴建议范围只由第一个文件的有限值决定。
"""

from typing import Dict, List, Sequence

from ..activities.models import Metric
from ..core.analytics.numeric import finite_bounds
from .schemas import OverlayCollection, OverlayEntry, PerFileSeriesSet


def reference_labels(series_sets: Sequence[PerFileSeriesSet]) -> List[str]:
    longest: List[str] = []
    for series_set in series_sets:
        if len(series_set.labels) > len(longest):
            longest = series_set.labels
    return list(longest)


def aggregate_metric(series_sets: Sequence[PerFileSeriesSet], metric: Metric) -> OverlayCollection:
    entries = [
        OverlayEntry(file_name=s.file_name, data=list(s.series.get(metric, [])))
        for s in series_sets
    ]
    bounds = finite_bounds(entries[0].data) if entries else None
    return OverlayCollection(
        metric=metric,
        sport=series_sets[0].sport if series_sets else None,
        entries=entries,
        labels=reference_labels(series_sets),
        suggested_min=bounds[0] if bounds else None,
        suggested_max=bounds[1] if bounds else None,
    )


def aggregate_all(series_sets: Sequence[PerFileSeriesSet]) -> Dict[Metric, OverlayCollection]:
    return {metric: aggregate_metric(series_sets, metric) for metric in Metric}
