"""
展示适配：把对比结果转换为折线图配置（Chart.js 结构）与 JSON 载荷。

- 每个文件一张图（四条指标曲线），纵轴建议最大值取心率有限值的最大值；
- 每个指标一张总对比图，纵轴建议范围来自 OverlayCollection；
- 交互：左键框选缩放（x 轴）、Ctrl+左键平移、双击重置、十字准线与活动点；
- 非有限值输出为 null；短于参考轴的叠加曲线在末尾补 null（断线显示）。

render_charts 返回由调用方持有的 ChartRegistry，重新对比时调用 clear() 替换旧图。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..activities.models import Metric
from ..core.analytics.numeric import finite_max, to_json_safe
from ..core.analytics.units import localized_name, metric_unit
from .schemas import SUMMARY_HEADERS, ComparisonResult, OverlayCollection, PerFileSeriesSet


ZOOM_IN_STEP = 1.2
ZOOM_OUT_STEP = 0.8
INTERACTION_HINT = "左键框选区域放大\nCtrl+鼠标左键平移\n双击重置缩放"
CROSSHAIR_STYLE = {"lineWidth": 1, "strokeStyle": "#969696", "dash": [5, 2]}
ACTIVE_POINT_STYLE = {"radius": 4, "strokeStyle": "white", "lineWidth": 2}


def pad_to_axis(data: Sequence[Any], length: int) -> List[Optional[float]]:
    values = to_json_safe(data)
    if len(values) < length:
        values.extend([None] * (length - len(values)))
    return values


def _dataset(label: str, data: List[Optional[float]], border_width: int) -> Dict[str, Any]:
    return {
        "label": label,
        "data": data,
        "borderWidth": border_width,
        "fill": False,
        "pointRadius": 0,
        "pointHoverRadius": 0,
    }


def _options(title: str, y_scale: Dict[str, float], units: Dict[str, str]) -> Dict[str, Any]:
    return {
        "responsive": True,
        "maintainAspectRatio": False,
        "interaction": {"mode": "nearest", "intersect": False},
        "scales": {"y": y_scale},
        "plugins": {
            "zoom": {
                "pan": {"enabled": True, "mode": "x", "modifierKey": "ctrl"},
                "zoom": {
                    "drag": {"enabled": True, "backgroundColor": "rgba(0,0,0,0.1)", "modifierKey": None},
                    "mode": "x",
                },
            },
            "legend": {"display": True, "labels": {"font": {"size": 14}}},
            "title": {"display": True, "text": title, "font": {"size": 18}},
            "tooltip": {"mode": "index", "position": "nearest", "intersect": False, "units": units},
            "crosshairLine": CROSSHAIR_STYLE,
            "activePoints": ACTIVE_POINT_STYLE,
        },
    }


def file_chart(series_set: PerFileSeriesSet) -> Dict[str, Any]:
    sport = series_set.sport
    datasets = []
    units: Dict[str, str] = {}
    for metric in Metric:
        name = localized_name(metric, sport)
        units[name] = metric_unit(metric, sport)
        datasets.append(_dataset(name, to_json_safe(series_set.series.get(metric, [])), 2))

    y_scale: Dict[str, float] = {}
    suggested_max = finite_max(series_set.series.get(Metric.HEART_RATE, []))
    if suggested_max is not None:
        y_scale["suggestedMax"] = suggested_max

    return {
        "type": "line",
        "data": {"labels": list(series_set.labels), "datasets": datasets},
        "options": _options(series_set.file_name, y_scale, units),
    }


def comparison_chart(overlay: OverlayCollection) -> Dict[str, Any]:
    length = len(overlay.labels)
    unit = metric_unit(overlay.metric, overlay.sport)
    datasets = [
        _dataset(entry.file_name, pad_to_axis(entry.data, length), 1)
        for entry in overlay.entries
    ]
    y_scale: Dict[str, float] = {}
    if overlay.suggested_max is not None:
        y_scale["suggestedMax"] = overlay.suggested_max
    if overlay.suggested_min is not None:
        y_scale["suggestedMin"] = overlay.suggested_min

    title = f"总对比：{localized_name(overlay.metric, overlay.sport)}"
    units = {entry.file_name: unit for entry in overlay.entries}
    return {
        "type": "line",
        "data": {"labels": list(overlay.labels), "datasets": datasets},
        "options": _options(title, y_scale, units),
    }


@dataclass
class ChartHandle:
    """单张图的句柄：配置 + 当前缩放状态"""
    chart_id: str
    kind: str
    title: str
    config: Dict[str, Any]
    zoom_level: float = 1.0

    @property
    def axis_length(self) -> int:
        return len(self.config["data"]["labels"])

    def zoom(self, factor: float) -> float:
        if factor <= 0:
            raise ValueError("zoom factor must be positive")
        self.zoom_level = max(1.0, self.zoom_level * factor)
        return self.zoom_level

    def zoom_in(self) -> float:
        return self.zoom(ZOOM_IN_STEP)

    def zoom_out(self) -> float:
        return self.zoom(ZOOM_OUT_STEP)

    def reset_zoom(self) -> None:
        self.zoom_level = 1.0

    def visible_range(self) -> Tuple[int, int]:
        """当前缩放下居中的可见索引区间 [start, end)。"""
        length = self.axis_length
        span = max(1, int(round(length / self.zoom_level))) if length else 0
        start = (length - span) // 2
        return start, start + span

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.chart_id,
            "kind": self.kind,
            "title": self.title,
            "hint": INTERACTION_HINT,
            "zoom_level": self.zoom_level,
            "config": self.config,
        }


@dataclass
class ChartRegistry:
    charts: Dict[str, ChartHandle] = field(default_factory=dict)

    def register(self, handle: ChartHandle) -> ChartHandle:
        self.charts[handle.chart_id] = handle
        return handle

    def get(self, chart_id: str) -> Optional[ChartHandle]:
        return self.charts.get(chart_id)

    def clear(self) -> None:
        self.charts.clear()

    def __iter__(self) -> Iterator[ChartHandle]:
        return iter(list(self.charts.values()))

    def __len__(self) -> int:
        return len(self.charts)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [handle.to_payload() for handle in self]


def render_charts(result: ComparisonResult, registry: Optional[ChartRegistry] = None) -> ChartRegistry:
    registry = registry if registry is not None else ChartRegistry()
    registry.clear()
    for index, series_set in enumerate(result.series):
        registry.register(ChartHandle(
            chart_id=f"file-{index}",
            kind="file",
            title=series_set.file_name,
            config=file_chart(series_set),
        ))
    for metric, overlay in result.overlays.items():
        config = comparison_chart(overlay)
        registry.register(ChartHandle(
            chart_id=f"compare-{metric.value}",
            kind="comparison",
            title=config["options"]["plugins"]["title"]["text"],
            config=config,
        ))
    return registry


def _series_payload(series_set: PerFileSeriesSet) -> Dict[str, Any]:
    return {
        "file_name": series_set.file_name,
        "sport": series_set.sport,
        "labels": list(series_set.labels),
        "series": {metric.value: to_json_safe(values) for metric, values in series_set.series.items()},
    }


def _overlay_payload(overlay: OverlayCollection) -> Dict[str, Any]:
    return {
        "metric": overlay.metric.value,
        "name": localized_name(overlay.metric, overlay.sport),
        "unit": metric_unit(overlay.metric, overlay.sport),
        "labels": list(overlay.labels),
        "entries": [
            {"file_name": entry.file_name, "data": to_json_safe(entry.data)}
            for entry in overlay.entries
        ],
        "suggested_min": overlay.suggested_min,
        "suggested_max": overlay.suggested_max,
    }


def result_payload(result: ComparisonResult, registry: Optional[ChartRegistry] = None) -> Dict[str, Any]:
    """对比结果 -> 可直接 JSON 序列化的字典（NaN 已替换为 null）。"""
    payload: Dict[str, Any] = {
        "coordinate": result.coordinate.value,
        "processing_time": result.processing_time,
        "headers": SUMMARY_HEADERS,
        "summaries": [row.model_dump() for row in result.summaries],
        "series": [_series_payload(s) for s in result.series],
        "overlays": {metric.value: _overlay_payload(o) for metric, o in result.overlays.items()},
        "diagnostics": [d.model_dump() for d in result.diagnostics],
    }
    if registry is not None:
        payload["charts"] = registry.to_payload()
    return payload
