"""指标表与单位格式化。

Metric -> (record 字段, 本地化名称, 单位) 的唯一映射表；
步频/踏频的名称与单位取决于运动类型（running 为步频/spm，其余为踏频/rpm）。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...activities.models import Metric
from .numeric import is_finite


RUNNING = "running"


@dataclass(frozen=True)
class MetricSpec:
    field: str
    name: str
    unit: str
    running_name: Optional[str] = None
    running_unit: Optional[str] = None

    def localized_name(self, sport: Optional[str] = None) -> str:
        if sport == RUNNING and self.running_name:
            return self.running_name
        return self.name

    def unit_for(self, sport: Optional[str] = None) -> str:
        if sport == RUNNING and self.running_unit:
            return self.running_unit
        return self.unit


METRIC_TABLE: Dict[Metric, MetricSpec] = {
    Metric.HEART_RATE: MetricSpec('heart_rate', '心率', 'bpm'),
    Metric.SPEED:      MetricSpec('speed', '速度', 'km/h'),
    Metric.CADENCE:    MetricSpec('cadence', '踏频', 'rpm', running_name='步频', running_unit='spm'),
    Metric.ALTITUDE:   MetricSpec('altitude', '海拔', 'm'),
}


def localized_name(metric: Metric, sport: Optional[str] = None) -> str:
    return METRIC_TABLE[metric].localized_name(sport)


def metric_unit(metric: Metric, sport: Optional[str] = None) -> str:
    return METRIC_TABLE[metric].unit_for(sport)


def format_distance(distance_km: Any) -> str:
    value = float(distance_km) if is_finite(distance_km) else 0.0
    return f"{value:.2f} km"


def format_altitude(altitude_km: Any) -> str:
    value = float(altitude_km) * 1000 if is_finite(altitude_km) else 0.0
    return f"{value:.0f} m"


def format_speed(speed_kmh: Any) -> str:
    value = float(speed_kmh) if is_finite(speed_kmh) else 0.0
    return f"{value:.2f} km/h"


def format_count(value: Any, unit: str) -> str:
    """整数值加单位后缀，缺失时为 0。"""
    number = int(round(float(value))) if is_finite(value) else 0
    return f"{number} {unit}"
