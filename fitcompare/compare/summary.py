"""
文件信息表：每个文件一行汇总（运动类型、起止时间、总量、极值、设备）。

取值顺序（与活动指标装配一致）：
    1. Session[0] 上的汇总字段（优先）
    2. 由 record 有限值推导（最大/平均、总距离、总时间、标准化功率）
    3. 仍缺失时按 0 / 空串展示
只有 Session[0] 本身不存在时才抛出 MissingSession。
"""

from typing import Any, Callable, Iterable, List, Optional

from .. import config
from ..activities.models import ActivityDocument, Metric, Record
from ..core.analytics.numeric import finite_max, finite_mean, finite_values, is_finite
from ..core.analytics.power import normalized_power
from ..core.analytics.time_utils import format_date, format_time
from ..core.analytics.units import (
    format_altitude,
    format_count,
    format_distance,
    format_speed,
    metric_unit,
)
from ..exceptions import MissingSession
from .extract import extract_records
from .schemas import SummaryRow


def _prefer(
    session_value: Optional[float],
    records: List[Record],
    field: str,
    reduce: Callable[[Iterable[Any]], Optional[float]],
) -> Optional[float]:
    if is_finite(session_value):
        return session_value
    return reduce(getattr(r, field) for r in records)


def _normalized_power(session_value: Optional[float], records: List[Record]) -> Optional[float]:
    if is_finite(session_value):
        return session_value
    powers = [r.power for r in records]
    if finite_values(powers).size == 0:
        return None
    return normalized_power(powers)


def project_summary(
    document: ActivityDocument,
    file_name: str,
    tz_name: Optional[str] = None,
) -> SummaryRow:
    if not document.sessions:
        raise MissingSession(file_name, "文件中没有 session 数据")

    session = document.sessions[0]
    records = extract_records(document)
    tz_name = tz_name or config.DISPLAY_TIMEZONE
    events = document.events or session.events
    start = next((e for e in events if e.event_type == 'start'), None)
    stop = next((e for e in events if e.event_type == 'stop_all'), None)
    cadence_unit = metric_unit(Metric.CADENCE, session.sport)
    hr_unit = metric_unit(Metric.HEART_RATE)
    device = document.device_infos[0].product_name if document.device_infos else None

    return SummaryRow(
        file_name=file_name,
        sport=session.sport or "",
        start_time=format_date(start.timestamp, tz_name) if start else "",
        end_time=format_date(stop.timestamp, tz_name) if stop else "",
        total_time=format_time(_prefer(session.total_elapsed_time, records, 'elapsed_time', finite_max) or 0),
        total_distance=format_distance(_prefer(session.total_distance, records, 'distance', finite_max)),
        total_ascent=format_altitude(session.total_ascent),
        total_descent=format_altitude(session.total_descent),
        total_calories=format_count(session.total_calories, 'kcal'),
        max_cadence=format_count(_prefer(session.max_cadence, records, 'cadence', finite_max), cadence_unit),
        avg_cadence=format_count(_prefer(session.avg_cadence, records, 'cadence', finite_mean), cadence_unit),
        max_heart_rate=format_count(_prefer(session.max_heart_rate, records, 'heart_rate', finite_max), hr_unit),
        avg_heart_rate=format_count(_prefer(session.avg_heart_rate, records, 'heart_rate', finite_mean), hr_unit),
        max_speed=format_speed(_prefer(session.max_speed, records, 'speed', finite_max)),
        avg_speed=format_speed(_prefer(session.avg_speed, records, 'speed', finite_mean)),
        max_power=format_count(_prefer(session.max_power, records, 'power', finite_max), 'w'),
        avg_power=format_count(_prefer(session.avg_power, records, 'power', finite_mean), 'w'),
        normalized_power=format_count(_normalized_power(session.normalized_power, records), 'w'),
        device=device or "",
    )
