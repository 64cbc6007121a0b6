"""
FIT 文件解析器（基于 fitparse）：解码消息，按级联模式组装 ActivityDocument。

级联规则（与设备写入顺序一致）：
- record 消息先缓存，遇到 lap 消息时归入该 lap；
- lap 消息先缓存，遇到 session 消息时归入该 session；
- 文件末尾未闭合的 record / lap 归入最后一个 session；
- event 按时间范围同时挂到对应的 session 上，文档级 events 保留全部事件。

单位转换：距离/海拔 米 -> 千米，速度 米每秒 -> 千米每小时，
elapsed_time 为相对第一条 record 的秒数。
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fitparse import FitFile

from .. import config
from ..exceptions import DecodeFailure
from .models import ActivityDocument, DeviceInfo, Event, Lap, Record, Session


logger = logging.getLogger(__name__)

Message = Tuple[str, Dict[str, Any]]

SESSION_PASSTHROUGH_FIELDS = (
    'total_elapsed_time', 'total_timer_time', 'total_calories',
    'max_cadence', 'avg_cadence', 'max_heart_rate', 'avg_heart_rate',
    'max_power', 'avg_power', 'normalized_power',
)


def _num(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _scaled(value: Any, factor: float) -> Optional[float]:
    v = _num(value)
    return v * factor if v is not None else None


def _first(values: Dict[str, Any], *names: str) -> Any:
    for name in names:
        value = values.get(name)
        if value is not None:
            return value
    return None


def _enum_str(value: Any) -> Optional[str]:
    # fitparse 对未知枚举返回整数，已知枚举返回字符串
    if value is None:
        return None
    if hasattr(value, 'name'):
        return value.name.lower()
    return str(value).lower()


def _to_record(values: Dict[str, Any], start_time: Optional[datetime]) -> Record:
    ts = values.get('timestamp')
    elapsed = None
    if isinstance(ts, datetime) and start_time is not None:
        elapsed = (ts - start_time).total_seconds()
    return Record(
        timestamp=ts if isinstance(ts, datetime) else None,
        elapsed_time=elapsed,
        distance=_scaled(values.get('distance'), 0.001),
        heart_rate=_num(values.get('heart_rate')),
        speed=_scaled(_first(values, 'enhanced_speed', 'speed'), 3.6),
        cadence=_num(values.get('cadence')),
        altitude=_scaled(_first(values, 'enhanced_altitude', 'altitude'), 0.001),
        power=_num(values.get('power')),
    )


def _to_event(values: Dict[str, Any]) -> Event:
    return Event(
        timestamp=values.get('timestamp'),
        event=_enum_str(values.get('event')),
        event_type=_enum_str(values.get('event_type')),
    )


def _to_device_info(values: Dict[str, Any]) -> DeviceInfo:
    product = _first(values, 'product_name', 'garmin_product', 'product')
    return DeviceInfo(
        timestamp=values.get('timestamp'),
        manufacturer=_enum_str(values.get('manufacturer')),
        product_name=str(product) if product is not None else None,
    )


def _to_session(values: Dict[str, Any], laps: List[Lap], events: List[Event]) -> Session:
    start = values.get('start_time')
    end = values.get('timestamp')
    in_range = [
        e for e in events
        if e.timestamp is not None and start is not None and end is not None
        and start <= e.timestamp <= end
    ]
    fields = {name: _num(values.get(name)) for name in SESSION_PASSTHROUGH_FIELDS}
    return Session(
        sport=_enum_str(values.get('sport')),
        start_time=start,
        timestamp=end,
        total_distance=_scaled(values.get('total_distance'), 0.001),
        total_ascent=_scaled(values.get('total_ascent'), 0.001),
        total_descent=_scaled(values.get('total_descent'), 0.001),
        max_speed=_scaled(_first(values, 'enhanced_max_speed', 'max_speed'), 3.6),
        avg_speed=_scaled(_first(values, 'enhanced_avg_speed', 'avg_speed'), 3.6),
        laps=laps,
        events=in_range,
        **fields,
    )


def build_document(messages: Iterable[Message]) -> ActivityDocument:
    """把 (消息名, 字段字典) 序列按级联规则组装为 ActivityDocument。"""
    start_time: Optional[datetime] = None
    pending_records: List[Record] = []
    pending_laps: List[Lap] = []
    session_parts: List[Tuple[Dict[str, Any], List[Lap]]] = []
    events: List[Event] = []
    device_infos: List[DeviceInfo] = []

    for name, values in messages:
        if name == 'record':
            ts = values.get('timestamp')
            if start_time is None and isinstance(ts, datetime):
                start_time = ts
            pending_records.append(_to_record(values, start_time))
        elif name == 'lap':
            pending_laps.append(Lap(
                start_time=values.get('start_time'),
                timestamp=values.get('timestamp'),
                records=pending_records,
            ))
            pending_records = []
        elif name == 'session':
            session_parts.append((values, pending_laps))
            pending_laps = []
        elif name == 'event':
            events.append(_to_event(values))
        elif name == 'device_info':
            device_infos.append(_to_device_info(values))

    if pending_records:
        pending_laps.append(Lap(records=pending_records))
    if pending_laps:
        if session_parts:
            session_parts[-1][1].extend(pending_laps)
        else:
            logger.debug("[fit-parser] %d laps without a session dropped", len(pending_laps))

    sessions = [_to_session(values, laps, events) for values, laps in session_parts]
    return ActivityDocument(sessions=sessions, events=events, device_infos=device_infos)


class FitParser:
    """FIT文件解析器"""

    def __init__(self, check_crc: Optional[bool] = None):
        self.check_crc = config.FIT_CHECK_CRC if check_crc is None else check_crc

    def parse_fit_file(self, file_data: bytes, file_name: str = "") -> ActivityDocument:
        try:
            fitfile = FitFile(BytesIO(file_data), check_crc=self.check_crc)
            messages = [(message.name, message.get_values()) for message in fitfile.get_messages()]
        except Exception as exc:
            logger.warning("[fit-parser] decode failed for %s: %s", file_name, exc)
            raise DecodeFailure(file_name, str(exc)) from exc

        document = build_document(messages)
        logger.debug(
            "[fit-parser] %s: %d messages, %d sessions",
            file_name, len(messages), len(document.sessions),
        )
        return document


fit_parser = FitParser()


def parse_fit_bytes(file_data: bytes, file_name: str = "") -> ActivityDocument:
    return fit_parser.parse_fit_file(file_data, file_name)
