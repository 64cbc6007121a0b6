"""
pytest配置文件，定义共享的测试夹具（fixtures）。

主要功能：
1. 构造活动文档（session -> lap -> record）样本
2. 提供桩解码器：按上传的字节内容返回预设文档或抛出解码异常
3. 提供FastAPI测试客户端（覆盖 get_decoder 依赖）
"""

import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from fitcompare.activities.models import (
    ActivityDocument,
    DeviceInfo,
    Event,
    Lap,
    Record,
    Session,
)
from fitcompare.exceptions import DecodeFailure
from fitcompare.main import app
from fitcompare.utils import get_decoder


START = datetime(2024, 5, 1, 6, 30, 0)


def make_records(count: int, offset: int = 0, **overrides) -> List[Record]:
    """每秒一条 record，速度 10.456 km/h，海拔 0.0523 km。"""
    records = []
    for i in range(offset, offset + count):
        values = {
            "timestamp": START + timedelta(seconds=i),
            "elapsed_time": float(i),
            "distance": round(i * 0.003, 3),
            "heart_rate": 120.0 + (i % 10),
            "speed": 10.456,
            "cadence": 85.0,
            "altitude": 0.0523,
            "power": 200.0,
        }
        values.update(overrides)
        records.append(Record(**values))
    return records


def make_document(
    laps: Sequence[Sequence[Record]] = (),
    sport: Optional[str] = "cycling",
    sessions: int = 1,
    with_events: bool = True,
    device: Optional[str] = "Edge 530",
    **session_fields,
) -> ActivityDocument:
    lap_models = [Lap(records=list(records)) for records in laps]
    fields = {
        "total_elapsed_time": 3725.0,
        "total_distance": 30.1234,
        "total_ascent": 0.3456,
        "total_descent": 0.3401,
        "total_calories": 812.0,
        "max_cadence": 110.0,
        "avg_cadence": 86.0,
        "max_heart_rate": 171.0,
        "avg_heart_rate": 142.0,
        "max_speed": 45.678,
        "avg_speed": 29.104,
        "max_power": 640.0,
        "avg_power": 198.0,
        "normalized_power": 215.0,
    }
    fields.update(session_fields)
    session_models = [
        Session(sport=sport, laps=lap_models if index == 0 else [], **fields)
        for index in range(sessions)
    ]
    events = []
    if with_events:
        events = [
            Event(timestamp=START, event="timer", event_type="start"),
            Event(timestamp=START + timedelta(minutes=10), event="timer", event_type="stop"),
            Event(timestamp=START + timedelta(seconds=3725), event="timer", event_type="stop_all"),
        ]
    device_infos = [DeviceInfo(product_name=device)] if device else []
    return ActivityDocument(sessions=session_models, events=events, device_infos=device_infos)


class StubDecoder:
    """按字节内容查表返回文档，未登记的内容视为解码失败。"""

    def __init__(self, documents: Dict[bytes, ActivityDocument]):
        self.documents = documents
        self.calls: List[str] = []

    def __call__(self, data: bytes, file_name: str = "") -> ActivityDocument:
        self.calls.append(file_name)
        if data not in self.documents:
            raise DecodeFailure(file_name, "invalid FIT header")
        return self.documents[data]


def nan_equal(left: Sequence[float], right: Sequence[float]) -> bool:
    if len(left) != len(right):
        return False
    return all(
        (math.isnan(a) and math.isnan(b)) or a == b
        for a, b in zip(left, right)
    )


@pytest.fixture
def ride_document():
    """两圈骑行：60 + 40 条 record"""
    return make_document([make_records(60), make_records(40, offset=60)])


@pytest.fixture
def run_document():
    return make_document([make_records(30)], sport="running", device="Forerunner 255")


@pytest.fixture
def stub_decoder(ride_document, run_document):
    return StubDecoder({
        b"ride": ride_document,
        b"run": run_document,
        b"no-session": ActivityDocument(),
        b"no-records": make_document([]),
    })


@pytest.fixture
def client(stub_decoder):
    """提供FastAPI测试客户端（桩解码器）"""
    app.dependency_overrides[get_decoder] = lambda: stub_decoder
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
