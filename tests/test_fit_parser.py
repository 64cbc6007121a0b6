"""
FIT 解析测试：级联组装与单位转换，以及无效字节的解码失败
"""

from datetime import datetime, timedelta

import pytest

from fitcompare.activities.fit_parser import FitParser, build_document, parse_fit_bytes
from fitcompare.exceptions import DecodeFailure

T0 = datetime(2024, 5, 1, 6, 30, 0)


def _record(seconds, **extra):
    values = {
        "timestamp": T0 + timedelta(seconds=seconds),
        "distance": seconds * 3.0,
        "enhanced_speed": 2.5,
        "enhanced_altitude": 52.3,
        "heart_rate": 130,
        "cadence": 88,
        "power": 210,
    }
    values.update(extra)
    return ("record", values)


def _messages():
    return [
        ("device_info", {"timestamp": T0, "manufacturer": "garmin", "product_name": "Edge 530"}),
        ("event", {"timestamp": T0, "event": "timer", "event_type": "start"}),
        _record(0),
        _record(1, heart_rate=None),
        ("lap", {"start_time": T0, "timestamp": T0 + timedelta(seconds=1)}),
        _record(2, enhanced_speed=None, speed=5.0, enhanced_altitude=None, altitude=100.0),
        ("lap", {"start_time": T0 + timedelta(seconds=2), "timestamp": T0 + timedelta(seconds=2)}),
        ("event", {"timestamp": T0 + timedelta(seconds=2), "event": "timer", "event_type": "stop_all"}),
        ("session", {
            "sport": "running",
            "start_time": T0,
            "timestamp": T0 + timedelta(seconds=2),
            "total_elapsed_time": 2.0,
            "total_distance": 6.0,
            "total_ascent": 12,
            "enhanced_avg_speed": 2.5,
            "max_speed": 5.0,
            "avg_heart_rate": 130,
        }),
    ]


def test_build_document_cascades_records_into_laps_and_sessions():
    doc = build_document(_messages())

    assert len(doc.sessions) == 1
    session = doc.sessions[0]
    assert [len(lap.records) for lap in session.laps] == [2, 1]
    assert [e.event_type for e in doc.events] == ["start", "stop_all"]
    assert [e.event_type for e in session.events] == ["start", "stop_all"]
    assert doc.device_infos[0].product_name == "Edge 530"


def test_build_document_converts_units():
    doc = build_document(_messages())
    session = doc.sessions[0]
    first, second = session.laps[0].records
    third = session.laps[1].records[0]

    assert first.elapsed_time == 0.0
    assert third.elapsed_time == 2.0
    assert second.distance == pytest.approx(0.003)
    assert first.speed == pytest.approx(9.0)
    assert third.speed == pytest.approx(18.0)
    assert first.altitude == pytest.approx(0.0523)
    assert third.altitude == pytest.approx(0.1)
    assert second.heart_rate is None

    assert session.sport == "running"
    assert session.total_distance == pytest.approx(0.006)
    assert session.total_ascent == pytest.approx(0.012)
    assert session.avg_speed == pytest.approx(9.0)
    assert session.max_speed == pytest.approx(18.0)
    assert session.avg_heart_rate == 130.0


def test_unclosed_records_join_last_session():
    messages = _messages() + [_record(3)]
    doc = build_document(messages)

    assert len(doc.sessions[0].laps) == 3
    assert doc.sessions[0].laps[-1].records[0].elapsed_time == 3.0


def test_records_without_session_produce_no_sessions():
    doc = build_document([_record(0), ("lap", {"start_time": T0, "timestamp": T0})])
    assert doc.sessions == []


def test_invalid_bytes_raise_decode_failure():
    with pytest.raises(DecodeFailure) as exc_info:
        FitParser().parse_fit_file(b"definitely not a fit file", "broken.fit")
    assert exc_info.value.file_name == "broken.fit"


def test_parse_fit_bytes_empty_input():
    with pytest.raises(DecodeFailure):
        parse_fit_bytes(b"", "empty.fit")
