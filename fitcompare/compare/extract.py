"""把 session -> lap -> record 的嵌套结构展平为一条按时间排序的 record 序列。"""

from typing import List

from ..activities.models import ActivityDocument, Record


def extract_records(document: ActivityDocument) -> List[Record]:
    return [
        record
        for session in document.sessions
        for lap in session.laps
        for record in lap.records
    ]
