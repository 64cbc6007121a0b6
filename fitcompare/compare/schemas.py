"""
对比流水线的输入输出模型。

包含：
1. PerFileSeriesSet - 单个文件的横坐标标签与四条指标曲线
2. OverlayEntry / OverlayCollection - 某个指标跨文件的叠加曲线集合
3. SummaryRow - 文件信息表的一行
4. FileDiagnostic / ComparisonResult - 一次对比运行的完整结果
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..activities.models import CoordinateMode, Metric


class PerFileSeriesSet(BaseModel):
    """单个文件的曲线集合，所有序列与 labels 等长"""
    file_name : str                       = Field(...)
    sport     : Optional[str]             = Field(None)
    coordinate: CoordinateMode            = Field(...)
    labels    : List[str]                 = Field(default_factory=list)
    series    : Dict[Metric, List[float]] = Field(default_factory=dict)


class OverlayEntry(BaseModel):
    file_name: str         = Field(...)
    data     : List[float] = Field(default_factory=list)


class OverlayCollection(BaseModel):
    """某个指标的跨文件叠加数据，共享最长的标签轴"""
    metric       : Metric             = Field(...)
    sport        : Optional[str]      = Field(None, description="第一个文件的运动类型，用于名称与单位")
    entries      : List[OverlayEntry] = Field(default_factory=list)
    labels       : List[str]          = Field(default_factory=list, description="参考横坐标轴")
    suggested_min: Optional[float]    = Field(None, description="第一个文件有限值的最小值")
    suggested_max: Optional[float]    = Field(None, description="第一个文件有限值的最大值")


class SummaryRow(BaseModel):
    """文件信息表的一行（全部为展示字符串）"""
    file_name       : str = Field(..., description="文件名")
    sport           : str = Field("", description="运动类型")
    start_time      : str = Field("", description="开始时间")
    end_time        : str = Field("", description="结束时间")
    total_time      : str = Field("", description="总时间")
    total_distance  : str = Field("", description="总距离")
    total_ascent    : str = Field("", description="总上升高度")
    total_descent   : str = Field("", description="总下降高度")
    total_calories  : str = Field("", description="总卡路里")
    max_cadence     : str = Field("", description="最大步频/踏频")
    avg_cadence     : str = Field("", description="平均步频/踏频")
    max_heart_rate  : str = Field("", description="最大心率")
    avg_heart_rate  : str = Field("", description="平均心率")
    max_speed       : str = Field("", description="最大速度")
    avg_speed       : str = Field("", description="平均速度")
    max_power       : str = Field("", description="最大功率")
    avg_power       : str = Field("", description="平均功率")
    normalized_power: str = Field("", description="标准化功率")
    device          : str = Field("", description="设备信息")


SUMMARY_HEADERS: List[str] = [
    field.description or name for name, field in SummaryRow.model_fields.items()
]


class FileDiagnostic(BaseModel):
    file_name: str = Field(...)
    kind     : str = Field(..., description="decode_failure / empty_record_set / missing_session / error")
    message  : str = Field("")


class ComparisonResult(BaseModel):
    coordinate     : CoordinateMode                    = Field(...)
    summaries      : List[SummaryRow]                  = Field(default_factory=list)
    series         : List[PerFileSeriesSet]            = Field(default_factory=list)
    overlays       : Dict[Metric, OverlayCollection]   = Field(default_factory=dict)
    diagnostics    : List[FileDiagnostic]              = Field(default_factory=list)
    processing_time: float                             = Field(0.0, description="处理耗时（秒）")
