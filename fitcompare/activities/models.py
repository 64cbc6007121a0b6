"""
本文件定义了解码后活动文档的数据模型。

包含：
1. Metric / CoordinateMode - 指标与横坐标类型枚举（封闭集合）
2. Record / Lap / Event / DeviceInfo / Session - FIT 消息的结构化表示
3. ActivityDocument - 一个 FIT 文件解码后的完整文档（session -> lap -> record 级联）

单位约定（与解码器输出一致）：
- distance / total_distance: 千米
- speed / avg_speed / max_speed: 千米每小时
- altitude / total_ascent / total_descent: 千米（展示时需乘以 1000 转为米）
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Metric(str, Enum):
    """可视化指标枚举"""
    HEART_RATE = "heartRate"
    SPEED = "speed"
    CADENCE = "cadence"
    ALTITUDE = "altitude"


class CoordinateMode(str, Enum):
    """横坐标类型枚举"""
    TIME = "time"
    DISTANCE = "distance"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Record(_Frozen):
    """单个采样点"""
    timestamp   : Optional[datetime] = Field(None)
    elapsed_time: Optional[float]    = Field(None, description="距活动开始的秒数")
    distance    : Optional[float]    = Field(None, description="累计距离（千米）")
    heart_rate  : Optional[float]    = Field(None, description="心率（bpm）")
    speed       : Optional[float]    = Field(None, description="速度（千米每小时）")
    cadence     : Optional[float]    = Field(None, description="步频/踏频")
    altitude    : Optional[float]    = Field(None, description="海拔（千米）")
    power       : Optional[float]    = Field(None, description="功率（瓦特）")


class Lap(_Frozen):
    start_time: Optional[datetime] = Field(None)
    timestamp : Optional[datetime] = Field(None, description="圈结束时间")
    records   : List[Record]       = Field(default_factory=list)


class Event(_Frozen):
    timestamp : Optional[datetime] = Field(None)
    event     : Optional[str]      = Field(None)
    event_type: Optional[str]      = Field(None, description="start / stop_all 等")


class DeviceInfo(_Frozen):
    timestamp   : Optional[datetime] = Field(None)
    manufacturer: Optional[str]      = Field(None)
    product_name: Optional[str]      = Field(None)


class Session(_Frozen):
    """一次连续的运动记录，带运动类型与汇总值"""
    sport             : Optional[str]      = Field(None)
    start_time        : Optional[datetime] = Field(None)
    timestamp         : Optional[datetime] = Field(None)
    total_elapsed_time: Optional[float]    = Field(None, description="总时间（秒）")
    total_timer_time  : Optional[float]    = Field(None)
    total_distance    : Optional[float]    = Field(None, description="总距离（千米）")
    total_ascent      : Optional[float]    = Field(None, description="总爬升（千米）")
    total_descent     : Optional[float]    = Field(None, description="总下降（千米）")
    total_calories    : Optional[float]    = Field(None)
    max_cadence       : Optional[float]    = Field(None)
    avg_cadence       : Optional[float]    = Field(None)
    max_heart_rate    : Optional[float]    = Field(None)
    avg_heart_rate    : Optional[float]    = Field(None)
    max_speed         : Optional[float]    = Field(None, description="千米每小时")
    avg_speed         : Optional[float]    = Field(None, description="千米每小时")
    max_power         : Optional[float]    = Field(None)
    avg_power         : Optional[float]    = Field(None)
    normalized_power  : Optional[float]    = Field(None)
    laps              : List[Lap]          = Field(default_factory=list)
    events            : List[Event]        = Field(default_factory=list)


class ActivityDocument(_Frozen):
    """FIT 文件解码结果（级联模式）"""
    sessions    : List[Session]    = Field(default_factory=list)
    events      : List[Event]      = Field(default_factory=list)
    device_infos: List[DeviceInfo] = Field(default_factory=list)
