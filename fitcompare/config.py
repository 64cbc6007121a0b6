"""
应用配置中心（Configuration Center）

说明：
- 本模块统一管理对比服务的运行配置（日志、解码并发、上传限制、显示时区等）
- 配置全部从环境变量中读取，未设置时使用安全的默认值
- 模块导入时读取一次；测试中可直接 monkeypatch 模块属性

常用环境变量（全部可选）：
1) 日志
   - `LOG_LEVEL`：日志等级，默认 INFO（可选 DEBUG/INFO/WARNING/ERROR 等）

2) 解码
   - `MAX_PARALLEL_DECODES`：同时解码的 FIT 文件数上限，默认 4
   - `FIT_CHECK_CRC`：是否校验 FIT 文件 CRC，"true"/"false"，默认 false（容错模式）
   - `FIT_FETCH_TIMEOUT`：下载远程 FIT 文件的超时时间（秒），默认 30

3) 对比与展示
   - `MAX_UPLOAD_FILES`：单次对比允许上传的文件数上限，默认 20
   - `DISPLAY_TIMEZONE`：开始/结束时间的显示时区（IANA 名称），默认 UTC
   - `DEFAULT_COORDINATE_MODE`：默认横坐标类型，time 或 distance，默认 time
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    """读取整数环境变量；无法解析时回退默认值，并保证不小于 minimum。"""
    try:
        value = int(os.environ.get(name, default))
    except (TypeError, ValueError):
        value = default
    return max(minimum, value)


# 日志（Logging）
# LOG_LEVEL 用于控制 logging 的根等级，详见 fitcompare/logging_config.py
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# 解码（Decoding）
MAX_PARALLEL_DECODES = _env_int('MAX_PARALLEL_DECODES', 4)
FIT_CHECK_CRC = _env_bool('FIT_CHECK_CRC', False)
FIT_FETCH_TIMEOUT = _env_int('FIT_FETCH_TIMEOUT', 30)

# 对比（Comparison）
MAX_UPLOAD_FILES = _env_int('MAX_UPLOAD_FILES', 20)
DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'UTC')
DEFAULT_COORDINATE_MODE = os.environ.get('DEFAULT_COORDINATE_MODE', 'time').lower()
