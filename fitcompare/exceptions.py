"""
对比流水线的异常类型。

文件级错误（解码失败、无记录、无 session）只影响出错的那个文件，
由批处理驱动捕获并转换为诊断信息；只有全部文件都不可用时才抛出 NoUsableFiles。
"""

from typing import List, Optional


class ActivityFileError(Exception):
    """单个活动文件处理失败的基类。"""

    kind = "error"

    def __init__(self, file_name: str, message: Optional[str] = None):
        self.file_name = file_name
        self.message = message or self.kind
        super().__init__(f"{file_name}: {self.message}")


class DecodeFailure(ActivityFileError):
    """文件字节无法被 FIT 解码器解析。"""

    kind = "decode_failure"


class EmptyRecordSet(ActivityFileError):
    """解码成功，但展平后没有任何 record。"""

    kind = "empty_record_set"


class MissingSession(ActivityFileError):
    """解码成功，但文件中没有 session。"""

    kind = "missing_session"


class NoUsableFiles(Exception):
    """一批文件中没有任何一个能产生汇总行或曲线。"""

    def __init__(self, diagnostics: Optional[List] = None):
        self.diagnostics = list(diagnostics or [])
        super().__init__("没有可用于对比的文件")
