"""
批处理驱动：解码一批 FIT 文件并生成对比结果。

流程：
    1. 并发解码（线程池，上限 MAX_PARALLEL_DECODES），结果保持输入顺序；
    2. 逐个文件：汇总行 -> 展平 record -> 构建曲线；
    3. 对有曲线的文件做跨文件叠加。

每个文件独立成败：解码失败 / 无 session / 无 record 只记录诊断信息，
不影响其它文件；全部文件都不可用时抛出 NoUsableFiles。
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

import requests

from .. import config
from ..activities.fit_parser import parse_fit_bytes
from ..activities.models import ActivityDocument, CoordinateMode
from ..exceptions import ActivityFileError, DecodeFailure, EmptyRecordSet, NoUsableFiles
from .extract import extract_records
from .overlay import aggregate_all
from .schemas import ComparisonResult, FileDiagnostic, PerFileSeriesSet, SummaryRow
from .series import build_series_set
from .summary import project_summary


logger = logging.getLogger(__name__)

Decoder = Callable[[bytes, str], ActivityDocument]
Source = Tuple[str, bytes]


def _diagnostic(error: ActivityFileError) -> FileDiagnostic:
    return FileDiagnostic(file_name=error.file_name, kind=error.kind, message=error.message)


def load_source(location: str, timeout: Optional[int] = None) -> Source:
    """读取本地路径或下载 http(s) 地址，返回 (文件名, 字节)。"""
    parsed = urlparse(location)
    if parsed.scheme in ('http', 'https'):
        response = requests.get(location, timeout=timeout or config.FIT_FETCH_TIMEOUT)
        response.raise_for_status()
        name = os.path.basename(parsed.path) or parsed.netloc
        return name, response.content
    with open(location, 'rb') as f:
        return os.path.basename(location), f.read()


def _decode_one(decoder: Decoder, file_name: str, data: bytes) -> ActivityDocument:
    try:
        return decoder(data, file_name)
    except ActivityFileError:
        raise
    except Exception as exc:
        raise DecodeFailure(file_name, str(exc)) from exc


def decode_all(
    sources: Sequence[Source],
    decoder: Decoder = parse_fit_bytes,
    max_workers: Optional[int] = None,
) -> Tuple[List[Tuple[str, ActivityDocument]], List[FileDiagnostic]]:
    documents: List[Tuple[str, ActivityDocument]] = []
    diagnostics: List[FileDiagnostic] = []
    if not sources:
        return documents, diagnostics

    workers = min(max_workers or config.MAX_PARALLEL_DECODES, len(sources))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            (name, executor.submit(_decode_one, decoder, name, data))
            for name, data in sources
        ]
        for name, future in futures:
            try:
                documents.append((name, future.result()))
            except ActivityFileError as err:
                logger.warning("[compare] %s skipped: %s", name, err.message)
                diagnostics.append(_diagnostic(err))
    return documents, diagnostics


def process_document(
    file_name: str,
    document: ActivityDocument,
    coordinate: CoordinateMode,
    tz_name: Optional[str] = None,
) -> Tuple[Optional[SummaryRow], Optional[PerFileSeriesSet], List[FileDiagnostic]]:
    """单个文件：汇总行 + 曲线。MissingSession 时两者都为 None。"""
    try:
        summary = project_summary(document, file_name, tz_name)
    except ActivityFileError as err:
        logger.warning("[compare] %s dropped: %s", file_name, err.message)
        return None, None, [_diagnostic(err)]

    records = extract_records(document)
    if not records:
        err = EmptyRecordSet(file_name, "没有可绘制的 record 数据")
        logger.warning("[compare] no records found for file: %s", file_name)
        return summary, None, [_diagnostic(err)]

    sport = document.sessions[0].sport
    return summary, build_series_set(file_name, records, coordinate, sport), []


def compare_documents(
    documents: Sequence[Tuple[str, ActivityDocument]],
    coordinate: CoordinateMode,
    diagnostics: Optional[List[FileDiagnostic]] = None,
    tz_name: Optional[str] = None,
) -> ComparisonResult:
    diagnostics = list(diagnostics or [])
    summaries: List[SummaryRow] = []
    series_sets: List[PerFileSeriesSet] = []

    for file_name, document in documents:
        try:
            summary, series_set, file_diagnostics = process_document(
                file_name, document, coordinate, tz_name
            )
        except Exception as exc:
            logger.exception("[compare] unexpected failure for %s", file_name)
            diagnostics.append(FileDiagnostic(file_name=file_name, kind="error", message=str(exc)))
            continue
        diagnostics.extend(file_diagnostics)
        if summary is not None:
            summaries.append(summary)
        if series_set is not None:
            series_sets.append(series_set)

    if not summaries and not series_sets:
        raise NoUsableFiles(diagnostics)

    return ComparisonResult(
        coordinate=coordinate,
        summaries=summaries,
        series=series_sets,
        overlays=aggregate_all(series_sets) if series_sets else {},
        diagnostics=diagnostics,
    )


def compare_files(
    sources: Sequence[Source],
    coordinate: Optional[CoordinateMode] = None,
    decoder: Decoder = parse_fit_bytes,
    max_workers: Optional[int] = None,
    tz_name: Optional[str] = None,
) -> ComparisonResult:
    started = time.perf_counter()
    coordinate = CoordinateMode(coordinate or config.DEFAULT_COORDINATE_MODE)
    documents, diagnostics = decode_all(sources, decoder, max_workers)
    result = compare_documents(documents, coordinate, diagnostics, tz_name)
    result.processing_time = round(time.perf_counter() - started, 2)
    logger.info(
        "[compare] %d files, %d charted, %d diagnostics in %.2fs",
        len(sources), len(result.series), len(result.diagnostics), result.processing_time,
    )
    return result
