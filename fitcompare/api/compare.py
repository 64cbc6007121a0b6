"""
文件对比 API 路由

包含：
- POST /compare：上传多个 FIT 文件，返回汇总表、逐文件曲线、跨文件叠加与图表配置；
- POST /compare/summary：上传多个 FIT 文件，只返回汇总表；
- GET  /compare/metrics：指标名称与单位（按运动类型）。

说明：
- 单个文件失败只出现在 diagnostics 中，不影响其它文件；
- 所有文件都不可用时返回 422。
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from .. import config
from ..activities.models import CoordinateMode, Metric
from ..compare.charts import render_charts, result_payload
from ..compare.pipeline import compare_files
from ..compare.schemas import SUMMARY_HEADERS
from ..core.analytics.units import localized_name, metric_unit
from ..exceptions import NoUsableFiles
from ..utils import get_decoder


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compare", tags=["compare"])


def _read_uploads(files: List[UploadFile]):
    if len(files) > config.MAX_UPLOAD_FILES:
        raise HTTPException(
            status_code=400,
            detail=f"一次最多对比 {config.MAX_UPLOAD_FILES} 个文件",
        )
    return [(f.filename or f"file-{i}", f.file.read()) for i, f in enumerate(files)]


def _no_usable_files(err: NoUsableFiles) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(err),
            "diagnostics": [d.model_dump() for d in err.diagnostics],
        },
    )


@router.post("")
def compare_activity_files(
    files: List[UploadFile] = File(..., description="一个或多个 FIT 文件"),
    coordinate: Optional[CoordinateMode] = Query(None, description="横坐标类型：time 或 distance"),
    decoder=Depends(get_decoder),
):
    try:
        sources = _read_uploads(files)
        result = compare_files(sources, coordinate, decoder=decoder)
        return result_payload(result, render_charts(result))
    except HTTPException:
        raise
    except NoUsableFiles as err:
        raise _no_usable_files(err)
    except Exception as e:
        logger.exception("[compare-api] comparison failed")
        raise HTTPException(
            status_code=500,
            detail=f"文件处理过程中发生错误: {str(e)}",
        )


@router.post("/summary")
def summarize_activity_files(
    files: List[UploadFile] = File(...),
    decoder=Depends(get_decoder),
):
    try:
        result = compare_files(_read_uploads(files), decoder=decoder)
        return {
            "headers": SUMMARY_HEADERS,
            "summaries": [row.model_dump() for row in result.summaries],
            "diagnostics": [d.model_dump() for d in result.diagnostics],
        }
    except HTTPException:
        raise
    except NoUsableFiles as err:
        raise _no_usable_files(err)
    except Exception as e:
        logger.exception("[compare-api] summary failed")
        raise HTTPException(
            status_code=500,
            detail=f"文件处理过程中发生错误: {str(e)}",
        )


@router.get("/metrics")
def list_metrics(sport: Optional[str] = Query(None, description="运动类型，如 running / cycling")):
    return [
        {"key": metric.value, "name": localized_name(metric, sport), "unit": metric_unit(metric, sport)}
        for metric in Metric
    ]
