"""
FIT 文件对比 API 主应用文件。

本文件是FastAPI应用的入口点，负责：
1. 初始化日志
2. 创建FastAPI应用实例
3. 注册对比路由
"""

from fastapi import FastAPI
from .logging_config import setup_logging
from .config import LOG_LEVEL

from .api.compare import router as compare_router

setup_logging(LOG_LEVEL)
app = FastAPI(title="FIT 文件对比 API")

# 路由注册
app.include_router(compare_router, tags=["对比"])


@app.get("/health", tags=["系统"])
def health():
    return {"status": "ok"}
