#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务启动脚本

读取 HOST / PORT / WORKERS 环境变量，使用 uvicorn 启动 server.main:app。
"""

import logging
import os

import uvicorn

from server.config import get_config

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()
    workers = int(os.getenv("WORKERS", "1"))

    logger.info(f"启动服务: {config.host}:{config.port} workers={workers}")
    uvicorn.run(
        "server.main:app",
        host=config.host,
        port=config.port,
        workers=workers,
        reload=config.debug and workers == 1,
        timeout_keep_alive=30,
        access_log=True
    )


if __name__ == "__main__":
    main()
