"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出

uvicorn 的日志统一经根 handler 渲染；访问日志由 LoggingMiddleware 负责，
uvicorn.access 关闭。
"""

import logging

import structlog
from taskboard.core.config import get_log_format, get_log_level

# 交给根 handler 输出的第三方 logger
_PROPAGATED_LOGGERS = ("uvicorn", "uvicorn.error")


def setup_logging() -> None:
    """初始化 structlog 配置

    根据 TASKBOARD_LOG_FORMAT 环境变量选择渲染模式：
    - "json": 结构化 JSON 输出（生产环境）
    - "dev" (默认): pretty print 可读输出
    """
    log_format = get_log_format()
    log_level = get_log_level()

    # 基础处理器链
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        # 任务名可能含日文/中文，保留原字符
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 配置标准库 logging
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _PROPAGATED_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True

    logging.getLogger("uvicorn.access").disabled = True
    # aiosqlite 在 DEBUG 下逐条记录 SQL 调用
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
