"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、日志格式、复制后缀等可配置项。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


def get_log_format() -> str:
    """日志渲染模式：dev / json"""
    return os.environ.get("TASKBOARD_LOG_FORMAT", "dev")


def get_log_level() -> str:
    return os.environ.get("TASKBOARD_LOG_LEVEL", "INFO")


# 复制任务时追加到名称末尾的标记
DEFAULT_DUPLICATE_SUFFIX: str = "(コピー)"


def get_duplicate_suffix() -> str:
    """获取复制后缀"""
    return os.environ.get("TASKBOARD_DUPLICATE_SUFFIX", DEFAULT_DUPLICATE_SUFFIX)


def get_bind() -> tuple[str, int]:
    """HTTP 监听地址（host, port）"""
    host = os.environ.get("TASKBOARD_HOST", "127.0.0.1")
    port = int(os.environ.get("TASKBOARD_PORT", "8000"))
    return host, port
