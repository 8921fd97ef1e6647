"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import STATUS_OUTPUT_KEYS, TaskPriority, TaskStatus
from .genre import Genre
from .stats import REPORT_RATE_DIGITS, STATS_RATE_DIGITS, TaskStats
from .task import Task, TaskDraft

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "STATUS_OUTPUT_KEYS",
    # Task
    "Task",
    "TaskDraft",
    # Genre
    "Genre",
    # 统计
    "TaskStats",
    "STATS_RATE_DIGITS",
    "REPORT_RATE_DIGITS",
]
