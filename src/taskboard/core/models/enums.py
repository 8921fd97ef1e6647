"""枚举定义 -- Task 状态与优先级

两者均为封闭枚举，非法标签在 HTTP 边界（pydantic）与存储边界（CHECK 约束）被拒绝。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态"""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """Task 优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# 统计输出使用的 camelCase 键，顺序即输出顺序
STATUS_OUTPUT_KEYS: dict[TaskStatus, str] = {
    TaskStatus.NOT_STARTED: "notStarted",
    TaskStatus.IN_PROGRESS: "inProgress",
    TaskStatus.COMPLETED: "completed",
}


def sql_check_values(enum_cls: type[StrEnum]) -> str:
    """生成 CHECK 约束用的取值列表，如 'low', 'medium', 'high'"""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
