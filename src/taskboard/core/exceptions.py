"""Core 异常体系

路由层据此映射 HTTP 状态码：TaskNotFoundError -> 404，TaskValidationError -> 422。
"""


class TaskboardError(Exception):
    """Core 包基础异常"""

    code: str = "TASKBOARD_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskNotFoundError(TaskboardError):
    """任务不存在（包括非数字 ID）"""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: object) -> None:
        """
        Args:
            task_id: 请求中的原始 ID（可能不是整数）
        """
        super().__init__(f"Task with id {task_id} does not exist")
        self.task_id = task_id


class TaskValidationError(TaskboardError):
    """写入前的业务校验失败"""

    code = "TASK_INVALID"


class GenreNotFoundError(TaskValidationError):
    """引用的 Genre 不存在"""

    code = "GENRE_NOT_FOUND"

    def __init__(self, genre_id: int) -> None:
        super().__init__(f"Genre with id {genre_id} does not exist")
        self.genre_id = genre_id
