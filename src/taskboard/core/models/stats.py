"""任务统计模型 -- 总数、按状态计数、完成率

完成率 = completed / total * 100，total 为 0 时为 0.0。
对精确比值做四舍五入（ROUND_HALF_UP），避免浮点二进制误差影响进位。
"""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field

from .enums import STATUS_OUTPUT_KEYS, TaskStatus

# 内部统计视图保留 2 位小数，对外报告保留 1 位
STATS_RATE_DIGITS = 2
REPORT_RATE_DIGITS = 1


def _zero_counts() -> dict[TaskStatus, int]:
    return {status: 0 for status in TaskStatus}


class TaskStats(BaseModel):
    """任务统计结果"""

    total_count: int = Field(default=0, ge=0, description="任务总数")
    status_counts: dict[TaskStatus, int] = Field(
        default_factory=_zero_counts,
        description="按状态计数，三种状态均有值",
    )

    @classmethod
    def from_counts(cls, counts: dict[str, int]) -> "TaskStats":
        """由 GROUP BY status 的结果构建，缺失的状态补 0"""
        status_counts = _zero_counts()
        for status, count in counts.items():
            status_counts[TaskStatus(status)] = count
        return cls(total_count=sum(status_counts.values()), status_counts=status_counts)

    @property
    def completed_count(self) -> int:
        return self.status_counts[TaskStatus.COMPLETED]

    def completion_rate(self, digits: int = STATS_RATE_DIGITS) -> float:
        """完成率（百分比），按 digits 位小数四舍五入"""
        if self.total_count == 0:
            return 0.0
        ratio = Decimal(self.completed_count) * 100 / Decimal(self.total_count)
        quantum = Decimal(1).scaleb(-digits)
        return float(ratio.quantize(quantum, rounding=ROUND_HALF_UP))

    def counts_by_key(self) -> dict[str, int]:
        """camelCase 键的状态计数"""
        return {
            key: self.status_counts[status]
            for status, key in STATUS_OUTPUT_KEYS.items()
        }

    def to_stats_view(self) -> dict:
        """内部统计视图（GET /tasks/stats）"""
        return {
            "totalCount": self.total_count,
            "statusCounts": self.counts_by_key(),
            "completionRate": self.completion_rate(STATS_RATE_DIGITS),
        }

    def to_report(self) -> dict:
        """对外报告（GET /tasks/report），字段固定"""
        return {
            "totalCount": self.total_count,
            "countByStatus": self.counts_by_key(),
            "completionRate": self.completion_rate(REPORT_RATE_DIGITS),
        }
