"""Genre Domain Model -- Task 的分类"""

from datetime import datetime

from pydantic import BaseModel, Field


class Genre(BaseModel):
    """Genre 数据模型"""

    id: int = Field(description="唯一标识，自增整数")
    name: str = Field(min_length=1, description="分类名称")
    created_at: datetime = Field(description="创建时间")
