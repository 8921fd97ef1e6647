"""分类路由

GET  /genres: 全部分类，按 id 升序。
POST /genres: 创建分类，返回 201。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from ..deps import get_store_group
from ..services.genre_service import GenreService

router = APIRouter()


class GenreCreateRequest(BaseModel):
    """创建分类请求体"""

    name: str = Field(min_length=1, description="分类名称")


class GenreResponse(BaseModel):
    id: int
    name: str


@router.get("/genres", response_model=list[GenreResponse])
async def list_genres(store_group=Depends(get_store_group)):
    """查询全部分类"""
    genres = await GenreService(store_group).list_genres()
    return [GenreResponse(id=g.id, name=g.name) for g in genres]


@router.post("/genres")
async def create_genre(
    body: GenreCreateRequest,
    store_group=Depends(get_store_group),
):
    """创建分类"""
    genre = await GenreService(store_group).create_genre(body.name)
    return JSONResponse(
        status_code=201,
        content=GenreResponse(id=genre.id, name=genre.name).model_dump(),
    )
