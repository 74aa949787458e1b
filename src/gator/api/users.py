"""用户 API."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from gator.api.deps import get_store
from gator.core.store import FeedStore, StoreConflictError

router = APIRouter(prefix="/api/users", tags=["users"])


class RegisterRequest(BaseModel):
    """注册请求."""

    name: str = Field(min_length=1)


@router.post("", status_code=201)
async def register_user(
    body: RegisterRequest,
    store: FeedStore = Depends(get_store),
) -> dict:
    """注册用户."""
    try:
        user = await store.create_user(body.name)
    except StoreConflictError as e:
        raise HTTPException(status_code=409, detail=f"用户 {body.name} 已存在") from e

    return {"id": user.id, "name": user.name, "created_at": user.created_at.isoformat()}


@router.get("")
async def list_users(store: FeedStore = Depends(get_store)) -> dict:
    """用户列表（按用户名排序）."""
    users = await store.list_users()
    return {
        "total": len(users),
        "items": [{"id": u.id, "name": u.name} for u in users],
    }


@router.delete("")
async def reset_users(store: FeedStore = Depends(get_store)) -> dict:
    """删除全部用户及其数据."""
    deleted = await store.reset_users()
    return {"success": True, "deleted": deleted}
