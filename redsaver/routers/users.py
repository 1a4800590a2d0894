# redsaver/routers/users.py
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends

from redsaver.core.errors import Forbidden
from redsaver.core.security import ADMIN, verify_identity
from redsaver.deps import get_repo
from redsaver.schemas import Ack, RoleUpdate, UserIn, UserOut, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=Ack, response_model_exclude_none=True)
async def upsert_user(body: UserIn, repo=Depends(get_repo)):
    await repo.upsert_user(body.model_dump())
    return Ack()


@router.get("", dependencies=ADMIN, response_model=List[UserOut], response_model_exclude_unset=True)
async def list_users(repo=Depends(get_repo)):
    return await repo.list_users()


@router.get("/{email}", response_model=UserOut, response_model_exclude_unset=True)
async def get_user(email: str, repo=Depends(get_repo)):
    return await repo.find_user(email) or {}


@router.put("/{email}", response_model=Ack, response_model_exclude_none=True)
async def update_user(email: str, body: UserUpdate,
                      principal: str = Depends(verify_identity), repo=Depends(get_repo)):
    if principal != email:
        raise Forbidden("You can only update your own profile")
    changes = body.changes()
    changes["updatedAt"] = datetime.now(timezone.utc)
    matched = await repo.update_user(email, changes)
    return Ack(matched=matched)


@router.patch("/block/{email}", dependencies=ADMIN, response_model=Ack, response_model_exclude_none=True)
async def block_user(email: str, repo=Depends(get_repo)):
    matched = await repo.set_user_status(email, "blocked")
    return Ack(message="User blocked", matched=matched)


@router.patch("/unblock/{email}", dependencies=ADMIN, response_model=Ack, response_model_exclude_none=True)
async def unblock_user(email: str, repo=Depends(get_repo)):
    matched = await repo.set_user_status(email, "active")
    return Ack(message="User unblocked", matched=matched)


@router.patch("/role/{email}", dependencies=ADMIN, response_model=Ack, response_model_exclude_none=True)
async def set_user_role(email: str, body: RoleUpdate, repo=Depends(get_repo)):
    matched = await repo.set_user_role(email, body.role)
    return Ack(message=f"User role updated to {body.role}", matched=matched)
