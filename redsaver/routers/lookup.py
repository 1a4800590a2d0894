# redsaver/routers/lookup.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from redsaver.deps import get_repo
from redsaver.schemas import DistrictOut, DivisionOut, UserOut

router = APIRouter(prefix="/api", tags=["lookup"])


@router.get("/donors", response_model=List[UserOut], response_model_exclude_unset=True)
async def list_donors(
    bloodGroup: Optional[str] = Query(default=None),
    division: Optional[str] = Query(default=None),
    district: Optional[str] = Query(default=None),
    repo=Depends(get_repo),
):
    return await repo.list_donors(bloodGroup, division, district)


@router.get("/divisions", response_model=List[DivisionOut], response_model_exclude_unset=True)
async def list_divisions(repo=Depends(get_repo)):
    return await repo.list_divisions()


@router.get("/districts", response_model=List[DistrictOut], response_model_exclude_unset=True)
async def list_districts(division: Optional[str] = Query(default=None), repo=Depends(get_repo)):
    return await repo.list_districts(division)
