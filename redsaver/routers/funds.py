# redsaver/routers/funds.py
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends

from redsaver.core.security import ADMIN, AUTHENTICATED
from redsaver.deps import get_repo
from redsaver.schemas import FundCreated, FundIn, FundOut, FundTotal

router = APIRouter(prefix="/funds", tags=["funds"])


@router.get("", dependencies=AUTHENTICATED, response_model=List[FundOut], response_model_exclude_unset=True)
async def list_funds(repo=Depends(get_repo)):
    return await repo.list_funds()


@router.get("/total", dependencies=ADMIN, response_model=FundTotal)
async def fund_total(repo=Depends(get_repo)):
    return FundTotal(total=await repo.fund_total())


@router.post("", dependencies=AUTHENTICATED, response_model=FundCreated)
async def create_fund(body: FundIn, repo=Depends(get_repo)):
    doc = {**body.model_dump(), "date": datetime.now(timezone.utc)}
    return FundCreated(fundId=await repo.create_fund(doc))
