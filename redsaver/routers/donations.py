# redsaver/routers/donations.py
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from redsaver.core.errors import NotFound
from redsaver.core.security import ADMIN, AUTHENTICATED
from redsaver.core.states import DonationStatus
from redsaver.deps import get_repo
from redsaver.schemas import Ack, DonationCreated, DonationIn, DonationOut, DonationStatusUpdate

router = APIRouter(prefix="/donations", tags=["donations"])


@router.post("", dependencies=AUTHENTICATED, response_model=DonationCreated)
async def create_donation(body: DonationIn, repo=Depends(get_repo)):
    new_id = await repo.create_donation(body.document(datetime.now(timezone.utc)))
    return DonationCreated(insertedId=new_id)


@router.get("", dependencies=AUTHENTICATED, response_model=List[DonationOut], response_model_exclude_unset=True)
async def list_donations(status: Optional[DonationStatus] = Query(default=None), repo=Depends(get_repo)):
    return await repo.list_donations(status)


@router.patch("/{donation_id}", dependencies=AUTHENTICATED, response_model=Ack, response_model_exclude_none=True)
async def update_donation_status(donation_id: str, body: DonationStatusUpdate, repo=Depends(get_repo)):
    if not await repo.update_donation_status(donation_id, body.status):
        raise NotFound("Donation not found")
    return Ack(message=f"Donation status updated to {body.status}")


@router.delete("/{donation_id}", dependencies=ADMIN, response_model=Ack, response_model_exclude_none=True)
async def delete_donation(donation_id: str, repo=Depends(get_repo)):
    if not await repo.delete_donation(donation_id):
        raise NotFound("Donation not found")
    return Ack(message="Donation deleted")
