# redsaver/repos/mongo.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING

from redsaver.core.db import Store
from redsaver.repos.base import district_filter, donor_filter, profile_upsert, serialize


def _oid(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoRepo:
    def __init__(self, store: Store):
        self.store = store

    # Users
    async def upsert_user(self, profile: Dict[str, Any]) -> None:
        update = profile_upsert(profile, datetime.now(timezone.utc))
        await self.store.users.update_one({"email": profile["email"]}, update, upsert=True)

    async def list_users(self) -> List[dict]:
        return [serialize(u) async for u in self.store.users.find({})]

    async def find_user(self, email: str) -> Optional[dict]:
        return serialize(await self.store.users.find_one({"email": email}))

    async def update_user(self, email: str, changes: Dict[str, Any]) -> int:
        res = await self.store.users.update_one({"email": email}, {"$set": changes})
        return res.matched_count

    async def set_user_status(self, email: str, status: str) -> int:
        return await self.update_user(email, {"status": status})

    async def set_user_role(self, email: str, role: str) -> int:
        return await self.update_user(email, {"role": role})

    async def list_donors(self, blood_group: Optional[str] = None,
                          division: Optional[str] = None,
                          district: Optional[str] = None) -> List[dict]:
        query = donor_filter(blood_group, division, district)
        return [serialize(u) async for u in self.store.users.find(query)]

    # Lookup tables
    async def list_divisions(self) -> List[dict]:
        return [serialize(d) async for d in self.store.divisions.find({})]

    async def list_districts(self, division: Optional[str] = None) -> List[dict]:
        return [serialize(d) async for d in self.store.districts.find(district_filter(division))]

    # Donations
    async def create_donation(self, data: Dict[str, Any]) -> str:
        res = await self.store.donations.insert_one(dict(data))
        return str(res.inserted_id)

    async def list_donations(self, status: Optional[str] = None) -> List[dict]:
        query = {"status": status} if status else {}
        cur = self.store.donations.find(query).sort("createdAt", DESCENDING)
        return [serialize(d) async for d in cur]

    async def update_donation_status(self, donation_id: str, status: str) -> bool:
        oid = _oid(donation_id)
        if oid is None:
            return False
        res = await self.store.donations.update_one({"_id": oid}, {"$set": {"status": status}})
        return res.matched_count > 0

    async def delete_donation(self, donation_id: str) -> bool:
        oid = _oid(donation_id)
        if oid is None:
            return False
        res = await self.store.donations.delete_one({"_id": oid})
        return res.deleted_count > 0

    # Funds
    async def list_funds(self) -> List[dict]:
        cur = self.store.funds.find({}).sort("date", DESCENDING)
        return [serialize(f) async for f in cur]

    async def fund_total(self):
        pipeline = [{"$group": {"_id": None, "total": {"$sum": "$amount"}}}]
        rows = await self.store.funds.aggregate(pipeline).to_list(length=1)
        return rows[0]["total"] if rows else 0

    async def create_fund(self, data: Dict[str, Any]) -> str:
        res = await self.store.funds.insert_one(dict(data))
        return str(res.inserted_id)
