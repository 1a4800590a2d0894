# redsaver/repos/inmemory.py
import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId

from redsaver.repos.base import district_filter, donor_filter, profile_upsert, serialize


def _id() -> str:
    return str(ObjectId())


def _matches(doc: dict, query: Dict[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in query.items())


class InMemoryRepo:
    """Process-local store with the same semantics as MongoRepo."""

    def __init__(self, divisions: Optional[List[dict]] = None, districts: Optional[List[dict]] = None):
        self.users: Dict[str, dict] = {}
        self.donations: Dict[str, dict] = {}
        self.funds: Dict[str, dict] = {}
        self.divisions: List[dict] = [dict(d) for d in divisions or []]
        self.districts: List[dict] = [dict(d) for d in districts or []]
        self._seq = itertools.count(1)

    # Users
    async def upsert_user(self, profile: Dict[str, Any]) -> None:
        update = profile_upsert(profile, datetime.now(timezone.utc))
        email = profile["email"]
        doc = self.users.get(email)
        if doc is None:
            doc = {"_id": _id(), "email": email, **update["$setOnInsert"]}
            self.users[email] = doc
        doc.update(update["$set"])

    async def list_users(self) -> List[dict]:
        return [serialize(u) for u in self.users.values()]

    async def find_user(self, email: str) -> Optional[dict]:
        return serialize(self.users.get(email))

    async def update_user(self, email: str, changes: Dict[str, Any]) -> int:
        doc = self.users.get(email)
        if doc is None:
            return 0
        doc.update(changes)
        return 1

    async def set_user_status(self, email: str, status: str) -> int:
        return await self.update_user(email, {"status": status})

    async def set_user_role(self, email: str, role: str) -> int:
        return await self.update_user(email, {"role": role})

    async def list_donors(self, blood_group: Optional[str] = None,
                          division: Optional[str] = None,
                          district: Optional[str] = None) -> List[dict]:
        query = donor_filter(blood_group, division, district)
        return [serialize(u) for u in self.users.values() if _matches(u, query)]

    # Lookup tables
    async def list_divisions(self) -> List[dict]:
        return [serialize(d) for d in self.divisions]

    async def list_districts(self, division: Optional[str] = None) -> List[dict]:
        query = district_filter(division)
        return [serialize(d) for d in self.districts if _matches(d, query)]

    # Donations
    async def create_donation(self, data: Dict[str, Any]) -> str:
        did = _id()
        self.donations[did] = {**data, "_id": did, "_seq": next(self._seq)}
        return did

    async def list_donations(self, status: Optional[str] = None) -> List[dict]:
        vals = [d for d in self.donations.values() if status is None or d.get("status") == status]
        vals.sort(key=lambda d: (d.get("createdAt"), d["_seq"]), reverse=True)
        return [serialize({k: v for k, v in d.items() if k != "_seq"}) for d in vals]

    async def update_donation_status(self, donation_id: str, status: str) -> bool:
        if donation_id not in self.donations:
            return False
        self.donations[donation_id]["status"] = status
        return True

    async def delete_donation(self, donation_id: str) -> bool:
        return self.donations.pop(donation_id, None) is not None

    # Funds
    async def list_funds(self) -> List[dict]:
        vals = sorted(self.funds.values(), key=lambda f: f.get("date"), reverse=True)
        return [serialize(f) for f in vals]

    async def fund_total(self):
        return sum(f.get("amount") or 0 for f in self.funds.values())

    async def create_fund(self, data: Dict[str, Any]) -> str:
        fid = _id()
        self.funds[fid] = {**data, "_id": fid}
        return fid
