# redsaver/repos/base.py
from datetime import datetime
from typing import Any, Dict, Optional

from redsaver.core.states import DEFAULT_ROLE, DEFAULT_USER_STATUS

PROFILE_FIELDS = ("name", "avatar", "bloodGroup", "division", "district", "upazila")


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out


def profile_upsert(profile: Dict[str, Any], now: datetime) -> Dict[str, Dict[str, Any]]:
    """
    Build the $set / $setOnInsert pair for a profile submission.

    Non-empty submitted fields overwrite the stored ones; blanks keep whatever
    is stored. Role, status and createdAt are only written on first insert.
    """
    changes = {f: profile[f] for f in PROFILE_FIELDS if profile.get(f)}
    on_insert = {f: "" for f in PROFILE_FIELDS if f not in changes}
    on_insert.update({"role": DEFAULT_ROLE, "status": DEFAULT_USER_STATUS, "createdAt": now})
    return {"$set": {**changes, "updatedAt": now}, "$setOnInsert": on_insert}


def donor_filter(blood_group: Optional[str] = None,
                 division: Optional[str] = None,
                 district: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {"role": "donor", "status": "active"}
    if blood_group:
        query["bloodGroup"] = blood_group
    if division:
        query["division"] = str(division)
    if district:
        query["district"] = str(district)
    return query


def district_filter(division: Optional[str] = None) -> Dict[str, Any]:
    return {"division_id": str(division)} if division else {}
