# redsaver/core/indexes.py
from pymongo import ASCENDING, DESCENDING

from redsaver.core.db import Store


async def ensure_indexes(store: Store):
    # Users are keyed by email
    await store.users.create_index("email", unique=True)
    await store.users.create_index([("role", ASCENDING), ("status", ASCENDING)])
    # Donations list newest first, optionally by status
    await store.donations.create_index([("createdAt", DESCENDING)])
    await store.donations.create_index("status")
    await store.funds.create_index([("date", DESCENDING)])
    await store.districts.create_index("division_id")
