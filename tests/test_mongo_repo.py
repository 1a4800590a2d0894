from datetime import datetime, timedelta, timezone

import pytest
from mongomock_motor import AsyncMongoMockClient

from redsaver.core.db import Store
from redsaver.core.indexes import ensure_indexes
from redsaver.repos import MongoRepo

pytestmark = pytest.mark.anyio


@pytest.fixture
def store():
    return Store.from_database(AsyncMongoMockClient()["RedSaver"])


@pytest.fixture
def mongo_repo(store):
    return MongoRepo(store)


async def test_ensure_indexes_is_repeatable(store):
    await ensure_indexes(store)
    await ensure_indexes(store)


async def test_upsert_user_sets_defaults_once(mongo_repo):
    await mongo_repo.upsert_user({"email": "a@x.org", "name": "A"})
    first = await mongo_repo.find_user("a@x.org")
    assert first["role"] == "donor"
    assert first["status"] == "active"
    assert isinstance(first["_id"], str)

    await mongo_repo.set_user_role("a@x.org", "admin")
    await mongo_repo.upsert_user({"email": "a@x.org", "name": "", "bloodGroup": "AB-"})
    second = await mongo_repo.find_user("a@x.org")
    assert second["role"] == "admin"
    assert second["name"] == "A"
    assert second["bloodGroup"] == "AB-"
    assert second["createdAt"] == first["createdAt"]


async def test_update_user_reports_matches(mongo_repo):
    assert await mongo_repo.update_user("ghost@x.org", {"name": "G"}) == 0
    await mongo_repo.upsert_user({"email": "a@x.org"})
    assert await mongo_repo.set_user_status("a@x.org", "blocked") == 1
    assert (await mongo_repo.find_user("a@x.org"))["status"] == "blocked"


async def test_list_donors_filters(mongo_repo):
    await mongo_repo.upsert_user({"email": "a@x.org", "bloodGroup": "O+", "division": "1"})
    await mongo_repo.upsert_user({"email": "b@x.org", "bloodGroup": "A+", "division": "1"})
    await mongo_repo.upsert_user({"email": "c@x.org", "bloodGroup": "O+"})
    await mongo_repo.set_user_status("c@x.org", "blocked")

    assert {d["email"] for d in await mongo_repo.list_donors()} == {"a@x.org", "b@x.org"}
    assert [d["email"] for d in await mongo_repo.list_donors(blood_group="O+")] == ["a@x.org"]
    assert [d["email"] for d in await mongo_repo.list_donors(division="1", blood_group="A+")] == ["b@x.org"]


async def test_list_districts_by_division(store, mongo_repo):
    await store.divisions.insert_many([{"_id": 1, "name": "Dhaka"}, {"_id": 2, "name": "Sylhet"}])
    await store.districts.insert_many([
        {"division_id": "1", "name": "Gazipur"},
        {"division_id": "2", "name": "Moulvibazar"},
    ])
    assert len(await mongo_repo.list_divisions()) == 2
    assert [d["name"] for d in await mongo_repo.list_districts("2")] == ["Moulvibazar"]
    assert len(await mongo_repo.list_districts()) == 2


async def test_donation_lifecycle(mongo_repo):
    t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
    old_id = await mongo_repo.create_donation({"status": "pending", "createdAt": t0, "n": 1})
    new_id = await mongo_repo.create_donation({"status": "done", "createdAt": t0 + timedelta(hours=1), "n": 2})

    assert [d["n"] for d in await mongo_repo.list_donations()] == [2, 1]
    assert [d["_id"] for d in await mongo_repo.list_donations("done")] == [new_id]

    assert await mongo_repo.update_donation_status(old_id, "canceled") is True
    assert await mongo_repo.update_donation_status("not-an-object-id", "done") is False
    assert await mongo_repo.update_donation_status("64b7f0c2a1b2c3d4e5f60718", "done") is False

    assert await mongo_repo.delete_donation(old_id) is True
    assert await mongo_repo.delete_donation(old_id) is False
    assert await mongo_repo.delete_donation("nope") is False


async def test_fund_total(mongo_repo):
    assert await mongo_repo.fund_total() == 0
    now = datetime.now(timezone.utc)
    await mongo_repo.create_fund({"amount": 100, "donorName": "A", "donorEmail": "a@x.org", "date": now})
    await mongo_repo.create_fund({"amount": 250, "donorName": "B", "donorEmail": "b@x.org", "date": now})
    assert await mongo_repo.fund_total() == 350
    assert len(await mongo_repo.list_funds()) == 2
