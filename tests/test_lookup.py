import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio


async def _seed_donors(repo):
    await repo.upsert_user({"email": "a@x.org", "bloodGroup": "O+", "division": "1", "district": "10"})
    await repo.upsert_user({"email": "b@x.org", "bloodGroup": "A+", "division": "1", "district": "11"})
    await repo.upsert_user({"email": "c@x.org", "bloodGroup": "O+", "division": "2", "district": "20"})
    await repo.upsert_user({"email": "blocked@x.org", "bloodGroup": "O+"})
    await repo.set_user_status("blocked@x.org", "blocked")
    await repo.upsert_user({"email": "boss@x.org", "bloodGroup": "O+"})
    await repo.set_user_role("boss@x.org", "admin")


async def test_donors_without_filters(test_client: AsyncClient, repo):
    await _seed_donors(repo)
    r = await test_client.get("/api/donors")
    assert r.status_code == 200, r.text
    assert {d["email"] for d in r.json()} == {"a@x.org", "b@x.org", "c@x.org"}


async def test_donors_by_blood_group(test_client: AsyncClient, repo):
    await _seed_donors(repo)
    r = await test_client.get("/api/donors", params={"bloodGroup": "O+"})
    assert r.status_code == 200
    donors = r.json()
    assert {d["email"] for d in donors} == {"a@x.org", "c@x.org"}
    assert all(d["status"] == "active" and d["bloodGroup"] == "O+" for d in donors)


async def test_donors_by_location(test_client: AsyncClient, repo):
    await _seed_donors(repo)
    r = await test_client.get("/api/donors", params={"division": "1", "district": "11"})
    assert [d["email"] for d in r.json()] == ["b@x.org"]


async def test_divisions(test_client: AsyncClient):
    r = await test_client.get("/api/divisions")
    assert r.status_code == 200
    assert [d["name"] for d in r.json()] == ["Dhaka", "Chattogram"]


async def test_districts_all_and_filtered(test_client: AsyncClient):
    r = await test_client.get("/api/districts")
    assert len(r.json()) == 3

    r = await test_client.get("/api/districts", params={"division": 1})
    assert r.status_code == 200
    assert {d["name"] for d in r.json()} == {"Gazipur", "Narsingdi"}


def test_lookup_routes_registered_once(app):
    paths = [route.path for route in app.routes]
    assert paths.count("/api/divisions") == 1
    assert paths.count("/api/districts") == 1


async def test_health(test_client: AsyncClient):
    r = await test_client.get("/")
    assert r.json() == {"success": True, "message": "RedSaver API Running"}
