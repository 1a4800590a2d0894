# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from redsaver.core.config import Settings
from redsaver.main import create_app
from redsaver.repos import InMemoryRepo

ADMIN_EMAIL = "admin@redsaver.org"
DONOR_EMAIL = "donor@redsaver.org"

TOKENS = {
    "admin-token": ADMIN_EMAIL,
    "donor-token": DONOR_EMAIL,
    "stranger-token": "stranger@redsaver.org",
}


class FakeIdentityProvider:
    def __init__(self, tokens):
        self.tokens = tokens
        self.calls = []

    async def verify(self, token: str) -> str:
        self.calls.append(token)
        if token not in self.tokens:
            raise ValueError("unknown token")
        return self.tokens[token]


class FakePaymentBridge:
    def __init__(self, secret="pi_123_secret_456", error=None):
        self.secret = secret
        self.error = error
        self.calls = []

    async def create_intent(self, amount_minor: int, currency: str) -> str:
        self.calls.append((amount_minor, currency))
        if self.error is not None:
            raise self.error
        return self.secret


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def anyio_backend():
    # keep AnyIO on asyncio
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(store_backend="memory", payment_currency="bdt", _env_file=None)


@pytest.fixture
def repo():
    return InMemoryRepo(
        divisions=[
            {"_id": "1", "name": "Dhaka"},
            {"_id": "2", "name": "Chattogram"},
        ],
        districts=[
            {"_id": "10", "division_id": "1", "name": "Gazipur"},
            {"_id": "11", "division_id": "1", "name": "Narsingdi"},
            {"_id": "20", "division_id": "2", "name": "Cox's Bazar"},
        ],
    )


@pytest.fixture
def identity():
    return FakeIdentityProvider(TOKENS)


@pytest.fixture
def payments():
    return FakePaymentBridge()


@pytest.fixture
def app(settings, repo, identity, payments):
    return create_app(settings, repo=repo, identity=identity, payments=payments)


@pytest.fixture
async def test_client(app):
    # Start the lifespan so app.state is populated
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def seeded(repo):
    await repo.upsert_user({"email": ADMIN_EMAIL, "name": "Admin"})
    await repo.set_user_role(ADMIN_EMAIL, "admin")
    await repo.upsert_user({"email": DONOR_EMAIL, "name": "Donor", "bloodGroup": "O+"})
    return repo
