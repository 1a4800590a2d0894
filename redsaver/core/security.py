# redsaver/core/security.py
import logging
from typing import Optional, Protocol

import firebase_admin
from fastapi import Depends, Header, Request
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from redsaver.core.config import Settings
from redsaver.core.errors import Forbidden, InvalidCredential, Unauthenticated
from redsaver.deps import get_identity_provider, get_repo

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "redsaver"


class IdentityProvider(Protocol):
    async def verify(self, token: str) -> str:
        """Return the verified email for `token`; raise ValueError if rejected."""


class FirebaseIdentityProvider:
    def __init__(self, app: firebase_admin.App):
        self._app = app

    @classmethod
    def from_service_account(cls, path: str) -> "FirebaseIdentityProvider":
        cred = credentials.Certificate(path)
        try:
            app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            app = firebase_admin.initialize_app(cred, name=FIREBASE_APP_NAME)
        return cls(app)

    async def verify(self, token: str) -> str:
        try:
            decoded = await run_in_threadpool(auth.verify_id_token, token, app=self._app)
        except (ValueError, FirebaseError) as exc:
            raise ValueError(str(exc)) from exc
        email = decoded.get("email")
        if not email:
            raise ValueError("Token carries no email")
        return email


def load_identity_provider(settings: Settings) -> Optional[FirebaseIdentityProvider]:
    if not settings.firebase_service_account:
        logger.warning("FIREBASE_SERVICE_ACCOUNT not set; token verification unavailable")
        return None
    try:
        provider = FirebaseIdentityProvider.from_service_account(settings.firebase_service_account)
    except (OSError, ValueError):
        logger.exception("Firebase Admin init failed; token verification unavailable")
        return None
    logger.info("Firebase Admin initialized")
    return provider


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthenticated()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise Unauthenticated()
    return token


# ---------- Guards ----------
async def verify_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    provider=Depends(get_identity_provider),
) -> str:
    token = bearer_token(authorization)
    if provider is None:
        raise InvalidCredential("Token verification unavailable")
    try:
        email = await provider.verify(token)
    except ValueError:
        raise InvalidCredential()
    request.state.principal = email
    return email


async def require_admin(principal: str = Depends(verify_identity), repo=Depends(get_repo)) -> str:
    user = await repo.find_user(principal)
    if not user or user.get("role") != "admin":
        raise Forbidden("Admin only access")
    return principal


# Ordered guard chains, applied as route dependencies
AUTHENTICATED = [Depends(verify_identity)]
ADMIN = [Depends(verify_identity), Depends(require_admin)]
