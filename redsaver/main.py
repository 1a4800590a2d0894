# redsaver/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from redsaver.core.config import Settings, validate_runtime_config
from redsaver.core.db import connect
from redsaver.core.errors import register_error_handlers
from redsaver.core.indexes import ensure_indexes
from redsaver.core.security import load_identity_provider
from redsaver.repos import InMemoryRepo, MongoRepo
from redsaver.routers import donations, funds, lookup, users
from redsaver.routers import payments as payments_router
from redsaver.services.payments import StripePaymentBridge

logger = logging.getLogger(__name__)

# Marks "build it from settings" for collaborators where None is a meaningful value
_FROM_SETTINGS = object()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None, repo=None, identity=_FROM_SETTINGS, payments=None) -> FastAPI:
    """
    Build the API.

    Collaborators passed in are used as-is; anything left out is built from
    `settings` once, in the lifespan, before the first request is served.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if repo is not None:
            app.state.repo = repo
        elif settings.store_backend == "memory":
            app.state.repo = InMemoryRepo()
        else:
            validate_runtime_config(settings)
            client, store = await connect(settings)
            await ensure_indexes(store)
            app.state.repo = MongoRepo(store)

        app.state.identity = load_identity_provider(settings) if identity is _FROM_SETTINGS else identity
        app.state.payments = payments or StripePaymentBridge(settings.stripe_secret_key)
        logger.info("All routes registered")

        yield
        if client is not None:
            client.close()

    app = FastAPI(lifespan=lifespan, title="RedSaver API")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(users.router)        # /users
    app.include_router(lookup.router)       # /api/donors, /api/divisions, /api/districts
    app.include_router(donations.router)    # /donations
    app.include_router(funds.router)        # /funds
    app.include_router(payments_router.router)  # /create-payment-intent

    @app.get("/")
    def root():
        return {"success": True, "message": "RedSaver API Running"}

    return app


app = create_app()
