# redsaver/core/db.py
import logging
from dataclasses import dataclass
from typing import Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from redsaver.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Store:
    """The five collections the API works with, bound once at startup."""

    users: AsyncIOMotorCollection
    donations: AsyncIOMotorCollection
    funds: AsyncIOMotorCollection
    divisions: AsyncIOMotorCollection
    districts: AsyncIOMotorCollection

    @classmethod
    def from_database(cls, db: AsyncIOMotorDatabase) -> "Store":
        return cls(
            users=db["users"],
            donations=db["donations"],
            funds=db["funds"],
            divisions=db["divisions"],
            districts=db["districts"],
        )


async def connect(settings: Settings) -> Tuple[AsyncIOMotorClient, Store]:
    client = AsyncIOMotorClient(settings.mongo_uri, uuidRepresentation="standard")
    # fail fast on bad credentials instead of on the first request
    await client.admin.command("ping")
    logger.info("MongoDB connected (database %s)", settings.db_name)
    return client, Store.from_database(client[settings.db_name])
