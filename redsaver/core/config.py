from typing import List, Literal, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    pass


class Settings(BaseSettings):
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_host: str = "cluster0.mongodb.net"
    db_scheme: str = "mongodb+srv"
    db_name: str = "RedSaver"
    store_backend: Literal["mongo", "memory"] = "mongo"

    firebase_service_account: Optional[str] = None
    stripe_secret_key: Optional[str] = None
    payment_currency: str = "bdt"

    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def mongo_uri(self) -> str:
        user = quote_plus(self.db_user or "")
        password = quote_plus(self.db_pass or "")
        return f"{self.db_scheme}://{user}:{password}@{self.db_host}/?retryWrites=true&w=majority"


def validate_runtime_config(settings: Settings) -> None:
    if settings.store_backend == "mongo" and not (settings.db_user and settings.db_pass):
        raise ConfigError("DB_USER or DB_PASS missing")
