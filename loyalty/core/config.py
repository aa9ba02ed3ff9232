"""Application configuration using pydantic settings with structured sections."""

from datetime import timedelta
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./loyalty.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30


class AccountSettings(BaseModel):
    default_balance: int = Field(default=500, ge=0)


class TransferSettings(BaseModel):
    confirm_window_minutes: int = Field(default=10, ge=1)
    recheck_balance_on_confirm: bool = False


class PaginationSettings(BaseModel):
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Loyalty Points Server"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    accounts: AccountSettings = AccountSettings()
    transfers: TransferSettings = TransferSettings()
    pagination: PaginationSettings = PaginationSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def confirm_window(self) -> timedelta:
        return timedelta(minutes=self.transfers.confirm_window_minutes)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
