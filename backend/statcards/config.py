from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, HttpUrl
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    github_token: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("GITHUB_TOKEN", "GITHUB_API_TOKEN")
    )
    github_username: Optional[str] = Field(default=None, alias="GITHUB_USERNAME")  # fallback when ?username is omitted
    github_graphql_url: HttpUrl = Field(
        default="https://api.github.com/graphql", alias="GITHUB_GRAPHQL_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    github_timeout_seconds: float = Field(default=20, alias="GITHUB_TIMEOUT_SECONDS")
    cache_ttl_seconds: int = Field(default=60 * 60 * 6, alias="CACHE_TTL_SECONDS")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
