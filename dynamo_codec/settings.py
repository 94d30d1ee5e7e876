from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NumberMode(str, Enum):
    """How Number payloads are turned back into Python values."""

    # Legacy contract: Numbers decode to int only; fractional text is a defect.
    INTEGER = "integer"
    NATIVE = "native"
    DECIMAL = "decimal"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="DYNAMO_CODEC_ENV")
    log_level: str = Field(default="INFO", validation_alias="DYNAMO_CODEC_LOG_LEVEL")

    # Codec
    number_mode: NumberMode = Field(
        default=NumberMode.INTEGER, validation_alias="DYNAMO_CODEC_NUMBER_MODE"
    )

    @property
    def normalized_environment(self) -> str:
        env = (self.environment or "").strip().lower()
        if env in ("prod", "production"):
            return "production"
        if env in ("stage", "staging"):
            return "staging"
        return "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def resolve_number_mode(mode: NumberMode | str | None = None) -> NumberMode:
    if mode is None:
        return get_settings().number_mode
    return NumberMode(mode)
