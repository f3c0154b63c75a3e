"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveFloat = Annotated[float, Field(gt=0.0)]
PositiveInt = Annotated[int, Field(gt=0)]
BcryptRounds = Annotated[int, Field(ge=4, le=31)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    jwt_secret: NonEmptyStr = Field(validation_alias="JWT_SECRET")
    token_ttl_seconds: PositiveInt = Field(default=3600, validation_alias="TOKEN_TTL_SECONDS")
    revocation_lookup_timeout_seconds: PositiveFloat = Field(
        default=2.0,
        validation_alias="REVOCATION_LOOKUP_TIMEOUT_SECONDS",
    )
    revocation_sweep_interval_seconds: PositiveFloat = Field(
        default=300.0,
        validation_alias="REVOCATION_SWEEP_INTERVAL_SECONDS",
    )
    bcrypt_rounds: BcryptRounds = Field(default=12, validation_alias="BCRYPT_ROUNDS")
    api_port: PositiveInt = Field(default=4300, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_allow_origins: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")

    @field_validator("jwt_secret")
    @classmethod
    def _reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET cannot be blank")
        return value

    @property
    def cors_origins(self) -> list[str]:
        """Comma-separated CORS_ALLOW_ORIGINS as a list; `*` allows any origin."""

        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
