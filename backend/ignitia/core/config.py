import secrets
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, AnyUrl, BeforeValidator, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Ignitia"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_V1_STR: str = "/api"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = secrets.token_urlsafe(32)
    # 60 minutes * 24 hours * 8 days = 8 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8
    SESSION_REFRESH_THRESHOLD_MINUTES: int = 60 * 24
    SESSION_COOKIE_NAME: str = "ignitia_session"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []
    FRONTEND_HOST: str = "http://localhost:3000"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    DATABASE_URL: str = "sqlite:///./ignitia.db"

    # OpenAI-compatible chat completions provider (OpenRouter by default)
    LLM_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_API_KEY", "OPENROUTER_API_KEY"),
    )
    LLM_BASE_URL: str = "https://openrouter.ai/api/v1"
    MODEL_DEFAULT: str = Field(
        default="meta-llama/llama-4-maverick:free",
        validation_alias=AliasChoices("MODEL_DEFAULT", "AI_MODEL"),
    )
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 8000

    @computed_field  # type: ignore[prop-decorator]
    @property
    def session_cookie_secure(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()  # type: ignore
