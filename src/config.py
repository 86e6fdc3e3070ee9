from functools import lru_cache
from typing import Any, Literal
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    APP_VERSION: str = "v0.1.x"
    API_NAME: str = "Vibe Coder Score"
    API_SUMMARY: str = (
        "Scores how often AI coding assistants recommend your developer tool"
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    USER_AGENT: str = "VibeCoderScore"

    CORS_ENABLED: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # Prompt model (prompt generation and mention classification)
    OPENAI_API_KEY: str | None = None
    PROMPT_MODEL: str = "gpt-4o-mini"

    # Research model (search-augmented, OpenAI compatible)
    PERPLEXITY_API_KEY: str | None = None
    PERPLEXITY_BASE_URL: str = "https://api.perplexity.ai"
    RESEARCH_MODEL: str = "sonar-pro"

    # Background agent
    CURSOR_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CURSOR_API_KEY", "CURSOR_BACKGROUND_AGENT"),
    )
    AGENT_API_BASE_URL: str = "https://api.cursor.com/v0"
    AGENT_SOURCE_REPOSITORY: str = "https://github.com/kapz28/emptyrepoforcursor"
    AGENT_SOURCE_REF: str = "main"
    AGENT_POLL_INTERVAL: float = 3.0  # seconds
    AGENT_MAX_WAIT: float = 300.0  # seconds
    AGENT_POLL_ERROR_RETRIES: int = 2

    # Scoring Settings
    GENERATED_PROMPT_COUNT: int = 10
    MAX_COMPETITORS: int = 5
    MAX_AGGREGATE_COMPETITORS: int = 15

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "vibe-coder-score"

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("AGENT_POLL_INTERVAL", "AGENT_MAX_WAIT")
    def validate_positive_duration(cls, v: float):
        if v <= 0:
            raise ValueError("Polling durations must be greater than zero")
        return v

    @field_validator("AGENT_POLL_ERROR_RETRIES", "GENERATED_PROMPT_COUNT")
    def validate_non_negative(cls, v: int):
        if v < 0:
            raise ValueError("Value must not be negative")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )


@lru_cache
def get_settings():
    return Settings()
