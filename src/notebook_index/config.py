"""Centralized configuration for notebook-index using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine tuning loaded from ``NOTEBOOK_*`` environment variables.

    Defaults reproduce the scoring constants of the search core, so an empty
    environment yields the reference behavior.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Result sizes
    search_limit: int = Field(default=10, ge=0, description="Maximum number of search hits")
    link_suggestion_limit: int = Field(default=6, ge=0, description="Maximum matched link suggestions")
    recent_suggestion_limit: int = Field(
        default=5, ge=0, description="Recent notes offered when the link query is empty"
    )
    recent_notes_limit: int = Field(default=6, ge=0, description="Notes listed by recent_notes()")
    similar_top_k: int = Field(default=3, ge=0, description="Number of similar notes returned")

    # Scoring
    snippet_radius: int = Field(default=48, ge=0, description="Characters of context on each side of a snippet")
    recency_max_boost: float = Field(default=35.0, ge=0.0, description="Boost for a note updated just now")
    recency_window_days: float = Field(default=90.0, gt=0.0, description="Age in days at which the boost reaches 0")

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Logging level"
    )
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_suggestion_limits(self) -> "Settings":
        if self.recent_suggestion_limit > self.link_suggestion_limit:
            raise ValueError(
                "NOTEBOOK_RECENT_SUGGESTION_LIMIT must not exceed NOTEBOOK_LINK_SUGGESTION_LIMIT "
                f"({self.recent_suggestion_limit} > {self.link_suggestion_limit})"
            )
        return self
