from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.graph_db.queries import TraversalPolicy
from src.utils.logging import get_logger

logger = get_logger(__name__)

MAX_NODE_LIMIT = 300
MAX_ROW_LIMIT = 2000
MIN_CACHE_SECONDS = 30

_BOOL_STRINGS = frozenset({"1", "0", "true", "false", "yes", "no", "on", "off", "t", "f", "y", "n"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Neo4j (no defaults; checked on first database access)
    NEO4J_URI: str | None = None
    NEO4J_USER: str | None = Field(
        default=None,
        validation_alias=AliasChoices("NEO4J_USER", "NEO4J_USERNAME"),
    )
    NEO4J_PASSWORD: str | None = None
    NEO4J_DATABASE: str = "neo4j"

    # Snapshot bounds
    NODE_LIMIT: int = 200
    ROW_LIMIT: int = 1200
    CACHE_SECONDS: int = 300
    TRAVERSAL_POLICY: TraversalPolicy = TraversalPolicy.LIMIT_THEN_EXPAND
    TOOLTIPS_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="json", description="'json' for production, 'console' for dev")

    @field_validator("NODE_LIMIT", "ROW_LIMIT", "CACHE_SECONDS", "TRAVERSAL_POLICY", mode="before")
    @classmethod
    def _default_on_invalid(cls, v: Any, info: ValidationInfo) -> Any:
        # Bad tuning values fall back to defaults so the service still starts
        default = cls.model_fields[info.field_name].default
        if v is None or (isinstance(v, str) and not v.strip()):
            return default
        try:
            if info.field_name == "TRAVERSAL_POLICY":
                return TraversalPolicy(v.strip() if isinstance(v, str) else v)
            return int(v.strip() if isinstance(v, str) else v)
        except (TypeError, ValueError):
            logger.warning("invalid_setting_ignored", setting=info.field_name, value=str(v), default=str(default))
            return default

    @field_validator("TOOLTIPS_ENABLED", mode="before")
    @classmethod
    def _default_tooltips_on_invalid(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().lower() not in _BOOL_STRINGS:
            if v.strip():
                logger.warning("invalid_setting_ignored", setting="TOOLTIPS_ENABLED", value=v, default="True")
            return True
        return v

    @field_validator("NODE_LIMIT")
    @classmethod
    def _clamp_node_limit(cls, v: int) -> int:
        return max(1, min(v, MAX_NODE_LIMIT))

    @field_validator("ROW_LIMIT")
    @classmethod
    def _clamp_row_limit(cls, v: int) -> int:
        return max(1, min(v, MAX_ROW_LIMIT))

    @field_validator("CACHE_SECONDS")
    @classmethod
    def _floor_cache_seconds(cls, v: int) -> int:
        return max(v, MIN_CACHE_SECONDS)

    def missing_credentials(self) -> list[str]:
        """Names of the connection variables that are unset or empty."""
        return [
            name
            for name in ("NEO4J_URI", "NEO4J_USER", "NEO4J_PASSWORD")
            if not getattr(self, name)
        ]


def get_settings() -> Settings:
    return Settings()
