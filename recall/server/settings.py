from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(override=False)


DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]
DEFAULT_DOCUMENT_EXTENSIONS = (".md", ".mdx", ".markdown")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in {"0", "false", "no", "off"}


class Settings(BaseModel):
    """Runtime configuration for the content index and its HTTP surface."""

    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    content_root: Path = Field(default_factory=lambda: Path(os.getenv("CONTENT_ROOT", "content")))
    site_title: str = Field(default_factory=lambda: os.getenv("SITE_TITLE", "Recall"))
    site_description: str = Field(
        default_factory=lambda: os.getenv("SITE_DESCRIPTION", "Interview Prep Dashboard")
    )
    document_extensions: Tuple[str, ...] = Field(
        default_factory=lambda: os.getenv("DOCUMENT_EXTENSIONS") or DEFAULT_DOCUMENT_EXTENSIONS
    )
    max_scan_depth: int = Field(default_factory=lambda: int(os.getenv("MAX_SCAN_DEPTH", "8")))
    title_from_heading: bool = Field(default_factory=lambda: _env_flag("TITLE_FROM_HEADING", "true"))
    watch_content: bool | None = Field(default_factory=lambda: os.getenv("WATCH_CONTENT"))
    watch_interval_seconds: float = Field(
        default_factory=lambda: float(os.getenv("WATCH_INTERVAL_SECONDS", "2.0"))
    )
    cors_origins: List[str] = Field(default_factory=lambda: os.getenv("CORS_ORIGINS"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @field_validator("document_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: object) -> Tuple[str, ...]:
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",") if item.strip()]
        else:
            items = list(value or [])
        if not items:
            return DEFAULT_DOCUMENT_EXTENSIONS
        return tuple(item.lower() if item.startswith(".") else f".{item.lower()}" for item in items)

    @field_validator("watch_content", mode="before")
    @classmethod
    def _parse_watch(cls, value: object) -> bool | None:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            return value.lower() not in {"0", "false", "no", "off"}
        return bool(value)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(value, str):
            if not value.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)

    @field_validator("max_scan_depth")
    @classmethod
    def _positive_depth(cls, value: int) -> int:
        if value < 1:
            raise ValueError("MAX_SCAN_DEPTH must be at least 1")
        return value

    @property
    def watch_enabled(self) -> bool:
        """Watch mode defaults to on in development and off elsewhere."""

        if self.watch_content is None:
            return self.is_development
        return self.watch_content and self.is_development


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for FastAPI dependency injection."""

    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_CORS_ORIGINS"]
