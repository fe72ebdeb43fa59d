"""
Configuration and application state management.
"""

import datetime
import os
from pathlib import Path
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .content import ContentMutator, ContentResolver, ContentStore

# Load environment variables
load_dotenv()

DEVELOPMENT = "development"
PRODUCTION = "production"


class Config:
    """Application configuration from environment."""
    CONTENT_DIR: Path = Path(os.getenv("CONTENT_DIR", "./content"))

    # development, production or test; only development allows content edits
    APP_ENV: str = os.getenv("APP_ENV", DEVELOPMENT).lower()

    # Zone used to decide which day it is for scheduled content
    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")

    # Used for absolute links in calendar exports
    SITE_URL: str = os.getenv("SITE_URL", "http://localhost:3000").rstrip("/")

    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def is_production(self) -> bool:
        return self.APP_ENV == PRODUCTION

    def is_development(self) -> bool:
        return self.APP_ENV == DEVELOPMENT

    def today(self) -> datetime.date:
        """Current day in the configured time zone."""
        return datetime.datetime.now(ZoneInfo(self.TIMEZONE)).date()


config = Config()


class AppState:
    """Shared application state."""
    store: "ContentStore | None" = None
    resolver: "ContentResolver | None" = None
    mutator: "ContentMutator | None" = None


state = AppState()


def get_resolver() -> "ContentResolver":
    """Dependency to get the content resolver."""
    if not state.resolver:
        raise HTTPException(status_code=500, detail="Content resolver not initialized")
    return state.resolver


def get_mutator() -> "ContentMutator":
    """Dependency to get the content mutator."""
    if not state.mutator:
        raise HTTPException(status_code=500, detail="Content mutator not initialized")
    return state.mutator
