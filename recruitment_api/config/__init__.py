"""Configuration module for the Recruitment API."""

from .settings import settings, get_settings, Settings
from .database import get_db, engine, SessionLocal

__all__ = ["settings", "get_settings", "Settings", "get_db", "engine", "SessionLocal"]
