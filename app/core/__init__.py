"""Core app configuration, storage and token handling."""

from app.core.config import get_settings, settings
from app.core.security import get_token_service
from app.core.store import get_record_store

__all__ = ["get_settings", "settings", "get_record_store", "get_token_service"]
