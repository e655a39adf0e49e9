"""Configuration module for Document Catalog."""

from .settings import get_settings, Settings

__all__ = ["get_settings", "Settings"]
