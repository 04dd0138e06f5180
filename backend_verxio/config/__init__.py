"""
Configuration management for backend_verxio.

Loads settings from environment variables and the project .env file.
"""

from backend_verxio.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
