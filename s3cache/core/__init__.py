"""Core: config and constants.

Single place for settings and shared constants.
"""

from s3cache.core.config import ConnectionSettings, get_settings

__all__ = ["ConnectionSettings", "get_settings"]
