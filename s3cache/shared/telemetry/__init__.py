"""Telemetry: logging setup."""

from s3cache.shared.telemetry.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
