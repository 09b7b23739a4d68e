"""Core utilities and shared components for s3disk."""

from .config import settings
from .exceptions import DiskError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "DiskError", "ValidationError", "get_logger", "get_tracer"]
