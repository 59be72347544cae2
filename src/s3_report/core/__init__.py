"""Core utilities and shared components for s3-report."""

from .config import settings
from .exceptions import S3ReportError
from .observability import get_logger, get_tracer

__all__ = ["settings", "S3ReportError", "get_logger", "get_tracer"]
