"""Object storage analysis operations."""

from .bucket_usage import (
    DEFAULT_DISPLAY_COUNT,
    EPOCH,
    UNKNOWN_OWNER,
    Bucket,
    ObjectSummary,
    analyze,
    as_utc,
    describe_error,
    select_display_objects,
)

__all__ = [
    "DEFAULT_DISPLAY_COUNT",
    "EPOCH",
    "UNKNOWN_OWNER",
    "Bucket",
    "ObjectSummary",
    "analyze",
    "as_utc",
    "describe_error",
    "select_display_objects",
]
