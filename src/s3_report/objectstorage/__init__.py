"""Object storage operations for S3-compatible services."""

from .analysis import Bucket, ObjectSummary, analyze
from .clients import S3ClientConfig, S3ClientManager
from .listing import S3BucketLister, filter_buckets, list_bucket_objects

__all__ = [
    "Bucket",
    "ObjectSummary",
    "S3BucketLister",
    "S3ClientConfig",
    "S3ClientManager",
    "analyze",
    "filter_buckets",
    "list_bucket_objects",
]
