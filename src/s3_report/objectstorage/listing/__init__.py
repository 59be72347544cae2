"""Object storage listing operations."""

from .bucket_contents import S3BucketLister, filter_buckets, list_bucket_objects

__all__ = ["S3BucketLister", "filter_buckets", "list_bucket_objects"]
