"""Per-bucket usage reports for S3-compatible object storage accounts.

For every bucket in an account the report gives the object count, the total
size, the size attributed to each object owner and a short sample of the
oldest or newest objects. Buckets are analyzed concurrently and each report
is printed as soon as its bucket is done.

Recommended Usage:
    >>> from s3_report import S3BucketLister, S3ClientConfig, run_report
    >>> lister = S3BucketLister(S3ClientConfig(aws_profile="my-profile"))
    >>> buckets = lister.get_buckets(include="logs")
    >>> run_report(lister, buckets, display_count=10)

Advanced Usage:
    The analysis itself works on any iterable of object summaries:

    >>> from s3_report.objectstorage.analysis import Bucket, analyze
"""

__version__ = "0.1.0"

from .objectstorage import (
    Bucket,
    ObjectSummary,
    S3BucketLister,
    S3ClientConfig,
    analyze,
    filter_buckets,
)
from .reporting import (
    ReportOrchestrator,
    byte_count_to_human,
    format_json,
    format_report,
    format_text,
    run_report,
)
from .schemas import ReportOptions

__all__ = [
    # Data model and analysis
    "Bucket",
    "ObjectSummary",
    "analyze",
    # Listing
    "S3BucketLister",
    "S3ClientConfig",
    "filter_buckets",
    # Reporting
    "ReportOrchestrator",
    "byte_count_to_human",
    "format_json",
    "format_report",
    "format_text",
    "run_report",
    # Options
    "ReportOptions",
]
