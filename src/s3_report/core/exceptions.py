"""Exception hierarchy for s3-report."""


class S3ReportError(Exception):
    """Base exception for all s3-report errors."""

    pass


class BucketListingError(S3ReportError):
    """Raised when the account's buckets cannot be enumerated."""

    pass


class ObjectListingError(S3ReportError):
    """Raised when a bucket's objects cannot be listed."""

    def __init__(self, bucket: str, message: str):
        super().__init__(f"Failed to list objects in bucket '{bucket}': {message}")
        self.bucket = bucket


class MalformedObjectError(S3ReportError):
    """Raised when listed objects lack a usable modification time."""

    def __init__(self, bucket: str, keys):
        shown = ", ".join(repr(k) for k in keys[:5])
        more = f" and {len(keys) - 5} more" if len(keys) > 5 else ""
        super().__init__(
            f"{len(keys)} objects in bucket '{bucket}' have no modification "
            f"time: {shown}{more}"
        )
        self.bucket = bucket
        self.keys = list(keys)
