"""Bucket and object listing for S3 accounts."""

from typing import Iterator, Optional

from s3_report.core import get_logger, settings
from s3_report.core.exceptions import BucketListingError, ObjectListingError
from s3_report.objectstorage.analysis import Bucket, ObjectSummary
from s3_report.objectstorage.clients import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)


def filter_buckets(
    buckets: list[Bucket], include: str = "", exclude: str = ""
) -> list[Bucket]:
    """Filter buckets by substrings of their names.

    Args:
        buckets: Buckets to filter
        include: Keep only names containing this string (empty keeps all)
        exclude: Drop names containing this string (empty drops none)

    Returns:
        The buckets that pass both filters, in their original order
    """
    return [
        b
        for b in buckets
        if include in b.name and (not exclude or exclude not in b.name)
    ]


class S3BucketLister:
    """Lists the buckets of an account and the objects inside them."""

    def __init__(self, config: S3ClientConfig, page_size: Optional[int] = None):
        """Initialize S3 bucket lister.

        Args:
            config: S3 client configuration
            page_size: Objects requested per ListObjectsV2 call
        """
        self.client_manager = S3ClientManager(config)
        self.page_size = page_size or settings.page_size
        logger.info("S3 bucket lister initialized", page_size=self.page_size)

    def list_buckets(self) -> list[Bucket]:
        """List every bucket in the account.

        Returns:
            Buckets carrying identity only (name and creation date)

        Raises:
            BucketListingError: If the buckets cannot be listed
        """
        try:
            response = self.client_manager.client.list_buckets()
        except Exception as e:
            error_msg = f"Could not get buckets: {e}"
            logger.error(error_msg, error=str(e))
            raise BucketListingError(error_msg)

        buckets = [
            Bucket(name=b["Name"], creation_date=b["CreationDate"])
            for b in response.get("Buckets", [])
        ]
        logger.info("S3 buckets listed", bucket_count=len(buckets))
        return buckets

    def get_buckets(self, include: str = "", exclude: str = "") -> list[Bucket]:
        """List the account's buckets and apply the name filters."""
        buckets = filter_buckets(self.list_buckets(), include, exclude)
        logger.info(
            "S3 buckets filtered",
            include=include,
            exclude=exclude,
            bucket_count=len(buckets),
        )
        return buckets

    def iter_objects(self, bucket: str) -> Iterator[ObjectSummary]:
        """Yield every object in a bucket, page by page, in API order.

        Nothing is requested until iteration starts. A failed page ends the
        listing; objects from earlier pages have already been yielded.

        Args:
            bucket: Bucket name

        Raises:
            ObjectListingError: If the bucket region or a page cannot be fetched
        """
        logger.info("Listing S3 objects", bucket=bucket)

        try:
            client = self.client_manager.client_for_bucket(bucket)

            # Owner is only returned by ListObjectsV2 when explicitly requested
            paginator = client.get_paginator("list_objects_v2")
            page_iterator = paginator.paginate(
                Bucket=bucket,
                FetchOwner=True,
                PaginationConfig={"PageSize": self.page_size},
            )

            object_count = 0
            for page in page_iterator:
                for obj in page.get("Contents", []):
                    object_count += 1
                    yield ObjectSummary(
                        key=obj["Key"],
                        last_modified=obj["LastModified"],
                        size=obj["Size"],
                        owner_id=obj.get("Owner", {}).get("ID"),
                    )

        except Exception as e:
            logger.error("Failed to list S3 objects", bucket=bucket, error=str(e))
            raise ObjectListingError(bucket, str(e)) from e

        logger.info("S3 objects listed", bucket=bucket, object_count=object_count)

    def list_objects(self, bucket: str) -> list[ObjectSummary]:
        """Fetch every object in a bucket.

        Raises:
            ObjectListingError: If the listing fails
        """
        return list(self.iter_objects(bucket))


def list_bucket_objects(
    bucket: str,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: str = "us-east-1",
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> list[ObjectSummary]:
    """Convenience function to fetch every object in a bucket.

    Args:
        bucket: Bucket name
        access_key_id: AWS access key ID
        secret_access_key: AWS secret access key
        session_token: AWS session token for temporary credentials
        region_name: AWS region name
        endpoint_url: Custom S3 endpoint URL
        aws_profile: AWS CLI profile name

    Returns:
        Every object in the bucket, in API order
    """
    config = S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )

    lister = S3BucketLister(config)
    return lister.list_objects(bucket)
