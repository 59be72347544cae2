"""S3 client configuration and management.

This module provides S3 client configuration and management functionality
with support for multiple authentication methods and S3-compatible services.

The S3ClientManager handles the complexity of boto3 client creation with
different credential sources. Buckets live in a specific region, so the
manager also resolves each bucket's location and hands out a client bound
to that region.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. AWS CLI profiles (aws_profile)
    3. IAM roles / environment variables (no explicit credentials)
    4. Temporary credentials (session_token)

S3-Compatible Services:
    Supports custom endpoints for services like MinIO, DigitalOcean Spaces,
    and other S3-compatible object storage providers via endpoint_url.
"""

import threading
from typing import Any, Dict, Optional

import boto3
from pydantic import BaseModel, ConfigDict, Field

from s3_report.core import get_logger

logger = get_logger(__name__)

# GetBucketLocation still reports this for buckets created in the old EU region
LEGACY_EU_LOCATION = "EU"


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Authentication Priority:
        1. If aws_profile is provided, use profile-based authentication
        2. If explicit credentials are provided, use them
        3. Otherwise, fall back to default AWS credential chain

    Example:
        # AWS profile
        config = S3ClientConfig(aws_profile="my-profile")

        # MinIO endpoint
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin"
        )
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    region_name: str = Field("us-east-1", description="AWS region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )


class S3ClientManager:
    """Manages S3 client connections, one client per region.

    boto3 clients are safe to share between threads once created, but
    creating them is not, so creation is serialized.
    """

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 client configuration
        """
        self.config = config
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()
        logger.info("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create the S3 client for the configured region."""
        return self.client_for_region(self.config.region_name)

    def client_for_region(self, region_name: str):
        """Get or create an S3 client bound to ``region_name``."""
        with self._lock:
            if region_name not in self._clients:
                self._clients[region_name] = self._create_client(region_name)
            return self._clients[region_name]

    def client_for_bucket(self, bucket: str):
        """Get a client for the region the bucket lives in."""
        return self.client_for_region(self.bucket_region(bucket))

    def bucket_region(self, bucket: str) -> str:
        """Resolve the region of a bucket via GetBucketLocation."""
        if self.config.endpoint_url:
            # S3-compatible services are addressed through a single endpoint
            return self.config.region_name

        response = self.client.get_bucket_location(Bucket=bucket)
        location = response.get("LocationConstraint")
        if not location:
            region = self.config.region_name
        elif location == LEGACY_EU_LOCATION:
            region = "eu-west-1"
        else:
            region = location

        logger.debug("Bucket region resolved", bucket=bucket, region=region)
        return region

    def _create_client(self, region_name: str):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": region_name,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            logger.info(
                "S3 client created with profile",
                profile=self.config.aws_profile,
                region=region_name,
            )
        else:
            session = boto3.Session()
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info(
                    "S3 client created with explicit credentials", region=region_name
                )
            else:
                logger.info(
                    "S3 client created with default credential chain",
                    region=region_name,
                )

        return session.client("s3", **kwargs)  # type: ignore
