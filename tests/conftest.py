"""Test configuration and fixtures for s3-report."""

from datetime import datetime, timedelta, timezone

import pytest

from s3_report.objectstorage.analysis import Bucket, ObjectSummary

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(seconds: int) -> datetime:
    """Timestamp ``seconds`` after the test base time."""
    return BASE_TIME + timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def empty_bucket():
    """A bucket carrying identity only."""
    return Bucket(name="test-bucket", creation_date=at(0))


@pytest.fixture
def sample_objects():
    """Three objects from two owners, listed out of time order."""
    return [
        ObjectSummary(key="c.txt", last_modified=at(3), size=50, owner_id="A"),
        ObjectSummary(key="a.txt", last_modified=at(1), size=100, owner_id="A"),
        ObjectSummary(key="b.txt", last_modified=at(2), size=200, owner_id="B"),
    ]
