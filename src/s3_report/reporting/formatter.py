"""Rendering of analyzed buckets as text or JSON reports."""

import json
from datetime import datetime

from s3_report.objectstorage.analysis import Bucket, ObjectSummary, as_utc

BYTES_PER_UNIT = 1024
BINARY_UNITS = ["KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


def byte_count_to_human(num_bytes: int) -> str:
    """Format a byte count with 1024-based units.

    Examples:
        >>> byte_count_to_human(1)
        '1B'
        >>> byte_count_to_human(1536)
        '1.50KiB'
        >>> byte_count_to_human(12345678)
        '11.77MiB'
    """
    if abs(num_bytes) < BYTES_PER_UNIT:
        return f"{num_bytes}B"

    value = float(num_bytes)
    for unit in BINARY_UNITS:
        value /= BYTES_PER_UNIT
        if abs(value) < BYTES_PER_UNIT or unit == BINARY_UNITS[-1]:
            return f"{value:.2f}{unit}"
    return f"{value:.2f}{BINARY_UNITS[-1]}"


def rfc3339(moment: datetime) -> str:
    """Render a timestamp as RFC 3339 in UTC, naive values taken as UTC."""
    return as_utc(moment).strftime("%Y-%m-%dT%H:%M:%SZ")


def _object_line(summary: ObjectSummary) -> str:
    return f"{rfc3339(summary.last_modified)} {summary.key}"


def format_json(bucket: Bucket) -> str:
    """Render a bucket as a single-line JSON object."""
    document = {
        "Name": bucket.name,
        "CreationDate": rfc3339(bucket.creation_date),
        "LastModified": rfc3339(bucket.last_modified),
        "TotalSize": bucket.total_size,
        "DisplayObjectCount": bucket.display_count,
        "TotalCount": bucket.total_count,
        "SizePerOwnerId": dict(bucket.size_per_owner),
        "Objects": [_object_line(o) for o in bucket.display_objects],
        "Error": bucket.error,
    }
    return json.dumps(document)


def format_text(bucket: Bucket) -> str:
    """Render a bucket as a human-readable block, one field per line."""
    lines = [
        f"Name: {bucket.name}",
        f"CreationDate: {rfc3339(bucket.creation_date)}",
        f"LastModified: {rfc3339(bucket.last_modified)}",
        f"TotalSize: {byte_count_to_human(bucket.total_size)}",
        f"TotalCount: {bucket.total_count}",
        "SizePerOwnerId:",
    ]
    total = byte_count_to_human(bucket.total_size)
    for owner, size in sorted(bucket.size_per_owner.items()):
        lines.append(f" * {owner} {byte_count_to_human(size)}/{total}")

    lines.append("Objects:")
    lines.extend(f" * {_object_line(o)}" for o in bucket.display_objects)
    lines.append(f"Error: {bucket.error or 'none'}")
    return "\n".join(lines) + "\n"


def format_report(bucket: Bucket, json_output: bool = False) -> str:
    """Render a bucket in the requested encoding."""
    if json_output:
        return format_json(bucket)
    return format_text(bucket)
