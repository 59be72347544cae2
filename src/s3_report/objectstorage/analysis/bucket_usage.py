"""Bucket usage analysis: object counts, sizes per owner and display samples.

The analysis is a single pass over a bucket's complete object listing:

1. The listing is materialized and sorted by modification time.
2. Every object is folded into the running totals (count, size, size per
   owner).
3. A bounded sample of the oldest or newest objects is kept for display.

Failures while fetching or folding objects are recorded on the returned
Bucket rather than raised, so one broken bucket never stops a report on
the others.
"""

import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence, Tuple

from s3_report.core import get_logger
from s3_report.core.exceptions import MalformedObjectError

logger = get_logger(__name__)

UNKNOWN_OWNER = "unknown"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_DISPLAY_COUNT = -5


@dataclass(frozen=True)
class ObjectSummary:
    """A single object from a bucket listing.

    Attributes:
        key: Object key
        last_modified: Time the object was last written
        size: Object size in bytes
        owner_id: Canonical ID of the object owner, if the listing had one
    """

    key: str
    last_modified: datetime
    size: int
    owner_id: Optional[str] = None


@dataclass(frozen=True)
class Bucket:
    """Identity and usage totals of one bucket.

    A Bucket starts out with identity only and zeroed totals. ``analyze``
    returns a new, fully populated Bucket; instances are never mutated.

    Attributes:
        name: Bucket name
        creation_date: Time the bucket was created
        last_modified: Modification time of the newest object, or the
            epoch when the bucket is empty
        total_size: Total size in bytes of all objects
        total_count: Total number of objects
        size_per_owner: Bytes attributed to each owner ID
        display_count: Signed sample size the display objects were chosen by
        display_objects: Oldest or newest objects, in ascending time order
        error: Description of the first failure met during analysis
    """

    name: str
    creation_date: datetime
    last_modified: datetime = EPOCH
    total_size: int = 0
    total_count: int = 0
    size_per_owner: Dict[str, int] = field(default_factory=dict)
    display_count: int = 0
    display_objects: Tuple[ObjectSummary, ...] = ()
    error: Optional[str] = None


def select_display_objects(
    ordered: Sequence[ObjectSummary], n: int
) -> Tuple[ObjectSummary, ...]:
    """Pick the display sample from objects sorted oldest first.

    A negative ``n`` keeps the ``|n|`` oldest objects, a positive ``n`` the
    ``n`` newest. Zero keeps nothing.
    """
    if n < 0:
        return tuple(ordered[:-n])
    if n == 0:
        return ()
    return tuple(ordered[max(len(ordered) - n, 0) :])


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` as an aware UTC datetime, naive values taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def describe_error(exc: BaseException) -> str:
    """Render an exception, then its traceback when it was raised."""
    description = f"{type(exc).__name__}: {exc}"
    if exc.__traceback__ is None:
        return description
    frames = "".join(traceback.format_tb(exc.__traceback__))
    return f"{description}\nTraceback (most recent call last):\n{frames.rstrip()}"


def analyze(
    bucket: Bucket,
    objects: Iterable[ObjectSummary],
    n: int = DEFAULT_DISPLAY_COUNT,
) -> Bucket:
    """Aggregate a bucket's objects into its reported form.

    Objects without a usable modification time still count towards the
    totals but are left out of ``last_modified`` and the display sample.

    Args:
        bucket: Bucket identity (name and creation date)
        objects: Every object in the bucket. May be a lazy listing; it is
            drained completely before sorting.
        n: Display sample size, negative for oldest and positive for newest

    Returns:
        A new Bucket with totals, display sample and, when something went
        wrong, ``error``. Never raises for listing or aggregation failures.
    """
    error: Optional[str] = None
    retrieved: list[ObjectSummary] = []

    try:
        for summary in objects:
            retrieved.append(summary)
    except Exception as e:
        error = describe_error(e)
        logger.warning("Object listing failed", bucket=bucket.name, error=str(e))

    dated = [o for o in retrieved if isinstance(o.last_modified, datetime)]
    undated = [o for o in retrieved if not isinstance(o.last_modified, datetime)]
    ordered = sorted(dated, key=lambda o: as_utc(o.last_modified))

    if undated:
        malformed = MalformedObjectError(bucket.name, [o.key for o in undated])
        if error is None:
            error = describe_error(malformed)
        logger.warning(
            "Objects without modification time",
            bucket=bucket.name,
            count=len(undated),
        )

    total_size = 0
    total_count = 0
    size_per_owner: Dict[str, int] = {}
    try:
        for summary in ordered + undated:
            size = int(summary.size)
            owner = summary.owner_id or UNKNOWN_OWNER
            total_size += size
            total_count += 1
            size_per_owner[owner] = size_per_owner.get(owner, 0) + size
    except Exception as e:
        if error is None:
            error = describe_error(e)
        logger.warning(
            "Object aggregation failed",
            bucket=bucket.name,
            aggregated=total_count,
            error=str(e),
        )

    last_modified = ordered[-1].last_modified if ordered else EPOCH

    result = replace(
        bucket,
        last_modified=last_modified,
        total_size=total_size,
        total_count=total_count,
        size_per_owner=size_per_owner,
        display_count=n,
        display_objects=select_display_objects(ordered, n),
        error=error,
    )

    logger.info(
        "Bucket analysis completed",
        bucket=result.name,
        total_count=result.total_count,
        total_size=result.total_size,
        failed=result.error is not None,
    )
    return result
