"""Concurrent per-bucket analysis with serialized report output.

Each bucket is listed, analyzed and formatted in a worker thread from a
bounded pool. Finished reports are handed back to the calling thread, the
only writer of the output stream, which writes each one with a single
``write`` call as soon as it is ready.
"""

import sys
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import IO, Iterable, Optional, Protocol

from s3_report.core import get_logger, get_tracer, settings
from s3_report.objectstorage.analysis import (
    DEFAULT_DISPLAY_COUNT,
    Bucket,
    ObjectSummary,
    analyze,
    describe_error,
)

from .formatter import format_report

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class ObjectSource(Protocol):
    """Protocol for anything that can list the objects of a bucket."""

    def iter_objects(self, bucket: str) -> Iterable[ObjectSummary]:
        """Return every object in the bucket."""
        ...


class ReportOrchestrator:
    """Runs one analysis job per bucket and writes each report once done."""

    def __init__(
        self,
        source: ObjectSource,
        display_count: int = DEFAULT_DISPLAY_COUNT,
        json_output: bool = False,
        max_workers: Optional[int] = None,
        stream: Optional[IO[str]] = None,
    ):
        """Initialize the orchestrator.

        Args:
            source: Object listing for each bucket
            display_count: Signed display sample size passed to ``analyze``
            json_output: Write JSON lines instead of text blocks
            max_workers: Size of the worker pool
            stream: Report destination, standard output when omitted
        """
        self.source = source
        self.display_count = display_count
        self.json_output = json_output
        self.max_workers = max_workers or settings.max_workers
        self.stream = stream

    def run(self, buckets: list[Bucket]) -> list[Bucket]:
        """Analyze every bucket and write one report for each.

        Blocks until all jobs have finished.

        Returns:
            The analyzed buckets, in the order their reports were written
        """
        stream = self.stream or sys.stdout
        logger.info(
            "Starting bucket reports",
            bucket_count=len(buckets),
            max_workers=self.max_workers,
        )

        results: list[Bucket] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: dict[Future, Bucket] = {
                executor.submit(self._report_bucket, bucket): bucket
                for bucket in buckets
            }
            for future in as_completed(futures):
                try:
                    analyzed, report = future.result()
                except Exception as e:
                    analyzed, report = self._failed_report(futures[future], e)

                stream.write(report + "\n")
                stream.flush()
                results.append(analyzed)

        logger.info(
            "Bucket reports completed",
            bucket_count=len(results),
            failed_count=sum(1 for b in results if b.error),
        )
        return results

    def _report_bucket(self, bucket: Bucket) -> tuple[Bucket, str]:
        """Worker job: list, analyze and format one bucket."""
        with tracer.start_as_current_span("analyze_bucket") as span:
            span.set_attribute("s3.bucket", bucket.name)
            analyzed = analyze(
                bucket, self.source.iter_objects(bucket.name), self.display_count
            )
            span.set_attribute("s3.object_count", analyzed.total_count)
            return analyzed, format_report(analyzed, self.json_output)

    def _failed_report(self, bucket: Bucket, exc: Exception) -> tuple[Bucket, str]:
        logger.error("Bucket report failed", bucket=bucket.name, error=str(exc))
        failed = replace(
            bucket, display_count=self.display_count, error=describe_error(exc)
        )
        return failed, format_report(failed, self.json_output)


def run_report(
    source: ObjectSource,
    buckets: list[Bucket],
    display_count: int = DEFAULT_DISPLAY_COUNT,
    json_output: bool = False,
    max_workers: Optional[int] = None,
    stream: Optional[IO[str]] = None,
) -> list[Bucket]:
    """Convenience function to report on a list of buckets."""
    orchestrator = ReportOrchestrator(
        source,
        display_count=display_count,
        json_output=json_output,
        max_workers=max_workers,
        stream=stream,
    )
    return orchestrator.run(buckets)
