"""Tests for concurrent bucket reporting."""

import io
import json
import threading

import pytest

from conftest import at
from s3_report.core import settings
from s3_report.core.exceptions import ObjectListingError
from s3_report.objectstorage.analysis import Bucket, ObjectSummary
from s3_report.reporting import ReportOrchestrator, run_report


class FakeSource:
    """Object source backed by in-memory listings.

    Listings that are exceptions fail after yielding nothing.
    """

    def __init__(self, listings):
        self.listings = listings
        self.calls = []
        self._lock = threading.Lock()

    def iter_objects(self, bucket):
        with self._lock:
            self.calls.append(bucket)
        listing = self.listings[bucket]
        if isinstance(listing, Exception):
            raise listing
        yield from listing


class BrokenSource:
    """Object source that fails before returning a listing at all."""

    def iter_objects(self, bucket):
        raise RuntimeError(f"no client for {bucket}")


class RecordingStream(io.StringIO):
    """StringIO that remembers each write call separately."""

    def __init__(self):
        super().__init__()
        self.writes = []

    def write(self, s):
        self.writes.append(s)
        return super().write(s)


def make_bucket(name):
    return Bucket(name=name, creation_date=at(0))


def make_objects(count, size=10, owner="A"):
    return [
        ObjectSummary(key=f"k{i}", last_modified=at(i), size=size, owner_id=owner)
        for i in range(count)
    ]


class TestReportOrchestrator:
    """Test one report per bucket and atomic report output."""

    def test_one_failure_one_success(self):
        """Test a failing bucket does not affect the other report."""
        source = FakeSource(
            {
                "good": make_objects(3),
                "bad": ObjectListingError("bad", "AccessDenied"),
            }
        )
        stream = RecordingStream()

        results = run_report(
            source, [make_bucket("good"), make_bucket("bad")], stream=stream
        )

        by_name = {b.name: b for b in results}
        assert set(by_name) == {"good", "bad"}
        assert by_name["good"].error is None
        assert by_name["good"].total_count == 3
        assert by_name["good"].total_size == 30
        assert "AccessDenied" in by_name["bad"].error
        assert by_name["bad"].total_count == 0
        assert len(stream.writes) == 2

    def test_each_report_written_once(self):
        """Test every report is a single complete write."""
        source = FakeSource({f"b{i}": make_objects(i) for i in range(12)})
        stream = RecordingStream()

        ReportOrchestrator(source, max_workers=4, stream=stream).run(
            [make_bucket(f"b{i}") for i in range(12)]
        )

        assert len(stream.writes) == 12
        for chunk in stream.writes:
            assert chunk.startswith("Name: b")
            assert chunk.endswith("Error: none\n\n")
            assert chunk.count("Name: ") == 1
        assert sorted(source.calls) == sorted(f"b{i}" for i in range(12))

    def test_json_lines(self):
        """Test JSON mode writes one JSON document per line."""
        source = FakeSource({"one": make_objects(2), "two": make_objects(5)})
        stream = io.StringIO()

        run_report(
            source,
            [make_bucket("one"), make_bucket("two")],
            display_count=1,
            json_output=True,
            stream=stream,
        )

        documents = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert {d["Name"]: d["TotalCount"] for d in documents} == {"one": 2, "two": 5}
        assert all(len(d["Objects"]) == 1 for d in documents)

    def test_display_count_passed_through(self):
        """Test the display count reaches the analysis."""
        source = FakeSource({"only": make_objects(6)})

        (result,) = run_report(
            source, [make_bucket("only")], display_count=2, stream=io.StringIO()
        )

        assert [o.key for o in result.display_objects] == ["k4", "k5"]
        assert result.display_count == 2

    def test_source_failing_outside_listing(self):
        """Test a job that fails outright still produces a report."""
        stream = io.StringIO()

        (result,) = run_report(BrokenSource(), [make_bucket("lost")], stream=stream)

        assert result.name == "lost"
        assert "RuntimeError" in result.error
        assert "Name: lost" in stream.getvalue()
        assert "no client for lost" in stream.getvalue()

    def test_undated_object_reported_with_totals(self):
        """Test an object without a timestamp still yields a full report."""
        source = FakeSource(
            {
                "mixed": [
                    ObjectSummary(key="a", last_modified=at(1), size=100),
                    ObjectSummary(key="b", last_modified=None, size=2),
                ]
            }
        )
        stream = io.StringIO()

        (result,) = run_report(source, [make_bucket("mixed")], stream=stream)

        assert result.total_count == 2
        assert result.total_size == 102
        assert result.error is not None
        assert "Name: mixed" in stream.getvalue()
        assert "TotalCount: 2" in stream.getvalue()

    def test_no_buckets(self):
        """Test an empty bucket list writes nothing."""
        stream = io.StringIO()
        assert run_report(FakeSource({}), [], stream=stream) == []
        assert stream.getvalue() == ""

    def test_default_worker_count(self):
        """Test the pool size falls back to the configured default."""
        orchestrator = ReportOrchestrator(FakeSource({}))
        assert orchestrator.max_workers == settings.max_workers

    def test_defaults_to_stdout(self, capsys):
        """Test reports go to standard output when no stream is given."""
        run_report(FakeSource({"out": []}), [make_bucket("out")])

        assert "Name: out" in capsys.readouterr().out

    @pytest.mark.parametrize("max_workers", [1, 3, 50])
    def test_pool_sizes(self, max_workers):
        """Test every bucket is reported whatever the pool size."""
        names = [f"bucket-{i}" for i in range(7)]
        source = FakeSource({n: make_objects(1) for n in names})

        results = run_report(
            source,
            [make_bucket(n) for n in names],
            max_workers=max_workers,
            stream=io.StringIO(),
        )

        assert sorted(b.name for b in results) == names
