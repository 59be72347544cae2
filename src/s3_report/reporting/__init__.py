"""Report rendering and cross-bucket orchestration."""

from .formatter import (
    byte_count_to_human,
    format_json,
    format_report,
    format_text,
    rfc3339,
)
from .orchestrator import ObjectSource, ReportOrchestrator, run_report

__all__ = [
    "ObjectSource",
    "ReportOrchestrator",
    "byte_count_to_human",
    "format_json",
    "format_report",
    "format_text",
    "rfc3339",
    "run_report",
]
