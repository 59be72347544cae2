"""Report option schemas for s3-report."""

from pydantic import BaseModel, ConfigDict, Field

from .core import settings
from .objectstorage.analysis import DEFAULT_DISPLAY_COUNT


class ReportOptions(BaseModel):
    """Options controlling which buckets are reported and how."""

    model_config = ConfigDict(extra="forbid")

    include: str = Field(
        default="", description="Only report buckets whose name contains this"
    )
    exclude: str = Field(
        default="", description="Skip buckets whose name contains this"
    )
    count: int = Field(
        default=DEFAULT_DISPLAY_COUNT,
        description="Objects to show per bucket: n newest if positive, "
        "n oldest if negative",
    )
    json_output: bool = Field(default=False, description="Emit JSON lines")
    max_workers: int = Field(
        default_factory=lambda: settings.max_workers,
        ge=1,
        description="Buckets analyzed concurrently",
    )
