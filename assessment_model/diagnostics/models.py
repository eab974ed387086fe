"""Data models for load diagnostics.

Tracks children skipped during a partial decode and the error that aborted
a load, so a host can report which resource is broken.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class LoadStatus(str, Enum):
    """Status of loading an assessment tree."""

    SUCCESS = "success"  # Every node decoded and unpacked
    PARTIAL = "partial"  # Some children were skipped
    FAILED = "failed"  # The load was aborted


class LoadIssue(BaseModel):
    """A problem encountered while decoding or unpacking a node."""

    stage: Literal["decode", "fetch", "unpack"]
    code: str  # Error code like "UNKNOWN_VARIANT"
    message: str
    identifier: str | None = None
    path: list[str] = Field(default_factory=list)
    type_name: str | None = None
    field: str | None = None


class LoadDiagnostic(BaseModel):
    """Diagnostics for a complete load."""

    resource: str
    status: LoadStatus
    skipped: list[LoadIssue] = Field(default_factory=list)
    errors: list[LoadIssue] = Field(default_factory=list)
    nodes_decoded: int = 0
