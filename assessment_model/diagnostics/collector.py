"""Collector for load diagnostics.

Collects skipped children and fatal errors while a tree is decoded and
unpacked, and produces a LoadDiagnostic report.
"""

import logging
from typing import Literal

from assessment_model.diagnostics.models import LoadDiagnostic, LoadIssue, LoadStatus
from assessment_model.errors import (
    AssessmentModelError,
    ResourceNotFoundError,
    SchemaViolationError,
    UnknownVariantError,
    UnpackTypeMismatchError,
)

logger = logging.getLogger(__name__)

Stage = Literal["decode", "fetch", "unpack"]


def _error_code(error: AssessmentModelError) -> str:
    if isinstance(error, UnknownVariantError):
        return "UNKNOWN_VARIANT"
    if isinstance(error, SchemaViolationError):
        return "SCHEMA_VIOLATION"
    if isinstance(error, ResourceNotFoundError):
        return "RESOURCE_NOT_FOUND"
    if isinstance(error, UnpackTypeMismatchError):
        return "UNPACK_TYPE_MISMATCH"
    return "LOAD_ERROR"


def issue_from_error(error: AssessmentModelError, stage: Stage) -> LoadIssue:
    """Build a LoadIssue describing an error."""
    return LoadIssue(
        stage=stage,
        code=_error_code(error),
        message=str(error),
        identifier=error.identifier,
        path=list(error.path),
        type_name=getattr(error, "type_name", None) or getattr(error, "variant", None),
        field=getattr(error, "field", None),
    )


class LoadReport:
    """Collects diagnostics for a single load.

    A decode running with a lenient policy records every skipped child here
    instead of raising.
    """

    def __init__(self, resource: str = "<memory>") -> None:
        """Initialize the collector.

        Args:
            resource: Name of the resource being loaded, for reporting.
        """
        self.resource = resource
        self.nodes_decoded = 0
        self._skipped: list[LoadIssue] = []
        self._errors: list[LoadIssue] = []

    def record_node(self) -> None:
        """Count a successfully decoded node."""
        self.nodes_decoded += 1

    def record_skipped(self, error: AssessmentModelError, stage: Stage = "decode") -> None:
        """Record a child that was dropped from its container."""
        issue = issue_from_error(error, stage)
        logger.warning(f"Skipping node {issue.identifier or '<unknown>'} in {self.resource}: {error}")
        self._skipped.append(issue)

    def record_failure(self, error: AssessmentModelError, stage: Stage) -> None:
        """Record the error that aborted the load."""
        self._errors.append(issue_from_error(error, stage))

    @property
    def skipped(self) -> list[LoadIssue]:
        """Issues for skipped children."""
        return list(self._skipped)

    @property
    def has_errors(self) -> bool:
        """Whether the load was aborted."""
        return len(self._errors) > 0

    def finalize(self) -> LoadDiagnostic:
        """Finalize and return the diagnostic report."""
        if self._errors:
            status = LoadStatus.FAILED
        elif self._skipped:
            status = LoadStatus.PARTIAL
        else:
            status = LoadStatus.SUCCESS

        return LoadDiagnostic(
            resource=self.resource,
            status=status,
            skipped=self._skipped,
            errors=self._errors,
            nodes_decoded=self.nodes_decoded,
        )
