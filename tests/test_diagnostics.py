"""Tests for the load diagnostics collector."""

import pytest

from assessment_model.diagnostics import LoadReport, LoadStatus
from assessment_model.diagnostics.collector import issue_from_error
from assessment_model.errors import (
    AssessmentModelError,
    RegistryFrozenError,
    ResourceNotFoundError,
    SchemaViolationError,
    UnknownVariantError,
    UnpackTypeMismatchError,
)


@pytest.fixture
def report() -> LoadReport:
    """Create a load report for testing."""
    return LoadReport("sleep@1.0.0")


class TestLoadReport:
    """Tests for LoadReport."""

    def test_success(self, report: LoadReport) -> None:
        """Test a clean load finalizes as success."""
        report.record_node()
        report.record_node()

        diagnostic = report.finalize()
        assert diagnostic.resource == "sleep@1.0.0"
        assert diagnostic.status == LoadStatus.SUCCESS
        assert diagnostic.nodes_decoded == 2
        assert not report.has_errors

    def test_skipped_is_partial(self, report: LoadReport) -> None:
        """Test a skipped child makes the load partial."""
        report.record_skipped(UnknownVariantError("hologram", "node", "h"))

        diagnostic = report.finalize()
        assert diagnostic.status == LoadStatus.PARTIAL
        assert diagnostic.skipped[0].code == "UNKNOWN_VARIANT"
        assert diagnostic.skipped[0].stage == "decode"
        assert diagnostic.skipped[0].type_name == "hologram"
        assert report.skipped == diagnostic.skipped

    def test_failure_wins(self, report: LoadReport) -> None:
        """Test a failure makes the load failed even with skipped children."""
        report.record_skipped(UnknownVariantError("hologram", "node", "h"))
        report.record_failure(ResourceNotFoundError("sleep"), "fetch")

        diagnostic = report.finalize()
        assert diagnostic.status == LoadStatus.FAILED
        assert diagnostic.errors[0].code == "RESOURCE_NOT_FOUND"
        assert report.has_errors

    def test_skipped_list_is_a_copy(self, report: LoadReport) -> None:
        """Test callers cannot modify the collected issues."""
        report.record_skipped(UnknownVariantError("hologram", "node"))
        report.skipped.clear()
        assert len(report.skipped) == 1


class TestIssueFromError:
    """Tests for issue_from_error."""

    def test_schema_violation(self) -> None:
        """Test a schema violation keeps its field, variant, and path."""
        error = SchemaViolationError("duration", "active", "bad", "walk")
        error.add_parent("section")
        error.add_parent("root")

        issue = issue_from_error(error, "decode")

        assert issue.code == "SCHEMA_VIOLATION"
        assert issue.field == "duration"
        assert issue.type_name == "active"
        assert issue.identifier == "walk"
        assert issue.path == ["root", "section"]

    @pytest.mark.parametrize(
        "error,code",
        [
            (UnpackTypeMismatchError("section", "instruction"), "UNPACK_TYPE_MISMATCH"),
            (RegistryFrozenError("trail", "node"), "LOAD_ERROR"),
            (AssessmentModelError("other"), "LOAD_ERROR"),
        ],
    )
    def test_codes(self, error: AssessmentModelError, code: str) -> None:
        """Test error codes per error class."""
        assert issue_from_error(error, "unpack").code == code


class TestErrorPath:
    """Tests for the error path helpers."""

    def test_location(self) -> None:
        """Test the location joins ancestors and the failing identifier."""
        error = UnknownVariantError("hologram", "node", "h")
        error.add_parent("part1")
        error.add_parent(None)
        error.add_parent("root")

        assert error.path == ["root", "part1"]
        assert error.location == "root/part1/h"

    def test_location_without_identifier(self) -> None:
        """Test the location of an error without an identifier."""
        error = ResourceNotFoundError("sleep")
        error.add_parent("root")
        assert error.location == "root"
