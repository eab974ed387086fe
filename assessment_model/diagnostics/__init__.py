"""Diagnostics collection for decode and unpack.

Tracks skipped children and fatal errors throughout loading.
"""

from assessment_model.diagnostics.collector import LoadReport
from assessment_model.diagnostics.models import LoadDiagnostic, LoadIssue, LoadStatus

__all__ = [
    "LoadReport",
    "LoadDiagnostic",
    "LoadIssue",
    "LoadStatus",
]
