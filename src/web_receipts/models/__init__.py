"""Data models for web-receipts."""

from web_receipts.models.browser import Browser
from web_receipts.models.request import ExportRequest, FilenameCandidate
from web_receipts.models.results import ExportOutcome, Status

__all__ = [
    "Browser",
    # Requests
    "ExportRequest",
    "FilenameCandidate",
    # Results
    "ExportOutcome",
    "Status",
]
