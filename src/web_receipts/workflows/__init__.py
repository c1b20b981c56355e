"""Workflow orchestrators for web-receipts."""

from web_receipts.workflows.export import ExportWorkflow

__all__ = [
    "ExportWorkflow",
]
