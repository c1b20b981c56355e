"""Result models for web-receipts runs."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from web_receipts.models.browser import Browser

CONFIRMATION_MESSAGE = "Saved to Web Receipts"


class Status(str, Enum):
    """Terminal status of an export run."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ExportOutcome:
    """Terminal result of one orchestrator run.

    Attributes:
        status: SUCCESS or FAILED
        browser: Browser that was exported (None if detection failed)
        path: PDF written to disk (SUCCESS only)
        protocol: Name of the protocol that ran
        error_kind: Exception class name on failure
        message: Human-readable message
        duration_seconds: Wall-clock time of the run
        timestamp: When the run finished
    """

    status: Status
    browser: Browser | None = None
    path: Path | None = None
    protocol: str = ""
    error_kind: str = ""
    message: str = ""
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_success(self) -> bool:
        return self.status == Status.SUCCESS

    @property
    def filename(self) -> str | None:
        return self.path.name if self.path else None

    @property
    def summary(self) -> str:
        """Line printed to stdout on success."""
        if self.filename:
            return f"Saved: {self.filename}"
        return CONFIRMATION_MESSAGE

    @classmethod
    def success(cls, path: Path | None, **kwargs: Any) -> "ExportOutcome":
        return cls(status=Status.SUCCESS, path=path, **kwargs)

    @classmethod
    def failure(cls, error: Exception, **kwargs: Any) -> "ExportOutcome":
        return cls(
            status=Status.FAILED,
            error_kind=type(error).__name__,
            message=str(error),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "browser": self.browser.value if self.browser else None,
            "path": str(self.path) if self.path else None,
            "protocol": self.protocol,
            "error_kind": self.error_kind,
            "message": self.message,
            "duration_seconds": self.duration_seconds,
            "timestamp": self.timestamp.isoformat(),
        }
