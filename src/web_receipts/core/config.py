"""Configuration management for web-receipts."""

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


DEFAULT_DESTINATION = Path.home() / "Documents" / "Web Receipts"
DEFAULT_WORKFLOW_NAME = "Save to Web Receipts"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _optional_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


def _detect_os_version() -> str:
    """Return the running macOS version ("14.5"), or "" off macOS."""
    return platform.mac_ver()[0]


@dataclass
class Config:
    """Runtime configuration for web-receipts.

    All values can be overridden via environment variables with the
    WEB_RECEIPTS_ prefix, e.g. WEB_RECEIPTS_VERIFY_ATTEMPTS=20. A .env file
    in the working directory is loaded first when python-dotenv is installed.

    The destination is where the run looks for the finished PDF. Chrome is
    told to save there, but Safari's PDF workflow picks its own folder, so
    when WEB_RECEIPTS_DESTINATION is overridden the workflow must save to the
    same folder or Safari exports will time out.
    """

    # Output
    destination: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WEB_RECEIPTS_DESTINATION", str(DEFAULT_DESTINATION))
        ).expanduser()
    )
    max_suffix: int = field(
        default_factory=lambda: int(os.environ.get("WEB_RECEIPTS_MAX_SUFFIX", "10000"))
    )

    # Verification budget
    verify_attempts: int = field(
        default_factory=lambda: int(os.environ.get("WEB_RECEIPTS_VERIFY_ATTEMPTS", "10"))
    )
    verify_interval: float = field(
        default_factory=lambda: float(os.environ.get("WEB_RECEIPTS_VERIFY_INTERVAL", "0.5"))
    )

    # UI automation
    timing_scale: float = field(
        default_factory=lambda: float(os.environ.get("WEB_RECEIPTS_TIMING_SCALE", "1.0"))
    )
    workflow_name: str = field(
        default_factory=lambda: os.environ.get(
            "WEB_RECEIPTS_WORKFLOW_NAME", DEFAULT_WORKFLOW_NAME
        )
    )
    os_version: str = field(
        default_factory=lambda: os.environ.get("WEB_RECEIPTS_OS_VERSION", "")
        or _detect_os_version()
    )
    osascript_timeout: float | None = field(
        default_factory=lambda: _optional_float("WEB_RECEIPTS_OSASCRIPT_TIMEOUT")
    )

    # Logging
    log_level: str = field(
        default_factory=lambda: os.environ.get("WEB_RECEIPTS_LOG_LEVEL", "WARNING")
    )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range.
        """
        if not self.destination.is_absolute():
            raise ValueError(f"Destination must be an absolute path: {self.destination}")
        if self.verify_attempts < 1:
            raise ValueError("WEB_RECEIPTS_VERIFY_ATTEMPTS must be at least 1")
        if self.verify_interval < 0:
            raise ValueError("WEB_RECEIPTS_VERIFY_INTERVAL must not be negative")
        if self.max_suffix < 2:
            raise ValueError("WEB_RECEIPTS_MAX_SUFFIX must be at least 2")
        if self.timing_scale <= 0:
            raise ValueError("WEB_RECEIPTS_TIMING_SCALE must be positive")
        if not self.workflow_name.strip():
            raise ValueError("WEB_RECEIPTS_WORKFLOW_NAME must not be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"WEB_RECEIPTS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}: {self.log_level}"
            )

    @classmethod
    def from_env(cls) -> "Config":
        """Create a Config instance from environment variables.

        Returns:
            Config instance with values from environment.
        """
        return cls()
