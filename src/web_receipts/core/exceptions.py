"""Custom exceptions for web-receipts."""

from typing import Any


class WebReceiptsError(Exception):
    """Base exception for all web-receipts errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class NoBrowserFoundError(WebReceiptsError):
    """Raised when the frontmost application is not a supported browser."""

    def __init__(
        self,
        message: str = "No supported browser (Safari or Chrome) is frontmost",
        app_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.app_name = app_name


class TitleUnavailableError(WebReceiptsError):
    """Raised when the active tab title cannot be read."""

    def __init__(
        self,
        message: str = "Could not read the title of the active tab",
        browser: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.browser = browser


class AutomationFailedError(WebReceiptsError):
    """Raised when a scripted UI interaction itself errors.

    A driver call that returns normally does not prove the target
    application reacted to it; only this failure mode is observable.
    """

    def __init__(
        self,
        message: str,
        step: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"AppleScript error: {message}", details)
        self.reason = message
        self.step = step


class VerificationTimeoutError(WebReceiptsError):
    """Raised when the exported PDF never appears within the polling budget."""

    def __init__(
        self,
        path: str,
        attempts: int,
        interval: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"PDF was not written to {path} after {attempts} checks "
            f"({attempts * interval:.1f}s)",
            details,
        )
        self.path = path
        self.attempts = attempts
        self.interval = interval


class FilenameExhaustedError(WebReceiptsError):
    """Raised when no free numbered suffix is found for a base name."""

    def __init__(
        self,
        base_name: str,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"No free filename for '{base_name}' after {attempts} attempts",
            details,
        )
        self.base_name = base_name
        self.attempts = attempts


class ProtocolNotFoundError(WebReceiptsError):
    """Raised when no export protocol is registered for a browser/OS pair."""

    def __init__(
        self,
        browser: str,
        os_version: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        version = os_version or "unknown"
        super().__init__(
            f"No export protocol for {browser} on macOS {version}", details
        )
        self.browser = browser
        self.os_version = os_version


class DestinationUnavailableError(WebReceiptsError):
    """Raised when the destination folder cannot be created or read."""

    def __init__(
        self,
        path: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Cannot use destination {path}: {reason}", details)
        self.path = path
        self.reason = reason
