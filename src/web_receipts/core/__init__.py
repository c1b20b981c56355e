"""Core infrastructure for web-receipts."""

from web_receipts.core.config import Config
from web_receipts.core.exceptions import (
    WebReceiptsError,
    AutomationFailedError,
    FilenameExhaustedError,
    NoBrowserFoundError,
    ProtocolNotFoundError,
    DestinationUnavailableError,
    TitleUnavailableError,
    VerificationTimeoutError,
)

__all__ = [
    "Config",
    "WebReceiptsError",
    "AutomationFailedError",
    "FilenameExhaustedError",
    "NoBrowserFoundError",
    "ProtocolNotFoundError",
    "DestinationUnavailableError",
    "TitleUnavailableError",
    "VerificationTimeoutError",
]
