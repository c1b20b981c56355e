"""web-receipts - Save the frontmost browser tab as a PDF receipt.

Detects whether Safari or Chrome is frontmost, drives its print surface
through scripted UI interactions, and confirms the PDF landed in
~/Documents/Web Receipts/. Requires macOS with Accessibility permission.

Library Usage:
    >>> from web_receipts import Config, ExportWorkflow
    >>>
    >>> outcome = ExportWorkflow(Config.from_env()).run()
    >>> print(outcome.summary)
    Saved: Invoice #42- March.pdf

CLI Usage:
    $ web-receipts
    $ web-receipts --list-protocols
    $ web-receipts --version
"""

__version__ = "0.1.0"

# Core
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

# Models
from web_receipts.models import (
    Browser,
    ExportOutcome,
    ExportRequest,
    FilenameCandidate,
    Status,
)

# Automation
from web_receipts.automation import (
    AutomationStep,
    OsaScriptDriver,
    ProtocolRunner,
    UIAutomationDriver,
)

# Components
from web_receipts.browser import BrowserDetector
from web_receipts.protocols import ExportProtocol, ProtocolRegistry
from web_receipts.storage import FilenameAllocator
from web_receipts.verification import CompletionVerifier

# Workflows
from web_receipts.workflows import ExportWorkflow

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "WebReceiptsError",
    "AutomationFailedError",
    "FilenameExhaustedError",
    "NoBrowserFoundError",
    "ProtocolNotFoundError",
    "DestinationUnavailableError",
    "TitleUnavailableError",
    "VerificationTimeoutError",
    # Models
    "Browser",
    "ExportOutcome",
    "ExportRequest",
    "FilenameCandidate",
    "Status",
    # Automation
    "AutomationStep",
    "OsaScriptDriver",
    "ProtocolRunner",
    "UIAutomationDriver",
    # Components
    "BrowserDetector",
    "ExportProtocol",
    "ProtocolRegistry",
    "FilenameAllocator",
    "CompletionVerifier",
    # Workflows
    "ExportWorkflow",
]
