"""Per-browser export protocols."""

from web_receipts.protocols.base import ExportProtocol, parse_os_version
from web_receipts.protocols.chrome import CHROME_SYSTEM_DIALOG
from web_receipts.protocols.registry import ProtocolRegistry
from web_receipts.protocols.safari import SAFARI_WORKFLOW, SAFARI_WORKFLOW_LEGACY

__all__ = [
    "ExportProtocol",
    "ProtocolRegistry",
    "parse_os_version",
    # Built-in protocols
    "SAFARI_WORKFLOW",
    "SAFARI_WORKFLOW_LEGACY",
    "CHROME_SYSTEM_DIALOG",
]
