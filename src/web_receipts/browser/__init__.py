"""Browser detection and tab queries."""

from web_receipts.browser.detector import BrowserDetector
from web_receipts.browser.tabs import fetch_tab_title

__all__ = [
    "BrowserDetector",
    "fetch_tab_title",
]
