"""Frontmost browser detection."""

import logging

from web_receipts.automation.applescript import FRONTMOST_APP_SCRIPT
from web_receipts.automation.driver import UIAutomationDriver
from web_receipts.core.exceptions import AutomationFailedError
from web_receipts.models.browser import Browser

logger = logging.getLogger(__name__)


class BrowserDetector:
    """Finds out which supported browser, if any, owns keyboard focus.

    Example:
        detector = BrowserDetector(OsaScriptDriver())
        browser = detector.detect_frontmost()
        if browser is None:
            raise NoBrowserFoundError()
    """

    def __init__(self, driver: UIAutomationDriver) -> None:
        self.driver = driver
        self.last_app_name: str | None = None

    def frontmost_app_name(self) -> str | None:
        """Name of the frontmost application process, or None on failure."""
        try:
            name = self.driver.evaluate(FRONTMOST_APP_SCRIPT)
        except AutomationFailedError as e:
            logger.warning(f"Could not query frontmost application: {e.reason}")
            return None
        return name or None

    def detect_frontmost(self) -> Browser | None:
        """Map the frontmost application to a supported browser.

        Returns:
            The Browser, or None for any other application or a failed query
        """
        self.last_app_name = self.frontmost_app_name()
        browser = Browser.from_app_name(self.last_app_name)
        logger.debug(f"Frontmost application: {self.last_app_name!r} -> {browser}")
        return browser
