"""Active tab queries."""

import logging

from web_receipts.automation.applescript import TAB_TITLE_SCRIPTS
from web_receipts.automation.driver import UIAutomationDriver
from web_receipts.core.exceptions import AutomationFailedError, TitleUnavailableError
from web_receipts.models.browser import Browser

logger = logging.getLogger(__name__)


def fetch_tab_title(driver: UIAutomationDriver, browser: Browser) -> str:
    """Read the title of the browser's active tab in its front window.

    Args:
        driver: Driver used to run the query
        browser: Browser to ask

    Returns:
        The raw, unsanitized title

    Raises:
        TitleUnavailableError: If the query fails or returns nothing
    """
    script = TAB_TITLE_SCRIPTS[browser.app_name]
    try:
        title = driver.evaluate(script)
    except AutomationFailedError as e:
        raise TitleUnavailableError(
            f"Could not read the active tab title from {browser.label}",
            browser=browser.label,
            details={"reason": e.reason},
        ) from e

    if not title.strip():
        raise TitleUnavailableError(
            f"{browser.label} returned an empty tab title", browser=browser.label
        )

    logger.debug(f"Active tab title: {title!r}")
    return title
