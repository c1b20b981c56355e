"""Supported browsers."""

from enum import Enum


class Browser(str, Enum):
    """Browsers whose active tab can be exported."""

    SAFARI = "safari"
    CHROME = "chrome"

    @property
    def app_name(self) -> str:
        """Application/process name as reported by System Events."""
        return APP_NAMES[self]

    @property
    def label(self) -> str:
        return "Chrome" if self is Browser.CHROME else "Safari"

    @classmethod
    def from_app_name(cls, name: str | None) -> "Browser | None":
        """Map a frontmost application name to a browser.

        The match is exact but case-insensitive; anything else is None.
        """
        if not name:
            return None
        return _BY_APP_NAME.get(name.strip().lower())


APP_NAMES: dict[Browser, str] = {
    Browser.SAFARI: "Safari",
    Browser.CHROME: "Google Chrome",
}

_BY_APP_NAME = {name.lower(): browser for browser, name in APP_NAMES.items()}
