"""Registry mapping (browser, macOS version) to an export protocol."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from web_receipts.core.exceptions import ProtocolNotFoundError
from web_receipts.models.browser import Browser
from web_receipts.protocols import chrome, safari
from web_receipts.protocols.base import ExportProtocol, parse_os_version

logger = logging.getLogger(__name__)


class ProtocolRegistry:
    """Capability table: each browser dispatches to its protocol variants.

    Example:
        registry = ProtocolRegistry.default()
        protocol = registry.select(Browser.SAFARI, "14.5")
    """

    def __init__(self, protocols: Iterable[ExportProtocol] = ()) -> None:
        self._protocols: dict[str, ExportProtocol] = {}
        for protocol in protocols:
            self.register(protocol)

    def register(self, protocol: ExportProtocol) -> None:
        """Add a protocol.

        Raises:
            ValueError: If the name is already registered
        """
        if protocol.name in self._protocols:
            raise ValueError(f"Protocol already registered: {protocol.name}")
        self._protocols[protocol.name] = protocol

    def get(self, name: str) -> ExportProtocol:
        try:
            return self._protocols[name]
        except KeyError:
            raise ValueError(f"Unknown protocol: {name}") from None

    def for_browser(self, browser: Browser) -> list[ExportProtocol]:
        return [p for p in self._protocols.values() if p.browser == browser]

    def select(self, browser: Browser, os_version: str | None = None) -> ExportProtocol:
        """Pick the protocol for ``browser`` on ``os_version``.

        Registration order breaks ties when ranges overlap.

        Raises:
            ProtocolNotFoundError: If no registered variant covers the version
        """
        version = parse_os_version(os_version)
        for protocol in self.for_browser(browser):
            if protocol.covers(version):
                logger.debug(
                    f"Selected protocol {protocol.name} for {browser.label} "
                    f"on macOS {os_version or 'unknown'}"
                )
                return protocol
        raise ProtocolNotFoundError(browser.label, os_version)

    def __iter__(self) -> Iterator[ExportProtocol]:
        return iter(self._protocols.values())

    def __len__(self) -> int:
        return len(self._protocols)

    @classmethod
    def default(cls) -> "ProtocolRegistry":
        """Registry with the built-in Safari and Chrome protocols."""
        return cls(safari.PROTOCOLS + chrome.PROTOCOLS)
