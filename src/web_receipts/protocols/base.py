"""Export protocol definition."""

from dataclasses import dataclass

from web_receipts.automation.steps import AutomationStep, StepKind
from web_receipts.models.browser import Browser

# macOS version as a comparable tuple, e.g. (14, 5)
OSVersion = tuple[int, ...]


def parse_os_version(version: str | None) -> OSVersion | None:
    """Parse "14.5.1" into (14, 5, 1). Empty or malformed input gives None."""
    if not version:
        return None
    parts = []
    for piece in version.strip().split("."):
        if not piece.isdigit():
            break
        parts.append(int(piece))
    return tuple(parts) or None


def format_os_range(min_os: OSVersion | None, max_os: OSVersion | None) -> str:
    def fmt(v: OSVersion) -> str:
        return ".".join(str(p) for p in v)

    if min_os and max_os:
        return f">={fmt(min_os)}, <{fmt(max_os)}"
    if min_os:
        return f">={fmt(min_os)}"
    if max_os:
        return f"<{fmt(max_os)}"
    return "any"


@dataclass(frozen=True)
class ExportProtocol:
    """A fixed, linear script that makes a browser write the tab as a PDF.

    Protocols are data. When a browser or macOS release moves a control,
    the fix is a new or edited protocol, not a code change elsewhere.

    Attributes:
        name: Unique protocol identifier
        browser: Browser this protocol drives
        steps: Ordered steps, run without branching
        min_os: Lowest macOS version covered (inclusive), None for no bound
        max_os: First macOS version no longer covered, None for no bound
        names_file: Whether the protocol types the filename and folder
            itself. When False the browser or PDF workflow picks the name.
        description: One-line summary for listings
    """

    name: str
    browser: Browser
    steps: tuple[AutomationStep, ...]
    min_os: OSVersion | None = None
    max_os: OSVersion | None = None
    names_file: bool = False
    description: str = ""

    def covers(self, os_version: OSVersion | None) -> bool:
        """Check whether this protocol applies to ``os_version``.

        An unknown version is treated as the newest release, so only
        protocols without an upper bound cover it.
        """
        if os_version is None:
            return self.max_os is None
        if self.min_os is not None and os_version < self.min_os:
            return False
        if self.max_os is not None and os_version >= self.max_os:
            return False
        return True

    @property
    def os_range(self) -> str:
        return format_os_range(self.min_os, self.max_os)

    @property
    def placeholders(self) -> set[str]:
        """All placeholders referenced by any step."""
        names: set[str] = set()
        for step in self.steps:
            names |= step.placeholders
        return names

    @property
    def total_wait(self) -> float:
        """Sum of WAIT durations at timing scale 1.0."""
        return sum(s.seconds for s in self.steps if s.kind == StepKind.WAIT)
