"""Filesystem verification that an exported PDF actually exists."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from web_receipts.core.exceptions import DestinationUnavailableError
from web_receipts.models.request import PDF_SUFFIX

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_INTERVAL = 0.5


@dataclass
class VerificationResult:
    """Result of polling for an exported file.

    Attributes:
        passed: Whether the file was observed
        path: File that was observed (or the expected path on timeout)
        attempts: Number of checks made
        details: Extra context for logs
    """

    passed: bool
    path: Path | None = None
    attempts: int = 0
    details: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        status = "passed" if self.passed else "timed out"
        return f"VerificationResult({status}, attempts={self.attempts})"


def list_pdfs(folder: Path) -> set[str]:
    """Names of the PDFs currently in ``folder`` (empty if it is missing)."""
    if not folder.is_dir():
        return set()
    return {p.name for p in folder.iterdir() if p.suffix.lower() == PDF_SUFFIX}


class CompletionVerifier:
    """Polls the filesystem until an export shows up or the budget runs out.

    UI automation cannot tell whether the browser really saved anything, so
    this is the only success signal. A render that finishes after the budget
    is reported as a failure even if the file appears moments later.

    Example:
        verifier = CompletionVerifier(max_attempts=10, interval=0.5)
        result = verifier.verify(Path("~/Documents/Web Receipts/Invoice.pdf"))
        if not result.passed:
            ...
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval: float = DEFAULT_INTERVAL,
        sleep: Callable[[float], None] | None = None,
        exists: Callable[[Path], bool] | None = None,
        lister: Callable[[Path], Iterable[str]] | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            max_attempts: Number of checks before giving up
            interval: Seconds between checks
            sleep: Replacement for time.sleep
            exists: Replacement for Path.exists
            lister: Replacement for list_pdfs
        """
        self.max_attempts = max_attempts
        self.interval = interval
        self._sleep = sleep or time.sleep
        self._exists = exists or Path.exists
        self._list = lister or list_pdfs

    @property
    def budget_seconds(self) -> float:
        return self.max_attempts * self.interval

    def _poll(
        self, check: Callable[[], Path | None], label: str, folder: Path
    ) -> VerificationResult:
        for attempt in range(1, self.max_attempts + 1):
            self._sleep(self.interval)
            try:
                found = check()
            except OSError as e:
                raise DestinationUnavailableError(str(folder), e.strerror or str(e)) from e
            if found is not None:
                logger.info(f"Found {found.name} after {attempt} check(s)")
                return VerificationResult(passed=True, path=found, attempts=attempt)
            logger.debug(f"Check {attempt}/{self.max_attempts}: {label} not there yet")

        logger.warning(
            f"{label} did not appear within {self.budget_seconds:.1f}s"
        )
        return VerificationResult(passed=False, attempts=self.max_attempts)

    def verify(self, expected_path: Path) -> VerificationResult:
        """Wait for ``expected_path`` to exist.

        Args:
            expected_path: Full path of the PDF the protocol should write

        Returns:
            VerificationResult, passed on the first check that sees the file

        Raises:
            DestinationUnavailableError: If the folder cannot be read
        """
        result = self._poll(
            lambda: expected_path if self._exists(expected_path) else None,
            expected_path.name,
            expected_path.parent,
        )
        if not result.passed:
            result.path = expected_path
        return result

    def verify_new_file(self, folder: Path, before: Iterable[str]) -> VerificationResult:
        """Wait for any PDF in ``folder`` that is not in ``before``.

        Used when the browser or PDF workflow chooses the name itself.

        Args:
            folder: Destination folder
            before: PDF names present before the protocol ran

        Returns:
            VerificationResult whose path is the newly written PDF
        """
        known = set(before)

        def check() -> Path | None:
            new = sorted(set(self._list(folder)) - known)
            return folder / new[0] if new else None

        result = self._poll(check, f"a new PDF in {folder}", folder)
        if not result.passed:
            result.path = folder
        return result
