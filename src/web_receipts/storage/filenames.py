"""Filename sanitization and collision-free allocation.

Tab titles become base names (no extension). If ``<base>.pdf`` is taken,
numbered variants ``<base>.2``, ``<base>.3`` ... are probed in order. The
destination folder itself is the only record of what is taken; there is no
locking, so two concurrent runs can pick the same name.
"""

import logging
import unicodedata
from pathlib import Path
from typing import Callable

from web_receipts.core.exceptions import DestinationUnavailableError, FilenameExhaustedError
from web_receipts.models.request import PDF_SUFFIX, FilenameCandidate

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Untitled"
MAX_NAME_LENGTH = 200
DEFAULT_MAX_SUFFIX = 10000
REPLACED_CHARS = (":", "/", "\\")
REPLACEMENT = "-"

_ZWJ = "\u200d"


def _extends_cluster(char: str) -> bool:
    """True for characters that attach to the preceding character."""
    if unicodedata.category(char) in ("Mn", "Mc", "Me"):
        return True
    code = ord(char)
    return (
        char == _ZWJ
        or 0xFE00 <= code <= 0xFE0F  # variation selectors
        or 0xE0100 <= code <= 0xE01EF
        or 0x1F3FB <= code <= 0x1F3FF  # skin tone modifiers
        or 0xE0020 <= code <= 0xE007F  # tag characters
    )


def _is_regional_indicator(char: str) -> bool:
    return 0x1F1E6 <= ord(char) <= 0x1F1FF


def grapheme_clusters(text: str) -> list[str]:
    """Split text into user-perceived characters.

    Handles combining marks, variation selectors, emoji modifiers, ZWJ
    sequences and flag pairs, which covers what shows up in page titles.
    """
    clusters: list[str] = []
    joined = False
    for char in text:
        if clusters and (joined or _extends_cluster(char)):
            clusters[-1] += char
            joined = char == _ZWJ
            continue
        if (
            clusters
            and _is_regional_indicator(char)
            and len(clusters[-1]) == 1
            and _is_regional_indicator(clusters[-1])
        ):
            clusters[-1] += char
            continue
        if char == "\n" and clusters and clusters[-1] == "\r":
            clusters[-1] += char
            continue
        clusters.append(char)
        joined = False
    return clusters


def truncate_graphemes(text: str, limit: int) -> str:
    """Truncate text to at most ``limit`` user-perceived characters."""
    clusters = grapheme_clusters(text)
    if len(clusters) <= limit:
        return text
    return "".join(clusters[:limit])


def sanitize(title: str | None, max_len: int = MAX_NAME_LENGTH) -> str:
    """Turn a tab title into a filesystem-safe base name.

    Replaces ``:``, ``/`` and ``\\`` with ``-``, trims surrounding whitespace
    and truncates to ``max_len`` user-perceived characters. An empty result
    becomes "Untitled". Sanitizing an already sanitized name is a no-op.

    Args:
        title: Raw tab title
        max_len: Maximum length in user-perceived characters

    Returns:
        Base name without extension
    """
    if not title:
        return FALLBACK_NAME

    name = str(title)
    for char in REPLACED_CHARS:
        name = name.replace(char, REPLACEMENT)

    # Strip again after truncating so a cut never leaves trailing whitespace
    name = truncate_graphemes(name.strip(), max_len).strip()
    return name or FALLBACK_NAME


def allocate(
    base: str,
    folder: Path,
    max_suffix: int = DEFAULT_MAX_SUFFIX,
    exists: Callable[[Path], bool] | None = None,
) -> str:
    """Find a base name whose PDF does not exist yet in ``folder``.

    Args:
        base: Sanitized base name
        folder: Destination folder
        max_suffix: Highest numbered suffix to try before giving up
        exists: Existence check, defaults to Path.exists

    Returns:
        ``base`` if free, otherwise the first free ``base.N`` with N >= 2

    Raises:
        FilenameExhaustedError: If every candidate up to max_suffix is taken
        DestinationUnavailableError: If the folder cannot be read
    """
    exists = exists or Path.exists

    def taken(name: str) -> bool:
        try:
            return exists(folder / f"{name}{PDF_SUFFIX}")
        except OSError as e:
            raise DestinationUnavailableError(str(folder), e.strerror or str(e)) from e

    if not taken(base):
        return base

    for n in range(2, max_suffix + 1):
        candidate = f"{base}.{n}"
        if not taken(candidate):
            logger.debug(f"'{base}{PDF_SUFFIX}' is taken, using '{candidate}{PDF_SUFFIX}'")
            return candidate

    raise FilenameExhaustedError(base, attempts=max_suffix, details={"folder": str(folder)})


class FilenameAllocator:
    """Allocates collision-free PDF names inside one destination folder.

    Example:
        allocator = FilenameAllocator(Path("~/Documents/Web Receipts").expanduser())
        candidate = allocator.candidate_for("Invoice #42: March")
        print(candidate.path)  # .../Invoice #42- March.pdf
    """

    def __init__(
        self,
        folder: Path,
        max_suffix: int = DEFAULT_MAX_SUFFIX,
        exists: Callable[[Path], bool] | None = None,
    ) -> None:
        self.folder = folder
        self.max_suffix = max_suffix
        self._exists = exists

    def sanitize(self, title: str | None) -> str:
        return sanitize(title)

    def allocate(self, base: str) -> str:
        return allocate(base, self.folder, self.max_suffix, self._exists)

    def candidate_for(self, title: str | None) -> FilenameCandidate:
        """Sanitize ``title`` and allocate a free name for it."""
        base = self.allocate(self.sanitize(title))
        return FilenameCandidate(base_name=base, folder=self.folder)
