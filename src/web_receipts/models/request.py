"""Request models for a single export run."""

from dataclasses import dataclass
from pathlib import Path

from web_receipts.models.browser import Browser

PDF_SUFFIX = ".pdf"


@dataclass(frozen=True)
class FilenameCandidate:
    """A base name (no extension) inside a destination folder.

    Attributes:
        base_name: Sanitized name without the .pdf extension
        folder: Destination folder
    """

    base_name: str
    folder: Path

    @property
    def filename(self) -> str:
        return f"{self.base_name}{PDF_SUFFIX}"

    @property
    def path(self) -> Path:
        return self.folder / self.filename


@dataclass(frozen=True)
class ExportRequest:
    """Everything a protocol needs to export one tab.

    Attributes:
        browser: Browser that owns the tab
        destination: Absolute destination folder
        base_name: Allocated base filename, if the title was available
    """

    browser: Browser
    destination: Path
    base_name: str | None = None

    @property
    def candidate(self) -> FilenameCandidate | None:
        if self.base_name is None:
            return None
        return FilenameCandidate(self.base_name, self.destination)

    @property
    def expected_path(self) -> Path | None:
        candidate = self.candidate
        return candidate.path if candidate else None
