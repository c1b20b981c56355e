"""Destination folder naming."""

from web_receipts.storage.filenames import FilenameAllocator, allocate, sanitize

__all__ = [
    "FilenameAllocator",
    "allocate",
    "sanitize",
]
