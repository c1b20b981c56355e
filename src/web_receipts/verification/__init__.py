"""Export completion verification."""

from web_receipts.verification.completion import (
    CompletionVerifier,
    VerificationResult,
    list_pdfs,
)

__all__ = [
    "CompletionVerifier",
    "VerificationResult",
    "list_pdfs",
]
