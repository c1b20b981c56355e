"""Command-line interface for web-receipts."""
