"""Contact email extraction scanner."""

from recontools.scanners.email.scanner import EmailScanner, extract_emails

__all__ = ["EmailScanner", "extract_emails"]
