"""Web technology scanner."""

from recontools.scanners.webtech.scanner import WebTechScanner

__all__ = ["WebTechScanner"]
