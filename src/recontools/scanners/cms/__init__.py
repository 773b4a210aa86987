"""CMS detection scanner."""

from recontools.scanners.cms.scanner import CMSScanner, extract_generator_version

__all__ = ["CMSScanner", "extract_generator_version"]
