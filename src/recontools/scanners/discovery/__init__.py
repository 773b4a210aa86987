"""robots.txt discovery scanner."""

from recontools.scanners.discovery.scanner import RobotsScanner, parse_robots_txt

__all__ = ["RobotsScanner", "parse_robots_txt"]
