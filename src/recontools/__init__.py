"""ReconTools - passive web reconnaissance toolkit."""

from recontools.version import __version__

__all__ = ["__version__"]
