"""erudify: sentence drills and adaptive review scheduling for Mandarin."""

from erudify.consts import VERSION as __version__

__all__ = ["__version__"]
