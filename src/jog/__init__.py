"""jog: run parameterized shell tasks declared in jogfiles."""

from jog.config import VERSION as __version__

__all__ = ["__version__"]
