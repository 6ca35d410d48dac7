"""Runtime version, taken from the engine."""

from .main import pdfdocpass

__version__ = pdfdocpass.ENGINE_VERSION

__all__ = ["__version__"]
