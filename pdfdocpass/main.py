"""Compatibility module re-exporting the engine entry points.

The implementation lives in `engine.py`; this module keeps
`from pdfdocpass.main import pdfdocpass` working for callers.
"""

from .engine import Mode, PasswordEncodingError, cli, main, pdfdocpass

__all__ = ["Mode", "PasswordEncodingError", "cli", "main", "pdfdocpass"]
