"""
PDFDOCPASS - PDFDocEncoding passwords for legacy PDF security

This module converts UTF-8 passwords into the single-byte PDFDocEncoding used
by revision 2-4 PDF security handlers, the way Acrobat 7 on Windows does.
Importing it also registers the "pdfdocpass-strict" and
"pdfdocpass-permissive" Python codecs.
"""

from .main import *
from . import codec as _codec  # noqa: F401  (registers the codecs)
from .version import __version__

FAILED = pdfdocpass.FAILED


def measure(password, mode):
    """
    Dry-run a password conversion.

    Args:
        password: UTF-8 bytes or a str
        mode: Mode.STRICT / "encrypt" or Mode.PERMISSIVE / "decrypt"

    Returns:
        Number of PDFDocEncoding bytes the password converts to, or -1
        when it is malformed or not accepted in this mode
    """
    return pdfdocpass.measure(password, mode)


def convert(password, mode, output):
    """
    Convert a password into a caller-supplied buffer.

    Args:
        password: UTF-8 bytes or a str
        mode: Mode.STRICT / "encrypt" or Mode.PERMISSIVE / "decrypt"
        output: bytearray or writable memoryview, sized with measure()

    Returns:
        Bytes written, or -1 on rejection (buffer contents then undefined)
    """
    return pdfdocpass.convert(password, mode, output)


def utf8_password_to_pdfdoc(password, encrypt: bool, output=None):
    """
    Size or convert a password in one call.

    Note:
        - encrypt=True applies the strict policy
        - output=None only measures
    """
    return pdfdocpass.utf8_password_to_pdfdoc(password, encrypt, output)


def encode_password(password, mode) -> bytes:
    """
    Convert a password and return the bytes.

    Raises:
        PasswordEncodingError: the password is not accepted in this mode
    """
    return pdfdocpass.encode_password(password, mode)


def is_acceptable(password, mode) -> bool:
    return pdfdocpass.is_acceptable(password, mode)


__all__ = [
    "FAILED",
    "Mode",
    "PasswordEncodingError",
    "__version__",
    "cli",
    "convert",
    "encode_password",
    "is_acceptable",
    "main",
    "measure",
    "pdfdocpass",
    "utf8_password_to_pdfdoc",
]
