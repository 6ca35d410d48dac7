"""
Password-dependent parts of the PDF standard security handler (revisions 2-4).

Passwords are converted with the PDFDocEncoding codec before they reach the
key derivation: strictly when a document is being encrypted, permissively when
a user is trying to open one.  MD5 and RC4 come from `cryptography`; RC4 lives
in its ``decrepit`` module, which requires cryptography 43 or newer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from cryptography.hazmat.decrepit.ciphers.algorithms import ARC4
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher

from .engine import Mode, PasswordEncodingError, pdfdocpass

PasswordLike = Union[str, bytes, bytearray, memoryview]

PASSWORD_PADDING = bytes.fromhex(
    "28bf4e5e4e758a4164004e56fffa0108"
    "2e2e00b6d0683e802f0ca9fe6453697a"
)

# RC4 key sizes accepted by cryptography's ARC4, in bytes
_RC4_KEY_LENGTHS = (5, 7, 8, 10, 16)
_MD5_ROUNDS = 50
_RC4_ROUNDS = 19


@dataclass(frozen=True)
class StandardSecurity:
    """Encryption dictionary values that feed the key derivation."""

    revision: int
    key_length: int
    permissions: int
    document_id: bytes
    encrypt_metadata: bool = True

    def __post_init__(self) -> None:
        if self.revision not in (2, 3, 4):
            raise ValueError(f"Unsupported security handler revision: {self.revision}")
        if self.revision == 2 and self.key_length != 5:
            raise ValueError("Revision 2 requires a 40-bit (5 byte) key")
        if self.key_length not in _RC4_KEY_LENGTHS:
            raise ValueError(f"Unsupported key length: {self.key_length} bytes")
        if not -(1 << 31) <= self.permissions < (1 << 32):
            raise ValueError("Permissions must fit in 32 bits")

    @property
    def permissions_bytes(self) -> bytes:
        return (self.permissions & 0xFFFFFFFF).to_bytes(4, "little")


class EncryptionEntries(NamedTuple):
    owner_entry: bytes
    user_entry: bytes
    file_key: bytes


def _md5(*parts: bytes) -> bytes:
    digest = hashes.Hash(hashes.MD5())
    for part in parts:
        digest.update(part)
    return digest.finalize()


def _rc4(key: bytes, data: bytes) -> bytes:
    return Cipher(ARC4(key), mode=None).encryptor().update(data)


def _rc4_rounds(key: bytes, data: bytes, rounds) -> bytes:
    for round_index in rounds:
        data = _rc4(bytes(b ^ round_index for b in key), data)
    return data


def pad_password(raw: bytes) -> bytes:
    """Truncate or pad a PDFDocEncoding password to exactly 32 bytes."""
    raw = bytes(raw[:32])
    return raw + PASSWORD_PADDING[:32 - len(raw)]


def _owner_rc4_key(owner_raw: bytes, security: StandardSecurity) -> bytes:
    digest = _md5(pad_password(owner_raw))
    if security.revision >= 3:
        for _ in range(_MD5_ROUNDS):
            digest = _md5(digest)
    return digest[:security.key_length]


def compute_owner_entry(owner_raw: bytes, user_raw: bytes, security: StandardSecurity) -> bytes:
    """Compute the O entry from already-encoded owner and user passwords."""
    key = _owner_rc4_key(owner_raw or user_raw, security)
    entry = _rc4(key, pad_password(user_raw))
    if security.revision >= 3:
        entry = _rc4_rounds(key, entry, range(1, _RC4_ROUNDS + 1))
    return entry


def compute_file_key(user_raw: bytes, owner_entry: bytes, security: StandardSecurity) -> bytes:
    """Derive the document encryption key from an encoded user password."""
    parts = [pad_password(user_raw), owner_entry, security.permissions_bytes, security.document_id]
    if security.revision >= 4 and not security.encrypt_metadata:
        parts.append(b"\xff\xff\xff\xff")
    digest = _md5(*parts)
    if security.revision >= 3:
        for _ in range(_MD5_ROUNDS):
            digest = _md5(digest[:security.key_length])
    return digest[:security.key_length]


def compute_user_entry(file_key: bytes, security: StandardSecurity) -> bytes:
    """Compute the U entry for a file key."""
    if security.revision == 2:
        return _rc4(file_key, PASSWORD_PADDING)
    entry = _rc4(file_key, _md5(PASSWORD_PADDING, security.document_id))
    entry = _rc4_rounds(file_key, entry, range(1, _RC4_ROUNDS + 1))
    # the last 16 bytes are arbitrary
    return entry + bytes(16)


def setup_encryption(
    owner_password: PasswordLike,
    user_password: PasswordLike,
    security: StandardSecurity,
) -> EncryptionEntries:
    """
    Produce the O and U entries plus the file key for a new document.

    Both passwords are encoded in strict mode; a password that another
    platform may not be able to reproduce raises PasswordEncodingError.
    An empty owner password falls back to the user password.
    """
    user_raw = pdfdocpass.encode_password(user_password, Mode.STRICT)
    owner_raw = pdfdocpass.encode_password(owner_password, Mode.STRICT)
    owner_entry = compute_owner_entry(owner_raw, user_raw, security)
    file_key = compute_file_key(user_raw, owner_entry, security)
    return EncryptionEntries(owner_entry, compute_user_entry(file_key, security), file_key)


def _check_user_raw(
    user_raw: bytes,
    owner_entry: bytes,
    user_entry: bytes,
    security: StandardSecurity,
) -> Optional[bytes]:
    file_key = compute_file_key(user_raw, owner_entry, security)
    expected = compute_user_entry(file_key, security)
    compared = 32 if security.revision == 2 else 16
    if expected[:compared] == bytes(user_entry[:compared]):
        return file_key
    return None


def authenticate_user_password(
    password: PasswordLike,
    owner_entry: bytes,
    user_entry: bytes,
    security: StandardSecurity,
) -> Optional[bytes]:
    """Return the file key if ``password`` is the user password, else None."""
    try:
        user_raw = pdfdocpass.encode_password(password, Mode.PERMISSIVE)
    except PasswordEncodingError:
        return None
    return _check_user_raw(user_raw, owner_entry, user_entry, security)


def authenticate_owner_password(
    password: PasswordLike,
    owner_entry: bytes,
    user_entry: bytes,
    security: StandardSecurity,
) -> Optional[bytes]:
    """Return the file key if ``password`` is the owner password, else None."""
    try:
        owner_raw = pdfdocpass.encode_password(password, Mode.PERMISSIVE)
    except PasswordEncodingError:
        return None
    key = _owner_rc4_key(owner_raw, security)
    if security.revision == 2:
        user_padded = _rc4(key, bytes(owner_entry))
    else:
        user_padded = _rc4_rounds(key, bytes(owner_entry), range(_RC4_ROUNDS, -1, -1))
    return _check_user_raw(user_padded, owner_entry, user_entry, security)
