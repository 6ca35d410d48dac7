import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

try:
    from pdfdocpass.main import PasswordEncodingError
    from pdfdocpass import security
except ModuleNotFoundError as exc:  # pragma: no cover - dependency missing
    security = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


DOCUMENT_ID = bytes.fromhex("4f6b2a1c9e0d33a7b2c5e8f1007d6e19")


@unittest.skipIf(security is None, f"dependency unavailable: {_IMPORT_ERROR}")
class StandardSecurityTests(unittest.TestCase):
    """Key derivation for revisions 2-4 and the strict/permissive split."""

    def _security(self, revision: int = 3, key_length: int = 16, **kwargs):
        return security.StandardSecurity(
            revision=revision,
            key_length=key_length,
            permissions=kwargs.pop("permissions", -3904),
            document_id=DOCUMENT_ID,
            **kwargs
        )

    def test_pad_password(self):
        self.assertEqual(len(security.PASSWORD_PADDING), 32)
        self.assertEqual(security.pad_password(b""), security.PASSWORD_PADDING)
        padded = security.pad_password(b"abc")
        self.assertEqual(padded, b"abc" + security.PASSWORD_PADDING[:29])
        self.assertEqual(security.pad_password(b"x" * 40), b"x" * 32)

    def test_revision_2_roundtrip(self):
        sec = self._security(revision=2, key_length=5)
        entries = security.setup_encryption("owner", "user", sec)
        self.assertEqual(len(entries.owner_entry), 32)
        self.assertEqual(len(entries.user_entry), 32)
        self.assertEqual(len(entries.file_key), 5)
        self.assertEqual(
            security.authenticate_user_password("user", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )
        self.assertEqual(
            security.authenticate_owner_password("owner", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )
        self.assertIsNone(
            security.authenticate_user_password("nope", entries.owner_entry, entries.user_entry, sec)
        )

    def test_revision_3_roundtrip(self):
        sec = self._security()
        entries = security.setup_encryption("Öwner", "café", sec)
        self.assertEqual(len(entries.user_entry), 32)
        self.assertEqual(len(entries.file_key), 16)
        self.assertEqual(
            security.authenticate_user_password("café", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )
        self.assertEqual(
            security.authenticate_owner_password("Öwner", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )
        self.assertIsNone(
            security.authenticate_owner_password("café", entries.owner_entry, entries.user_entry, sec)
        )

    def test_empty_owner_password_uses_user_password(self):
        sec = self._security()
        entries = security.setup_encryption("", "shared", sec)
        self.assertEqual(
            security.authenticate_owner_password("shared", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )

    def test_empty_user_password(self):
        sec = self._security(key_length=5)
        entries = security.setup_encryption("owner", "", sec)
        self.assertEqual(
            security.authenticate_user_password("", entries.owner_entry, entries.user_entry, sec),
            entries.file_key
        )

    def test_setup_rejects_decrypt_only_characters(self):
        sec = self._security()
        with self.assertRaises(PasswordEncodingError):
            security.setup_encryption("owner", "pass—word", sec)
        with self.assertRaises(PasswordEncodingError):
            security.setup_encryption("Ā", "user", sec)

    def test_authenticate_with_decrypt_only_characters(self):
        sec = self._security()
        user_raw = b"pass\x84word"
        owner_entry = security.compute_owner_entry(b"owner", user_raw, sec)
        file_key = security.compute_file_key(user_raw, owner_entry, sec)
        user_entry = security.compute_user_entry(file_key, sec)
        self.assertEqual(
            security.authenticate_user_password("pass—word", owner_entry, user_entry, sec),
            file_key
        )

    def test_authenticate_with_table_remapped_characters(self):
        sec = self._security(revision=4)
        owner_entry = security.compute_owner_entry(b"own", b"A", sec)
        file_key = security.compute_file_key(b"A", owner_entry, sec)
        user_entry = security.compute_user_entry(file_key, sec)
        self.assertEqual(
            security.authenticate_user_password("Ā", owner_entry, user_entry, sec),
            file_key
        )

    def test_unrepresentable_password_fails_authentication(self):
        sec = self._security()
        entries = security.setup_encryption("owner", "user", sec)
        self.assertIsNone(
            security.authenticate_user_password("密码", entries.owner_entry, entries.user_entry, sec)
        )
        self.assertIsNone(
            security.authenticate_owner_password(b"\xc3", entries.owner_entry, entries.user_entry, sec)
        )

    def test_metadata_flag_changes_revision_4_key(self):
        plain = self._security(revision=4)
        hidden = self._security(revision=4, encrypt_metadata=False)
        owner_entry = security.compute_owner_entry(b"o", b"u", plain)
        self.assertNotEqual(
            security.compute_file_key(b"u", owner_entry, plain),
            security.compute_file_key(b"u", owner_entry, hidden)
        )

    def test_known_entries(self):
        # owner "owner", user "user", P=-3904 and DOCUMENT_ID
        cases = [
            (dict(revision=2, key_length=5),
             "94e8094419662a774442fb072e3d9f19e9d130ec09a4d0061e78fe920f7ab62f",
             "f0aa859ae65c7ffd9aeaee23409dce07f73e629e43f50ae54850c77775a6cc6a",
             "c5718cc4fe"),
            (dict(revision=3, key_length=16),
             "0ba3835f88f90388e74e54584125ce142be0de24c6b0d37746e075b891756671",
             "827dad6cee9dc545dc332250c6f0c93b" + "00" * 16,
             "8458a502f1237e3fba66996eb68efcea"),
            (dict(revision=3, key_length=5),
             "3c482162008fafcb228b7db3c43a1090bc5b56e9b1556e89fc0656fd291f4908",
             "6ff1f9730b54a52f4196618498be173d" + "00" * 16,
             "ddaeef1e95"),
            (dict(revision=4, key_length=16),
             "0ba3835f88f90388e74e54584125ce142be0de24c6b0d37746e075b891756671",
             "827dad6cee9dc545dc332250c6f0c93b" + "00" * 16,
             "8458a502f1237e3fba66996eb68efcea"),
            (dict(revision=4, key_length=16, encrypt_metadata=False),
             "0ba3835f88f90388e74e54584125ce142be0de24c6b0d37746e075b891756671",
             "5977c86eb1a6e21ea30281750e1805cd" + "00" * 16,
             "78803bf6cf9beff79bb6425fa74b6252"),
        ]
        for params, owner_hex, user_hex, key_hex in cases:
            with self.subTest(**params):
                sec = self._security(**params)
                entries = security.setup_encryption("owner", "user", sec)
                self.assertEqual(entries.owner_entry.hex(), owner_hex)
                self.assertEqual(entries.user_entry.hex(), user_hex)
                self.assertEqual(entries.file_key.hex(), key_hex)
                self.assertEqual(
                    security.authenticate_owner_password(
                        "owner", bytes.fromhex(owner_hex), bytes.fromhex(user_hex), sec
                    ).hex(),
                    key_hex
                )

    def test_permissions_bytes(self):
        self.assertEqual(self._security(permissions=-4).permissions_bytes, b"\xfc\xff\xff\xff")
        self.assertEqual(self._security(permissions=0xF0C).permissions_bytes, b"\x0c\x0f\x00\x00")

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            self._security(revision=5)
        with self.assertRaises(ValueError):
            self._security(revision=2, key_length=16)
        with self.assertRaises(ValueError):
            self._security(key_length=6)
        with self.assertRaises(ValueError):
            self._security(permissions=1 << 40)


if __name__ == "__main__":
    unittest.main()
