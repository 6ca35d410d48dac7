# PDFDOCPASS PASSWORD ENGINE ->

import enum as _enum_module
import os as _os_module
import sys as _sys_module
import warnings as _warnings_module

from . import tables as _tables


class Mode(_enum_module.Enum):
    """Acceptance policy: STRICT when setting a password, PERMISSIVE when using one."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


class PasswordEncodingError(ValueError):
    """Raised when a password cannot be expressed in PDFDocEncoding for the given mode."""

    def __init__(self, mode: Mode, offset: int, reason: str):
        self.mode = mode
        self.offset = offset
        self.reason = reason
        action = "encryption" if mode is Mode.STRICT else "decryption"
        super().__init__(f"Password rejected for {action} at byte {offset}: {reason}")


class pdfdocpass:
    import typing

    ENGINE_VERSION = "1.0.0"
    FAILED = -1
    Mode = Mode
    _MODE_NAMES = {
        "strict": Mode.STRICT,
        "encrypt": Mode.STRICT,
        "permissive": Mode.PERMISSIVE,
        "decrypt": Mode.PERMISSIVE,
    }

    @staticmethod
    def _env_flag(name: str, default: bool = False) -> bool:
        raw = _os_module.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in ("1", "true", "yes", "on"):
            return True
        if value in ("0", "false", "no", "off"):
            return False
        return default

    WARN_LOSSY = _env_flag("PDFDOCPASS_WARN_LOSSY")
    DEFAULT_MODE = _MODE_NAMES.get(
        (_os_module.getenv("PDFDOCPASS_MODE") or "").strip().lower(),
        Mode.STRICT
    )

    @staticmethod
    def _resolve_mode(mode: "pdfdocpass.typing.Union[Mode, str]") -> Mode:
        if isinstance(mode, Mode):
            return mode
        if isinstance(mode, str):
            resolved = pdfdocpass._MODE_NAMES.get(mode.strip().lower())
            if resolved is not None:
                return resolved
        raise ValueError(f"Unsupported password mode: {mode!r}")

    @staticmethod
    def _coerce_password_bytes(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if isinstance(password, str):
            # surrogatepass keeps lone surrogates visible to classification
            return password.encode("utf-8", "surrogatepass")
        if isinstance(password, (bytes, bytearray, memoryview)):
            return bytes(password)
        raise TypeError(f"Unsupported password type: {type(password)!r}")

    @staticmethod
    def _decode_next(data: bytes, index: int) -> "pdfdocpass.typing.Optional[tuple[int, int]]":
        """Decode one UTF-8 sequence at ``index``.

        Returns ``(code_point, next_index)`` or None when the sequence is
        malformed, truncated or longer than three bytes.  Only the bit
        patterns are checked, so overlong forms decode to their value.
        """
        size = len(data)
        lead = data[index]
        if lead & 0x80 == 0:
            return lead, index + 1
        if lead & 0xE0 == 0xC0:
            if index + 1 < size and data[index + 1] & 0xC0 == 0x80:
                return ((lead & 0x1F) << 6) | (data[index + 1] & 0x3F), index + 2
            return None
        if lead & 0xF0 == 0xE0:
            if (
                index + 2 < size
                and data[index + 1] & 0xC0 == 0x80
                and data[index + 2] & 0xC0 == 0x80
            ):
                value = (lead & 0x0F) << 12
                value |= (data[index + 1] & 0x3F) << 6
                value |= data[index + 2] & 0x3F
                return value, index + 3
            return None
        return None

    @staticmethod
    def _classify(code_point: int, mode: Mode) -> "pdfdocpass.typing.Optional[int]":
        """Map one code point to its PDFDocEncoding byte, or None if rejected."""
        # U+0000 is a control character here, not a terminator: the caller
        # passes an explicit length, so "ab\0cd" is rejected rather than cut.
        if 0x20 <= code_point < 0x7F or 0xA0 <= code_point <= 0xFF:
            return code_point
        mapped = _tables.ALWAYS_MAPPED.get(code_point)
        if mapped is not None:
            return mapped
        if mode is Mode.STRICT:
            return None
        if _tables.LATIN_EXTENDED_FIRST <= code_point <= _tables.LATIN_EXTENDED_LAST:
            return _tables.LATIN_EXTENDED_MAP[code_point - _tables.LATIN_EXTENDED_FIRST]
        return _tables.DECRYPT_ONLY_MAPPED.get(code_point)

    @staticmethod
    def _iter_pdfdoc(
        data: bytes,
        mode: Mode
    ) -> "pdfdocpass.typing.Iterator[tuple[int, int]]":
        """Yield ``(code_point, pdfdoc_byte)`` pairs, raising on the first rejection."""
        index = 0
        size = len(data)
        while index < size:
            decoded = pdfdocpass._decode_next(data, index)
            if decoded is None:
                raise PasswordEncodingError(mode, index, "malformed or unsupported UTF-8 sequence")
            code_point, next_index = decoded
            value = pdfdocpass._classify(code_point, mode)
            if value is None:
                raise PasswordEncodingError(mode, index, f"U+{code_point:04X} is not accepted")
            yield code_point, value
            index = next_index

    @staticmethod
    def measure(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]",
        mode: "pdfdocpass.typing.Union[Mode, str]"
    ) -> int:
        """Return the number of bytes ``convert`` would write, or FAILED."""
        mode = pdfdocpass._resolve_mode(mode)
        data = pdfdocpass._coerce_password_bytes(password)
        count = 0
        try:
            for _ in pdfdocpass._iter_pdfdoc(data, mode):
                count += 1
        except PasswordEncodingError:
            return pdfdocpass.FAILED
        return count

    @staticmethod
    def convert(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]",
        mode: "pdfdocpass.typing.Union[Mode, str]",
        output: "pdfdocpass.typing.Union[bytearray, memoryview]"
    ) -> int:
        """Write the converted password into ``output`` and return the count, or FAILED.

        ``output`` must hold at least ``measure(password, mode)`` bytes; a
        shorter buffer raises IndexError.  Bytes written before a failure are
        left in place and mean nothing.
        """
        mode = pdfdocpass._resolve_mode(mode)
        data = pdfdocpass._coerce_password_bytes(password)
        count = 0
        try:
            for _, value in pdfdocpass._iter_pdfdoc(data, mode):
                if count >= len(output):
                    raise IndexError("Output buffer too small for converted password")
                output[count] = value
                count += 1
        except PasswordEncodingError:
            return pdfdocpass.FAILED
        return count

    @staticmethod
    def utf8_password_to_pdfdoc(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]",
        encrypt: bool,
        output: "pdfdocpass.typing.Optional[pdfdocpass.typing.Union[bytearray, memoryview]]" = None
    ) -> int:
        """Combined sizing/conversion call: dry run when ``output`` is None."""
        mode = Mode.STRICT if encrypt else Mode.PERMISSIVE
        if output is None:
            return pdfdocpass.measure(password, mode)
        return pdfdocpass.convert(password, mode, output)

    @staticmethod
    def encode_password(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]",
        mode: "pdfdocpass.typing.Union[Mode, str]"
    ) -> bytes:
        mode = pdfdocpass._resolve_mode(mode)
        data = pdfdocpass._coerce_password_bytes(password)
        out = bytearray()
        collapsed = []
        for code_point, value in pdfdocpass._iter_pdfdoc(data, mode):
            if value == _tables.PLACEHOLDER and code_point != value:
                collapsed.append(code_point)
            out.append(value)
        if collapsed and pdfdocpass.WARN_LOSSY:
            points = ", ".join(f"U+{cp:04X}" for cp in collapsed)
            _warnings_module.warn(
                f"Password characters {points} collapse to '.' in PDFDocEncoding",
                UserWarning,
                stacklevel=2
            )
        return bytes(out)

    @staticmethod
    def is_acceptable(
        password: "pdfdocpass.typing.Union[str, bytes, bytearray, memoryview]",
        mode: "pdfdocpass.typing.Union[Mode, str]"
    ) -> bool:
        return pdfdocpass.measure(password, mode) != pdfdocpass.FAILED


def _cli_plain_output() -> bool:
    return bool(_os_module.getenv("NO_COLOR") or _os_module.getenv("PDFDOCPASS_CLI_PLAIN"))


class _CliTheme:
    _RESET = "\033[0m"
    _RED = "\033[1;31m"
    _GREEN = "\033[1;32m"

    def __init__(self, plain: bool):
        self.plain = plain

    def _wrap(self, msg: str, color: str) -> str:
        return msg if self.plain else f"{color}{msg}{self._RESET}"

    def ok(self, msg: str) -> str:
        return self._wrap(msg, self._GREEN)

    def err(self, msg: str) -> str:
        return self._wrap(msg, self._RED)


def cli(argv=None) -> int:
    import argparse
    import getpass

    theme = _CliTheme(_cli_plain_output())
    default_mode = pdfdocpass.DEFAULT_MODE.value

    parser = argparse.ArgumentParser(
        prog="pdfdocpass",
        description="Convert passwords to PDFDocEncoding for legacy PDF security"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {pdfdocpass.ENGINE_VERSION}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check",
        help="Report whether a password is accepted for encryption and/or decryption"
    )
    check.add_argument(
        "-p", "--password",
        default=None,
        help="Password text (prompted for when omitted)"
    )
    check.add_argument(
        "--mode",
        choices=["strict", "permissive", "both"],
        default="both",
        help="Policy to check: strict (encrypt), permissive (decrypt) or both"
    )

    encode = subparsers.add_parser(
        "encode",
        help="Print the PDFDocEncoding bytes of a password"
    )
    encode.add_argument(
        "-p", "--password",
        default=None,
        help="Password text (prompted for when omitted)"
    )
    encode.add_argument(
        "--mode",
        choices=["strict", "permissive"],
        default=default_mode,
        help=f"Policy to apply (default: {default_mode})"
    )
    encode.add_argument(
        "--format",
        dest="output_format",
        choices=["hex", "octal", "raw"],
        default="hex",
        help="Output representation; raw writes the bytes to stdout"
    )

    args = parser.parse_args(argv)

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")

    if args.command == "check":
        if args.mode == "both":
            modes = [Mode.STRICT, Mode.PERMISSIVE]
        else:
            modes = [pdfdocpass._resolve_mode(args.mode)]
        failures = 0
        for mode in modes:
            count = pdfdocpass.measure(password, mode)
            if count == pdfdocpass.FAILED:
                failures += 1
                print(theme.err(f"{mode.value}: REJECTED"))
            else:
                print(theme.ok(f"{mode.value}: OK ({count} bytes)"))
        return 0 if failures == 0 else 1

    mode = pdfdocpass._resolve_mode(args.mode)
    try:
        encoded = pdfdocpass.encode_password(password, mode)
    except PasswordEncodingError as exc:
        print(theme.err(str(exc)), file=_sys_module.stderr)
        return 1
    if args.output_format == "raw":
        _sys_module.stdout.buffer.write(encoded)
        _sys_module.stdout.flush()
    elif args.output_format == "octal":
        print(" ".join(f"{value:03o}" for value in encoded))
    else:
        print(encoded.hex())
    return 0


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
