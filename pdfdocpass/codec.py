"""
Python codec registration for PDFDocEncoding passwords.

Importing this module registers two encodings with :mod:`codecs`:

    "café".encode("pdfdocpass-strict")       # for setting a password
    "pass—word".encode("pdfdocpass-permissive")  # for opening a document

The mapping is lossy, so only encoding is supported.
"""

import codecs
import functools

from .engine import Mode, pdfdocpass

_NAMES = {
    "pdfdocpass_strict": ("pdfdocpass-strict", Mode.STRICT),
    "pdfdocpass_encrypt": ("pdfdocpass-strict", Mode.STRICT),
    "pdfdocpass_permissive": ("pdfdocpass-permissive", Mode.PERMISSIVE),
    "pdfdocpass_decrypt": ("pdfdocpass-permissive", Mode.PERMISSIVE),
}


def _encode(text: str, errors: str, name: str, mode: Mode):
    out = bytearray()
    position = 0
    length = len(text)
    while position < length:
        value = pdfdocpass._classify(ord(text[position]), mode)
        if value is not None:
            out.append(value)
            position += 1
            continue
        end = position + 1
        while end < length and pdfdocpass._classify(ord(text[end]), mode) is None:
            end += 1
        exc = UnicodeEncodeError(name, text, position, end, f"not accepted in {mode.value} mode")
        if errors == "strict":
            raise exc
        replacement, position = codecs.lookup_error(errors)(exc)
        if position < 0:
            position += length
        if isinstance(replacement, bytes):
            out.extend(replacement)
            continue
        for char in replacement:
            value = pdfdocpass._classify(ord(char), mode)
            if value is None:
                raise exc
            out.append(value)
    return bytes(out), length


def _decode(data, errors="strict"):
    raise NotImplementedError("PDFDocEncoding password encodings are one-way")


@functools.lru_cache(maxsize=None)
def _codec_info(name: str, mode: Mode) -> codecs.CodecInfo:

    class Codec(codecs.Codec):

        def encode(self, input, errors="strict"):
            return _encode(input, errors, name, mode)

        def decode(self, input, errors="strict"):
            return _decode(input, errors)

    class IncrementalEncoder(codecs.IncrementalEncoder):

        def encode(self, input, final=False):
            return _encode(input, self.errors, name, mode)[0]

    class IncrementalDecoder(codecs.IncrementalDecoder):

        def decode(self, input, final=False):
            return _decode(input, self.errors)

    class StreamWriter(Codec, codecs.StreamWriter):
        pass

    class StreamReader(Codec, codecs.StreamReader):
        pass

    return codecs.CodecInfo(
        name=name,
        encode=Codec().encode,
        decode=Codec().decode,
        incrementalencoder=IncrementalEncoder,
        incrementaldecoder=IncrementalDecoder,
        streamwriter=StreamWriter,
        streamreader=StreamReader,
    )


def search(encoding: str):
    """codecs search function; returns None for names it does not own."""
    key = encoding.strip().lower().replace("-", "_").replace(" ", "_")
    entry = _NAMES.get(key)
    if entry is None:
        return None
    return _codec_info(*entry)


codecs.register(search)
