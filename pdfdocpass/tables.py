"""PDFDocEncoding lookup tables for legacy (revision 2-4) PDF passwords.

All tables are read-only module constants.
"""

from types import MappingProxyType

# Code points outside the direct ranges that Acrobat accepts for both
# encryption and decryption.  Values are PDFDocEncoding bytes.
ALWAYS_MAPPED = MappingProxyType({
    0x0152: 0o226,  # OE ligature
    0x0153: 0o234,  # oe ligature
    0x0160: 0o227,  # Scaron
    0x0161: 0o235,  # scaron
    0x0178: 0o230,  # Ydieresis
    0x017D: 0o231,  # Zcaron
    0x017E: 0o236,  # zcaron
    0x0192: 0o206,  # florin
})

# Accepted only when decrypting.  Acrobat/Reader will not let these be typed
# for revision 4 security and earlier, so they must never be used to encrypt.
DECRYPT_ONLY_MAPPED = MappingProxyType({
    0x20AC: 0o240,  # Euro
    0x2022: 0o200,  # bullet
    0x2020: 0o201,  # dagger
    0x2021: 0o202,  # daggerdbl
    0x2026: 0o203,  # ellipsis
    0x02C6: 0o032,  # circumflex
    0x2014: 0o204,  # emdash
    0x2013: 0o205,  # endash
    0x2039: 0o210,  # guilsinglleft
    0x203A: 0o211,  # guilsinglright
    0x2030: 0o213,  # perthousand
    0x201E: 0o214,  # quotedblbase
    0x201C: 0o215,  # quotedblleft
    0x201D: 0o216,  # quotedblright
    0x2018: 0o217,  # quoteleft
    0x2019: 0o220,  # quoteright
    0x201A: 0o221,  # quotesinglebase
    0x02DC: 0o037,  # tilde
    0x2122: 0o222,  # trademark
})

LATIN_EXTENDED_FIRST = 0x0100
LATIN_EXTENDED_LAST = 0x01FF

# Latin Extended-A and the start of Latin Extended-B, as Acrobat 7 on Windows
# maps them when a password is typed for decryption.  Many points land on
# Windows CP-1250 positions, some on the bare ASCII letter, and the rest on
# "." which Acrobat substitutes for characters it cannot place.  Each row
# holds sixteen consecutive code points starting at the one in the comment.
LATIN_EXTENDED_MAP = (
    b"Aa\xc3\xc4\xa5\xb9\xc6\xe6....\xc8\xe8\xcf\xef"  # U+0100
    b"\xd0\xf0Ee..Ee\xca\xea\xcc\xec..Gg"  # U+0110
    b"..Gg......Ii..Ii"  # U+0120
    b"Ii....Kk.\xc5\xe5Ll\xbc\xbe."  # U+0130
    b".\xa3\xb3\xd1\xf1Nn\xd2\xf2...Oo.."  # U+0140
    b"\xd5\xf5\x96\x9c\xc0\xe0Rr\xd8\xf8\x8c\x9c..\xaa\xba"  # U+0150
    b"\x8a\x9a\xde\xfe\x8d\x9dTt..Uu..\xd9\xf9"  # U+0160
    b"\xdb\xfbUu....\x98\x8f\x9f\xaf\xbf\x99\x9e."  # U+0170
    b"b........\xd0......"  # U+0180
    b".\x83\x83....I..l....O"  # U+0190
    b"Oo.........t..TU"  # U+01A0
    b"u..............."  # U+01B0
    b"|..!............"  # U+01C0
    b"..............Aa"  # U+01D0
    b"....Gg......Oo.."  # U+01E0
    b"................"  # U+01F0
)

# Byte Acrobat emits for an extended Latin letter it has no better match for.
PLACEHOLDER = ord(".")

assert len(LATIN_EXTENDED_MAP) == LATIN_EXTENDED_LAST - LATIN_EXTENDED_FIRST + 1
