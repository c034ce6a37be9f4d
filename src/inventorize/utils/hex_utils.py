"""Lossless conversion between byte sequences and hexadecimal strings."""

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def bytes_to_hex(data: bytes) -> str:
    """Encode bytes as a lowercase hex string, two characters per byte, high nibble first."""
    return data.hex()


def hex_to_bytes(text: str) -> bytes | None:
    """
    Decode a hex string into bytes.

    Decoding is case-insensitive. Returns None (never a partial result) if
    the string has an odd length or contains anything other than hex digits.
    `bytes.fromhex` alone is too lenient here, since it skips whitespace.
    """
    if len(text) % 2 != 0:
        return None
    if not _HEX_DIGITS.issuperset(text):
        return None
    return bytes.fromhex(text)
