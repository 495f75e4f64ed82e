"""
radix.py - Byte and Big-Radix Conversion Primitives

This module holds the arithmetic layer underneath the zero-width frames.
A message is turned into UTF-8 bytes, the bytes are read as one big-endian
unsigned integer, and that integer is rewritten as digits in the base of the
invisible alphabet. Decoding walks the same path backwards.

Conversion Chain:
    message ──UTF-8──► bytes ──big-endian──► int ──base N──► digits
    digits  ──fold───► int   ──low byte───► bytes ──UTF-8──► message

Python integers are unbounded, so no message is ever too long to convert.

Known Limitation:
    Leading 0x00 bytes carry no positional value, exactly like leading zeros
    in a decimal number. int_to_bytes(bytes_to_int(b"\\x00A")) is b"A".
    Frames already in circulation depend on this layout, so it is kept as-is.
"""

from typing import Iterable, List

# ═══════════════════════════════════════════════════════════════════════════════
# BYTE CODEC: Text <-> UTF-8
# ═══════════════════════════════════════════════════════════════════════════════


def text_to_bytes(message: str) -> bytes:
    """
    Encode a message as UTF-8.

    Raises:
        UnicodeEncodeError: If the string holds lone surrogates, which are
            not Unicode scalar values.
    """
    return message.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    """Strict UTF-8 decode. The empty byte string decodes to ``""``."""
    return data.decode("utf-8")


# ═══════════════════════════════════════════════════════════════════════════════
# BIG-RADIX CONVERTER
# ═══════════════════════════════════════════════════════════════════════════════


def bytes_to_int(data: bytes) -> int:
    """
    Fold bytes into a single non-negative integer, most significant first.

    Equivalent to ``acc = acc * 256 + byte`` starting from 0, so ``b""``
    yields 0 and leading zero bytes have no effect on the value.
    """
    return int.from_bytes(data, byteorder="big", signed=False)


def int_to_digits(n: int, base: int) -> List[int]:
    """
    Rewrite an integer as base-``base`` digits, most significant first.

    Zero becomes ``[0]`` rather than an empty list, so a frame built from
    these digits always carries at least one symbol.

    Example:
        >>> int_to_digits(0, 22)
        [0]
        >>> int_to_digits(485, 22)
        [1, 0, 1]
    """
    if base < 2:
        raise ValueError("base must be >= 2")
    if n < 0:
        raise ValueError("n must be non-negative")
    if n == 0:
        return [0]

    digits: List[int] = []
    while n > 0:
        n, rem = divmod(n, base)
        digits.append(rem)
    digits.reverse()
    return digits


def digits_to_int(digits: Iterable[int], base: int) -> int:
    """Left fold ``acc = acc * base + digit`` over most-significant-first digits."""
    if base < 2:
        raise ValueError("base must be >= 2")
    n = 0
    for d in digits:
        if d < 0 or d >= base:
            raise ValueError(f"digit {d} out of range for base {base}")
        n = n * base + d
    return n


def int_to_bytes(n: int) -> bytes:
    """
    Minimal big-endian byte string for a non-negative integer.

    Zero maps to ``b""``, not ``b"\\x00"``.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    length_bytes = (n.bit_length() + 7) // 8
    return n.to_bytes(length_bytes, byteorder="big", signed=False)
