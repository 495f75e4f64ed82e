"""
stegano_core.py - Zero-Width Frame Encoder/Decoder

This module implements the framing layer of Invisible-Frame. A message is
converted to a big integer, written in base 22 using invisible Unicode code
points as digit symbols, and wrapped between two multi-character markers.
The resulting "frame" renders as nothing and can be dropped anywhere in a
host text.

Technical Background:
    Zero-width and bidi-control characters exist to steer text rendering
    (joining, direction, invisible operators). They have no glyph, and most
    editors, serializers and rich-text pipelines preserve them. This module
    uses 22 of them as an alphabet and 4 more as frame markers.

Frame Layout:
    START (U+2060 U+2061) · base-22 digits, most significant first · END (U+2062 U+2063)

    The marker code points are excluded from the digit alphabet, so the
    first END after a START always closes the frame.

Security Note:
    This is an encoding, not encryption. Anyone who knows the alphabet can
    read a frame back.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

try:
    from .radix import (
        bytes_to_int,
        bytes_to_text,
        digits_to_int,
        int_to_bytes,
        int_to_digits,
        text_to_bytes,
    )
except ImportError:
    from radix import (
        bytes_to_int,
        bytes_to_text,
        digits_to_int,
        int_to_bytes,
        int_to_digits,
        text_to_bytes,
    )

# ═══════════════════════════════════════════════════════════════════════════════
# INVISIBLE ALPHABET AND FRAME MARKERS
# ═══════════════════════════════════════════════════════════════════════════════


class ZeroWidthAlphabet:
    """
    Unicode code points used as invisible base-22 digits and frame markers.

    The digit order is part of the wire format: SYMBOLS[d] encodes digit d.
    Reordering or extending the tuple breaks every frame already written.

    Reference: Unicode Standard, Chapter 23.2 "Format Characters" and
    Chapter 23.3 "Deprecated Format Characters"
    """

    SYMBOLS: tuple = (
        "\u200B",  # ZERO WIDTH SPACE
        "\u200C",  # ZERO WIDTH NON-JOINER
        "\u200D",  # ZERO WIDTH JOINER
        "\uFEFF",  # ZERO WIDTH NO-BREAK SPACE
        "\u200E",  # LEFT-TO-RIGHT MARK
        "\u200F",  # RIGHT-TO-LEFT MARK
        "\u202A",  # LEFT-TO-RIGHT EMBEDDING
        "\u202B",  # RIGHT-TO-LEFT EMBEDDING
        "\u202C",  # POP DIRECTIONAL FORMATTING
        "\u202D",  # LEFT-TO-RIGHT OVERRIDE
        "\u202E",  # RIGHT-TO-LEFT OVERRIDE
        "\u2064",  # INVISIBLE PLUS
        "\u2066",  # LEFT-TO-RIGHT ISOLATE
        "\u2067",  # RIGHT-TO-LEFT ISOLATE
        "\u2068",  # FIRST STRONG ISOLATE
        "\u2069",  # POP DIRECTIONAL ISOLATE
        "\u206A",  # INHIBIT SYMMETRIC SWAPPING
        "\u206B",  # ACTIVATE SYMMETRIC SWAPPING
        "\u206C",  # INHIBIT ARABIC FORM SHAPING
        "\u206D",  # ACTIVATE ARABIC FORM SHAPING
        "\u206E",  # NATIONAL DIGIT SHAPES
        "\u206F",  # NOMINAL DIGIT SHAPES
    )

    # Frame markers - none of these code points may appear in SYMBOLS
    START: str = "\u2060\u2061"  # WORD JOINER + FUNCTION APPLICATION
    END: str = "\u2062\u2063"  # INVISIBLE TIMES + INVISIBLE SEPARATOR

    BASE: int = len(SYMBOLS)

    # Reverse lookup: symbol -> digit (read-only)
    INDEX: Mapping[str, int] = MappingProxyType(
        {symbol: digit for digit, symbol in enumerate(SYMBOLS)}
    )

    MARKER_CHARS: frozenset = frozenset(START + END)
    ALL_CHARS: frozenset = frozenset(SYMBOLS) | MARKER_CHARS

    @classmethod
    def is_symbol(cls, char: str) -> bool:
        """Check if a character is one of the digit symbols."""
        return char in cls.INDEX

    @classmethod
    def contains_invisibles(cls, text: str) -> bool:
        """Quick check if text contains any alphabet or marker character."""
        return any(c in cls.ALL_CHARS for c in text)


ALPHABET = ZeroWidthAlphabet.SYMBOLS
START = ZeroWidthAlphabet.START
END = ZeroWidthAlphabet.END
BASE = ZeroWidthAlphabet.BASE


# ═══════════════════════════════════════════════════════════════════════════════
# DATA CLASSES FOR STRUCTURED RESULTS
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of decoding the first frame found in a string.

    Attributes:
        payload: The decoded message, or None if decoding failed
        symbol_count: Number of digit symbols between the markers
        is_valid: Whether a message was recovered
        error: Reason decoding failed, None otherwise
    """

    payload: Optional[str]
    symbol_count: int
    is_valid: bool
    error: Optional[str] = None


def _failure(error: str, symbol_count: int = 0) -> DecodeResult:
    return DecodeResult(payload=None, symbol_count=symbol_count, is_valid=False, error=error)


# ═══════════════════════════════════════════════════════════════════════════════
# ENCODING: Text → Frame
# ═══════════════════════════════════════════════════════════════════════════════


def encode(message: str) -> str:
    """
    Encode a message into a self-delimiting invisible frame.

    Every string, including ``""``, produces a frame with at least one
    digit symbol between START and END.

    Example:
        >>> frame = encode("Hi")
        >>> frame.startswith(START) and frame.endswith(END)
        True
        >>> decode("visible text" + frame)
        'Hi'
    """
    n = bytes_to_int(text_to_bytes(message))
    digits = int_to_digits(n, BASE)
    return START + "".join(ALPHABET[d] for d in digits) + END


# ═══════════════════════════════════════════════════════════════════════════════
# DECODING: Frame → Text
# ═══════════════════════════════════════════════════════════════════════════════


def inspect_frame(stego: str) -> DecodeResult:
    """
    Decode the first frame in ``stego`` and report why it failed, if it did.

    Only the first START is considered, closed by the first END after it.
    Nothing is raised for malformed input; the problem is described in
    ``DecodeResult.error`` instead.

    Args:
        stego: Any string that may contain a frame.

    Returns:
        DecodeResult with the recovered message or the failure reason.
    """
    start_idx = stego.find(START)
    if start_idx < 0:
        return _failure("No START marker found")

    payload_start = start_idx + len(START)
    end_idx = stego.find(END, payload_start)
    if end_idx < 0:
        return _failure("No END marker after START - frame truncated")

    payload = stego[payload_start:end_idx]
    if not payload:
        return _failure("Empty frame payload")

    digits = []
    for char in payload:
        digit = ZeroWidthAlphabet.INDEX.get(char)
        if digit is None:
            return _failure(f"Invalid symbol U+{ord(char):04X} in frame payload", len(payload))
        digits.append(digit)

    n = digits_to_int(digits, BASE)
    if n == 0 and payload == ALPHABET[0]:
        # Canonical encoding of the empty message
        return DecodeResult(payload="", symbol_count=1, is_valid=True)

    try:
        message = bytes_to_text(int_to_bytes(n))
    except UnicodeDecodeError as e:
        return _failure(f"UTF-8 decode error: {e}", len(payload))

    return DecodeResult(payload=message, symbol_count=len(payload), is_valid=True)


def decode(stego: str) -> str:
    """
    Decode the first frame in ``stego`` back to its message.

    Returns ``""`` for any malformed, truncated or missing frame; use
    inspect_frame() to learn why.
    """
    return inspect_frame(stego).payload or ""


# ═══════════════════════════════════════════════════════════════════════════════
# UTILITY: Injection into carrier text
# ═══════════════════════════════════════════════════════════════════════════════


def embed(carrier: str, message: str, position: str = "end") -> str:
    """
    Embed an encoded message into a carrier string.

    Args:
        carrier: The visible text that will carry the frame.
        message: The message to hide.
        position: Where to inject - "start", "middle", or "end" (default).

    Returns:
        The carrier text with the frame inserted.

    Raises:
        ValueError: If position is not one of the three supported values.
    """
    frame = encode(message)

    if position == "start":
        return frame + carrier
    elif position == "middle":
        mid = len(carrier) // 2
        return carrier[:mid] + frame + carrier[mid:]
    elif position == "end":
        return carrier + frame
    raise ValueError(f"Unknown position {position!r} (expected start, middle or end)")


def has_frame(text: str) -> bool:
    """
    Quick check for a START marker followed by an END marker.

    Does not validate the payload; use inspect_frame() for that.
    """
    start_idx = text.find(START)
    if start_idx < 0:
        return False
    return text.find(END, start_idx + len(START)) >= 0
