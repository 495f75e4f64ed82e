"""
Invisible-Frame: Zero-Width Steganographic Frames for Text

This package hides short messages, typically a JSON identifier, inside
ordinary text as a run of invisible Unicode characters, and finds, strips
or decodes those runs again in larger documents.

Core Components:
    - radix: UTF-8 and big-integer base conversion primitives
    - stegano_core: Invisible alphabet, frame encoding and decoding
    - frame_scanner: Frame location, stripping, JSON extraction, scan reports
    - identifier: Identifier generation and content tagging
    - cli: Command-line interface for all operations

Example:
    >>> from invisible_frame import encode, decode, extract_stego, strip_stego
    >>> html = "<p>a " + encode('{"oid": "x"}') + " b</p>"
    >>> extract_stego(html)
    {'oid': 'x'}
    >>> strip_stego(html)
    '<p>a  b</p>'

License: MIT
"""

__version__ = "1.0.0"

from .stegano_core import (
    ALPHABET,
    BASE,
    END,
    START,
    DecodeResult,
    ZeroWidthAlphabet,
    decode,
    embed,
    encode,
    has_frame,
    inspect_frame,
)
from .frame_scanner import (
    FrameFinding,
    FrameSpan,
    ScanReport,
    extract_all_stego,
    extract_stego,
    find_frame,
    iter_frames,
    scan,
    strip_stego,
)
from .identifier import (
    AttachReport,
    attach_identifier,
    clean_content,
    detect_identifier,
    generate_identifier,
    generate_random_hex_string,
)

__all__ = [
    "ALPHABET",
    "BASE",
    "END",
    "START",
    "DecodeResult",
    "ZeroWidthAlphabet",
    "decode",
    "embed",
    "encode",
    "has_frame",
    "inspect_frame",
    "FrameFinding",
    "FrameSpan",
    "ScanReport",
    "extract_all_stego",
    "extract_stego",
    "find_frame",
    "iter_frames",
    "scan",
    "strip_stego",
    "AttachReport",
    "attach_identifier",
    "clean_content",
    "detect_identifier",
    "generate_identifier",
    "generate_random_hex_string",
]
