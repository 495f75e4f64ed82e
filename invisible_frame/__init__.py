"""Compatibility wrapper package for Invisible-Frame."""

from src import (  # re-export public API
    ALPHABET,
    BASE,
    END,
    START,
    AttachReport,
    DecodeResult,
    FrameFinding,
    FrameSpan,
    ScanReport,
    ZeroWidthAlphabet,
    attach_identifier,
    clean_content,
    decode,
    detect_identifier,
    embed,
    encode,
    extract_all_stego,
    extract_stego,
    find_frame,
    generate_identifier,
    generate_random_hex_string,
    has_frame,
    inspect_frame,
    iter_frames,
    scan,
    strip_stego,
    __version__,
)

__all__ = [
    "ALPHABET",
    "BASE",
    "END",
    "START",
    "AttachReport",
    "DecodeResult",
    "FrameFinding",
    "FrameSpan",
    "ScanReport",
    "ZeroWidthAlphabet",
    "attach_identifier",
    "clean_content",
    "decode",
    "detect_identifier",
    "embed",
    "encode",
    "extract_all_stego",
    "extract_stego",
    "find_frame",
    "generate_identifier",
    "generate_random_hex_string",
    "has_frame",
    "inspect_frame",
    "iter_frames",
    "scan",
    "strip_stego",
]
