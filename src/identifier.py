"""
identifier.py - Content Identifiers Carried in Invisible Frames

This module is the consumer-facing layer on top of the frame codec. A
content blob (an editor draft, an HTML fragment) is tagged with a small
JSON object such as {"oid": "..."} hidden in a frame at its end. When the
blob comes back, possibly edited, the identifier is read out of it again
and the frame is stripped before the text is shown to a person.

Tagging Strategy:
    The frame is appended to the END of the content by default so that
    the visible text, and any prefix comparisons on it, are unchanged.
    Tagging is idempotent: content that already carries an identifier is
    left alone and the report is marked as skipped.

Identifier Format:
    generate_identifier() produces 160 random bits as 32 lowercase base32
    characters (RFC 4648 alphabet, no padding), optionally prefixed.
"""

import base64
import json
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, Optional

try:
    from .frame_scanner import extract_stego, strip_stego
    from .stegano_core import embed
except ImportError:
    from frame_scanner import extract_stego, strip_stego
    from stegano_core import embed

logger = logging.getLogger(__name__)

IDENTIFIER_BYTES = 20
HEX_STRING_BYTES = 8


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTIFIER GENERATION
# ═══════════════════════════════════════════════════════════════════════════════


def generate_identifier(prefix: str = "") -> str:
    """
    Generate a random identifier from 20 random bytes (160 bits).

    Example:
        >>> oid = generate_identifier("doc-")
        >>> len(oid)
        36
    """
    raw = secrets.token_bytes(IDENTIFIER_BYTES)
    return prefix + base64.b32encode(raw).decode("ascii").lower()


def generate_random_hex_string() -> str:
    """Generate a random 16-character hex string (8 random bytes)."""
    return secrets.token_hex(HEX_STRING_BYTES)


# ═══════════════════════════════════════════════════════════════════════════════
# TAGGING AND DETECTION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class AttachReport:
    """
    Result of tagging a content blob with an identifier.

    Attributes:
        identifier: The identifier that was requested
        content: The resulting content (unchanged if skipped)
        skipped: True if the content already carried an identifier
        existing: The identifier already present, if skipped
    """

    identifier: Dict[str, Any]
    content: str
    skipped: bool = False
    existing: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        """Returns True if a new frame was written."""
        return not self.skipped

    def summary(self) -> str:
        """Human-readable one-line summary."""
        if self.skipped:
            return f"Skipped: content already tagged with {json.dumps(self.existing)}"
        return f"Tagged content with {json.dumps(self.identifier)}"


def detect_identifier(content: str) -> Optional[Dict[str, Any]]:
    """
    Read the identifier object from the first frame in ``content``.

    Returns:
        The decoded JSON object, or None if there is no frame or it does not
        hold a non-empty JSON object.
    """
    value = extract_stego(content)
    if not isinstance(value, dict) or not value:
        return None
    return value


def attach_identifier(
    content: str, identifier: Dict[str, Any], position: str = "end"
) -> AttachReport:
    """
    Hide ``identifier`` as compact JSON in a frame inside ``content``.

    Args:
        content: The visible text to tag.
        identifier: A non-empty JSON-serialisable dict, e.g. {"oid": "..."}.
        position: Where to put the frame - "start", "middle" or "end".

    Returns:
        AttachReport; report.content holds the tagged text.

    Raises:
        ValueError: If identifier is not a non-empty dict, or position is
            unknown.
    """
    if not isinstance(identifier, dict) or not identifier:
        raise ValueError("identifier must be a non-empty dict")

    existing = detect_identifier(content)
    if existing is not None:
        logger.debug("Content already tagged with %r, skipping", existing)
        return AttachReport(
            identifier=identifier, content=content, skipped=True, existing=existing
        )

    message = json.dumps(identifier, separators=(",", ":"), ensure_ascii=False)
    tagged = embed(content, message, position=position)
    return AttachReport(identifier=identifier, content=tagged)


def clean_content(content: str) -> str:
    """Content with every frame removed, ready to show to a person."""
    return strip_stego(content)
