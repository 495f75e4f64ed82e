"""
frame_scanner.py - Frame Location, Stripping and Extraction

This module provides the "reading" side of Invisible-Frame. Given a host
text (an HTML fragment, a document body, a chat message) it locates the
embedded frames, removes them for display, or decodes them back into the
JSON values they carry.

Scanning Model:
    Frames are found with an explicit left-to-right scan: find START, find
    the first END after it, record the span, resume after END. A START with
    no END after it ends the scan. Every search moves strictly forward, so
    hostile input with thousands of unmatched START markers is still read in
    linear time.

Sentinel Policy:
    Nothing in this module raises for string input. Missing or broken frames
    come back as "" from strip_stego's perspective and None from
    extract_stego's; scan() records the reason in each FrameFinding.

Example:
    >>> from invisible_frame import encode, extract_stego, strip_stego
    >>> html = "<p>a " + encode('{"oid": "x"}') + " b</p>"
    >>> extract_stego(html)
    {'oid': 'x'}
    >>> strip_stego(html)
    '<p>a  b</p>'
"""

import hashlib
import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, List, Optional

try:
    from .stegano_core import END, START, inspect_frame
except ImportError:
    from stegano_core import END, START, inspect_frame

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# FRAME LOCATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FrameSpan:
    """
    A START...END span located inside a host text.

    Attributes:
        start: Index of the first START character in the host text
        end: Index one past the last END character
        text: The exact matched substring, markers included
    """

    start: int
    end: int
    text: str

    @property
    def payload(self) -> str:
        """The characters strictly between the markers."""
        return self.text[len(START) : len(self.text) - len(END)]


def iter_frames(host: str) -> Iterator[FrameSpan]:
    """
    Yield every non-overlapping frame in ``host``, in document order.

    Each frame is the shortest START...END span beginning at the next
    START; its payload is not validated here.
    """
    pos = 0
    while True:
        start_idx = host.find(START, pos)
        if start_idx < 0:
            return
        end_idx = host.find(END, start_idx + len(START))
        if end_idx < 0:
            return
        stop = end_idx + len(END)
        yield FrameSpan(start=start_idx, end=stop, text=host[start_idx:stop])
        pos = stop


def find_frame(host: str) -> Optional[FrameSpan]:
    """Return the first frame in ``host``, or None."""
    return next(iter_frames(host), None)


# ═══════════════════════════════════════════════════════════════════════════════
# STRIPPING
# ═══════════════════════════════════════════════════════════════════════════════


# Marker characters are the only ones that can open or close a frame
_MARKER_CHAR = re.compile("[" + re.escape(START + END) + "]")


def strip_stego(host: str) -> str:
    """
    Remove every frame from ``host``, leaving all other content untouched.

    Single left-to-right pass. Plain runs are copied as whole pieces and each
    marker character becomes its own piece, so a START or END spliced
    together by a removal is seen through the last output piece and closed
    in the same pass. The result holds no frame at all, which makes
    ``strip_stego(strip_stego(x)) == strip_stego(x)`` hold for any input.
    """
    out: List[str] = []
    open_at: Optional[int] = None
    pos = 0
    for match in _MARKER_CHAR.finditer(host):
        idx = match.start()
        if idx > pos:
            out.append(host[pos:idx])
        pos = idx + 1

        char = host[idx]
        prev = out[-1] if out else ""
        if open_at is None and prev == START[0] and char == START[1]:
            open_at = len(out) - 1
            out.append(char)
        elif open_at is not None and prev == END[0] and char == END[1]:
            del out[open_at:]
            open_at = None
        else:
            out.append(char)

    if pos == 0:
        return host
    out.append(host[pos:])
    return "".join(out)


# ═══════════════════════════════════════════════════════════════════════════════
# EXTRACTION
# ═══════════════════════════════════════════════════════════════════════════════


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(message: str) -> Any:
    """
    Strict JSON parse: NaN and Infinity literals are rejected.

    Raises:
        ValueError: If the message is not valid JSON or nests too deeply.
    """
    try:
        return json.loads(message, parse_constant=_reject_constant)
    except RecursionError:
        raise ValueError("JSON nesting too deep") from None


def _decode_json(span: FrameSpan) -> Optional[Any]:
    result = inspect_frame(span.text)
    if not result.payload:
        logger.debug("Frame at %d skipped: %s", span.start, result.error or "empty message")
        return None
    try:
        return parse_json(result.payload)
    except ValueError as e:
        logger.debug("Frame at %d is not JSON: %s", span.start, e)
        return None


def extract_stego(host: str) -> Optional[Any]:
    """
    Decode the first frame in ``host`` and parse it as JSON.

    Only the first frame is ever considered, even when it is broken and a
    later one is not.

    Returns:
        The parsed JSON value, or None if there is no frame, the frame
        decodes to nothing, or the message is not JSON.
    """
    span = find_frame(host)
    if span is None:
        return None
    return _decode_json(span)


def extract_all_stego(host: str) -> List[Any]:
    """Parsed JSON value of every frame in ``host`` that carries valid JSON."""
    values = []
    for span in iter_frames(host):
        value = _decode_json(span)
        if value is not None:
            values.append(value)
    return values


# ═══════════════════════════════════════════════════════════════════════════════
# FORENSIC SCAN
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class FrameFinding:
    """
    Records one frame located during a scan.

    Attributes:
        offset: Index of the frame's START marker in the host text
        length: Length of the frame in characters, markers included
        message: The decoded message, None if the frame is broken
        value: Parsed JSON value, None if the message is not JSON
        is_json: Whether the message parsed as JSON
        error: Why decoding failed, None otherwise
    """

    offset: int
    length: int
    message: Optional[str]
    value: Any = None
    is_json: bool = False
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass
class ScanReport:
    """
    Summary of every frame found in a host text.

    Attributes:
        source: Where the host text came from (file path or "<in-memory>")
        text_hash: SHA-256 of the UTF-8 host text
        scan_timestamp: When the scan was performed
        findings: One entry per located frame, in document order
        clean_length: Length of the host text after strip_stego
    """

    source: str
    text_hash: str
    scan_timestamp: str
    findings: List[FrameFinding] = field(default_factory=list)
    clean_length: int = 0

    @property
    def frames_found(self) -> bool:
        return len(self.findings) > 0

    @property
    def total_frames(self) -> int:
        return len(self.findings)

    @property
    def valid_frames(self) -> List[FrameFinding]:
        return [f for f in self.findings if f.is_valid]

    @property
    def messages(self) -> List[str]:
        """Decoded messages of all valid frames, in document order."""
        return [f.message for f in self.findings if f.is_valid]

    def summary(self) -> str:
        """Human-readable multi-line report."""
        lines = [
            "═══════════════════════════════════════════════════════════",
            "  FRAME SCAN REPORT",
            "═══════════════════════════════════════════════════════════",
            f"  Source:    {self.source}",
            f"  SHA-256:   {self.text_hash}",
            f"  Scan Time: {self.scan_timestamp}",
            f"  Frames:    {self.total_frames} ({len(self.valid_frames)} decodable)",
            f"  Clean text length: {self.clean_length} chars",
        ]

        for finding in self.findings:
            lines.append("───────────────────────────────────────────────────────────")
            lines.append(f"  @ offset {finding.offset} ({finding.length} chars)")
            if not finding.is_valid:
                lines.append(f"    ✗ {finding.error}")
            elif finding.is_json:
                lines.append(f"    JSON: {json.dumps(finding.value, ensure_ascii=False)[:80]}")
            else:
                lines.append(f"    Text: {finding.message[:80]!r}")

        lines.append("═══════════════════════════════════════════════════════════")
        return "\n".join(lines)

    def to_json(self) -> str:
        """Export report as JSON for programmatic processing."""
        return json.dumps(
            {
                "source": self.source,
                "text_hash": self.text_hash,
                "scan_timestamp": self.scan_timestamp,
                "frames_found": self.frames_found,
                "total_frames": self.total_frames,
                "clean_length": self.clean_length,
                "findings": [
                    {
                        "offset": f.offset,
                        "length": f.length,
                        "message": f.message,
                        "value": f.value,
                        "is_json": f.is_json,
                        "error": f.error,
                    }
                    for f in self.findings
                ],
            },
            indent=2,
            ensure_ascii=False,
        )


def scan(host: str, source: str = "<in-memory>") -> ScanReport:
    """
    Locate and decode every frame in ``host``.

    The host text is never modified. Broken frames are reported with the
    reason they could not be decoded rather than silently dropped.
    """
    report = ScanReport(
        source=source,
        text_hash=hashlib.sha256(host.encode("utf-8", "surrogatepass")).hexdigest(),
        scan_timestamp=datetime.now().isoformat(),
        clean_length=len(strip_stego(host)),
    )

    for span in iter_frames(host):
        result = inspect_frame(span.text)
        finding = FrameFinding(
            offset=span.start,
            length=span.end - span.start,
            message=result.payload,
            error=result.error,
        )
        if result.payload:
            try:
                finding.value = parse_json(result.payload)
                finding.is_json = True
            except ValueError:
                pass
        report.findings.append(finding)

    logger.debug("Scanned %s: %d frame(s)", source, report.total_frames)
    return report
