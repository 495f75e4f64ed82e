#!/usr/bin/env python3
"""
cli.py - Command Line Interface for Invisible-Frame

This module provides a CLI around the frame codec. It supports the round
trip of hiding a message in text and getting it back, plus the reading-side
workflows used on content that comes back from an editor:

    1. ENCODE / DECODE: Turn a message into a frame and back
    2. TAG:     Hide a JSON identifier in a content file
    3. EXTRACT: Read the JSON identifier out of a content file
    4. STRIP:   Remove all frames so the text can be shown to a person
    5. SCAN / VERIFY: Report on, or just detect, frames in a file

Usage Examples:
    # Tag a draft with a fresh identifier
    $ python -m invisible_frame tag draft.html -o draft_tagged.html

    # Read it back
    $ python -m invisible_frame extract draft_tagged.html

    # Clean a file for display
    $ python -m invisible_frame strip draft_tagged.html

FILE arguments default to standard input. Exit codes: 0 success, 1 error,
2 frame detected (scan/verify), 130 interrupted.
"""

import argparse
import json
import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, List, Optional, cast

# Local imports (when run as module)
if TYPE_CHECKING:
    from .frame_scanner import extract_stego, iter_frames, scan, strip_stego
    from .identifier import attach_identifier, generate_identifier
    from .stegano_core import encode, inspect_frame
else:
    try:
        from .frame_scanner import extract_stego, iter_frames, scan, strip_stego
        from .identifier import attach_identifier, generate_identifier
        from .stegano_core import encode, inspect_frame
    except ImportError:
        # Direct script execution
        from frame_scanner import extract_stego, iter_frames, scan, strip_stego
        from identifier import attach_identifier, generate_identifier
        from stegano_core import encode, inspect_frame

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# CLI OUTPUT FORMATTING
# ═══════════════════════════════════════════════════════════════════════════════


class ConsoleOutput:
    """Handles formatted console output with optional color support."""

    # ANSI color codes (disabled if not TTY)
    COLORS_ENABLED = sys.stdout.isatty()

    RESET = "\033[0m" if COLORS_ENABLED else ""
    BOLD = "\033[1m" if COLORS_ENABLED else ""
    GREEN = "\033[92m" if COLORS_ENABLED else ""
    RED = "\033[91m" if COLORS_ENABLED else ""
    YELLOW = "\033[93m" if COLORS_ENABLED else ""
    BLUE = "\033[94m" if COLORS_ENABLED else ""
    CYAN = "\033[96m" if COLORS_ENABLED else ""

    @classmethod
    def banner(cls) -> None:
        """Print the application banner."""
        print(
            f"""
{cls.CYAN}╔═══════════════════════════════════════════════════════════════╗
║  {cls.BOLD}Invisible-Frame{cls.RESET}{cls.CYAN}                                              ║
║  Zero-width steganographic frames for plain and rich text     ║
║  Version 1.0.0 | MIT License                                  ║
╚═══════════════════════════════════════════════════════════════╝{cls.RESET}
"""
        )

    @classmethod
    def success(cls, message: str) -> None:
        """Print a success message."""
        print(f"{cls.GREEN}✓ {message}{cls.RESET}")

    @classmethod
    def error(cls, message: str) -> None:
        """Print an error message."""
        print(f"{cls.RED}✗ {message}{cls.RESET}", file=sys.stderr)

    @classmethod
    def warning(cls, message: str) -> None:
        """Print a warning message."""
        print(f"{cls.YELLOW}⚠ {message}{cls.RESET}", file=sys.stderr)

    @classmethod
    def info(cls, message: str) -> None:
        """Print an info message."""
        print(f"{cls.BLUE}ℹ {message}{cls.RESET}")

    @classmethod
    def alert(cls, message: str) -> None:
        """Print a detection message."""
        print(f"{cls.RED}{cls.BOLD}🚨 {message}{cls.RESET}")


# ═══════════════════════════════════════════════════════════════════════════════
# INPUT / OUTPUT HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def _read_input(file: Optional[str]) -> str:
    """
    Read a UTF-8 file, or standard input when file is None or '-'.

    Line endings are kept exactly as they are on disk.
    """
    if file is None or file == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    with open(file, encoding="utf-8", newline="") as f:
        return f.read()


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    else:
        sys.stdout.write(text)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND HANDLERS
# ═══════════════════════════════════════════════════════════════════════════════


def cmd_encode(args: argparse.Namespace) -> int:
    """Handle the 'encode' command - print the frame for a message."""
    _write_output(encode(args.message), args.output)
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """
    Handle the 'decode' command - print the message in the first frame.

    Unlike the library call, a broken frame is reported with its reason.
    """
    result = inspect_frame(_read_input(args.file))
    if not result.is_valid:
        ConsoleOutput.error(f"Could not decode frame: {result.error}")
        return 1
    print(result.payload)
    return 0


def cmd_strip(args: argparse.Namespace) -> int:
    """Handle the 'strip' command - remove every frame from the input."""
    content = _read_input(args.file)
    cleaned = strip_stego(content)
    _write_output(cleaned, args.output)
    if args.output:
        removed = len(content) - len(cleaned)
        ConsoleOutput.success(f"Removed {removed} invisible character(s) -> {args.output}")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """Handle the 'extract' command - print the JSON value of the first frame."""
    value = extract_stego(_read_input(args.file))
    if value is None:
        ConsoleOutput.error("No JSON frame found")
        return 1
    print(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


def cmd_tag(args: argparse.Namespace) -> int:
    """
    Handle the 'tag' command - hide an {"oid": ...} identifier in the input.

    A fresh identifier is generated unless --id is given. Content that is
    already tagged is passed through unchanged.
    """
    content = _read_input(args.file)
    oid = args.id or generate_identifier(args.prefix)

    report = attach_identifier(content, {"oid": oid}, position=args.position)
    if report.skipped:
        ConsoleOutput.warning(report.summary())

    _write_output(report.content, args.output)
    if args.output and report.success:
        ConsoleOutput.success(f"{report.summary()} -> {args.output}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """
    Handle the 'scan' command - report on every frame in the input.

    Returns exit code 2 if any frame is found.
    """
    source = args.file if args.file and args.file != "-" else "<stdin>"
    report = scan(_read_input(args.file), source=source)

    if args.json_output:
        print(report.to_json())
    else:
        ConsoleOutput.banner()
        print(report.summary())
        print()
        if report.frames_found:
            ConsoleOutput.alert(f"{report.total_frames} FRAME(S) DETECTED")
        else:
            ConsoleOutput.success("No frames detected.")

    return 2 if report.frames_found else 0


def cmd_verify(args: argparse.Namespace) -> int:
    """
    Handle the 'verify' command - quick frame presence check.

    Useful for batch processing: only the exit code matters with --quiet.
    """
    label = args.file if args.file and args.file != "-" else "<stdin>"
    found = next(iter_frames(_read_input(args.file)), None) is not None

    if not args.quiet:
        if found:
            ConsoleOutput.alert(f"FRAME PRESENT: {label}")
        else:
            ConsoleOutput.success(f"No frame: {label}")
    return 2 if found else 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Handle the 'demo' command - walk through tag, extract and strip."""
    ConsoleOutput.banner()

    print(f"{ConsoleOutput.CYAN}═══ DEMONSTRATION MODE ═══{ConsoleOutput.RESET}")
    print()

    html = "<p>Quarterly report draft, please review.</p>"
    oid = generate_identifier("demo-")
    report = attach_identifier(html, {"oid": oid})
    tagged = report.content

    ConsoleOutput.info(f"Original: {html!r} ({len(html)} chars)")
    ConsoleOutput.info(f"Tagged:   {len(tagged)} chars, looks identical when rendered")
    print()

    print(f"{ConsoleOutput.YELLOW}═══ EXTRACT ═══{ConsoleOutput.RESET}")
    ConsoleOutput.success(f"Recovered identifier: {extract_stego(tagged)}")
    print()

    print(f"{ConsoleOutput.YELLOW}═══ STRIP ═══{ConsoleOutput.RESET}")
    cleaned = strip_stego(tagged)
    ConsoleOutput.success(f"Clean text matches original: {cleaned == html}")
    print()

    print(scan(tagged, source="<demo>").summary())
    return 0


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="invisible-frame",
        description="Zero-width steganographic frames for plain and rich text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s encode '{"oid": "abc"}' > frame.txt   Build a frame
  %(prog)s tag draft.html -o tagged.html           Hide a fresh identifier
  %(prog)s extract tagged.html                     Read the identifier back
  %(prog)s strip tagged.html                       Remove all frames
  %(prog)s scan tagged.html --json                 Machine-readable report
        """,
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (also: DEBUG env var)"
    )

    subparsers = parser.add_subparsers(
        dest="command", title="commands", description="Available operations"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # ENCODE / DECODE
    # ─────────────────────────────────────────────────────────────────────────
    encode_parser = subparsers.add_parser("encode", help="Encode a message as a frame")
    encode_parser.add_argument("message", help="Message to hide")
    encode_parser.add_argument("-o", "--output", help="Write the frame to a file")
    encode_parser.set_defaults(func=cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Decode the first frame")
    decode_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    decode_parser.set_defaults(func=cmd_decode)

    # ─────────────────────────────────────────────────────────────────────────
    # STRIP / EXTRACT / TAG
    # ─────────────────────────────────────────────────────────────────────────
    strip_parser = subparsers.add_parser("strip", help="Remove every frame")
    strip_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    strip_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    strip_parser.set_defaults(func=cmd_strip)

    extract_parser = subparsers.add_parser("extract", help="Print the first frame's JSON value")
    extract_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    extract_parser.set_defaults(func=cmd_extract)

    tag_parser = subparsers.add_parser("tag", help="Hide an identifier in content")
    tag_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    tag_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    tag_parser.add_argument("--id", help="Identifier to embed (default: generated)")
    tag_parser.add_argument("--prefix", default="", help="Prefix for a generated identifier")
    tag_parser.add_argument(
        "--position",
        choices=["start", "middle", "end"],
        default="end",
        help="Where to put the frame (default: end)",
    )
    tag_parser.set_defaults(func=cmd_tag)

    # ─────────────────────────────────────────────────────────────────────────
    # SCAN / VERIFY / DEMO
    # ─────────────────────────────────────────────────────────────────────────
    scan_parser = subparsers.add_parser("scan", help="Report on every frame")
    scan_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    scan_parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Output results as JSON (machine-readable)",
    )
    scan_parser.set_defaults(func=cmd_scan)

    verify_parser = subparsers.add_parser("verify", help="Quick check for frame presence")
    verify_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    verify_parser.add_argument(
        "-q", "--quiet", action="store_true", help="Silent mode - only return exit code"
    )
    verify_parser.set_defaults(func=cmd_verify)

    demo_parser = subparsers.add_parser("demo", help="Run a demonstration")
    demo_parser.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = args.debug or bool(os.environ.get("DEBUG"))
    _configure_logging(debug)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        func = cast(Callable[[argparse.Namespace], int], args.func)
        return func(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        return 130
    except (OSError, UnicodeDecodeError) as e:
        ConsoleOutput.error(f"Failed to read or write file: {e}")
        return 1
    except Exception as e:
        ConsoleOutput.error(f"Unexpected error: {e}")
        logger.debug("Command %r failed", args.command, exc_info=True)
        if debug:
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
