"""
test_cli.py - Command Line Interface Tests

End-to-end checks of the invisible-frame CLI through main(argv), using
temporary files and captured output.

Run with: python -m pytest tests/ -v
"""

import io
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cli import main
from identifier import detect_identifier
from stegano_core import END, START, encode

# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def tagged_file(tmp_path):
    """A small HTML file carrying an {"oid": "abc"} frame."""
    path = tmp_path / "tagged.html"
    path.write_text("<p>Draft" + encode('{"oid": "abc"}') + "</p>", encoding="utf-8")
    return path


@pytest.fixture
def plain_file(tmp_path):
    path = tmp_path / "plain.html"
    path.write_text("<p>Nothing hidden</p>", encoding="utf-8")
    return path


# ═══════════════════════════════════════════════════════════════════════════════
# ENCODE / DECODE
# ═══════════════════════════════════════════════════════════════════════════════


class TestEncodeDecode:
    def test_encode_to_stdout(self, capsys):
        assert main(["encode", "hello"]) == 0
        assert capsys.readouterr().out == encode("hello")

    def test_encode_to_file_then_decode(self, tmp_path, capsys):
        out = tmp_path / "frame.txt"

        assert main(["encode", "hello", "-o", str(out)]) == 0
        assert main(["decode", str(out)]) == 0
        assert capsys.readouterr().out == "hello\n"

    def test_decode_reports_broken_frame(self, tmp_path, capsys):
        path = tmp_path / "broken.txt"
        path.write_text(START + "abc" + END, encoding="utf-8")

        assert main(["decode", str(path)]) == 1
        assert "Could not decode" in capsys.readouterr().err

    def test_decode_from_stdin(self, monkeypatch, capsys):
        piped = ("x" + encode("piped") + "y").encode("utf-8")
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(piped), encoding="utf-8"))

        assert main(["decode"]) == 0
        assert capsys.readouterr().out == "piped\n"


# ═══════════════════════════════════════════════════════════════════════════════
# STRIP / EXTRACT / TAG
# ═══════════════════════════════════════════════════════════════════════════════


class TestContentCommands:
    def test_strip_to_stdout(self, tagged_file, capsys):
        assert main(["strip", str(tagged_file)]) == 0
        assert capsys.readouterr().out == "<p>Draft</p>"

    def test_strip_to_file(self, tagged_file, tmp_path):
        out = tmp_path / "clean.html"

        assert main(["strip", str(tagged_file), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "<p>Draft</p>"

    def test_extract(self, tagged_file, capsys):
        assert main(["extract", str(tagged_file)]) == 0
        assert json.loads(capsys.readouterr().out) == {"oid": "abc"}

    def test_extract_without_frame(self, plain_file, capsys):
        assert main(["extract", str(plain_file)]) == 1
        assert "No JSON frame" in capsys.readouterr().err

    def test_tag_with_explicit_id(self, plain_file, tmp_path):
        out = tmp_path / "out.html"

        assert main(["tag", str(plain_file), "--id", "doc-1", "-o", str(out)]) == 0
        tagged = out.read_text(encoding="utf-8")
        assert detect_identifier(tagged) == {"oid": "doc-1"}
        assert tagged.startswith("<p>Nothing hidden</p>")

    def test_tag_generates_prefixed_id(self, plain_file, capsys):
        assert main(["tag", str(plain_file), "--prefix", "demo-"]) == 0
        oid = detect_identifier(capsys.readouterr().out)["oid"]
        assert oid.startswith("demo-")
        assert len(oid) == 37

    def test_tag_skips_tagged_content(self, tagged_file, capsys):
        assert main(["tag", str(tagged_file), "--id", "other"]) == 0
        captured = capsys.readouterr()
        assert detect_identifier(captured.out) == {"oid": "abc"}
        assert "Skipped" in captured.err

    def test_strip_and_tag_keep_crlf(self, tmp_path):
        source = tmp_path / "crlf.txt"
        source.write_bytes(
            b"line1\r\n" + encode("x").encode("utf-8") + b"line2\r\n"
        )
        stripped = tmp_path / "stripped.txt"
        tagged = tmp_path / "tagged.txt"

        assert main(["strip", str(source), "-o", str(stripped)]) == 0
        assert stripped.read_bytes() == b"line1\r\nline2\r\n"

        assert main(["tag", str(stripped), "--id", "crlf", "-o", str(tagged)]) == 0
        assert tagged.read_bytes().startswith(b"line1\r\nline2\r\n")
        assert detect_identifier(tagged.read_bytes().decode("utf-8")) == {"oid": "crlf"}


# ═══════════════════════════════════════════════════════════════════════════════
# SCAN / VERIFY / MISC
# ═══════════════════════════════════════════════════════════════════════════════


class TestInspection:
    def test_scan_json(self, tagged_file, capsys):
        assert main(["scan", str(tagged_file), "--json"]) == 2
        report = json.loads(capsys.readouterr().out)
        assert report["total_frames"] == 1
        assert report["findings"][0]["value"] == {"oid": "abc"}

    def test_scan_clean_file(self, plain_file, capsys):
        assert main(["scan", str(plain_file)]) == 0
        assert "No frames detected" in capsys.readouterr().out

    def test_verify_exit_codes(self, tagged_file, plain_file, capsys):
        assert main(["verify", "-q", str(tagged_file)]) == 2
        assert main(["verify", "-q", str(plain_file)]) == 0
        assert capsys.readouterr().out == ""

    def test_verify_stdin_label(self, tagged_file, monkeypatch, capsys):
        monkeypatch.setattr(
            sys, "stdin", io.TextIOWrapper(io.BytesIO(tagged_file.read_bytes()), encoding="utf-8")
        )

        assert main(["verify", "-"]) == 2
        assert "FRAME PRESENT: <stdin>" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["strip", str(tmp_path / "missing.html")]) == 1
        assert "Failed to read" in capsys.readouterr().err

    def test_demo(self, capsys):
        assert main(["demo"]) == 0
        assert "Clean text matches original: True" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
