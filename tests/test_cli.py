"""Tests for the command line interface."""

import json
import tempfile
from pathlib import Path

import pytest

from wikidown import __version__
from wikidown.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


def run(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    out = capsys.readouterr()
    return exc.value.code, out.out, out.err


def test_render_html(capsys):
    """Render a note with embeds resolved from a folder."""
    code, out, _err = run(["--notes", str(FIXTURES), "render", str(FIXTURES / "Test.md")], capsys)

    assert code == 0
    assert "<p>Hello world</p>" in out
    assert '<a href="/internal-link" title="Internal link">Internal link</a>' in out


def test_render_markdown_with_base_url(capsys):
    """Markdown output with a base URL."""
    code, out, _err = run(
        [
            "--notes", str(FIXTURES),
            "--base-url", "/docs",
            "render", "--format", "markdown", str(FIXTURES / "Test.md"),
        ],
        capsys,
    )

    assert code == 0
    assert 'href="/docs/internal-link"' in out
    assert out.strip().endswith("End")


def test_render_missing_file(capsys):
    """A missing input is reported on stderr."""
    with tempfile.TemporaryDirectory() as tmpdir:
        code, _out, err = run(["render", str(Path(tmpdir) / "nope.md")], capsys)

    assert code == 1
    assert "not found" in err


def test_toc_json(capsys):
    """Table of contents as JSON."""
    code, out, _err = run(["toc", "--json", str(FIXTURES / "Course2.md")], capsys)

    assert code == 0
    entries = json.loads(out)
    assert entries[0] == {"href": "/lesson-1", "title": "Lesson 1", "group": "Module 1 : Introduction"}
    assert len(entries) == 6


def test_slug(capsys):
    """Print a slug."""
    code, out, _err = run(["slug", "A & B"], capsys)

    assert code == 0
    assert out == "a-and-b\n"


def test_version(capsys):
    """--version shows package and interpreter."""
    code, out, _err = run(["--version"], capsys)

    assert code == 0
    assert f"wikidown {__version__}" in out
    assert "python" in out
