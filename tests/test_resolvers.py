"""Tests for note resolution."""

import tempfile
from pathlib import Path

from wikidown.adapters.fs_storage import FsStorage
from wikidown.adapters.html_renderer import HtmlRenderer
from wikidown.adapters.markdown_parser import MarkdownParser
from wikidown.adapters.resolvers import (
    CallableResolver,
    FolderResolver,
    RegistryResolver,
    SlugResolver,
    join_url,
)
from wikidown.core.model import NoteFile, ResolvedReference
from wikidown.core.pipeline import Processor


def test_join_url():
    """Base URLs are joined with exactly one slash."""
    assert join_url("", "/a") == "/a"
    assert join_url("/docs", "/a") == "/docs/a"
    assert join_url("https://example.com/", "a") == "https://example.com/a"


def test_slug_resolver():
    """Every title resolves and nothing can be fetched."""
    resolver = SlugResolver()
    assert resolver.resolve("Hello world") == ResolvedReference("/hello-world", "Hello world", True)
    assert resolver.fetch_content("Hello world") is None


def test_folder_resolver_prefers_frontmatter_slug():
    """A slug field in the target note overrides the title slug."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "Custom.md").write_text("---\nslug: /my/path\n---\n\nBody\n", encoding="utf-8")
        (folder / "Plain.md").write_text("Just text\n", encoding="utf-8")

        resolver = FolderResolver(FsStorage(folder), base_url="/docs")

        assert resolver.resolve("Custom").href == "/docs/my/path"
        assert resolver.resolve("Plain").href == "/docs/plain"
        # missing files still resolve: folder mode never reports not-found
        missing = resolver.resolve("Missing Note")
        assert missing.href == "/docs/missing-note"
        assert missing.found is True


def test_folder_resolver_fetch():
    """Raw contents, frontmatter included, or None."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "Note.md").write_text("---\na: 1\n---\nBody\n", encoding="utf-8")

        resolver = FolderResolver.from_folder(folder)

        assert resolver.fetch_content("Note") == "---\na: 1\n---\nBody\n"
        assert resolver.fetch_content("Other") is None


def test_registry_resolver():
    """Registry membership decides found; permalinks win."""
    resolver = RegistryResolver(
        [
            NoteFile("Alpha.md", permalink="/a/"),
            NoteFile("Beta", content="Beta body"),
        ]
    )

    assert resolver.resolve("Alpha") == ResolvedReference("/a/", "Alpha", True)
    assert resolver.resolve("Beta") == ResolvedReference("/beta", "Beta", True)
    assert resolver.resolve("Gamma") == ResolvedReference("/gamma", "Gamma", False)

    assert resolver.fetch_content("Beta") == "Beta body"
    assert resolver.fetch_content("Alpha") is None
    assert resolver.fetch_content("Gamma") is None


def test_callable_resolver_falls_back():
    """Missing overrides defer to the wrapped resolver."""
    registry = RegistryResolver([NoteFile("Known.md", content="k")])
    resolver = CallableResolver(registry, title_to_url=lambda t: f"/x/{t}")

    ref = resolver.resolve("Unknown")
    assert ref.href == "/x/Unknown"
    assert ref.found is False
    assert resolver.fetch_content("Known") == "k"


def test_folder_resolver_tolerates_non_yaml_opening():
    """A note opening with a rule and colon-heavy text still resolves and embeds."""
    with tempfile.TemporaryDirectory() as tmpdir:
        folder = Path(tmpdir)
        (folder / "Ruled.md").write_text("---\nNote: this: breaks\n---\n\nBody\n", encoding="utf-8")

        resolver = FolderResolver.from_folder(folder)
        assert resolver.resolve("Ruled").href == "/ruled"

        processor = Processor(resolver, MarkdownParser())
        output = HtmlRenderer().render(processor.process_text("See [[Ruled]]\n\n![[Ruled]]\n"))

        assert '<a href="/ruled" title="Ruled">Ruled</a>' in output
        assert "<hr />\n<h2>Note: this: breaks</h2>\n<p>Body</p>" in output


def test_callable_title_to_url_owns_href():
    """A custom title_to_url produces the full href; the base URL is not added."""
    registry = RegistryResolver([NoteFile("Known.md")], base_url="/docs")
    resolver = CallableResolver(registry, title_to_url=lambda t: f"https://wiki.test/{t}")

    assert resolver.resolve("Known") == ResolvedReference("https://wiki.test/Known", "Known", True)
    assert registry.resolve("Known").href == "/docs/known"
