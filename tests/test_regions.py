"""Tests for ignore and private regions."""

from wikidown.adapters.html_renderer import HtmlRenderer
from wikidown.adapters.markdown_parser import MarkdownParser
from wikidown.adapters.resolvers import SlugResolver
from wikidown.core.model import Block, paragraph, root, text
from wikidown.core.pipeline import Processor
from wikidown.core.regions import add_paywall, find_region, remove_ignore_regions

PAYWALL = '<div class="paywall">Members only</div>'


def comment(value: str) -> Block:
    return Block("comment", value=value)


def texts(tree: Block) -> list[str]:
    return [b.inlines[0].value if b.kind == "paragraph" else b.kind for b in tree.blocks]


def test_remove_ignore_region():
    """The region and its markers are deleted."""
    tree = root(
        paragraph(text("a")),
        comment(" ignore "),
        paragraph(text("b")),
        comment(" END IGNORE "),
        paragraph(text("c")),
    )
    remove_ignore_regions(tree)
    assert texts(tree) == ["a", "c"]


def test_remove_multiple_ignore_regions():
    """Every region is removed."""
    tree = root(
        comment("ignore"),
        paragraph(text("a")),
        comment("end ignore"),
        paragraph(text("b")),
        comment("ignore"),
        paragraph(text("c")),
        comment("end ignore"),
        paragraph(text("d")),
    )
    remove_ignore_regions(tree)
    assert texts(tree) == ["b", "d"]


def test_unclosed_ignore_runs_to_end():
    """Without an end marker everything after the start goes."""
    tree = root(paragraph(text("a")), comment("ignore"), paragraph(text("b")), paragraph(text("c")))
    remove_ignore_regions(tree)
    assert texts(tree) == ["a"]


def test_end_marker_before_start_is_ignored():
    """Only an end marker after the start closes the region."""
    tree = root(
        comment("end ignore"),
        paragraph(text("a")),
        comment("ignore"),
        paragraph(text("b")),
        comment("end ignore"),
        paragraph(text("c")),
    )
    assert find_region(tree, "ignore", "end ignore") == (2, 4)
    remove_ignore_regions(tree)
    assert texts(tree) == ["comment", "a", "c"]


def test_other_comments_are_inert():
    """Unrecognized comments are kept."""
    tree = root(comment("todo"), paragraph(text("a")))
    remove_ignore_regions(tree)
    add_paywall(tree, PAYWALL)
    assert texts(tree) == ["comment", "a"]


def test_paywall_replaces_region():
    """A private region becomes one paywall fragment."""
    tree = root(
        paragraph(text("public")),
        comment("private"),
        paragraph(text("secret")),
        comment("end private"),
        paragraph(text("after")),
    )
    add_paywall(tree, PAYWALL)
    assert texts(tree) == ["public", "html", "after"]
    assert tree.blocks[1].value == PAYWALL


def test_paywall_replaces_every_region():
    """Each private region gets exactly one fragment."""
    tree = root(
        comment("private"),
        paragraph(text("s1")),
        comment("end private"),
        paragraph(text("middle")),
        comment("private"),
        paragraph(text("s2")),
    )
    add_paywall(tree, PAYWALL)
    assert texts(tree) == ["html", "middle", "html"]


def test_paywall_disabled():
    """Without a fragment private content is left as is."""
    tree = root(comment("private"), paragraph(text("secret")), comment("end private"))
    add_paywall(tree, None)
    assert texts(tree) == ["comment", "secret", "comment"]


def test_regions_from_markdown():
    """Markers written as HTML comments drive both passes."""
    source = (
        "Intro\n\n"
        "<!-- ignore -->\n\n"
        "Draft notes\n\n"
        "<!-- end ignore -->\n\n"
        "<!-- private -->\n\n"
        "Premium [[Content]]\n\n"
        "<!-- end private -->\n\n"
        "Outro\n"
    )
    processor = Processor(SlugResolver(), MarkdownParser(), paywall=PAYWALL)
    output = HtmlRenderer().render(processor.process_text(source))

    assert output == f"<p>Intro</p>\n{PAYWALL}\n<p>Outro</p>\n"
