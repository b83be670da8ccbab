"""Tests for callout blocks."""

from wikidown.adapters.html_renderer import HtmlRenderer
from wikidown.adapters.markdown_parser import MarkdownParser
from wikidown.adapters.resolvers import SlugResolver
from wikidown.core.callouts import ICONS, parse_callout
from wikidown.core.pipeline import Processor


def render(text: str) -> str:
    processor = Processor(SlugResolver(), MarkdownParser())
    return HtmlRenderer().render(processor.process_text(text))


def test_callout_custom_title_and_body():
    """Body lines are joined by a single space inside one paragraph."""
    output = render("> [!NOTE] Custom title\n> First line\n> second line\n")

    assert output.startswith('<blockquote class="callout note">')
    assert '<div class="callout-title-inner">Custom title</div>' in output
    assert '<div class="callout-content"><p>First line second line</p></div>' in output
    assert output.count("<p>") == 1


def test_callout_known_type_has_icon_and_default_title():
    """A registered type shows its icon and its name as title."""
    output = render("> [!info]\n> Body\n")

    assert '<blockquote class="callout info">' in output
    assert f'<div class="callout-icon">{ICONS["info"]}</div>' in output
    assert '<div class="callout-title-inner">Info</div>' in output


def test_callout_unknown_type_without_title():
    """No icon and no custom title: no title row."""
    output = render("> [!custom]\n> Body text\n")

    assert output == (
        '<blockquote class="callout custom">'
        '<div class="callout-content"><p>Body text</p></div>'
        "</blockquote>\n"
    )


def test_callout_unknown_type_with_title():
    """A custom title alone still produces a title row."""
    output = render("> [!Recipe] Pancakes\n> Flour and eggs\n")

    assert '<div class="callout-title"><div class="callout-title-inner">Pancakes</div></div>' in output
    assert "callout-icon" not in output


def test_callout_keeps_links():
    """Wikilinks in the body are already resolved."""
    output = render("> [!QUOTE]\n> As said in [[Some note]]\n")

    assert '<blockquote class="callout quote">' in output
    assert '<p>As said in <a href="/some-note" title="Some note">Some note</a></p>' in output


def test_plain_blockquote_untouched():
    """A quote without marker stays a quote."""
    output = render("> just a quote\n")
    assert output == "<blockquote>\n<p>just a quote</p>\n</blockquote>\n"


def test_marker_must_lead():
    """A marker later in the quote is not a callout."""
    parser = MarkdownParser()
    tree = parser.parse("> text first [!NOTE]\n")
    assert parse_callout(tree.blocks[0]) is None


def test_parse_callout_fields():
    """Type is lower-cased, title and body split."""
    tree = MarkdownParser().parse("> [!WARNING]- Careful\n> one\n>\n> two\n")
    callout = parse_callout(tree.blocks[0])

    assert callout is not None
    assert callout.type == "warning"
    assert callout.title == "Careful"
    assert callout.body == "one two"
