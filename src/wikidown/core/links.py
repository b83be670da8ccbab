"""Wikilink and embed substitution."""

import logging
from typing import Callable

from .markup import escape_href
from .model import Block, Embed, Inline, WikiLink
from .ports import NoteResolver
from .scanner import find_embeds, find_wikilinks, flatten, verbatim_values
from .utils import slugify

logger = logging.getLogger(__name__)

NOT_FOUND_EMBED = '<div class="embed-note not-found">Note not found</div>'

# Produces the blocks replacing an embed, or None to leave it literal
EmbedHandler = Callable[[Embed], list[Block] | None]


def link_href(link: WikiLink, resolver: NoteResolver) -> tuple[str, bool]:
    """Destination of a wikilink and whether its target exists."""
    fragment = f"#{slugify(link.heading)}" if link.heading else ""
    if not link.target:
        return fragment, True
    ref = resolver.resolve(link.target)
    return f"{ref.href}{fragment}", ref.found


def render_wikilink(link: WikiLink, resolver: NoteResolver) -> str:
    href, found = link_href(link, resolver)
    title = link.title
    # title chars are restricted to the bracket-link alphabet: no <, > or "
    cls = "" if found else ' class="not-found"'
    return f'<a href="{escape_href(href)}" title="{title}"{cls}>{title}</a>'


def transform_links(
    tree: Block,
    resolver: NoteResolver,
    embed: EmbedHandler | None = None,
) -> Block:
    """
    Replace embeds and wikilinks in every paragraph of the tree.

    Embeds replace their whole paragraph; wikilinks are substituted in place
    as html inlines while the surrounding text runs stay text.
    """
    _transform_children(tree, resolver, embed)
    return tree


def _transform_children(
    parent: Block, resolver: NoteResolver, embed: EmbedHandler | None
) -> None:
    i = 0
    while i < len(parent.children):
        child = parent.children[i]
        if not isinstance(child, Block) or child.kind == "embed":
            i += 1
            continue
        if child.kind != "paragraph":
            _transform_children(child, resolver, embed)
            i += 1
            continue

        replacement = _expand_embeds(child, embed) if embed else None
        if replacement is not None:
            parent.children[i : i + 1] = replacement
            i += len(replacement)
            continue

        _substitute_wikilinks(child, resolver)
        i += 1


def _expand_embeds(paragraph: Block, embed: EmbedHandler) -> list[Block] | None:
    flat = flatten(paragraph.inlines)
    found = find_embeds(flat, verbatim_values(paragraph))
    if not found:
        return None

    blocks: list[Block] = []
    for _m, occurrence in found:
        expanded = embed(occurrence)
        if expanded is None:
            # at least one embed stays literal: keep the paragraph as written
            return None
        blocks.extend(expanded)
    return blocks


def _substitute_wikilinks(paragraph: Block, resolver: NoteResolver) -> None:
    flat = flatten(paragraph.inlines)
    found = find_wikilinks(flat, verbatim_values(paragraph))
    if not found:
        return

    # formatting is flattened to html; plain text stays visible to later passes
    out: list[Inline] = []
    pos = 0
    for m, link in found:
        out.extend(flat.inlines(pos, m.start()))
        out.append(Inline("html", render_wikilink(link, resolver)))
        pos = m.end()
    out.extend(flat.inlines(pos))

    logger.debug("Substituted %d wikilink(s)", len(found))
    paragraph.children = out
