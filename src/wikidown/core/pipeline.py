"""Runs the transformation passes over a note, expanding embeds recursively."""

import logging

from .callouts import transform_callouts
from .highlights import transform_highlights
from .links import NOT_FOUND_EMBED, transform_links
from .model import Block, Embed, TocEntry, html_block
from .ports import NoteResolver, ParserStrategy
from .regions import add_paywall, remove_ignore_regions
from .toc import extract_toc

logger = logging.getLogger(__name__)

DEFAULT_PAYWALL = '<div class="paywall">This content is available to members only.</div>'
DEFAULT_MAX_EMBED_DEPTH = 10


class Processor:
    """
    Rewrite a document tree in place:

    1. ignore regions removed, private regions replaced by the paywall
    2. table of contents extracted (when a sink is given)
    3. embeds expanded and wikilinks turned into anchors
    4. callouts restyled
    5. highlights marked
    """

    def __init__(
        self,
        resolver: NoteResolver,
        parser: ParserStrategy,
        paywall: str | None = DEFAULT_PAYWALL,
        max_embed_depth: int = DEFAULT_MAX_EMBED_DEPTH,
    ):
        self.resolver = resolver
        self.parser = parser
        self.paywall = paywall
        self.max_embed_depth = max_embed_depth

    def process(self, tree: Block, toc: list[TocEntry] | None = None, depth: int = 0) -> Block:
        remove_ignore_regions(tree)
        add_paywall(tree, self.paywall)

        if toc is not None:
            toc.extend(extract_toc(tree, self.resolver))

        transform_links(tree, self.resolver, embed=lambda e: self._embed(e, depth))
        transform_callouts(tree)
        transform_highlights(tree)
        return tree

    def process_text(self, text: str, toc: list[TocEntry] | None = None) -> Block:
        return self.process(self.parser.parse(text), toc=toc)

    def _embed(self, embed: Embed, depth: int) -> list[Block] | None:
        if depth >= self.max_embed_depth:
            logger.warning(
                "Embed depth limit (%d) reached at %r; leaving it as written",
                self.max_embed_depth,
                embed.target,
            )
            return None

        content = self.resolver.fetch_content(embed.target)
        if content is None:
            logger.warning("Embedded note %r not found", embed.target)
            return [html_block(NOT_FOUND_EMBED)]

        logger.debug("Embedding %r (depth %d)", embed.target, depth + 1)
        sub = self.process(self.parser.parse(content), depth=depth + 1)
        return [Block("embed", sub.children)]
