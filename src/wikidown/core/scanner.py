"""Detection of wikilink, embed and highlight syntax inside a block's inlines.

A block is flattened to a single string in which every character remembers
whether it came from a text node (scannable) or from markup (code spans,
tags, raw HTML). Syntax is only recognized where its characters are
scannable, so nothing inside a code span is ever rewritten.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator

from .markup import code_span, escape, render_inline
from .model import Block, Embed, Inline, WikiLink

_CHARS = r"[a-zA-ZÀ-ÿ0-9\-'?%.():&,+/€! ]"

BRACKET_LINK_RE = re.compile(
    rf"\[\[({_CHARS}*)(?:#({_CHARS}+))?(?:\|({_CHARS}+))?\]\]"
)
EMBED_LINK_RE = re.compile(rf"!\[\[({_CHARS}+)\]\]")
HIGHLIGHT_RE = re.compile(r"==(.+?)==")


@dataclass
class FlatText:
    text: str = ""
    markup: list[bool] = field(default_factory=list)

    def add_text(self, value: str) -> None:
        self.text += value
        self.markup.extend([False] * len(value))

    def add_markup(self, value: str) -> None:
        self.text += value
        self.markup.extend([True] * len(value))

    def is_text(self, start: int, end: int) -> bool:
        return not any(self.markup[start:end])

    def runs(self, start: int = 0, end: int | None = None) -> Iterator[tuple[str, bool]]:
        """Maximal (chunk, is_markup) runs of a slice."""
        end = len(self.text) if end is None else end
        i = start
        while i < end:
            j = i
            is_markup = self.markup[i]
            while j < end and self.markup[j] == is_markup:
                j += 1
            yield self.text[i:j], is_markup
            i = j

    def emit(self, start: int = 0, end: int | None = None) -> str:
        """HTML for a slice: text characters escaped, markup verbatim."""
        return "".join(
            chunk if is_markup else escape(chunk)
            for chunk, is_markup in self.runs(start, end)
        )

    def inlines(self, start: int = 0, end: int | None = None) -> list[Inline]:
        """A slice as inline nodes: text runs stay text, markup becomes html."""
        return [
            Inline("html" if is_markup else "text", chunk)
            for chunk, is_markup in self.runs(start, end)
        ]


def flatten(nodes: list[Inline], plain_emphasis: bool = False) -> FlatText:
    """
    Flatten inlines into a FlatText.

    With plain_emphasis, strong/emphasis/strikethrough contribute only their
    text (formatting is dropped); otherwise their tags are kept as markup.
    """
    flat = FlatText()
    _flatten_into(flat, nodes, plain_emphasis)
    return flat


def _flatten_into(flat: FlatText, nodes: list[Inline], plain_emphasis: bool) -> None:
    tags = {"emphasis": "em", "strong": "strong", "strikethrough": "s"}
    for node in nodes:
        if node.kind == "text":
            flat.add_text(node.value)
        elif node.kind == "softbreak":
            flat.add_text("\n")
        elif node.kind == "code":
            flat.add_markup(code_span(node.value))
        elif node.kind in tags:
            if not plain_emphasis:
                flat.add_markup(f"<{tags[node.kind]}>")
            _flatten_into(flat, node.children, plain_emphasis)
            if not plain_emphasis:
                flat.add_markup(f"</{tags[node.kind]}>")
        else:
            flat.add_markup(render_inline(node))


def verbatim_values(block: Block) -> set[str]:
    """Values of all code spans inside a block."""
    found: set[str] = set()
    stack = list(block.inlines)
    while stack:
        node = stack.pop()
        if node.kind == "code":
            found.add(node.value)
        stack.extend(node.children)
    return found


def iter_matches(
    pattern: re.Pattern[str],
    flat: FlatText,
    whole: bool = True,
) -> Iterator[re.Match[str]]:
    """
    Yield non-overlapping matches that sit on scannable text.

    whole=True requires every character to be text; otherwise only the
    two-character delimiters at each end must be. A rejected candidate
    resumes the search one character later.
    """
    pos = 0
    while True:
        m = pattern.search(flat.text, pos)
        if m is None:
            return
        if whole:
            ok = flat.is_text(m.start(), m.end())
        else:
            ok = flat.is_text(m.start(), m.start() + 2) and flat.is_text(
                m.end() - 2, m.end()
            )
        if ok:
            yield m
            pos = m.end()
        else:
            pos = m.start() + 1


def wikilink_from_match(m: re.Match[str]) -> WikiLink | None:
    target, heading, text = m.group(1), m.group(2), m.group(3)
    if not target and not heading:
        return None
    return WikiLink(target=target, heading=heading or None, display_text=text or None)


def parse_bracket_link(bracket_link: str) -> WikiLink | None:
    """Parse the first `[[...]]` occurrence of a string."""
    m = BRACKET_LINK_RE.search(bracket_link)
    if not m:
        return None
    return wikilink_from_match(m)


def find_embeds(flat: FlatText, verbatim: set[str]) -> list[tuple[re.Match[str], Embed]]:
    return [
        (m, Embed(target=m.group(1)))
        for m in iter_matches(EMBED_LINK_RE, flat)
        if m.group(0) not in verbatim
    ]


def find_wikilinks(
    flat: FlatText, verbatim: set[str]
) -> list[tuple[re.Match[str], WikiLink]]:
    # An embed's inner brackets are never a wikilink, shadowed or not
    embed_spans = [m.span() for m in iter_matches(EMBED_LINK_RE, flat)]
    out = []
    for m in iter_matches(BRACKET_LINK_RE, flat):
        if any(s < m.end() and m.start() < e for s, e in embed_spans):
            continue
        if m.group(0) in verbatim:
            continue
        link = wikilink_from_match(m)
        if link is not None:
            out.append((m, link))
    return out


def find_highlights(flat: FlatText, verbatim: set[str]) -> list[re.Match[str]]:
    return [
        m
        for m in iter_matches(HIGHLIGHT_RE, flat, whole=False)
        if m.group(0) not in verbatim
    ]
