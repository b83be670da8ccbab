from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator

BLOCK_KINDS = frozenset(
    {
        "root",
        "paragraph",
        "heading",
        "blockquote",
        "list",
        "list_item",
        "code_block",
        "comment",
        "html",
        "thematic_break",
        "embed",
    }
)

INLINE_KINDS = frozenset(
    {
        "text",
        "emphasis",
        "strong",
        "strikethrough",
        "code",
        "link",
        "image",
        "html",
        "softbreak",
        "hardbreak",
    }
)


@dataclass
class Inline:
    kind: str  # one of INLINE_KINDS
    value: str = ""  # text / code / html payload
    children: list[Inline] = field(default_factory=list)
    attrs: dict[str, str] = field(default_factory=dict)  # href, title, src, alt

    def __post_init__(self) -> None:
        if self.kind not in INLINE_KINDS:
            raise ValueError(f"Unknown inline kind: {self.kind!r}")


@dataclass
class Block:
    kind: str  # one of BLOCK_KINDS
    children: list[Block | Inline] = field(default_factory=list)
    value: str = ""  # comment payload, code, raw html
    attrs: dict[str, str] = field(default_factory=dict)  # level, info, ordered, start

    def __post_init__(self) -> None:
        if self.kind not in BLOCK_KINDS:
            raise ValueError(f"Unknown block kind: {self.kind!r}")

    @property
    def marker(self) -> str | None:
        """Normalized payload of a comment marker, None for other blocks."""
        if self.kind != "comment":
            return None
        return self.value.strip().lower()

    @property
    def inlines(self) -> list[Inline]:
        return [c for c in self.children if isinstance(c, Inline)]

    @property
    def blocks(self) -> list[Block]:
        return [c for c in self.children if isinstance(c, Block)]

    def walk(self) -> Iterator[Block]:
        """Depth-first over blocks; does not enter embedded notes."""
        yield self
        for child in self.blocks:
            if child.kind == "embed":
                continue
            yield from child.walk()


def root(*children: Block) -> Block:
    return Block("root", list(children))


def paragraph(*children: Inline) -> Block:
    return Block("paragraph", list(children))


def text(value: str) -> Inline:
    return Inline("text", value)


def html_block(value: str) -> Block:
    return Block("html", value=value)


@dataclass(frozen=True)
class WikiLink:
    target: str  # "" for [[#Heading]]
    heading: str | None = None
    display_text: str | None = None

    @property
    def title(self) -> str:
        if self.display_text:
            return self.display_text
        return self.target or (self.heading or "")


@dataclass(frozen=True)
class Embed:
    target: str


@dataclass(frozen=True)
class ResolvedReference:
    href: str
    title: str
    found: bool = True


@dataclass(frozen=True)
class NoteFile:
    """Registry entry: a known note, optionally with inline content or a permalink."""
    file: str
    permalink: str | None = None
    content: str | None = None

    @property
    def name(self) -> str:
        return self.file[:-3] if self.file.endswith(".md") else self.file


@dataclass(frozen=True)
class TocEntry:
    href: str
    title: str
    group: str | None = None
