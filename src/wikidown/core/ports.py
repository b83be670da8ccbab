from typing import Protocol, Any
from .model import Block, ResolvedReference


class StorageStrategy(Protocol):
    """
    Flat store: one directory, files named <name>.md
    """

    def read_raw(self, name: str) -> str | None:
        pass


class FrontmatterCodec(Protocol):
    """
    Split optional frontmatter from a note without enforcing schema.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        pass


class ParserStrategy(Protocol):
    """
    Parse Markdown into a document tree. Frontmatter, if any, is dropped.
    """

    def parse(self, text: str) -> Block:
        pass


class NoteResolver(Protocol):
    """
    Map a note title to its destination and, for embeds, to its raw contents.
    `fetch_content` returns None when the note does not exist.
    """

    def resolve(self, target: str) -> ResolvedReference:
        pass

    def fetch_content(self, target: str) -> str | None:
        pass


class Renderer(Protocol):
    def render(self, tree: Block) -> str:
        pass
