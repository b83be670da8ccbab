"""Obsidian-flavored markdown transformations: wikilinks, embeds, highlights, callouts."""

__version__ = "0.3.0"

from .core.model import Block, Inline, NoteFile, ResolvedReference, TocEntry, WikiLink
from .core.pipeline import Processor
from .core.scanner import parse_bracket_link
from .core.utils import slugify
from .runtime import build_runtime

__all__ = [
    "__version__",
    "Block",
    "Inline",
    "NoteFile",
    "Processor",
    "ResolvedReference",
    "TocEntry",
    "WikiLink",
    "build_runtime",
    "parse_bracket_link",
    "slugify",
]
