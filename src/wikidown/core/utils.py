"""Utility functions for wikidown."""

import re
import unicodedata

from .model import Block, Inline

# Symbols that carry meaning in a title and are spelled out in slugs
CHARMAP = {
    "&": "and",
    "%": "percent",
    "€": "euro",
    "$": "dollar",
    "£": "pound",
    "<": "less",
    ">": "greater",
    "|": "or",
    "©": "(c)",
    "®": "(r)",
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ł": "l",
    "Ł": "L",
    "þ": "th",
    "Þ": "TH",
}

_REMOVE = re.compile(r"[^\w\s$*_+~.()'\"!:@]+")


def slugify(text: str) -> str:
    """
    Convert a note title or heading to a URL slug.

    - Spell out mapped symbols in place (`&` -> `and`, `€` -> `euro`)
    - Treat `-` as a space, so separators collapse with surrounding spaces
    - Unicode normalize (NFKD), drop combining marks
    - Remove characters outside word chars, spaces and `$*_+~.()'"!:@`
    - Trim, convert whitespace runs to single `-`
    - Lowercase

    Examples:
        >>> slugify("Internal link")
        'internal-link'
        >>> slugify("Productivité")
        'productivite'
        >>> slugify("A & B")
        'a-and-b'
        >>> slugify("Part 1 - Basics")
        'part-1-basics'
    """
    text = "".join(" " if c == "-" else CHARMAP.get(c, c) for c in text)

    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))

    text = _REMOVE.sub("", text)

    text = text.strip()
    text = re.sub(r"\s+", "-", text)

    return text.lower()


def to_string(node: Block | Inline) -> str:
    """Plain text content of a node: values of leaves, concatenated."""
    if isinstance(node, Inline):
        if node.kind in ("softbreak", "hardbreak"):
            return "\n"
        if node.kind == "image":
            return node.attrs.get("alt", "")
        if node.value:
            return node.value
    elif node.kind in ("code_block", "html", "comment"):
        return node.value
    return "".join(to_string(c) for c in node.children)
