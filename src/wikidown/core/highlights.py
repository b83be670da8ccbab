"""`==highlight==` spans rendered as <mark>."""

from .model import Block, Inline
from .scanner import find_highlights, flatten, verbatim_values
from .utils import to_string


def transform_highlights(tree: Block) -> Block:
    for block in tree.walk():
        if block.kind == "paragraph":
            _highlight_paragraph(block)
    return tree


def _highlight_paragraph(paragraph: Block) -> None:
    flat = flatten(paragraph.inlines, plain_emphasis=True)
    found = find_highlights(flat, verbatim_values(paragraph))
    if not found:
        return

    bold = {to_string(c) for c in paragraph.inlines if c.kind == "strong"}

    out = []
    pos = 0
    for m in found:
        out.append(flat.emit(pos, m.start()))
        inner = flat.emit(m.start(1), m.end(1))
        # flattening drops bold; restore it when the whole span was one strong node
        if m.group(1) in bold:
            out.append(f"<mark><b>{inner}</b></mark>")
        else:
            out.append(f"<mark>{inner}</mark>")
        pos = m.end()
    out.append(flat.emit(pos))

    paragraph.children = [Inline("html", "".join(out))]
