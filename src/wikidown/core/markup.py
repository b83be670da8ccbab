"""HTML emission for document tree nodes."""

import html

from .model import Block, Inline


def escape(text: str) -> str:
    return html.escape(text, quote=False)


def escape_attr(text: str) -> str:
    return html.escape(text, quote=True)


def escape_href(url: str) -> str:
    """Escape a URL for a double-quoted attribute; apostrophes stay as written."""
    return escape(url).replace('"', "&quot;")


def code_span(value: str) -> str:
    return f"<code>{escape(value)}</code>"


def render_inline(node: Inline) -> str:
    kind = node.kind
    if kind == "text":
        return escape(node.value)
    if kind == "code":
        return code_span(node.value)
    if kind == "html":
        return node.value
    if kind == "softbreak":
        return "\n"
    if kind == "hardbreak":
        return "<br />\n"
    if kind == "image":
        src = escape_attr(node.attrs.get("src", ""))
        alt = escape_attr(node.attrs.get("alt", ""))
        title = node.attrs.get("title")
        title_attr = f' title="{escape_attr(title)}"' if title else ""
        return f'<img src="{src}" alt="{alt}"{title_attr} />'

    inner = render_inlines(node.children)
    if kind == "emphasis":
        return f"<em>{inner}</em>"
    if kind == "strong":
        return f"<strong>{inner}</strong>"
    if kind == "strikethrough":
        return f"<s>{inner}</s>"
    if kind == "link":
        href = escape_attr(node.attrs.get("href", ""))
        title = node.attrs.get("title")
        title_attr = f' title="{escape_attr(title)}"' if title else ""
        return f'<a href="{href}"{title_attr}>{inner}</a>'
    raise ValueError(f"Cannot render inline kind {kind!r}")


def render_inlines(nodes: list[Inline]) -> str:
    return "".join(render_inline(n) for n in nodes)


def render_block(block: Block) -> str:
    """Render a block and its descendants as an HTML fragment."""
    kind = block.kind
    if kind in ("root", "embed"):
        return "\n".join(render_block(b) for b in block.blocks)
    if kind == "paragraph":
        return f"<p>{render_inlines(block.inlines)}</p>"
    if kind == "heading":
        level = block.attrs.get("level", "1")
        return f"<h{level}>{render_inlines(block.inlines)}</h{level}>"
    if kind == "blockquote":
        inner = "\n".join(render_block(b) for b in block.blocks)
        return f"<blockquote>\n{inner}\n</blockquote>"
    if kind == "list":
        tag = "ol" if block.attrs.get("ordered") == "true" else "ul"
        start = block.attrs.get("start")
        start_attr = f' start="{start}"' if tag == "ol" and start not in (None, "1") else ""
        items = "\n".join(render_block(b) for b in block.blocks)
        return f"<{tag}{start_attr}>\n{items}\n</{tag}>"
    if kind == "list_item":
        parts = []
        for child in block.blocks:
            # tight list items render their paragraphs without <p>
            if child.kind == "paragraph" and block.attrs.get("tight") == "true":
                parts.append(render_inlines(child.inlines))
            else:
                parts.append(render_block(child))
        return f"<li>{chr(10).join(parts)}</li>"
    if kind == "code_block":
        info = block.attrs.get("info", "").split(" ")[0]
        cls = f' class="language-{escape_attr(info)}"' if info else ""
        return f"<pre><code{cls}>{escape(block.value)}</code></pre>"
    if kind == "comment":
        return f"<!--{block.value}-->"
    if kind == "html":
        return block.value.rstrip("\n")
    if kind == "thematic_break":
        return "<hr />"
    raise ValueError(f"Cannot render block kind {kind!r}")
