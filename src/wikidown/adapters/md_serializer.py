import re

from ..core.model import Block, Inline
from ..core.ports import Renderer


def _code_span(value: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", value)), default=0)
    fence = "`" * (longest + 1)
    pad = " " if value.startswith("`") or value.endswith("`") else ""
    return f"{fence}{pad}{value}{pad}{fence}"


def _indent(text: str, first: str, rest: str) -> str:
    lines = text.split("\n")
    out = [first + lines[0]]
    out.extend((rest + line) if line else line for line in lines[1:])
    return "\n".join(out)


class MarkdownSerializer(Renderer):
    """
    Serialize a processed tree back to markdown. Rewritten content (links,
    highlights, callouts, embeds of missing notes) is emitted as inline HTML.
    """

    def render(self, tree: Block) -> str:
        out = self._blocks(tree.blocks)
        return out + "\n" if out else ""

    def _blocks(self, blocks: list[Block], sep: str = "\n\n") -> str:
        return sep.join(s for s in (self._block(b) for b in blocks) if s)

    def _block(self, block: Block) -> str:
        kind = block.kind
        if kind in ("root", "embed"):
            return self._blocks(block.blocks)
        if kind == "paragraph":
            return self._inlines(block.inlines)
        if kind == "heading":
            level = int(block.attrs.get("level", "1"))
            return "#" * level + " " + self._inlines(block.inlines)
        if kind == "blockquote":
            inner = self._blocks(block.blocks)
            return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
        if kind == "list":
            return self._list(block)
        if kind == "code_block":
            value = block.value if block.value.endswith("\n") else block.value + "\n"
            fence = "````" if "```" in value else "```"
            return f"{fence}{block.attrs.get('info', '')}\n{value}{fence}"
        if kind == "comment":
            return f"<!--{block.value}-->"
        if kind == "html":
            return block.value.rstrip("\n")
        if kind == "thematic_break":
            return "***"
        if kind == "list_item":
            return self._blocks(block.blocks)
        raise ValueError(f"Cannot serialize block kind {kind!r}")

    def _list(self, block: Block) -> str:
        ordered = block.attrs.get("ordered") == "true"
        start = int(block.attrs.get("start", "1"))
        tight = all(item.attrs.get("tight") != "false" for item in block.blocks)
        items = []
        for i, item in enumerate(block.blocks):
            marker = f"{start + i}. " if ordered else "- "
            content = self._blocks(item.blocks, sep="\n" if tight else "\n\n")
            items.append(_indent(content, marker, " " * len(marker)))
        return ("\n" if tight else "\n\n").join(items)

    def _inlines(self, nodes: list[Inline]) -> str:
        return "".join(self._inline(n) for n in nodes)

    def _inline(self, node: Inline) -> str:
        kind = node.kind
        if kind in ("text", "html"):
            return node.value
        if kind == "code":
            return _code_span(node.value)
        if kind == "softbreak":
            return "\n"
        if kind == "hardbreak":
            return "\\\n"
        if kind == "emphasis":
            return f"*{self._inlines(node.children)}*"
        if kind == "strong":
            return f"**{self._inlines(node.children)}**"
        if kind == "strikethrough":
            return f"~~{self._inlines(node.children)}~~"
        if kind in ("link", "image"):
            title = node.attrs.get("title")
            title_part = f' "{title}"' if title else ""
            if kind == "image":
                return f"![{node.attrs.get('alt', '')}]({node.attrs.get('src', '')}{title_part})"
            return f"[{self._inlines(node.children)}]({node.attrs.get('href', '')}{title_part})"
        raise ValueError(f"Cannot serialize inline kind {kind!r}")
