import re

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from ..core.model import Block, Inline
from ..core.ports import FrontmatterCodec, ParserStrategy
from .yaml_codec import YamlFrontmatter

COMMENT_RE = re.compile(r"^\s*<!--(.*?)-->\s*$", re.DOTALL)

_CONTAINERS = {
    "blockquote": "blockquote",
    "bullet_list": "list",
    "ordered_list": "list",
    "list_item": "list_item",
}
_EMPHASIS = {"em": "emphasis", "strong": "strong", "s": "strikethrough"}


class MarkdownParser(ParserStrategy):
    """
    Build a document tree with markdown-it-py (CommonMark plus tables and
    strikethrough). HTML comments standing alone become comment markers;
    constructs without a tree equivalent are kept as pre-rendered HTML.
    """

    def __init__(self, frontmatter: FrontmatterCodec | None = None):
        self.frontmatter = frontmatter or YamlFrontmatter()
        self.md = MarkdownIt("commonmark").enable(["table", "strikethrough"])

    def parse(self, text: str) -> Block:
        _meta, body = self.frontmatter.decode(text)
        tree = SyntaxTreeNode(self.md.parse(body))
        return Block("root", [self._block(n) for n in tree.children])

    def _block(self, node: SyntaxTreeNode) -> Block:
        t = node.type
        if t == "paragraph":
            return Block("paragraph", self._inlines(node))
        if t == "heading":
            return Block("heading", self._inlines(node), attrs={"level": node.tag[1:]})
        if t in _CONTAINERS:
            block = Block(_CONTAINERS[t], [self._block(c) for c in node.children])
            if t == "ordered_list":
                block.attrs["ordered"] = "true"
                block.attrs["start"] = str(node.attrs.get("start", 1))
            if t == "list_item":
                tight = any(c.type == "paragraph" and c.hidden for c in node.children)
                block.attrs["tight"] = "true" if tight else "false"
            return block
        if t in ("fence", "code_block"):
            return Block("code_block", value=node.content, attrs={"info": node.info.strip()})
        if t == "hr":
            return Block("thematic_break")
        if t == "html_block":
            m = COMMENT_RE.match(node.content)
            if m:
                return Block("comment", value=m.group(1))
            return Block("html", value=node.content)
        # tables and anything else: keep markdown-it's own rendering
        rendered = self.md.renderer.render(node.to_tokens(), self.md.options, {})
        return Block("html", value=rendered)

    def _inlines(self, node: SyntaxTreeNode) -> list[Inline]:
        out: list[Inline] = []
        for child in node.children:
            if child.type == "inline":
                out.extend(_convert_inlines(child.children))
        return out


def _convert_inlines(nodes: list[SyntaxTreeNode]) -> list[Inline]:
    out: list[Inline] = []
    for node in nodes:
        t = node.type
        if t in ("text", "text_special"):
            # adjacent text runs are merged so syntax is never split
            if out and out[-1].kind == "text":
                out[-1].value += node.content
            else:
                out.append(Inline("text", node.content))
        elif t == "softbreak":
            out.append(Inline("softbreak"))
        elif t == "hardbreak":
            out.append(Inline("hardbreak"))
        elif t == "code_inline":
            out.append(Inline("code", node.content))
        elif t in _EMPHASIS:
            out.append(Inline(_EMPHASIS[t], children=_convert_inlines(node.children)))
        elif t == "link":
            attrs = {"href": str(node.attrs.get("href", ""))}
            if node.attrs.get("title"):
                attrs["title"] = str(node.attrs["title"])
            out.append(Inline("link", children=_convert_inlines(node.children), attrs=attrs))
        elif t == "image":
            attrs = {"src": str(node.attrs.get("src", "")), "alt": node.content}
            if node.attrs.get("title"):
                attrs["title"] = str(node.attrs["title"])
            out.append(Inline("image", attrs=attrs))
        elif t == "html_inline":
            out.append(Inline("html", node.content))
        else:
            out.append(Inline("text", node.content))
    return out
