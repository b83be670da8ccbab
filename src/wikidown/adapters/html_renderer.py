from ..core.markup import render_block
from ..core.model import Block
from ..core.ports import Renderer


class HtmlRenderer(Renderer):
    def render(self, tree: Block) -> str:
        out = render_block(tree)
        return out + "\n" if out else ""
