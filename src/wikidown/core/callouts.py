"""Callout blocks: `> [!TYPE] Optional title` quotes restyled as boxes."""

import re
from dataclasses import dataclass

from .markup import escape, render_block, render_inlines
from .model import Block, html_block

CALLOUT_RE = re.compile(r"^\[!([\w-]+)\][+-]?[ \t]*([^\n]*)")


def _svg(body: str) -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" '
        'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
        f'stroke-linecap="round" stroke-linejoin="round">{body}</svg>'
    )


ICONS = {
    "note": _svg('<path d="M12 20h9"></path><path d="M16.5 3.5a2.12 2.12 0 0 1 3 3L7 19l-4 1 1-4Z"></path>'),
    "info": _svg('<circle cx="12" cy="12" r="10"></circle><path d="M12 16v-4"></path><path d="M12 8h.01"></path>'),
    "tip": _svg('<path d="M8.5 14.5A2.5 2.5 0 0 0 11 12c0-1.38-.5-2-1-3-1.07-2.14-.22-4.05 2-6 .5 2.5 2 4.9 4 6.5 2 1.6 3 3.5 3 5.5a7 7 0 1 1-14 0c0-1.15.43-2.29 1-3a2.5 2.5 0 0 0 2.5 2.5z"></path>'),
    "warning": _svg('<path d="m21.73 18-8-14a2 2 0 0 0-3.48 0l-8 14A2 2 0 0 0 4 21h16a2 2 0 0 0 1.73-3Z"></path><path d="M12 9v4"></path><path d="M12 17h.01"></path>'),
    "danger": _svg('<polygon points="13 2 3 14 12 14 11 22 21 10 12 10 13 2"></polygon>'),
    "success": _svg('<polyline points="20 6 9 17 4 12"></polyline>'),
    "question": _svg('<circle cx="12" cy="12" r="10"></circle><path d="M9.09 9a3 3 0 0 1 5.83 1c0 2-3 3-3 3"></path><path d="M12 17h.01"></path>'),
    "quote": _svg('<path d="M3 21c3 0 7-1 7-8V5c0-1.25-.756-2.017-2-2H4c-1.25 0-2 .75-2 1.972V11c0 1.25.75 2 2 2 1 0 1 0 1 1v1c0 1-1 2-2 2s-1 .008-1 1.031V20c0 1 0 1 1 1z"></path><path d="M15 21c3 0 7-1 7-8V5c0-1.25-.757-2.017-2-2h-4c-1.25 0-2 .75-2 1.972V11c0 1.25.75 2 2 2h.75c0 2.25.25 4-2.75 4v3c0 1 0 1 1 1z"></path>'),
}


@dataclass(frozen=True)
class Callout:
    type: str  # lower-cased
    title: str | None  # custom title, already HTML
    body: str  # HTML, lines joined by single spaces


def parse_callout(block: Block) -> Callout | None:
    """Recognize a callout from a blockquote's rendered content."""
    if block.kind != "blockquote":
        return None
    parts = []
    for child in block.blocks:
        if child.kind == "paragraph":
            parts.append(render_inlines(child.inlines))
        else:
            parts.append(render_block(child))
    content = "\n".join(parts)

    m = CALLOUT_RE.match(content)
    if not m:
        return None
    lines = content[m.end() :].split("\n")
    body = " ".join(line.strip() for line in lines if line.strip())
    title = m.group(2).strip() or None
    return Callout(type=m.group(1).lower(), title=title, body=body)


def render_callout(callout: Callout) -> str:
    icon = ICONS.get(callout.type)
    out = [f'<blockquote class="callout {escape(callout.type)}">']
    if icon or callout.title:
        title = callout.title or escape(callout.type.capitalize())
        out.append('<div class="callout-title">')
        if icon:
            out.append(f'<div class="callout-icon">{icon}</div>')
        out.append(f'<div class="callout-title-inner">{title}</div>')
        out.append("</div>")
    out.append(f'<div class="callout-content"><p>{callout.body}</p></div>')
    out.append("</blockquote>")
    return "".join(out)


def transform_callouts(tree: Block) -> Block:
    for block in list(tree.walk()):
        for i, child in enumerate(block.children):
            if isinstance(child, Block) and (callout := parse_callout(child)):
                block.children[i] = html_block(render_callout(callout))
    return tree
