"""Table-of-contents extraction from nested lists of wikilinks."""

from .links import link_href
from .model import Block, TocEntry
from .ports import NoteResolver
from .scanner import find_wikilinks, flatten, verbatim_values
from .utils import to_string


def _item_paragraph(item: Block) -> Block | None:
    return next((b for b in item.blocks if b.kind == "paragraph"), None)


def _entries(paragraph: Block, resolver: NoteResolver, group: str | None) -> list[TocEntry]:
    flat = flatten(paragraph.inlines)
    out = []
    for _m, link in find_wikilinks(flat, verbatim_values(paragraph)):
        href, _found = link_href(link, resolver)
        out.append(TocEntry(href=href, title=link.title, group=group))
    return out


def extract_toc(tree: Block, resolver: NoteResolver) -> list[TocEntry]:
    """
    Collect wikilinks from the top-level lists of a note, in document order.

    A list item holding a nested list names a group: entries found in the
    nested items carry the item's own text as their `group`. Items without a
    nested list yield ungrouped entries.
    """
    toc: list[TocEntry] = []
    for lst in tree.blocks:
        if lst.kind != "list":
            continue
        for item in lst.blocks:
            para = _item_paragraph(item)
            nested = [b for b in item.blocks if b.kind == "list"]
            if not nested:
                if para is not None:
                    toc.extend(_entries(para, resolver, None))
                continue
            group = to_string(para).strip() if para is not None else None
            for sub in nested:
                for sub_item in sub.blocks:
                    sub_para = _item_paragraph(sub_item)
                    if sub_para is not None:
                        toc.extend(_entries(sub_para, resolver, group))
    return toc
