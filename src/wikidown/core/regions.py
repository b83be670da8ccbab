"""Structural edits over top-level blocks delimited by comment markers."""

from .model import Block, html_block


def find_region(tree: Block, start_marker: str, end_marker: str) -> tuple[int, int] | None:
    """
    Locate the first region opened by `start_marker`.

    Returns inclusive (start, end) indices into tree.children. Without a
    closing marker the region runs to the last child.
    """
    children = tree.children
    start = next(
        (i for i, c in enumerate(children) if isinstance(c, Block) and c.marker == start_marker),
        None,
    )
    if start is None:
        return None
    for i in range(start + 1, len(children)):
        child = children[i]
        if isinstance(child, Block) and child.marker == end_marker:
            return (start, i)
    return (start, len(children) - 1)


def remove_ignore_regions(tree: Block) -> Block:
    """Delete every `ignore` ... `end ignore` region, markers included."""
    while (region := find_region(tree, "ignore", "end ignore")) is not None:
        start, end = region
        del tree.children[start : end + 1]
    return tree


def add_paywall(tree: Block, paywall: str | None) -> Block:
    """
    Replace every `private` ... `end private` region with the paywall fragment.

    No-op when no paywall fragment is given.
    """
    if not paywall:
        return tree
    while (region := find_region(tree, "private", "end private")) is not None:
        start, end = region
        tree.children[start : end + 1] = [html_block(paywall)]
    return tree
