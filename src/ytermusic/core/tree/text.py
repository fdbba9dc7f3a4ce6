"""Rebuild plain strings from the service's rich-text encoding.

A text value is one of:
- a literal string,
- a wrapper ``{"text": <text value>, ...}``,
- a list of styled fragments ``{"runs": [<text value>, ...]}``.
"""

from typing import Any

_BULLET = "•"


def extract_text(
    node: Any, suppress_singleton: bool = False, bullet_join: bool = False
) -> str | None:
    """Extract the text carried by `node`, or None if it carries none.

    Args:
        node: Any JSON node.
        suppress_singleton: Reject ``{"text": ...}`` wrappers that have no
            other key. Bare wrappers mark separators and labels, not data.
        bullet_join: Join runs with " • " instead of a single space.
    """
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return None
    if "text" in node:
        if suppress_singleton and len(node) == 1:
            return None
        return extract_text(
            node["text"], suppress_singleton=suppress_singleton, bullet_join=bullet_join
        )
    runs = node.get("runs")
    if not isinstance(runs, list):
        return None
    fragments = []
    for run in runs:
        fragment = extract_text(run, bullet_join=bullet_join)
        if fragment is None:
            continue
        fragment = fragment.strip()
        if not fragment:
            continue
        # A lone glyph run would double the joiner's separator.
        if bullet_join and not fragment.strip(_BULLET).strip():
            continue
        fragments.append(fragment)
    if not fragments:
        return None
    return (f" {_BULLET} " if bullet_join else " ").join(fragments)
