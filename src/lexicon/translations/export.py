"""Reshape flat dotted translation keys into a nested export tree.

``common.button.save = "Save"`` becomes ``{"common": {"button": {"save": "Save"}}}``.

Records are unordered, and a key that is a strict dotted prefix of another key
in the same language cannot be represented: ``a.b`` wants a string at ``b``
while ``a.b.c`` wants a mapping there. The record processed later wins and the
other value is dropped. Callers that want to know when this happens pass
``on_collision``.
"""

from collections.abc import Callable, Iterable
from typing import Any

from lexicon.translations.models import KEY_SEPARATOR

ExportTree = dict[str, Any]

# Called with (full key being placed, dotted path of the overwritten node)
CollisionHandler = Callable[[str, str], None]


def build_export_tree(
    records: Iterable[tuple[str, str]],
    on_collision: CollisionHandler | None = None,
) -> ExportTree:
    """Fold ``(key, content)`` pairs into a fresh nested mapping.

    Args:
        records: Flat translation keys with their content
        on_collision: Optional callback invoked whenever a leaf is replaced by
            a mapping or a mapping by a leaf

    Returns:
        Nested dict; leaves are the content strings
    """
    tree: ExportTree = {}
    for key, content in records:
        _place(tree, key, content, on_collision)
    return tree


def _place(
    tree: ExportTree,
    key: str,
    content: str,
    on_collision: CollisionHandler | None,
) -> None:
    segments = key.split(KEY_SEPARATOR)
    node = tree

    for depth, segment in enumerate(segments[:-1]):
        child = node.get(segment)
        if not isinstance(child, dict):
            if child is not None and on_collision:
                on_collision(key, KEY_SEPARATOR.join(segments[: depth + 1]))
            child = {}
            node[segment] = child
        node = child

    leaf = segments[-1]
    if isinstance(node.get(leaf), dict) and on_collision:
        on_collision(key, key)
    node[leaf] = content
