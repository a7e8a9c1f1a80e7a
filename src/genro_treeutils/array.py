# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Operations on tree-like arrays.

A tree-like array is a flat list of records linked by parent ids::

    [
        {'id': 1},
        {'id': 2, 'pId': 1},
        {'id': 3, 'pId': 2},
    ]

Parents may appear before or after their children. Arguments must be
lists; other types are not guarded against.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from typing import Any, Callable, Mapping

from .options import TreeOptions, resolve_options

logger = logging.getLogger(__name__)

TreeLikeArray = list[dict[str, Any]]
OptionsArg = TreeOptions | Mapping[str, Any] | None


def _find_by_id(array: TreeLikeArray, item_id: Any, opts: TreeOptions) -> dict[str, Any] | None:
    return next((item for item in array if opts.get_id(item) == item_id), None)


def create_tree_from_tree_like_array(
    array: TreeLikeArray,
    options: OptionsArg = None,
) -> TreeLikeArray:
    """Build a nested forest from a tree-like array.

    Items are deep-copied. Each item whose parent id resolves to another
    item is appended to that item's children list (created on first use);
    the others become roots. Children keep the order of the input array.

    Args:
        array: Flat list of records.
        options: Field aliases (id_key, parent_id_key, children_key).

    Returns:
        List of root nodes.

    Example:
        >>> create_tree_from_tree_like_array([{'id': 1}, {'id': 2, 'pId': 1}])
        [{'id': 1, 'children': [{'id': 2, 'pId': 1}]}]
    """
    opts = resolve_options(options)
    items = copy.deepcopy(array)
    by_id = {opts.get_id(item): item for item in items}

    roots: TreeLikeArray = []
    for item in items:
        parent = by_id.get(opts.get_parent_id(item)) if opts.has_parent(item) else None
        if parent is None:
            roots.append(item)
            continue
        children = opts.get_children(parent)
        if children is None:
            children = []
            opts.set_children(parent, children)
        children.append(item)

    logger.debug("Built %d root(s) from %d item(s)", len(roots), len(items))
    return roots


def filter_tree_array(
    array: TreeLikeArray,
    predicate: Callable[[dict[str, Any]], Any],
    options: OptionsArg = None,
) -> TreeLikeArray:
    """Filter a tree-like array, keeping the ancestors of matching items.

    Ancestors are looked up in the full array, starting from the last
    matching item, and prepended to the result, so each ancestor comes
    before the items found through it.

    Returns:
        Copies of the matching items and their ancestors.

    Example:
        >>> array = [{'id': 1}, {'id': 2, 'pId': 1}, {'id': 3, 'pId': 2}]
        >>> [i['id'] for i in filter_tree_array(array, lambda i: i['id'] == 3)]
        [1, 2, 3]
    """
    opts = resolve_options(options)
    result = [item for item in array if predicate(item)]
    included = [opts.get_id(item) for item in result]
    pending = list(result)
    added = 0
    while pending:
        current = pending.pop()
        if not opts.has_parent(current):
            continue
        parent = _find_by_id(array, opts.get_parent_id(current), opts)
        if parent is not None and opts.get_id(parent) not in included:
            result.insert(0, parent)
            included.append(opts.get_id(parent))
            pending.append(parent)
            added += 1

    if added:
        logger.debug("Added %d ancestor(s) to %d matching item(s)",
                     added, len(result) - added)
    return copy.deepcopy(result)


def _walk_up(
    array: TreeLikeArray,
    start: Mapping[str, Any],
    max_depth: int | bool | None,
    opts: TreeOptions,
) -> TreeLikeArray:
    """Return the ancestors of start, root-most first.

    At least one step is taken; max_depth None or False means unlimited.
    """
    remaining = (
        float('inf') if max_depth is None or max_depth is False else max_depth
    )
    chain: TreeLikeArray = []
    current: Mapping[str, Any] | None = start
    while True:
        if current is not None and opts.has_parent(current):
            current = _find_by_id(array, opts.get_parent_id(current), opts)
        else:
            current = None
        if current is not None:
            chain.insert(0, current)
        remaining -= 1
        if current is None or not opts.has_parent(current) or remaining <= 0:
            break
    return chain


def closest_parent_item_in_tree_array(
    array: TreeLikeArray,
    node: Mapping[str, Any],
    max_depth: int | bool | None = None,
    options: OptionsArg = None,
) -> TreeLikeArray:
    """Return the ancestors of node, root-most first.

    Args:
        array: Flat list of records.
        node: Item whose ancestors are wanted.
        max_depth: Maximum number of levels to climb; None or False for
            no limit.
        options: Field aliases.
    """
    return _walk_up(array, node, max_depth, resolve_options(options))


def closest_parent_keys_in_tree_array(
    array: TreeLikeArray,
    key: Any,
    max_depth: int | bool | None = None,
    options: OptionsArg = None,
) -> list[Any]:
    """Return the ids of the ancestors of the item with id key, root-most first.

    Example:
        >>> array = [{'id': 1}, {'id': 2, 'pId': 1}, {'id': 3, 'pId': 2}]
        >>> closest_parent_keys_in_tree_array(array, 3)
        [1, 2]
    """
    opts = resolve_options(options)
    start = _find_by_id(array, key, opts)
    if start is None:
        return []
    return [opts.get_id(item) for item in _walk_up(array, start, max_depth, opts)]


def find_children_item_in_tree_array(
    array: TreeLikeArray,
    target: Mapping[str, Any],
    options: OptionsArg = None,
) -> TreeLikeArray:
    """Return all descendants of target, breadth-first in discovery order."""
    opts = resolve_options(options)

    def children_of(parent_id: Any) -> TreeLikeArray:
        return [
            item for item in array
            if opts.has_parent(item) and opts.get_parent_id(item) == parent_id
        ]

    result: TreeLikeArray = []
    queue = deque(children_of(opts.get_id(target)))
    while queue:
        current = queue.popleft()
        result.append(current)
        queue.extend(children_of(opts.get_id(current)))
    return result


def has_children_node(
    array: TreeLikeArray,
    target: Mapping[str, Any],
    options: OptionsArg = None,
) -> bool:
    """True if any item references target as its parent."""
    opts = resolve_options(options)
    target_id = opts.get_id(target)
    return any(
        opts.has_parent(item) and opts.get_parent_id(item) == target_id
        for item in array
    )
