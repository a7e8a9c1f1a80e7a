# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal engine for nested trees.

A single generator, iter_tree(), walks a tree or forest breadth-first or
depth-first over one work queue. The search helpers (some_tree, every_tree,
find_one_in_tree, find_all_in_tree) are thin consumers of that generator.

Ordering:
    When a node is dequeued its children are scheduled first and the node
    is yielded afterwards (enqueue-then-visit). Breadth-first appends the
    children to the tail of the queue; depth-first pushes them, in order,
    to the head, which yields a pre-order walk.

Example:
    >>> tree = [{'id': 1, 'children': [{'id': 2}, {'id': 3}]}]
    >>> [n['id'] for n in iter_tree(tree)]
    [1, 2, 3]
    >>> find_one_in_tree(tree, lambda n: n['id'] > 1)
    {'id': 2}
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Iterator, Mapping

from .options import TreeOptions, resolve_options

logger = logging.getLogger(__name__)

Tree = dict[str, Any] | list[dict[str, Any]]
Predicate = Callable[[dict[str, Any]], Any]


class TraverseType(str, Enum):
    """Walk order for traversal helpers.

    Only 'depth' (any case) selects depth-first; every other value,
    including the historical spelling 'breath', walks breadth-first.
    """

    BREADTH = 'breadth'
    DEPTH = 'depth'

    @classmethod
    def _missing_(cls, value: object) -> TraverseType:
        if isinstance(value, str) and value.lower() == 'depth':
            return cls.DEPTH
        if not (isinstance(value, str) and value.lower() in ('breadth', 'breath')):
            logger.debug("Unknown traverse type %r, walking breadth-first", value)
        return cls.BREADTH


def as_forest(tree: Tree | None) -> list[dict[str, Any]]:
    """Return tree as a list of roots ([] for None)."""
    if tree is None:
        return []
    if isinstance(tree, list):
        return tree
    return [tree]


def iter_tree(
    tree: Tree,
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield every node of a tree or forest.

    Args:
        tree: A root node or a list of root nodes.
        traverse_type: 'depth' walks depth-first; any other value, the
            default 'breadth' included, walks breadth-first.
        options: Field aliases; children_key and max_depth are used.

    Yields:
        The caller's node objects (not copies). None entries are skipped.

    Raises:
        TreeDepthExceededError: If options.max_depth is set and exceeded.
    """
    opts = resolve_options(options)
    depth_first = TraverseType(traverse_type) is TraverseType.DEPTH

    queue: deque[tuple[dict[str, Any], int]] = deque(
        (node, 1) for node in as_forest(tree)
    )
    while queue:
        node, depth = queue.popleft()
        if node is None:
            continue
        children = opts.get_children(node)
        if children:
            opts.check_depth(depth + 1)
            scheduled = [(child, depth + 1) for child in children]
            if depth_first:
                queue.extendleft(reversed(scheduled))
            else:
                queue.extend(scheduled)
        yield node


def traverse_tree(
    tree: Tree,
    callback: Callable[[dict[str, Any]], Any],
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> None:
    """Call callback on every node; stop as soon as it returns False.

    Example:
        >>> seen = []
        >>> traverse_tree(tree, lambda n: seen.append(n['id']))
    """
    for node in iter_tree(tree, traverse_type, options):
        if callback(node) is False:
            break


def some_tree(
    tree: Tree,
    predicate: Predicate,
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> bool:
    """True if predicate holds for at least one node (stops at the first)."""
    return any(predicate(node) for node in iter_tree(tree, traverse_type, options))


def every_tree(
    tree: Tree,
    predicate: Predicate,
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> bool:
    """True if predicate holds for every node (stops at the first failure)."""
    return all(predicate(node) for node in iter_tree(tree, traverse_type, options))


def find_one_in_tree(
    tree: Tree,
    predicate: Predicate,
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> dict[str, Any] | None:
    """Return the first node matching predicate in walk order, or None."""
    for node in iter_tree(tree, traverse_type, options):
        if predicate(node):
            return node
    return None


def find_all_in_tree(
    tree: Tree,
    predicate: Predicate,
    traverse_type: TraverseType | str = TraverseType.BREADTH,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Return all nodes matching predicate in walk order."""
    return [
        node for node in iter_tree(tree, traverse_type, options)
        if predicate(node)
    ]


def walk_post_order(
    forest: list[Any],
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> Iterator[tuple[list[Any], int]]:
    """Yield (siblings, index) for every node, children before their parent.

    Uses an explicit stack instead of recursion. The caller may replace or
    edit siblings[index] while the generator is suspended: a node's children
    list has been fully walked before the node itself is yielded.

    Example:
        >>> forest = [{'id': 1, 'children': [{'id': 2}]}]
        >>> [siblings[i]['id'] for siblings, i in walk_post_order(forest)]
        [2, 1]
    """
    opts = resolve_options(options)
    # frames: [siblings, next index, depth of siblings]
    stack: list[list[Any]] = [[forest, 0, 1]]
    while stack:
        frame = stack[-1]
        siblings, index, depth = frame
        if index >= len(siblings):
            stack.pop()
            if stack:
                parent = stack[-1]
                yield parent[0], parent[1]
                parent[1] += 1
            continue
        children = opts.get_children(siblings[index])
        if children:
            opts.check_depth(depth + 1)
            stack.append([children, 0, depth + 1])
        else:
            yield siblings, index
            frame[1] += 1
