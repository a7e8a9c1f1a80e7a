# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parent, sibling and ancestor lookups in nested trees.

Nodes are related through their ids: a node's parent is the node whose id
equals its parent id field. Results are the caller's own node objects, so
they can be inspected or edited in place.
"""

from __future__ import annotations

from typing import Any, Mapping

from .options import TreeOptions, resolve_options
from .traverse import Predicate, Tree, TraverseType, as_forest, find_one_in_tree, walk_post_order

OptionsArg = TreeOptions | Mapping[str, Any] | None


def find_parent_tree_node(
    tree: Tree,
    target: Mapping[str, Any],
    options: OptionsArg = None,
) -> dict[str, Any] | None:
    """Return the node whose id equals target's parent id, or None.

    Target without a parent id (a root) has no parent. The search is
    breadth-first.
    """
    opts = resolve_options(options)
    if not opts.has_parent(target):
        return None
    parent_id = opts.get_parent_id(target)
    return find_one_in_tree(
        tree,
        lambda node: opts.get_id(node) == parent_id,
        TraverseType.BREADTH,
        opts,
    )


def _sibling_position(
    tree: Tree, target: Mapping[str, Any], opts: TreeOptions
) -> tuple[list[Any], int | None]:
    """Return (siblings, index) of target under its parent.

    siblings is [] when target has no parent; index is None when target is
    not among its parent's children.
    """
    parent = find_parent_tree_node(tree, target, opts)
    if parent is None:
        return [], None
    siblings = opts.get_children(parent) or []
    target_id = opts.get_id(target)
    for index, node in enumerate(siblings):
        if isinstance(node, Mapping) and opts.get_id(node) == target_id:
            return siblings, index
    return siblings, None


def find_index_in_sibling_node(
    tree: Tree,
    target: Mapping[str, Any],
    options: OptionsArg = None,
) -> int | None:
    """Return target's position among its parent's children.

    Returns:
        The index, or None when target has no parent or is not found
        among the parent's children.
    """
    _, index = _sibling_position(tree, target, resolve_options(options))
    return index


def get_left_node(tree: Tree, target: Mapping[str, Any], options: OptionsArg = None) -> Any:
    """Return the sibling just before target, or None."""
    siblings, index = _sibling_position(tree, target, resolve_options(options))
    if not index:
        return None
    return siblings[index - 1]


def get_all_left_node(tree: Tree, target: Mapping[str, Any], options: OptionsArg = None) -> list[Any]:
    """Return all siblings before target, nearest last."""
    siblings, index = _sibling_position(tree, target, resolve_options(options))
    if index is None:
        return []
    return siblings[:index]


def get_right_node(tree: Tree, target: Mapping[str, Any], options: OptionsArg = None) -> Any:
    """Return the sibling just after target, or None."""
    siblings, index = _sibling_position(tree, target, resolve_options(options))
    if index is None or index + 1 >= len(siblings):
        return None
    return siblings[index + 1]


def get_all_right_node(tree: Tree, target: Mapping[str, Any], options: OptionsArg = None) -> list[Any]:
    """Return all siblings after target, nearest first."""
    siblings, index = _sibling_position(tree, target, resolve_options(options))
    if index is None:
        return []
    return siblings[index + 1:]


def closest_parent_item_in_tree(
    tree: Tree,
    predicate: Predicate,
    include_matched: bool = False,
    options: OptionsArg = None,
) -> list[dict[str, Any]]:
    """Return the ancestor chain of the nodes matching predicate.

    The tree is walked children-first. A node belongs to the result when
    any node in its subtree matched; in that case its own predicate is not
    evaluated. With include_matched, a matching node is included too.
    Every subtree is visited, so several matches contribute all of their
    ancestors.

    Args:
        tree: A root node or a list of root nodes.
        predicate: Match function.
        include_matched: Also include the matching nodes themselves.
        options: Field aliases.

    Returns:
        Nodes ordered root-most first.

    Example:
        >>> tree = [{'id': 1, 'children': [{'id': 2, 'children': [{'id': 3}]}]}]
        >>> [n['id'] for n in closest_parent_item_in_tree(tree, lambda n: n['id'] == 3)]
        [1, 2]
    """
    opts = resolve_options(options)
    matched: set[int] = set()
    found: list[dict[str, Any]] = []
    for siblings, index in walk_post_order(as_forest(tree), opts):
        node = siblings[index]
        children = opts.get_children(node) or []
        if any(id(child) in matched for child in children):
            matched.add(id(node))
            found.append(node)
        elif predicate(node):
            matched.add(id(node))
            if include_matched:
                found.append(node)
    # collected children-first, returned root-most first
    found.reverse()
    return found
