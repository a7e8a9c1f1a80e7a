# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Structural transforms over nested trees.

Every transform deep-copies its input and returns a new forest (a list of
root nodes), even when a single root node is passed in. The caller's tree is
never modified.

Recursive descent is performed with an explicit stack, so deep trees do not
grow the interpreter call stack; set TreeOptions.max_depth to refuse trees
nested beyond a given level (for instance when input may contain cycles).

Example:
    >>> tree = [{'id': 1, 'children': [{'id': 2}, {'id': 3, 'children': []}]}]
    >>> filter_tree(tree, lambda n: n['id'] == 3)
    [{'id': 1, 'children': [{'id': 3, 'children': []}]}]
    >>> remove_empty_children(tree)
    [{'id': 1, 'children': [{'id': 2}, {'id': 3}]}]
"""

from __future__ import annotations

import copy
from functools import cmp_to_key
from typing import Any, Callable, Mapping

from .options import TreeOptions, resolve_options
from .relations import closest_parent_item_in_tree
from .traverse import (
    Predicate,
    Tree,
    TraverseType,
    as_forest,
    iter_tree,
    walk_post_order,
)

OptionsArg = TreeOptions | Mapping[str, Any] | None


def _clone_forest(tree: Tree | None, opts: TreeOptions) -> list[Any]:
    """Deep-copy a forest without recursing on the nesting.

    Each node is copied field by field; children lists are rebuilt on an
    explicit stack and every other field value goes through deepcopy.
    """
    forest: list[Any] = []
    stack: list[tuple[list[Any], list[Any], int]] = [(as_forest(tree), forest, 1)]
    while stack:
        source, target, depth = stack.pop()
        for node in source:
            if not isinstance(node, Mapping):
                target.append(copy.deepcopy(node))
                continue
            clone: dict[str, Any] = {}
            for key, value in node.items():
                if key == opts.children_key and isinstance(value, list):
                    clone[key] = []
                    if value:
                        opts.check_depth(depth + 1)
                        stack.append((value, clone[key], depth + 1))
                else:
                    clone[key] = copy.deepcopy(value)
            target.append(clone)
    return forest


def map_tree(
    tree: Tree,
    callback: Callable[[dict[str, Any]], Any],
    options: OptionsArg = None,
) -> list[Any]:
    """Return a mapped copy of the tree.

    Children are mapped before their parent, so callback receives each node
    with its children already replaced by their mapped values. The value
    returned by callback takes the node's place.

    Args:
        tree: A root node or a list of root nodes.
        callback: Function applied to every (copied) node.
        options: Field aliases; children_key and max_depth are used.

    Returns:
        New forest of mapped nodes.
    """
    opts = resolve_options(options)
    forest = _clone_forest(tree, opts)
    for siblings, index in walk_post_order(forest, opts):
        siblings[index] = callback(siblings[index])
    return forest


def sort_tree(
    tree: Tree,
    compare: Callable[[Any, Any], int],
    options: OptionsArg = None,
) -> list[Any]:
    """Return a copy with every children list and the forest sorted.

    Args:
        tree: A root node or a list of root nodes.
        compare: cmp-style function returning <0, 0 or >0.
        options: Field aliases.
    """
    opts = resolve_options(options)
    key = cmp_to_key(compare)
    forest = _clone_forest(tree, opts)
    for siblings, index in walk_post_order(forest, opts):
        children = opts.get_children(siblings[index])
        if children:
            children.sort(key=key)
    forest.sort(key=key)
    return forest


def filter_tree(
    tree: Tree,
    predicate: Predicate,
    options: OptionsArg = None,
) -> list[Any]:
    """Filter a tree, keeping the ancestors of every matching node.

    Children are filtered first. A node that still has children afterwards
    is kept whatever predicate says about it; any other node is kept only
    if predicate(node) is truthy. Predicate sees nodes with their children
    already filtered.

    Example:
        >>> tree = [{'id': 1, 'children': [{'id': 2}, {'id': 3}]}, {'id': 4}]
        >>> filter_tree(tree, lambda n: n['id'] == 2)
        [{'id': 1, 'children': [{'id': 2}]}]
    """
    opts = resolve_options(options)
    forest = _clone_forest(tree, opts)
    kept: set[int] = set()
    for siblings, index in walk_post_order(forest, opts):
        node = siblings[index]
        children = opts.get_children(node)
        if children is not None:
            children[:] = [child for child in children if id(child) in kept]
            if children:
                kept.add(id(node))
                continue
        if predicate(node):
            kept.add(id(node))
    return [node for node in forest if id(node) in kept]


def statistics_tree_node_children(
    tree: Tree,
    deep: bool = False,
    statistics_key: str = 'statistics',
    options: OptionsArg = None,
) -> list[Any]:
    """Annotate nodes having children with their children count.

    Args:
        tree: A root node or a list of root nodes.
        deep: If False, count direct children only. If True, count all
            descendants (direct count plus the children's own counts).
        statistics_key: Field receiving the count.
        options: Field aliases.

    Returns:
        New forest; leaves carry no statistics field.
    """
    opts = resolve_options(options)

    def annotate(node: dict[str, Any]) -> dict[str, Any]:
        children = opts.get_children(node)
        if children:
            count = len(children)
            if deep:
                count += sum(
                    child.get(statistics_key) or 0
                    for child in children
                    if isinstance(child, Mapping)
                )
            node[statistics_key] = count
        return node

    return map_tree(tree, annotate, opts)


def replace_tree_node(
    tree: Tree,
    predicate: Predicate,
    replacement: Any,
    options: OptionsArg = None,
) -> list[Any]:
    """Replace matching nodes with replacement(node) if callable, else a copy of replacement."""
    def replace(node: dict[str, Any]) -> Any:
        if predicate(node):
            return replacement(node) if callable(replacement) else copy.deepcopy(replacement)
        return node

    return map_tree(tree, replace, options)


def update_tree_node(
    tree: Tree,
    predicate: Predicate,
    patch: Mapping[str, Any],
    options: OptionsArg = None,
) -> list[Any]:
    """Shallow-merge patch onto every matching node."""
    def update(node: dict[str, Any]) -> dict[str, Any]:
        if predicate(node):
            return {**node, **patch}
        return node

    return map_tree(tree, update, options)


def update_tree_node_and_all_children_node(
    tree: Tree | None,
    field_name: str,
    field_value: Any,
    patch: Mapping[str, Any] | None = None,
    options: OptionsArg = None,
) -> list[Any]:
    """Patch the nodes whose field_name equals field_value and all their descendants.

    Args:
        tree: A root node or a list of root nodes.
        field_name: Field compared against field_value.
        field_value: Value identifying the matched nodes.
        patch: Fields merged onto matched nodes and their descendants.
        options: Field aliases.
    """
    opts = resolve_options(options)
    patch = patch or {}
    forest = _clone_forest(tree, opts)
    stack: list[tuple[list[Any], int, bool]] = [(forest, 1, False)]
    while stack:
        siblings, depth, inherited = stack.pop()
        for index, node in enumerate(siblings):
            if not isinstance(node, Mapping):
                continue
            matched = inherited or node.get(field_name) == field_value
            if matched:
                node = siblings[index] = {**node, **patch}
            children = opts.get_children(node)
            if children:
                opts.check_depth(depth + 1)
                stack.append((children, depth + 1, matched))
    return forest


def update_tree_node_and_all_parent_node(
    tree: Tree | None,
    field_name: str,
    field_value: Any,
    patch: Mapping[str, Any],
    options: OptionsArg = None,
) -> list[Any]:
    """Patch the nodes whose field_name equals field_value and all their ancestors.

    Ancestors are located with closest_parent_item_in_tree() and matched
    back by id, so nodes are expected to carry unique ids.
    """
    opts = resolve_options(options)
    chain = closest_parent_item_in_tree(
        tree or [],
        lambda node: node.get(field_name) == field_value,
        True,
        opts,
    )
    chain_ids = [opts.get_id(node) for node in chain]
    return update_tree_node(
        tree or [], lambda node: opts.get_id(node) in chain_ids, patch, opts
    )


def remove_empty_children(tree: Tree | None, options: OptionsArg = None) -> list[Any]:
    """Drop the children field wherever it is absent, empty or not a list.

    The field is removed entirely rather than left as an empty list.
    """
    opts = resolve_options(options)
    forest = _clone_forest(tree, opts)
    for siblings, index in walk_post_order(forest, opts):
        node = siblings[index]
        if isinstance(node, dict) and not opts.has_children(node):
            opts.pop_children(node)
    return forest


# Both names were in use; they share one implementation.
remove_empty_children_tree_node = remove_empty_children


def completion_tree_node_pid(tree: Tree | None, options: OptionsArg = None) -> list[Any]:
    """Fill in missing parent ids from the actual nesting.

    Every child without a parent id receives its parent's id; parent ids
    already present are kept. Nesting is preserved.
    """
    opts = resolve_options(options)
    forest = _clone_forest(tree, opts)
    for node in iter_tree(forest, TraverseType.DEPTH, opts):
        parent_id = opts.get_id(node)
        for child in opts.get_children(node) or []:
            if isinstance(child, dict) and not opts.has_parent(child):
                opts.set_parent_id(child, parent_id)
    return forest


def flatten_tree(
    tree: Tree | None,
    keep_children_field: bool = False,
    options: OptionsArg = None,
) -> list[dict[str, Any]]:
    """Return copies of every node in pre-order (parents before children).

    Args:
        tree: A root node or a list of root nodes.
        keep_children_field: If False (default), the children field is
            removed from each returned node.
        options: Field aliases.
    """
    opts = resolve_options(options)
    result = list(iter_tree(_clone_forest(tree, opts), TraverseType.DEPTH, opts))
    if not keep_children_field:
        for node in result:
            opts.pop_children(node)
    return result


def tree_to_tree_like_array(tree: Tree | None, options: OptionsArg = None) -> list[dict[str, Any]]:
    """Flatten a tree into a parent-linked flat array.

    Missing parent ids are completed from the nesting first, so
    create_tree_from_tree_like_array() rebuilds an equivalent forest.
    """
    opts = resolve_options(options)
    return flatten_tree(completion_tree_node_pid(tree, opts), False, opts)


def get_tree_depth(tree: Tree | None, options: OptionsArg = None) -> int:
    """Return the maximum nesting depth.

    For a forest the roots are level 1 (an empty forest has depth 0); for a
    single root node the root itself is level 0.

    Example:
        >>> get_tree_depth([{'id': 1, 'children': [{'id': 2, 'children': [{'id': 3}]}]}])
        3
        >>> get_tree_depth({'id': 1})
        0
    """
    opts = resolve_options(options)
    if tree is None:
        return 0
    offset = 0 if isinstance(tree, list) else -1

    deepest = 0
    stack = [(node, 1) for node in as_forest(tree)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth + offset)
        children = opts.get_children(node)
        if children:
            opts.check_depth(depth + 1)
            stack.extend((child, depth + 1) for child in children)
    return deepest
