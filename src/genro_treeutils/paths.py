# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path resolution over plain records and nested trees.

Path Syntax:
    - Dotted paths: 'config.database.host'
    - Bracket indexes: 'items[2].name' (same as 'items.2.name')
    - Explicit steps: ['items', '2', 'name']

Tree paths additionally ignore the children field name, so that
'child1.children[0]' and 'child1[0]' address the same node: each step picks
a child either by position or by its label field.

Example:
    >>> data = {'a': {'b': [10, 20, {'c': 'x'}]}}
    >>> get_by_path(data, 'a.b[2].c')
    'x'
    >>> tree = {'title': 'root', 'children': [{'title': 'child1'}]}
    >>> get_tree_node_by_path(tree, 'child1')
    {'title': 'child1'}
"""

from __future__ import annotations

import copy
import logging
import math
import re
from typing import Any, Mapping, Sequence

from .options import TreeOptions, resolve_options

_BRACKET_INDEX = re.compile(r'\[(\d+)\]')
_SCALARS = (str, bytes, int, float, bool)

logger = logging.getLogger(__name__)

PathLike = str | Sequence[str]


def _is_index(step: Any) -> bool:
    """True if a path step addresses a list position (non-negative int)."""
    return isinstance(step, int) or (isinstance(step, str) and step.isdigit())


def resolve_object_path(path: PathLike) -> list[str]:
    """Split a record path into ordered steps.

    Args:
        path: Dotted/bracket string, or an already segmented sequence.

    Returns:
        List of steps with empty steps discarded.

    Example:
        >>> resolve_object_path('a.b[2].c')
        ['a', 'b', '2', 'c']
    """
    if not isinstance(path, str):
        return [str(step) for step in path]
    return [p for p in _BRACKET_INDEX.sub(r'.\1', path).split('.') if p]


def resolve_tree_path(
    path: PathLike,
    separator: str = '.',
    children_key: str = 'children',
) -> list[str]:
    """Split a tree path into steps, dropping the children field name.

    Every literal occurrence of children_key is removed (case-insensitive)
    before bracket indexes are rewritten and the path is split.

    Example:
        >>> resolve_tree_path('child1.children[0]')
        ['child1', '0']
        >>> resolve_tree_path('a/b[1]', separator='/')
        ['a', 'b', '1']
    """
    if not isinstance(path, str):
        return [str(step) for step in path]
    path = re.sub(re.escape(children_key), '', path, flags=re.IGNORECASE)
    path = _BRACKET_INDEX.sub(lambda m: separator + m.group(1), path)
    return [p for p in path.split(separator) if p]


# ==================== Record paths ====================

_MISSING = object()


def _get_step(container: Any, step: str) -> Any:
    """Read one step from a mapping, a sequence or a plain object."""
    if isinstance(container, Mapping):
        if step in container:
            return container[step]
        if _is_index(step) and int(step) in container:
            return container[int(step)]
        return _MISSING
    if isinstance(container, (list, tuple)):
        if _is_index(step) and int(step) < len(container):
            return container[int(step)]
        return _MISSING
    if container is None or isinstance(container, _SCALARS):
        return _MISSING
    return getattr(container, step, _MISSING)


def _set_step(container: Any, step: str, value: Any) -> None:
    """Write one step onto a dict, a list (padding with None) or an object.

    Scalars cannot hold fields, so writing onto one is skipped.
    """
    if container is None or isinstance(container, _SCALARS):
        logger.debug("Cannot set %r on %s, skipped", step, type(container).__name__)
        return
    if isinstance(container, list) and _is_index(step):
        index = int(step)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    elif isinstance(container, dict):
        container[step] = value
    else:
        setattr(container, step, value)


def get_by_path(root: Any, path: PathLike, default: Any = None) -> Any:
    """Get the value at path, or default if any step is absent.

    Args:
        root: Record (or list) to read from. Never mutated.
        path: Dotted/bracket string or sequence of steps.
        default: Value returned when the path does not resolve.

    Example:
        >>> get_by_path({'a': [{'b': 1}]}, 'a[0].b')
        1
        >>> get_by_path({'a': 1}, 'a.b.c', 'none')
        'none'
    """
    current = root
    for step in resolve_object_path(path):
        current = _get_step(current, step)
        if current is _MISSING:
            return default
    return current


def set_by_path(root: Any, path: PathLike, value: Any) -> Any:
    """Set value at path and return root.

    Missing intermediate containers are created on a scratch deep copy of
    root: a list when the following step is a non-negative integer, a dict
    otherwise. The final assignment targets the live object reached from
    the original root.

    This gives an asymmetric contract that callers must be aware of:

    - when every intermediate step already exists in root, root IS mutated
      at the leaf (the same object graph the caller holds);
    - when an intermediate container had to be created, it only exists in
      the scratch copy, so the leaf lands there and root is left unchanged.

    Args:
        root: Record to write into. Mutated as described above.
        path: Dotted/bracket string or sequence of steps.
        value: Value to store at the leaf.

    Returns:
        The original root object.

    Example:
        >>> data = {'a': {'b': 1}}
        >>> set_by_path(data, 'a.b', 2) is data
        True
        >>> data
        {'a': {'b': 2}}
    """
    steps = resolve_object_path(path)
    if not steps:
        return root

    scratch = copy.deepcopy(root)
    live: Any = root
    for index, step in enumerate(steps[:-1]):
        child = _get_step(scratch, step)
        if child is _MISSING or child is None:
            child = [] if _is_index(steps[index + 1]) else {}
            _set_step(scratch, step, child)
            # from here on the walk only exists in the scratch copy
            live = None
        elif live is not None:
            live = _get_step(live, step)
            if live is _MISSING:
                live = None
        scratch = child

    _set_step(live if live is not None else scratch, steps[-1], value)
    return root


# ==================== Tree paths ====================

def _as_position(step: str) -> float | None:
    """Return step as a number when it reads as a finite one, else None."""
    try:
        number = float(step)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def get_tree_node_by_path(
    tree: Mapping[str, Any],
    path: PathLike,
    options: TreeOptions | Mapping[str, Any] | None = None,
) -> Any:
    """Get the tree node addressed by path, starting from the root node.

    Each step selects a child of the current node, by position when the
    step reads as a number (a negative or fractional one resolves to
    nothing), else by equality with the label field
    (options.field_name, default 'title').

    Args:
        tree: Root node.
        path: Tree path; '' returns the root itself.
        options: Field aliases (children_key, field_name, path_separator).

    Returns:
        The node found, or None if any step does not resolve.

    Example:
        path = 'child1'          -> root.children[title == 'child1']
        path = 'children[1]'     -> root.children[1]
        path = 'child1.child11'  -> root.children[title == 'child1'].children[title == 'child11']
        path = 'child1[0]'       -> root.children[title == 'child1'].children[0]
    """
    opts = resolve_options(options)
    steps = resolve_tree_path(path, opts.path_separator, opts.children_key)

    node: Any = tree
    for step in steps:
        if not node:
            return None
        children = opts.get_children(node) or []
        position = _as_position(step)
        if position is not None:
            in_range = position.is_integer() and 0 <= position < len(children)
            node = children[int(position)] if in_range else None
        else:
            node = next(
                (child for child in children if opts.get_label(child) == step),
                None,
            )
    return node
