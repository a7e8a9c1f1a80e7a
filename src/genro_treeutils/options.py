# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Field alias configuration for schema-less tree records.

Tree nodes and flat items are plain mappings with no fixed schema. The
names of the identifier, parent-reference and children fields are supplied
through a TreeOptions instance, and the algorithms read those fields only
through its accessor methods.

Example:
    >>> opts = resolve_options({'idKey': 'key', 'childrenKey': 'items'})
    >>> opts.get_id({'key': 7})
    7
    >>> opts.get_children({'items': [{'key': 8}]})
    [{'key': 8}]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .exceptions import InvalidOptionsError, TreeDepthExceededError

logger = logging.getLogger(__name__)

# camelCase names accepted for compatibility with JavaScript-style callers
_ALIASES = {
    'idKey': 'id_key',
    'parentIdKey': 'parent_id_key',
    'childrenKey': 'children_key',
    'pathSeparator': 'path_separator',
    'fieldName': 'field_name',
    'maxDepth': 'max_depth',
}


@dataclass(frozen=True, slots=True)
class TreeOptions:
    """Immutable field alias configuration.

    Attributes:
        id_key: Field holding the node identifier.
        parent_id_key: Field holding the parent identifier.
        children_key: Field holding the list of child nodes.
        path_separator: Separator used by string tree paths.
        field_name: Label field matched by string tree path segments.
        max_depth: Optional nesting limit for nested-tree walks, counting
            root nodes as level 1. None means unguarded; deeper trees
            raise TreeDepthExceededError.
    """

    id_key: str = 'id'
    parent_id_key: str = 'pId'
    children_key: str = 'children'
    path_separator: str = '.'
    field_name: str = 'title'
    max_depth: int | None = None

    def __post_init__(self) -> None:
        for name in ('id_key', 'parent_id_key', 'children_key',
                     'path_separator', 'field_name'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise InvalidOptionsError(
                    f"{name} must be a non-empty string, got {value!r}"
                )
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise InvalidOptionsError(
                f"max_depth must be None or an int >= 1, got {self.max_depth!r}"
            )

    # ==================== Accessors ====================

    def get_id(self, node: Mapping[str, Any]) -> Any:
        return node.get(self.id_key)

    def get_parent_id(self, node: Mapping[str, Any]) -> Any:
        return node.get(self.parent_id_key)

    def has_parent(self, node: Mapping[str, Any]) -> bool:
        """True if the node references a parent (field present and not None)."""
        return node.get(self.parent_id_key) is not None

    def set_parent_id(self, node: dict[str, Any], parent_id: Any) -> None:
        node[self.parent_id_key] = parent_id

    def get_children(self, node: Mapping[str, Any]) -> list | None:
        """Return the node's children list, or None if absent or not a list."""
        if not isinstance(node, Mapping):
            return None
        children = node.get(self.children_key)
        return children if isinstance(children, list) else None

    def has_children(self, node: Mapping[str, Any]) -> bool:
        """True if the node carries a non-empty children list."""
        return bool(self.get_children(node))

    def set_children(self, node: dict[str, Any], children: list) -> None:
        node[self.children_key] = children

    def pop_children(self, node: dict[str, Any]) -> Any:
        return node.pop(self.children_key, None)

    def get_label(self, node: Mapping[str, Any]) -> Any:
        return node.get(self.field_name)

    def check_depth(self, depth: int) -> None:
        """Raise TreeDepthExceededError if depth is beyond max_depth."""
        if self.max_depth is not None and depth > self.max_depth:
            logger.warning("Tree walk reached depth %d (max_depth=%d)",
                           depth, self.max_depth)
            raise TreeDepthExceededError(self.max_depth)


DEFAULT_OPTIONS = TreeOptions()

_FIELD_NAMES = frozenset(f.name for f in fields(TreeOptions))


def resolve_options(
    options: TreeOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> TreeOptions:
    """Normalize an options argument into a TreeOptions instance.

    Args:
        options: None (defaults), a TreeOptions, or a mapping using either
            snake_case field names or camelCase aliases (idKey, parentIdKey,
            childrenKey, pathSeparator, fieldName, maxDepth). Other names,
            such as traversal settings passed alongside, are ignored.
        **overrides: Extra fields applied on top of options.

    Returns:
        The resolved TreeOptions.

    Raises:
        InvalidOptionsError: If options is not a mapping or a value is invalid.
    """
    if options is None:
        base = DEFAULT_OPTIONS
    elif isinstance(options, TreeOptions):
        base = options
    elif isinstance(options, Mapping):
        base = replace(DEFAULT_OPTIONS, **_normalize_names(options))
    else:
        raise InvalidOptionsError(
            f"options must be TreeOptions, a mapping or None, not {type(options).__name__}"
        )
    if overrides:
        base = replace(base, **_normalize_names(overrides))
    return base


def _normalize_names(values: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for name, value in values.items():
        name = _ALIASES.get(name, name)
        if name not in _FIELD_NAMES:
            logger.debug("Ignoring unknown tree option %r", name)
            continue
        if name == 'max_depth' and value is False:
            value = None
        result[name] = value
    return result
