# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeUtils - Operations on schema-less tree data.

A lightweight, zero-dependency library for trees stored either as nested
mappings (children kept in a list field) or as flat, parent-linked arrays.
It converts between the two shapes and searches, transforms, filters and
restructures tree data without imposing a node schema.
"""

__version__ = "0.1.0"

from .array import (
    closest_parent_item_in_tree_array,
    closest_parent_keys_in_tree_array,
    create_tree_from_tree_like_array,
    filter_tree_array,
    find_children_item_in_tree_array,
    has_children_node,
)
from .exceptions import (
    InvalidOptionsError,
    TreeDepthExceededError,
    TreeUtilsError,
)
from .options import DEFAULT_OPTIONS, TreeOptions, resolve_options
from .paths import (
    get_by_path,
    get_tree_node_by_path,
    resolve_object_path,
    resolve_tree_path,
    set_by_path,
)
from .relations import (
    closest_parent_item_in_tree,
    find_index_in_sibling_node,
    find_parent_tree_node,
    get_all_left_node,
    get_all_right_node,
    get_left_node,
    get_right_node,
)
from .transform import (
    completion_tree_node_pid,
    filter_tree,
    flatten_tree,
    get_tree_depth,
    map_tree,
    remove_empty_children,
    remove_empty_children_tree_node,
    replace_tree_node,
    sort_tree,
    statistics_tree_node_children,
    tree_to_tree_like_array,
    update_tree_node,
    update_tree_node_and_all_children_node,
    update_tree_node_and_all_parent_node,
)
from .traverse import (
    TraverseType,
    every_tree,
    find_all_in_tree,
    find_one_in_tree,
    iter_tree,
    some_tree,
    traverse_tree,
    walk_post_order,
)

__all__ = [
    # Configuration
    "TreeOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
    # Paths
    "resolve_object_path",
    "resolve_tree_path",
    "get_by_path",
    "set_by_path",
    "get_tree_node_by_path",
    # Traversal
    "TraverseType",
    "iter_tree",
    "walk_post_order",
    "traverse_tree",
    "some_tree",
    "every_tree",
    "find_one_in_tree",
    "find_all_in_tree",
    # Transforms
    "map_tree",
    "sort_tree",
    "filter_tree",
    "statistics_tree_node_children",
    "replace_tree_node",
    "update_tree_node",
    "update_tree_node_and_all_children_node",
    "update_tree_node_and_all_parent_node",
    "remove_empty_children",
    "remove_empty_children_tree_node",
    "completion_tree_node_pid",
    "flatten_tree",
    "tree_to_tree_like_array",
    "get_tree_depth",
    # Relations
    "find_parent_tree_node",
    "find_index_in_sibling_node",
    "get_left_node",
    "get_all_left_node",
    "get_right_node",
    "get_all_right_node",
    "closest_parent_item_in_tree",
    # Tree-like arrays
    "create_tree_from_tree_like_array",
    "filter_tree_array",
    "closest_parent_item_in_tree_array",
    "closest_parent_keys_in_tree_array",
    "find_children_item_in_tree_array",
    "has_children_node",
    # Exceptions
    "TreeUtilsError",
    "InvalidOptionsError",
    "TreeDepthExceededError",
]
