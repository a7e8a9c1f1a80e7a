# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreeOptions, option resolution and exceptions."""

import dataclasses
import logging

import pytest

from genro_treeutils import (
    DEFAULT_OPTIONS,
    InvalidOptionsError,
    TreeDepthExceededError,
    TreeOptions,
    TreeUtilsError,
    resolve_options,
)


class TestResolveOptions:
    """Tests for resolve_options."""

    def test_defaults(self):
        """Test None gives the default options."""
        opts = resolve_options()
        assert opts is DEFAULT_OPTIONS
        assert opts.id_key == 'id'
        assert opts.parent_id_key == 'pId'
        assert opts.children_key == 'children'
        assert opts.path_separator == '.'
        assert opts.field_name == 'title'
        assert opts.max_depth is None

    def test_instance_passthrough(self):
        """Test a TreeOptions instance is used as is."""
        opts = TreeOptions(id_key='key')
        assert resolve_options(opts) is opts

    def test_camel_case_names(self):
        """Test JavaScript-style option names."""
        opts = resolve_options({'idKey': 'key', 'parentIdKey': 'up',
                                'childrenKey': 'items', 'maxDepth': 4})
        assert (opts.id_key, opts.parent_id_key, opts.children_key) == ('key', 'up', 'items')
        assert opts.max_depth == 4

    def test_snake_case_names(self):
        """Test Python field names in a mapping."""
        assert resolve_options({'field_name': 'name'}).field_name == 'name'

    def test_overrides(self):
        """Test keyword overrides on top of options."""
        opts = resolve_options({'idKey': 'key'}, childrenKey='items')
        assert opts.id_key == 'key'
        assert opts.children_key == 'items'

    def test_max_depth_false_is_unlimited(self):
        """Test maxDepth=False means no limit."""
        assert resolve_options({'maxDepth': False}).max_depth is None

    def test_unknown_names_ignored(self, caplog):
        """Test unknown option names are skipped and logged."""
        with caplog.at_level(logging.DEBUG, logger='genro_treeutils.options'):
            opts = resolve_options({'idKey': 'key', 'traverseType': 'depth'})
        assert opts.id_key == 'key'
        assert opts.children_key == 'children'
        assert "'traverseType'" in caplog.text
        assert resolve_options({'idkey': 'x'}) == DEFAULT_OPTIONS

    def test_bad_options_type(self):
        """Test options must be a mapping or TreeOptions."""
        with pytest.raises(InvalidOptionsError):
            resolve_options(42)
        with pytest.raises(TypeError):
            resolve_options(['id'])


class TestTreeOptions:
    """Tests for TreeOptions validation and accessors."""

    def test_empty_field_name_rejected(self):
        """Test field names must be non-empty strings."""
        with pytest.raises(InvalidOptionsError):
            TreeOptions(id_key='')
        with pytest.raises(InvalidOptionsError):
            TreeOptions(children_key=None)

    def test_max_depth_validation(self):
        """Test max_depth must be a positive int."""
        for value in (0, -1, True, 2.5):
            with pytest.raises(InvalidOptionsError):
                TreeOptions(max_depth=value)
        assert TreeOptions(max_depth=1).max_depth == 1

    def test_frozen(self):
        """Test options cannot be changed after creation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_OPTIONS.id_key = 'key'

    def test_id_accessors(self):
        """Test id and parent id access."""
        opts = TreeOptions(id_key='key', parent_id_key='up')
        node = {'key': 'a', 'up': 0}
        assert opts.get_id(node) == 'a'
        assert opts.get_parent_id(node) == 0
        assert opts.has_parent(node) is True
        assert opts.has_parent({'key': 'b', 'up': None}) is False
        assert opts.has_parent({'key': 'c'}) is False

    def test_set_parent_id(self):
        """Test writing the parent id field."""
        node = {'id': 2}
        DEFAULT_OPTIONS.set_parent_id(node, 1)
        assert node == {'id': 2, 'pId': 1}

    def test_children_accessors(self):
        """Test children access ignores non-list values."""
        opts = DEFAULT_OPTIONS
        assert opts.get_children({'children': [1]}) == [1]
        assert opts.get_children({'children': 'abc'}) is None
        assert opts.get_children({}) is None
        assert opts.get_children(None) is None
        assert opts.has_children({'children': []}) is False
        assert opts.has_children({'children': [{}]}) is True

    def test_set_and_pop_children(self):
        """Test writing and removing the children field."""
        node = {'id': 1}
        DEFAULT_OPTIONS.set_children(node, [])
        assert node == {'id': 1, 'children': []}
        assert DEFAULT_OPTIONS.pop_children(node) == []
        assert DEFAULT_OPTIONS.pop_children(node) is None
        assert node == {'id': 1}

    def test_label(self):
        """Test the label field."""
        assert TreeOptions(field_name='name').get_label({'name': 'x'}) == 'x'

    def test_check_depth(self, caplog):
        """Test depth beyond max_depth raises and logs a warning."""
        opts = TreeOptions(max_depth=2)
        opts.check_depth(2)
        with caplog.at_level(logging.WARNING, logger='genro_treeutils.options'):
            with pytest.raises(TreeDepthExceededError):
                opts.check_depth(3)
        assert 'max_depth=2' in caplog.text

    def test_unguarded_by_default(self):
        """Test no depth limit without max_depth."""
        DEFAULT_OPTIONS.check_depth(10_000)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        """Test every error derives from TreeUtilsError."""
        assert issubclass(InvalidOptionsError, TreeUtilsError)
        assert issubclass(InvalidOptionsError, TypeError)
        assert issubclass(TreeDepthExceededError, TreeUtilsError)

    def test_depth_error_message(self):
        """Test the depth error carries its limit."""
        error = TreeDepthExceededError(5)
        assert error.max_depth == 5
        assert str(error) == "Tree is deeper than max_depth=5"
