# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared sample data for tree utilities tests."""

import pytest


@pytest.fixture
def forest():
    """A two-root forest, three levels deep.

    Breadth-first ids: 1, 8, 2, 3, 7, 4, 5, 6
    Depth-first ids:   1, 2, 4, 5, 3, 6, 7, 8
    """
    return [
        {'id': 1, 'title': 'root', 'children': [
            {'id': 2, 'pId': 1, 'title': 'child1', 'children': [
                {'id': 4, 'pId': 2, 'title': 'child11'},
                {'id': 5, 'pId': 2, 'title': 'child12'},
            ]},
            {'id': 3, 'pId': 1, 'title': 'child2', 'children': [
                {'id': 6, 'pId': 3, 'title': 'child21'},
            ]},
            {'id': 7, 'pId': 1, 'title': 'child3', 'children': []},
        ]},
        {'id': 8, 'title': 'other'},
    ]


@pytest.fixture
def flat_array():
    """A tree-like array with a child listed before its parent."""
    return [
        {'id': 1, 'title': 'root'},
        {'id': 4, 'pId': 2, 'title': 'child11'},
        {'id': 2, 'pId': 1, 'title': 'child1'},
        {'id': 3, 'pId': 1, 'title': 'child2'},
        {'id': 5, 'pId': 4, 'title': 'child111'},
        {'id': 6, 'title': 'other'},
    ]
