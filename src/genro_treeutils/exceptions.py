# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree utilities exceptions.

Data problems (missing fields, unresolvable paths, failed searches) never
raise: operations return None, a default or an empty list instead. The
exceptions below signal caller mistakes.
"""

from __future__ import annotations


class TreeUtilsError(Exception):
    """Base exception for tree utilities errors."""

    pass


class InvalidOptionsError(TreeUtilsError, TypeError):
    """Raised when options are not a mapping or carry a bad value."""

    pass


class TreeDepthExceededError(TreeUtilsError):
    """Raised when a walk goes deeper than the configured max_depth."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Tree is deeper than max_depth={max_depth}")
        self.max_depth = max_depth
