# Code Doctor - Detect duplicated logic and suggest refactorings
# Copyright (C) 2025  Jonathan Louis
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Structural (Type-2) comparison of syntax trees.

Two trees are equivalent when they have the same shape node for node.
The differing identifiers and literals are collected during the same
descent, so each pair comes from the same tree position on both sides.
"""

import logging
from typing import Dict, Optional

from .models import AstNode, NodeKind, VaryingParts


logger = logging.getLogger(__name__)


def compare_structure(
    left: Optional[AstNode],
    right: Optional[AstNode],
    compare_leaves: bool = False,
) -> Optional[VaryingParts]:
    """
    Compare two trees for shape equivalence.

    Args:
        left: Root of the first tree
        right: Root of the second tree
        compare_leaves: Require identifier names and literal values to match

    Returns:
        VaryingParts holding the differing leaves if the trees are
        equivalent (always empty with compare_leaves=True), None otherwise
    """
    varying = VaryingParts()
    if _equivalent(left, right, varying, compare_leaves):
        return varying
    return None


def structurally_equivalent(left: Optional[AstNode], right: Optional[AstNode]) -> bool:
    """Whole-tree equality, ignoring only function names and parameters."""
    return compare_structure(left, right, compare_leaves=True) is not None


def extract_varying_parts(left: AstNode, right: AstNode) -> Optional[VaryingParts]:
    """Differing identifiers and literals of two same-shaped trees, or None."""
    return compare_structure(left, right, compare_leaves=False)


def _equivalent(
    left: Optional[AstNode],
    right: Optional[AstNode],
    varying: VaryingParts,
    compare_leaves: bool,
) -> bool:
    if left is None or right is None:
        return left is None and right is None

    if left.kind != right.kind:
        return False

    kind = left.kind

    if kind == NodeKind.IDENTIFIER:
        return _leaf(left, right, varying.identifiers, compare_leaves)

    if kind == NodeKind.LITERAL:
        return _leaf(left, right, varying.literals, compare_leaves)

    if kind == NodeKind.FUNCTION:
        # Signature is ignored, only bodies count
        return _equivalent(left.children[0], right.children[0], varying, compare_leaves)

    if kind in (NodeKind.BINARY, NodeKind.OTHER) and left.tag != right.tag:
        return False

    # BLOCK, PROGRAM, EXPRESSION_STATEMENT, IF_STATEMENT, CALL and the rest:
    # positional children must pair up one to one
    if len(left.children) != len(right.children):
        return False

    return all(
        _equivalent(a, b, varying, compare_leaves)
        for a, b in zip(left.children, right.children)
    )


def _leaf(left: AstNode, right: AstNode, mapping: Dict[str, str], compare_leaves: bool) -> bool:
    if left.value == right.value:
        return True
    if compare_leaves:
        return False

    previous = mapping.setdefault(left.value, right.value)
    if previous != right.value:
        logger.debug(
            f"{left.value!r} pairs with both {previous!r} and {right.value!r} "
            f"(line {left.start_line}); keeping the first"
        )
    return True
