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
Base parser interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Tuple

from ..config import MAX_NESTING_DEPTH
from ..models import AstNode, NodeKind


@dataclass
class ParsedModule:
    """A whole-file parse: the tree plus comment line spans."""

    root: AstNode
    comments: List[Tuple[int, int]] = field(default_factory=list)   # (start_line, end_line)

    def functions(self) -> List[AstNode]:
        return [node for node in self.root.walk() if node.kind == NodeKind.FUNCTION]

    def is_comment_line(self, line_no: int) -> bool:
        return any(start <= line_no <= end for start, end in self.comments)


class BaseParser(ABC):
    """Abstract base class for language-specific parser adapters."""

    def __init__(self, max_depth: int = MAX_NESTING_DEPTH):
        self.max_depth = max_depth

    @abstractmethod
    def parse_module(self, content: str) -> ParsedModule:
        """
        Parse source text as a standalone program.

        Args:
            content: Source text

        Returns:
            ParsedModule with the converted tree and comment spans

        Raises:
            ParseError: if the text is not syntactically valid on its own
        """
        pass

    def parse(self, content: str) -> AstNode:
        """Parse source text and return the root node. Raises ParseError."""
        return self.parse_module(content).root
