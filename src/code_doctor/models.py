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
Data models for code-doctor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .languages.base import BaseParser


# Lines that close a function definition
_CLOSING_LINES = {"}", "};", "})", "});", "},", "}))", "}));"}

# What may follow the closing brace of a one-line function
_TRAILERS = {line[1:] for line in _CLOSING_LINES}


def _split_one_line(line: str) -> Optional[Tuple[str, str, str]]:
    """
    Split a function written on one line at its body braces.

    Returns (before, inner, after) where before ends just ahead of the
    opening brace and after starts at the closing one, or None if the
    line has no block body.
    """
    close = line.rfind("}")
    if close < 0 or line[close + 1:] not in _TRAILERS:
        return None

    depth = 0
    for pos in range(close, -1, -1):
        if line[pos] == "}":
            depth += 1
        elif line[pos] == "{":
            depth -= 1
            if depth == 0:
                before = line[:pos]
                # Object literal bodies like `() => ({...})` are not blocks
                if not before.rstrip().endswith((")", "=>")):
                    return None
                return before, line[pos + 1:close].strip(), line[close:]
    return None


@dataclass
class Fragment:
    """A function-sized slice of normalized source text."""

    index: int               # Position in the segmented sequence
    lines: List[str]         # Normalized lines, in order
    start_line: int = 1      # First line in the normalized text (1-indexed)
    _tree: Optional["AstNode"] = field(default=None, init=False, repr=False, compare=False)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def header(self) -> str:
        """The line that opens the function."""
        return self.lines[0] if self.lines else ""

    @property
    def footer(self) -> str:
        """The closing brace line, or "" if the fragment doesn't end with one."""
        if len(self.lines) > 1 and self.lines[-1] in _CLOSING_LINES:
            return self.lines[-1]
        return ""

    @property
    def body_lines(self) -> List[str]:
        """Lines between the header and the footer, or inside the braces of a one-liner."""
        if len(self.lines) == 1:
            split = _split_one_line(self.lines[0])
            return [split[1]] if split is not None and split[1] else []
        end = len(self.lines) - 1 if self.footer else len(self.lines)
        return self.lines[1:end]

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.lines) - 1

    def with_body(self, body: List[str]) -> str:
        """The fragment text with body_lines swapped for body."""
        if len(self.lines) == 1:
            split = _split_one_line(self.lines[0])
            if split is not None:
                before, _, after = split
                return "\n".join([before + "{"] + body + [after])

        lines = [self.header] + body
        if self.footer:
            lines.append(self.footer)
        return "\n".join(lines)

    def syntax_tree(self, parser: "BaseParser") -> "AstNode":
        """Parse on first use and cache the tree. Raises ParseError."""
        if self._tree is None:
            self._tree = parser.parse(self.text)
        return self._tree

    def function_body(self, parser: "BaseParser") -> Optional["FunctionBody"]:
        """
        Split the text around the body of its outermost function.

        Uses the parser's byte offsets, so one-line and expression-bodied
        functions split as cleanly as multi-line ones. Returns None if
        there is no function or its body is empty. Raises ParseError.
        """
        tree = self.syntax_tree(parser)
        function = next((node for node in tree.walk() if node.kind == NodeKind.FUNCTION), None)
        if function is None or function.children[0] is None:
            return None

        body = function.children[0]
        data = self.text.encode("utf-8")
        before = data[:body.start_byte].decode("utf-8")
        inner = data[body.start_byte:body.end_byte].decode("utf-8")
        after = data[body.end_byte:].decode("utf-8")

        if body.kind == NodeKind.BLOCK:
            lines = tuple(line.strip() for line in inner[1:-1].split("\n") if line.strip())
            expression = False
        else:
            lines = (" ".join(inner.split("\n")),)
            expression = True

        if not lines:
            return None
        return FunctionBody(before=before, lines=lines, after=after, expression=expression)

    def preview(self, max_chars: int = 60) -> str:
        """Short preview of the content."""
        if len(self.header) > max_chars:
            return self.header[:max_chars-3] + "..."
        return self.header


@dataclass(frozen=True)
class FunctionBody:
    """A fragment cut around its function's body."""

    before: str                # Text up to the body
    lines: Tuple[str, ...]     # Body statements without the braces
    after: str                 # Text from the end of the body on
    expression: bool = False   # Arrow function whose body is an expression

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def rebuild(self, lines: List[str]) -> str:
        """The fragment text with the body replaced by lines."""
        if self.expression:
            return self.before + " ".join(lines) + self.after
        return "\n".join([self.before + "{"] + lines + ["}" + self.after])


class NodeKind(Enum):
    FUNCTION = "function"
    BLOCK = "block"
    PROGRAM = "program"
    EXPRESSION_STATEMENT = "expression_statement"
    IF_STATEMENT = "if_statement"
    BINARY = "binary"
    CALL = "call"
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    OTHER = "other"


@dataclass(frozen=True)
class AstNode:
    """
    A syntax tree node tagged by kind.

    Children are positional and fixed-arity for the structured kinds:
    IF_STATEMENT = (test, consequent, alternate or None), BINARY = (left, right),
    CALL = (callee, *arguments), FUNCTION = (body,),
    EXPRESSION_STATEMENT = (expression,).
    """

    kind: NodeKind
    children: Tuple[Optional["AstNode"], ...] = ()
    value: Optional[str] = None   # Identifier name, literal text or function name
    tag: Optional[str] = None     # Operator, or grammar type + tokens for OTHER
    arity: int = 0                # Parameter count for FUNCTION
    start_line: int = 0
    end_line: int = 0
    start_byte: int = 0           # Offsets into the UTF-8 encoded source
    end_byte: int = 0

    def walk(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            if child is not None:
                yield from child.walk()

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass
class VaryingParts:
    """Differing leaf values between two structurally equivalent trees."""

    identifiers: Dict[str, str] = field(default_factory=dict)
    literals: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.identifiers) + len(self.literals)

    def is_empty(self) -> bool:
        return len(self) == 0


@dataclass(frozen=True)
class SubstitutionAmbiguous:
    """A varying-part substitution that did not match exactly one spot."""

    value: str
    replacement: str
    left_matches: int
    right_matches: int

    def describe(self) -> str:
        return (
            f"substituting {self.value!r} -> {self.replacement!r} matched "
            f"{self.left_matches} spot(s) in fragment 1 and "
            f"{self.right_matches} in fragment 2"
        )


@dataclass(frozen=True)
class NotRefactored:
    fragment1: str
    fragment2: str


@dataclass(frozen=True)
class Refactored:
    fragment1: str                 # Rewritten first fragment
    fragment2: str                 # Rewritten second fragment
    synthesized_function: str
    warnings: Tuple[SubstitutionAmbiguous, ...] = ()


RefactorResult = Union[NotRefactored, Refactored]


@dataclass(frozen=True)
class InsufficientFragments:
    """Fewer than two fragments were found; nothing to compare."""

    fragment_count: int


@dataclass(frozen=True)
class NoDuplicates:
    similarity: float = 0.0
    fragment_indices: Tuple[int, int] = (0, 1)
    comparison_unavailable: Optional[str] = None   # ParseError message, if any


@dataclass(frozen=True)
class Type1Duplicate:
    """Fragments that are nearly line-identical."""

    fragment1: Fragment
    fragment2: Fragment
    similarity: float
    common_lines: Tuple[str, ...]
    refactoring: Refactored

    @property
    def synthesized_function(self) -> str:
        return self.refactoring.synthesized_function


@dataclass(frozen=True)
class Type2Duplicate:
    """Fragments with the same shape but different identifiers or literals."""

    fragment1: Fragment
    fragment2: Fragment
    similarity: float
    varying_parts: VaryingParts
    refactoring: Refactored

    @property
    def synthesized_function(self) -> str:
        return self.refactoring.synthesized_function


AnalysisResult = Union[InsufficientFragments, NoDuplicates, Type1Duplicate, Type2Duplicate]


@dataclass(frozen=True)
class MethodFinding:
    """A function longer than the long-method threshold."""

    name: str
    start_line: int
    end_line: int
    executable_lines: int


@dataclass(frozen=True)
class ParameterFinding:
    """A function with more parameters than the threshold."""

    name: str
    start_line: int
    end_line: int
    parameter_count: int
