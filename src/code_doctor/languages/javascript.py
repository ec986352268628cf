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
JavaScript parser adapter using tree-sitter.

Converts the tree-sitter concrete tree into AstNode trees. JSX is
handled by the JavaScript grammar itself.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from .base import BaseParser, ParsedModule
from ..config import MAX_NESTING_DEPTH
from ..errors import ParseError
from ..models import AstNode, NodeKind


FUNCTION_TYPES = {
    "function_declaration",
    "function",
    "function_expression",
    "arrow_function",
    "method_definition",
    "generator_function",
    "generator_function_declaration",
}

LITERAL_TYPES = {
    "number",
    "string",
    "template_string",
    "regex",
    "true",
    "false",
    "null",
    "undefined",
    "jsx_text",
}

IDENTIFIER_TYPES = {
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
}

# Tokens that never distinguish two constructs of the same type
_PUNCTUATION = {";", ",", "(", ")", "{", "}", "[", "]"}


class JavaScriptParser(BaseParser):
    """tree-sitter backed JavaScript/JSX parser adapter."""

    def __init__(self, max_depth: int = MAX_NESTING_DEPTH):
        super().__init__(max_depth)
        self._parser = None
        self._language = None

    def _ensure_parser(self):
        """Lazy-load tree-sitter parser."""
        if self._parser is not None:
            return

        try:
            import tree_sitter_javascript as tsjavascript
            from tree_sitter import Language, Parser

            self._language = Language(tsjavascript.language())
            self._parser = Parser(self._language)

        except ImportError as e:
            raise ImportError(
                "tree-sitter-javascript not installed. "
                "Install with: pip install tree-sitter-javascript"
            ) from e

    def parse_module(self, content: str) -> ParsedModule:
        """Parse content as a standalone program."""
        self._ensure_parser()

        tree = self._parser.parse(content.encode("utf-8"))
        root = tree.root_node

        if root.has_error:
            raise ParseError("not a self-contained JavaScript program", line=_first_error_line(root))

        return ParsedModule(root=self._convert(root, 0), comments=_comment_spans(root))

    def _convert(self, node, depth: int) -> AstNode:
        """Recursively convert a tree-sitter node."""
        start_line = node.start_point[0] + 1
        end_line = node.end_point[0] + 1
        span = dict(
            start_line=start_line,
            end_line=end_line,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )

        if depth > self.max_depth:
            raise ParseError(f"nesting deeper than {self.max_depth} levels", line=start_line)

        node_type = node.type

        def convert(child) -> Optional[AstNode]:
            if child is None:
                return None
            return self._convert(child, depth + 1)

        if node_type in LITERAL_TYPES:
            return AstNode(NodeKind.LITERAL, value=_text(node), **span)

        if node_type in IDENTIFIER_TYPES:
            return AstNode(NodeKind.IDENTIFIER, value=_text(node), **span)

        named = _named_children(node)

        if node_type in FUNCTION_TYPES:
            name = node.child_by_field_name("name")
            return AstNode(
                NodeKind.FUNCTION,
                children=(convert(node.child_by_field_name("body")),),
                value=_text(name) if name is not None else None,
                arity=_parameter_count(node),
                **span,
            )

        if node_type == "variable_declarator":
            value = node.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_TYPES:
                # The binding name stands in for the function name and is
                # left out of the tree like a declaration name
                function = convert(value)
                if function.value is None:
                    function = replace(function, value=_text(node.child_by_field_name("name")))
                return AstNode(NodeKind.OTHER, children=(function,), tag=_other_tag(node), **span)

        if node_type in ("program", "statement_block"):
            kind = NodeKind.PROGRAM if node_type == "program" else NodeKind.BLOCK
            return AstNode(
                kind,
                children=tuple(convert(c) for c in named),
                **span,
            )

        if node_type == "expression_statement" and named:
            return AstNode(
                NodeKind.EXPRESSION_STATEMENT,
                children=(convert(named[0]),),
                **span,
            )

        if node_type == "if_statement":
            test = _unwrap_parentheses(node.child_by_field_name("condition"))
            alternative = node.child_by_field_name("alternative")
            if alternative is not None and alternative.type == "else_clause":
                else_children = _named_children(alternative)
                alternative = else_children[0] if else_children else None
            return AstNode(
                NodeKind.IF_STATEMENT,
                children=(
                    convert(test),
                    convert(node.child_by_field_name("consequence")),
                    convert(alternative),
                ),
                **span,
            )

        if node_type == "binary_expression":
            operator = node.child_by_field_name("operator")
            return AstNode(
                NodeKind.BINARY,
                children=(
                    convert(node.child_by_field_name("left")),
                    convert(node.child_by_field_name("right")),
                ),
                tag=operator.type if operator is not None else None,
                **span,
            )

        if node_type == "call_expression":
            arguments = node.child_by_field_name("arguments")
            if arguments is None:
                args = []
            elif arguments.type == "arguments":
                args = _named_children(arguments)
            else:
                # Tagged template: fn`...`
                args = [arguments]
            return AstNode(
                NodeKind.CALL,
                children=(convert(node.child_by_field_name("function")),) + tuple(convert(a) for a in args),
                **span,
            )

        return AstNode(
            NodeKind.OTHER,
            children=tuple(convert(c) for c in named),
            tag=_other_tag(node),
            **span,
        )


def _text(node) -> str:
    return node.text.decode("utf-8")


def _named_children(node) -> list:
    return [child for child in node.named_children if child.type != "comment"]


def _unwrap_parentheses(node):
    while node is not None and node.type == "parenthesized_expression":
        inner = _named_children(node)
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def _parameter_count(node) -> int:
    params = node.child_by_field_name("parameters")
    if params is not None:
        return len(_named_children(params))
    # Arrow function with a single bare parameter: x => ...
    if node.child_by_field_name("parameter") is not None:
        return 1
    return 0


def _other_tag(node) -> str:
    """Grammar type plus keyword/operator tokens, e.g. 'lexical_declaration:const'."""
    tokens = [c.type for c in node.children if not c.is_named and c.type not in _PUNCTUATION]
    if tokens:
        return f"{node.type}:{' '.join(tokens)}"
    return node.type


def _comment_spans(root) -> List[Tuple[int, int]]:
    """(start_line, end_line) of every comment, in source order."""
    spans = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            spans.append((node.start_point[0] + 1, node.end_point[0] + 1))
            continue
        stack.extend(reversed(node.children))
    return spans


def _first_error_line(root) -> Optional[int]:
    """Line of the first ERROR or MISSING node, if any."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed(node.children))
    return None
