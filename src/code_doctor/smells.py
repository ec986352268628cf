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
Long method and long parameter list checks.

Both work on the raw file (not the normalized text) so reported line
numbers match the editor.
"""

from typing import List, Optional

from .config import LONG_METHOD_THRESHOLD, LONG_PARAMETER_THRESHOLD
from .languages import BaseParser, ParsedModule, get_parser
from .models import AstNode, MethodFinding, ParameterFinding


ANONYMOUS = "anonymous function"


def _function_name(node: AstNode) -> str:
    return node.value or ANONYMOUS


def executable_line_count(source_lines: List[str], module: ParsedModule, node: AstNode) -> int:
    """Non-blank lines of a function that no comment touches."""
    count = 0
    for line_no in range(node.start_line, node.end_line + 1):
        if line_no > len(source_lines):
            break
        if not source_lines[line_no - 1].strip():
            continue
        if module.is_comment_line(line_no):
            continue
        count += 1
    return count


def detect_long_methods(
    source: str,
    parser: Optional[BaseParser] = None,
    threshold: int = LONG_METHOD_THRESHOLD,
) -> List[MethodFinding]:
    """
    Find functions with more executable lines than threshold.

    Raises:
        ParseError: if the file is not valid JavaScript
    """
    parser = parser or get_parser("javascript")
    module = parser.parse_module(source)
    source_lines = source.split("\n")

    findings = []
    for node in module.functions():
        lines = executable_line_count(source_lines, module, node)
        if lines > threshold:
            findings.append(MethodFinding(
                name=_function_name(node),
                start_line=node.start_line,
                end_line=node.end_line,
                executable_lines=lines,
            ))
    return findings


def detect_long_parameter_lists(
    source: str,
    parser: Optional[BaseParser] = None,
    threshold: int = LONG_PARAMETER_THRESHOLD,
) -> List[ParameterFinding]:
    """
    Find functions declaring more parameters than threshold.

    Raises:
        ParseError: if the file is not valid JavaScript
    """
    parser = parser or get_parser("javascript")
    module = parser.parse_module(source)

    return [
        ParameterFinding(
            name=_function_name(node),
            start_line=node.start_line,
            end_line=node.end_line,
            parameter_count=node.arity,
        )
        for node in module.functions()
        if node.arity > threshold
    ]
