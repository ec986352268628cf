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
Refactoring synthesizer - builds the shared function and rewritten fragments.

Type-1 pairs get a no-argument function holding their common lines.
Type-2 pairs get a function parameterized over their varying parts.
The output is a suggestion: it is not checked for equivalence.
"""

import logging
import re
from typing import List, Tuple

from .config import DEFAULT_FUNCTION_NAME
from .models import (
    Fragment,
    FunctionBody,
    NotRefactored,
    Refactored,
    RefactorResult,
    SubstitutionAmbiguous,
    VaryingParts,
)
from .similarity import common_lines, replace_common_runs


logger = logging.getLogger(__name__)

_RETURN_RE = re.compile(r"return\b")


def _whole_word(value: str) -> "re.Pattern[str]":
    return re.compile(rf"(?<![\w$]){re.escape(value)}(?![\w$])")


def unique_function_name(base: str, source: str) -> str:
    """base, or base2, base3, ... if the name is already used in source."""
    name = base
    suffix = 2
    while _whole_word(name).search(source):
        name = f"{base}{suffix}"
        suffix += 1
    return name


def function_text(name: str, params: List[str], body: List[str]) -> str:
    """Render a function declaration with an indented body."""
    lines = [f"function {name}({', '.join(params)}) {{"]
    lines.extend(f"  {line}" for line in body)
    lines.append("}")
    return "\n".join(lines)


def refactor_common_lines(
    fragment1: Fragment,
    fragment2: Fragment,
    function_name: str = DEFAULT_FUNCTION_NAME,
) -> RefactorResult:
    """
    Extract the lines both fragments share into a new function.

    Each run of shared lines in either fragment becomes one call.
    Fragments with no shared lines are returned unchanged.
    """
    shared = common_lines(fragment1.body_lines, fragment2.body_lines)
    if not shared:
        return NotRefactored(fragment1.text, fragment2.text)

    call = f"{function_name}();"
    return Refactored(
        fragment1=fragment1.with_body(replace_common_runs(fragment1.body_lines, shared, call)),
        fragment2=fragment2.with_body(replace_common_runs(fragment2.body_lines, shared, call)),
        synthesized_function=function_text(function_name, [], shared),
    )


def parameters_for(varying: VaryingParts) -> List[Tuple[str, str, str]]:
    """
    (parameter name, left value, right value) for each varying part.

    Identifiers name their own parameter; literals get value1, value2, ...
    """
    entries = [(left, left, right) for left, right in varying.identifiers.items()]
    used = set(varying.identifiers)

    counter = 1
    for left, right in varying.literals.items():
        while f"value{counter}" in used:
            counter += 1
        name = f"value{counter}"
        used.add(name)
        entries.append((name, left, right))

    return entries


def refactor_varying_parts(
    body1: FunctionBody,
    body2: FunctionBody,
    varying: VaryingParts,
    function_name: str = DEFAULT_FUNCTION_NAME,
) -> Refactored:
    """
    Build a function parameterized over the varying parts.

    The body is the first fragment's body with each left-side value
    replaced by its parameter. An expression body becomes a single
    return statement. Both bodies are replaced by one call, the first
    passing the left-side values and the second the right-side ones.
    Substitutions that match no spot or several spots are reported in
    Refactored.warnings.

    Args:
        body1: First fragment split around its function body
        body2: Second fragment split the same way
        varying: Differing leaves from the structural comparison
        function_name: Name of the synthesized function
    """
    entries = parameters_for(varying)
    left_body = body1.text
    right_body = body2.text

    body = left_body
    warnings = []
    for param, left, right in entries:
        left_matches = len(_whole_word(left).findall(left_body))
        right_matches = len(_whole_word(right).findall(right_body))
        if left_matches != 1 or right_matches != 1:
            warning = SubstitutionAmbiguous(left, right, left_matches, right_matches)
            logger.warning(f"Ambiguous substitution: {warning.describe()}")
            warnings.append(warning)
        if param != left:
            body = _whole_word(left).sub(param, body)

    if body1.expression:
        stub_body = [f"return {body};"]
        prefix = suffix = ""
    else:
        stub_body = body.split("\n")
        returns = any(_RETURN_RE.match(line) for line in body1.lines)
        prefix = "return " if returns else ""
        suffix = ";"

    def call(values: List[str]) -> str:
        return f"{prefix}{function_name}({', '.join(values)}){suffix}"

    return Refactored(
        fragment1=body1.rebuild([call([left for _, left, _ in entries])]),
        fragment2=body2.rebuild([call([right for _, _, right in entries])]),
        synthesized_function=function_text(
            function_name,
            [param for param, _, _ in entries],
            stub_body,
        ),
        warnings=tuple(warnings),
    )
