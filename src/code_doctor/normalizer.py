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
Source normalizer - strips comments and whitespace noise.

The output has one trimmed, whitespace-collapsed statement line per line
and no blank lines. Normalizing normalized text returns it unchanged.
"""

import re
from typing import List


# String, template and regex literals are matched first so comment
# markers inside them are left alone. A slash only opens a regex where an
# operand is expected: after an operator, an opening bracket or `return`.
_TOKEN_RE = re.compile(
    r"""
    (?P<literal>
        "(?:\\.|[^"\\\n])*"
      | '(?:\\.|[^'\\\n])*'
      | `(?:\\.|[^`\\])*`
    )
    | (?P<regex>
        (?:^|(?<=[(,=:\[!&|?{};])|(?<=\breturn)|(?<=\btypeof))
        [ \t]*
        /(?![*/])(?:\\.|\[(?:\\.|[^\]\\\n])*\]|[^/\\\n\[])+/[A-Za-z]*
    )
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    """,
    re.VERBOSE | re.DOTALL | re.MULTILINE,
)

_WHITESPACE_RE = re.compile(r"\s+")


def strip_comments(source: str) -> str:
    """Remove // and /* */ comments outside string and regex literals."""

    def _replace(match: re.Match) -> str:
        if match.group("literal") is not None or match.group("regex") is not None:
            return match.group(0)
        if match.group("block_comment") is not None:
            # Keep tokens on either side of the comment apart
            return " "
        return ""

    return _TOKEN_RE.sub(_replace, source)


def normalize_lines(source: str) -> List[str]:
    """Normalize source into a list of non-empty canonical lines."""
    lines = []
    for line in strip_comments(source).splitlines():
        line = _WHITESPACE_RE.sub(" ", line.strip())
        if line:
            lines.append(line)
    return lines


def normalize(source: str) -> str:
    """Normalize source text. Pure and idempotent."""
    return "\n".join(normalize_lines(source))


def strip_literals(line: str) -> str:
    """The line with string, template and regex literals cut out."""

    def _replace(match: re.Match) -> str:
        if match.group("literal") is not None or match.group("regex") is not None:
            return ""
        return match.group(0)

    return _TOKEN_RE.sub(_replace, line)
