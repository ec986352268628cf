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
Fragment segmenter - splits normalized source at function boundaries.
"""

import logging
import re
from typing import List

from .models import Fragment
from .normalizer import strip_literals


logger = logging.getLogger(__name__)


# Lines are already normalized, so single spaces separate tokens
FUNCTION_START_RE = re.compile(
    r"^(?:export (?:default )?)?(?:async )?function\b"
    r"|^(?:export )?(?:const|let|var) [\w$]+ ?= ?(?:async )?"
    r"(?:function\b|\([^)]*\) ?=>|[\w$]+ ?=>)"
)


def is_function_start(line: str) -> bool:
    """True if the normalized line opens a function definition."""
    return FUNCTION_START_RE.match(line) is not None


def segment(normalized: str) -> List[Fragment]:
    """
    Split normalized text into function fragments.

    Each fragment runs from a function-opening line until its braces
    balance again, or until the first line ending in ";" for an arrow
    function without a block body. A nested function start begins a
    new fragment. Text outside every fragment is dropped.

    Args:
        normalized: Output of normalize()

    Returns:
        List of Fragment objects, in source order
    """
    fragments: List[Fragment] = []
    current: List[str] = []
    start_line = 0
    depth = 0
    opened = False
    skipped = 0

    def close() -> None:
        if current:
            fragments.append(Fragment(index=len(fragments), lines=list(current), start_line=start_line))
            current.clear()

    for line_no, line in enumerate(normalized.split("\n"), start=1):
        if is_function_start(line):
            close()
            start_line = line_no
            depth = 0
            opened = False
        elif not current:
            if line:
                skipped += 1
            continue

        current.append(line)

        code = strip_literals(line)
        depth += code.count("{") - code.count("}")
        opened = opened or "{" in code
        if (opened and depth <= 0) or (not opened and line.endswith(";")):
            close()

    close()

    if skipped:
        logger.debug(f"Dropped {skipped} line(s) outside any function")

    return fragments
