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
Literal (Type-1) similarity over normalized lines.
"""

from functools import reduce
from typing import Iterable, List, Sequence, Set, Tuple

from .config import SIMILARITY_THRESHOLD


def jaccard(lines_a: Iterable[str], lines_b: Iterable[str]) -> float:
    """
    Jaccard coefficient between the distinct lines of two fragments.

    Repeated lines count once. Two empty inputs score 0.0.
    """
    set_a = set(lines_a)
    set_b = set(lines_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def exceeds_threshold(score: float, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    """Type-1 qualification. Strictly greater: a score equal to the threshold fails."""
    return score > threshold


def common_lines(lines_a: Sequence[str], lines_b: Iterable[str]) -> List[str]:
    """Lines of the first fragment that also occur in the second, in first-fragment order."""
    members: Set[str] = set(lines_b)
    return [line for line in lines_a if line in members]


def replace_common_runs(lines: Sequence[str], common: Iterable[str], replacement: str) -> List[str]:
    """
    Replace each maximal run of common lines with a single replacement line.

    A common line that comes back after a non-common one starts a new run
    and gets its own replacement.
    """
    members = set(common)

    def step(state: Tuple[List[str], bool], line: str) -> Tuple[List[str], bool]:
        out, in_run = state
        if line in members:
            if not in_run:
                out.append(replacement)
            return out, True
        out.append(line)
        return out, False

    replaced, _ = reduce(step, lines, ([], False))
    return replaced
