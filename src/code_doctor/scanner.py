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
Pair scanner - ranks every fragment pair by line similarity.

Only used when all-pairs scanning is enabled; the default analysis
compares the first two fragments.
"""

from typing import List, Tuple

import numpy as np

from .models import Fragment
from .similarity import jaccard


def similarity_matrix(fragments: List[Fragment]) -> np.ndarray:
    """Symmetric matrix of Jaccard scores between fragment bodies."""
    n = len(fragments)
    matrix = np.eye(n, dtype=np.float64)

    for i in range(n):
        for j in range(i + 1, n):
            score = jaccard(fragments[i].body_lines, fragments[j].body_lines)
            matrix[i, j] = matrix[j, i] = score

    return matrix


def rank_fragment_pairs(fragments: List[Fragment]) -> List[Tuple[int, int, float]]:
    """
    Every (i, j, score) pair with i < j, most similar first.

    Ties keep source order, so the first two fragments come first among
    equals.
    """
    if len(fragments) < 2:
        return []

    matrix = similarity_matrix(fragments)

    # Upper triangle (excluding diagonal)
    rows, cols = np.triu_indices(len(fragments), k=1)
    scores = matrix[rows, cols]

    order = np.argsort(-scores, kind="stable")
    return [(int(rows[k]), int(cols[k]), float(scores[k])) for k in order]
