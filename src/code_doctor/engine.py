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
Duplicate detection engine.

For a pair of fragments:

1. Type-1: Jaccard similarity of body lines above the threshold, and at
   least one shared line -> extract the shared lines.
2. Type-2: both fragments parse, have the same tree shape and a
   non-empty function body -> extract a function parameterized over
   the differing identifiers/literals.
3. Otherwise no duplicate. A parse failure ends the pair here.
"""

import logging
from typing import List, Optional

from .config import DetectorConfig
from .errors import ParseError
from .languages import BaseParser, get_parser
from .models import (
    AnalysisResult,
    Fragment,
    InsufficientFragments,
    NoDuplicates,
    Refactored,
    Type1Duplicate,
    Type2Duplicate,
)
from .normalizer import normalize
from .scanner import rank_fragment_pairs
from .segmenter import segment
from .similarity import common_lines, exceeds_threshold, jaccard
from .structural import extract_varying_parts
from .synthesizer import refactor_common_lines, refactor_varying_parts, unique_function_name


logger = logging.getLogger(__name__)


def analyze_pair(
    fragment1: Fragment,
    fragment2: Fragment,
    config: Optional[DetectorConfig] = None,
    parser: Optional[BaseParser] = None,
    function_name: Optional[str] = None,
) -> AnalysisResult:
    """
    Run both detection tiers on one fragment pair.

    Args:
        fragment1: Left fragment
        fragment2: Right fragment
        config: Detector settings (defaults used if None)
        parser: Parser adapter (JavaScript if None)
        function_name: Name for the synthesized function (config's if None)

    Returns:
        Type1Duplicate, Type2Duplicate or NoDuplicates
    """
    config = config or DetectorConfig()
    function_name = function_name or config.function_name
    indices = (fragment1.index, fragment2.index)

    similarity = jaccard(fragment1.body_lines, fragment2.body_lines)
    logger.debug(f"Fragments {indices}: similarity {similarity:.4f}")

    if exceeds_threshold(similarity, config.similarity_threshold):
        refactoring = refactor_common_lines(fragment1, fragment2, function_name)
        if isinstance(refactoring, Refactored):
            logger.info(f"Fragments {indices}: Type-1 duplicate ({similarity:.0%})")
            return Type1Duplicate(
                fragment1=fragment1,
                fragment2=fragment2,
                similarity=similarity,
                common_lines=tuple(common_lines(fragment1.body_lines, fragment2.body_lines)),
                refactoring=refactoring,
            )

    if parser is None:
        parser = get_parser("javascript", max_depth=config.max_depth)

    try:
        left = fragment1.syntax_tree(parser)
        right = fragment2.syntax_tree(parser)
    except ParseError as e:
        logger.info(f"Fragments {indices}: structural comparison unavailable: {e}")
        return NoDuplicates(similarity=similarity, fragment_indices=indices, comparison_unavailable=str(e))

    varying = extract_varying_parts(left, right)
    if varying is None:
        logger.debug(f"Fragments {indices}: different structure")
        return NoDuplicates(similarity=similarity, fragment_indices=indices)

    body1 = fragment1.function_body(parser)
    body2 = fragment2.function_body(parser)
    if body1 is None or body2 is None:
        logger.debug(f"Fragments {indices}: no function body to extract")
        return NoDuplicates(similarity=similarity, fragment_indices=indices)

    logger.info(f"Fragments {indices}: Type-2 duplicate ({len(varying)} varying part(s))")
    return Type2Duplicate(
        fragment1=fragment1,
        fragment2=fragment2,
        similarity=similarity,
        varying_parts=varying,
        refactoring=refactor_varying_parts(body1, body2, varying, function_name),
    )


def analyze_source(
    source: str,
    config: Optional[DetectorConfig] = None,
    parser: Optional[BaseParser] = None,
) -> AnalysisResult:
    """
    Analyze the first two functions of a source file.

    Returns:
        InsufficientFragments if fewer than two functions were found,
        otherwise the result of analyze_pair on the first two
    """
    config = config or DetectorConfig()
    fragments = segment(normalize(source))

    if len(fragments) < 2:
        logger.info(f"Only {len(fragments)} fragment(s); nothing to compare")
        return InsufficientFragments(fragment_count=len(fragments))

    name = unique_function_name(config.function_name, source)
    return analyze_pair(fragments[0], fragments[1], config, parser, function_name=name)


def scan_source(
    source: str,
    config: Optional[DetectorConfig] = None,
    parser: Optional[BaseParser] = None,
) -> List[AnalysisResult]:
    """
    Analyze every pair of functions in a source file.

    Pairs are visited most line-similar first. Only duplicate pairs are
    returned; an empty list means none were found.

    Returns:
        [InsufficientFragments] if fewer than two functions were found,
        otherwise the Type1Duplicate/Type2Duplicate results
    """
    config = config or DetectorConfig()
    fragments = segment(normalize(source))

    if len(fragments) < 2:
        return [InsufficientFragments(fragment_count=len(fragments))]

    if parser is None:
        parser = get_parser("javascript", max_depth=config.max_depth)

    name = unique_function_name(config.function_name, source)
    results: List[AnalysisResult] = []
    for i, j, _ in rank_fragment_pairs(fragments):
        result = analyze_pair(fragments[i], fragments[j], config, parser, function_name=name)
        if isinstance(result, (Type1Duplicate, Type2Duplicate)):
            results.append(result)

    logger.info(f"Scanned {len(fragments)} fragments, {len(results)} duplicate pair(s)")
    return results
