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
Report generator - formats analysis results for output.

Supports text, markdown, and json output formats.
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from enum import Enum
import json
from datetime import datetime

from .models import (
    AnalysisResult,
    InsufficientFragments,
    MethodFinding,
    NoDuplicates,
    ParameterFinding,
    Type1Duplicate,
    Type2Duplicate,
)


class OutputFormat(Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"


NOT_ENOUGH_FRAGMENTS = "Not enough code fragments for comparison."
NO_DUPLICATES = "No significant duplicates found."
NO_LONG_METHODS = "Damn looks like your code is clean. Good going !\nNo long methods detected."
NO_LONG_PARAMETERS = "Damn looks like your code is clean. Good going !\nNo long parameter list detected."

Duplicate = Union[Type1Duplicate, Type2Duplicate]


def report_analysis(
    path: Path,
    results: Optional[List[AnalysisResult]] = None,
    output_format: OutputFormat = OutputFormat.TEXT,
    long_methods: Optional[List[MethodFinding]] = None,
    long_parameters: Optional[List[ParameterFinding]] = None,
) -> str:
    """
    Generate a report for one analyzed file.

    Args:
        path: Analyzed file (for display)
        results: Duplicate detection results, None if that check was skipped
        output_format: Desired output format
        long_methods: Long method findings, None if that check was skipped
        long_parameters: Long parameter list findings, None if skipped

    Returns:
        Formatted report string
    """
    if output_format == OutputFormat.TEXT:
        return _format_text(path, results, long_methods, long_parameters)
    elif output_format == OutputFormat.MARKDOWN:
        return _format_markdown(path, results, long_methods, long_parameters)
    elif output_format == OutputFormat.JSON:
        return _format_json(path, results, long_methods, long_parameters)
    else:
        raise ValueError(f"Unknown format: {output_format}")


def _duplicates(results: List[AnalysisResult]) -> List[Duplicate]:
    return [r for r in results if isinstance(r, (Type1Duplicate, Type2Duplicate))]


def _duplicate_label(result: Duplicate) -> str:
    return "Type-1 (literal)" if isinstance(result, Type1Duplicate) else "Type-2 (structural)"


def _no_duplicate_message(results: List[AnalysisResult]) -> str:
    if any(isinstance(r, InsufficientFragments) for r in results):
        return NOT_ENOUGH_FRAGMENTS
    return NO_DUPLICATES


def _unavailable_notes(results: List[AnalysisResult]) -> List[str]:
    return [
        f"Structural comparison unavailable for fragments {r.fragment_indices}: {r.comparison_unavailable}"
        for r in results
        if isinstance(r, NoDuplicates) and r.comparison_unavailable
    ]


def _format_text(
    path: Path,
    results: Optional[List[AnalysisResult]],
    long_methods: Optional[List[MethodFinding]],
    long_parameters: Optional[List[ParameterFinding]],
) -> str:
    """Plain text format."""
    lines = [f"🩺 Code Doctor report for {path}", ""]

    if results is not None:
        lines.append("━" * 70)
        lines.append("Duplicate code")
        lines.append("━" * 70)
        duplicates = _duplicates(results)
        if not duplicates:
            lines.append(_no_duplicate_message(results))
            for note in _unavailable_notes(results):
                lines.append(f"   ⚠️  {note}")
        for result in duplicates:
            lines.append("Duplicated code detected.")
            lines.append(f"Kind: {_duplicate_label(result)} | Similarity: {result.similarity:.0%}")
            lines.append(f"Duplicate code part1 is:\n{result.fragment1.text}")
            lines.append(f"Duplicate code part2 is:\n{result.fragment2.text}")
            if isinstance(result, Type2Duplicate):
                for left, right in result.varying_parts.identifiers.items():
                    lines.append(f"   • identifier {left} ↔ {right}")
                for left, right in result.varying_parts.literals.items():
                    lines.append(f"   • literal {left} ↔ {right}")
            lines.append("Here is the refactored solution for you:")
            lines.append(result.synthesized_function)
            lines.append("")
            lines.append("Rewritten part1:")
            lines.append(result.refactoring.fragment1)
            lines.append("Rewritten part2:")
            lines.append(result.refactoring.fragment2)
            for warning in result.refactoring.warnings:
                lines.append(f"   ⚠️  {warning.describe()}")
            lines.append("")
        lines.append("")

    if long_methods is not None:
        lines.append("━" * 70)
        lines.append("Long methods")
        lines.append("━" * 70)
        if not long_methods:
            lines.append(NO_LONG_METHODS)
        for finding in long_methods:
            lines.append(
                f"We have detected a long method.\nYour function {finding.name} seems to be long.\n"
                f"Executable Lines: {finding.executable_lines}, "
                f"Start: {finding.start_line}, End: {finding.end_line}."
            )
        lines.append("")

    if long_parameters is not None:
        lines.append("━" * 70)
        lines.append("Long parameter lists")
        lines.append("━" * 70)
        if not long_parameters:
            lines.append(NO_LONG_PARAMETERS)
        for finding in long_parameters:
            lines.append(
                f"{finding.name} Method/ Function with long parameter list detected.\n"
                f"The method starts at line {finding.start_line} and ends at line {finding.end_line}.\n"
                f"Total parameters: {finding.parameter_count}."
            )
        lines.append("")

    return "\n".join(lines)


def _format_markdown(
    path: Path,
    results: Optional[List[AnalysisResult]],
    long_methods: Optional[List[MethodFinding]],
    long_parameters: Optional[List[ParameterFinding]],
) -> str:
    """Markdown format for documentation."""
    lines = ["# Code Doctor Report", "", f"**File:** `{path}`", ""]

    if results is not None:
        lines.append("## Duplicate Code")
        lines.append("")
        duplicates = _duplicates(results)
        if not duplicates:
            lines.append(_no_duplicate_message(results))
            lines.append("")
            for note in _unavailable_notes(results):
                lines.append(f"- ⚠️ {note}")
        for n, result in enumerate(duplicates, start=1):
            lines.append(f"### Duplicate {n}: {_duplicate_label(result)}, {result.similarity:.0%} similarity")
            lines.append("")
            lines.append(
                f"Lines {result.fragment1.start_line}-{result.fragment1.end_line} and "
                f"{result.fragment2.start_line}-{result.fragment2.end_line} of the normalized source."
            )
            lines.append("")
            if isinstance(result, Type2Duplicate) and not result.varying_parts.is_empty():
                lines.append("| Kind | Fragment 1 | Fragment 2 |")
                lines.append("|------|------------|------------|")
                for left, right in result.varying_parts.identifiers.items():
                    lines.append(f"| identifier | `{left}` | `{right}` |")
                for left, right in result.varying_parts.literals.items():
                    lines.append(f"| literal | `{left}` | `{right}` |")
                lines.append("")
            lines.append("**Suggested function:**")
            lines.append("")
            lines.append("```javascript")
            lines.append(result.synthesized_function)
            lines.append("```")
            lines.append("")
            lines.append("**Rewritten fragments:**")
            lines.append("")
            lines.append("```javascript")
            lines.append(result.refactoring.fragment1)
            lines.append("")
            lines.append(result.refactoring.fragment2)
            lines.append("```")
            lines.append("")
            for warning in result.refactoring.warnings:
                lines.append(f"- ⚠️ {warning.describe()}")
            if result.refactoring.warnings:
                lines.append("")

    if long_methods is not None:
        lines.append("## Long Methods")
        lines.append("")
        if long_methods:
            lines.append("| Function | Lines | Executable lines |")
            lines.append("|----------|-------|------------------|")
            for finding in long_methods:
                lines.append(f"| {finding.name} | {finding.start_line}-{finding.end_line} | {finding.executable_lines} |")
        else:
            lines.append("No long methods detected.")
        lines.append("")

    if long_parameters is not None:
        lines.append("## Long Parameter Lists")
        lines.append("")
        if long_parameters:
            lines.append("| Function | Lines | Parameters |")
            lines.append("|----------|-------|------------|")
            for finding in long_parameters:
                lines.append(f"| {finding.name} | {finding.start_line}-{finding.end_line} | {finding.parameter_count} |")
        else:
            lines.append("No long parameter list detected.")
        lines.append("")

    return "\n".join(lines)


def _result_data(result: AnalysisResult) -> Dict[str, Any]:
    if isinstance(result, InsufficientFragments):
        return {"outcome": "insufficient_fragments", "fragment_count": result.fragment_count}

    if isinstance(result, NoDuplicates):
        return {
            "outcome": "no_duplicates",
            "similarity": round(result.similarity, 4),
            "fragments": list(result.fragment_indices),
            "comparison_unavailable": result.comparison_unavailable,
        }

    data: Dict[str, Any] = {
        "outcome": "type1_duplicate" if isinstance(result, Type1Duplicate) else "type2_duplicate",
        "similarity": round(result.similarity, 4),
        "fragments": [
            {
                "index": fragment.index,
                "start_line": fragment.start_line,
                "end_line": fragment.end_line,
                "content": fragment.text,
            }
            for fragment in (result.fragment1, result.fragment2)
        ],
        "synthesized_function": result.synthesized_function,
        "rewritten": [result.refactoring.fragment1, result.refactoring.fragment2],
        "warnings": [warning.describe() for warning in result.refactoring.warnings],
    }
    if isinstance(result, Type1Duplicate):
        data["common_lines"] = list(result.common_lines)
    else:
        data["varying_parts"] = {
            "identifiers": dict(result.varying_parts.identifiers),
            "literals": dict(result.varying_parts.literals),
        }
    return data


def _format_json(
    path: Path,
    results: Optional[List[AnalysisResult]],
    long_methods: Optional[List[MethodFinding]],
    long_parameters: Optional[List[ParameterFinding]],
) -> str:
    """JSON format for programmatic use."""
    data: Dict[str, Any] = {
        "meta": {
            "path": str(path),
            "timestamp": datetime.now().isoformat(),
        },
    }

    if results is not None:
        data["duplicates"] = [_result_data(result) for result in results]

    if long_methods is not None:
        data["long_methods"] = [
            {
                "name": f.name,
                "start_line": f.start_line,
                "end_line": f.end_line,
                "executable_lines": f.executable_lines,
            }
            for f in long_methods
        ]

    if long_parameters is not None:
        data["long_parameter_lists"] = [
            {
                "name": f.name,
                "start_line": f.start_line,
                "end_line": f.end_line,
                "parameter_count": f.parameter_count,
            }
            for f in long_parameters
        ]

    return json.dumps(data, indent=2)
