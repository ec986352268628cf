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
Code Doctor - Find duplicated logic in a JavaScript file and suggest a refactoring.

Detects literal (Type-1) and structural (Type-2) clones between functions
and synthesizes a shared function for them. Also flags long methods and
long parameter lists.
"""

__version__ = "0.1.0"

from .engine import analyze_pair, analyze_source, scan_source
from .normalizer import normalize
from .segmenter import segment
from .similarity import jaccard
from .structural import compare_structure, structurally_equivalent
from .smells import detect_long_methods, detect_long_parameter_lists
from .reporter import report_analysis
from .config import DetectorConfig, load_config, find_config_file

__all__ = [
    "__version__",
    "analyze_pair",
    "analyze_source",
    "scan_source",
    "normalize",
    "segment",
    "jaccard",
    "compare_structure",
    "structurally_equivalent",
    "detect_long_methods",
    "detect_long_parameter_lists",
    "report_analysis",
    "DetectorConfig",
    "load_config",
    "find_config_file",
]
