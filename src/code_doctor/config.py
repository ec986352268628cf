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
Configuration for code-doctor.

Holds the detector thresholds as named constants and looks for
.codedoctorrc or .code-doctor.toml next to the analyzed file or in
any parent directory.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Dict, Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # type: ignore
    except ImportError:
        tomllib = None  # type: ignore


# Type-1 duplicates need a Jaccard score strictly above this
SIMILARITY_THRESHOLD = 0.75

# Functions with more executable lines than this are reported
LONG_METHOD_THRESHOLD = 15

# Functions with more parameters than this are reported
LONG_PARAMETER_THRESHOLD = 3

# Recursion guard for tree conversion and comparison
MAX_NESTING_DEPTH = 200

DEFAULT_FUNCTION_NAME = "refactoredCommonFunction"

CONFIG_NAMES = [".codedoctorrc", ".code-doctor.toml"]
CONFIG_SECTION = "code-doctor"


@dataclass
class DetectorConfig:
    """Settings for one analysis run."""

    similarity_threshold: float = SIMILARITY_THRESHOLD
    function_name: str = DEFAULT_FUNCTION_NAME
    all_pairs: bool = False
    max_depth: int = MAX_NESTING_DEPTH
    long_method_lines: int = LONG_METHOD_THRESHOLD
    long_parameter_count: int = LONG_PARAMETER_THRESHOLD

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "DetectorConfig":
        """Build a config from a [code-doctor] table, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Search for .codedoctorrc or .code-doctor.toml in start_path and its parents.

    Args:
        start_path: File or directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_NAMES:
            config_path = current / name
            if config_path.is_file():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load the [code-doctor] section of the nearest config file.

    Returns an empty dict when no config file is found or it cannot be read.

    Example config file (.codedoctorrc or .code-doctor.toml):
        [code-doctor]
        similarity_threshold = 0.8
        function_name = "sharedSetup"
        all_pairs = true
        long_method_lines = 20
        long_parameter_count = 4
    """
    if tomllib is None:
        return {}

    config_path = find_config_file(path)

    if config_path is None:
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return data.get(CONFIG_SECTION, {})

    except (OSError, tomllib.TOMLDecodeError):
        # File unreadable or invalid TOML - return empty config
        return {}
