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
Language-specific parser adapters.

Only JavaScript (with JSX) is supported; its grammar is loaded lazily.
"""

from pathlib import Path
from typing import Optional

from .base import BaseParser, ParsedModule
from ..config import MAX_NESTING_DEPTH
from ..errors import UnsupportedLanguageError


# Language registry - maps language name to parser class
_PARSER_REGISTRY: dict[str, type[BaseParser]] = {}

# Extension to language mapping
EXTENSION_MAP = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
}

SUPPORTED_LANGUAGES = {"javascript"}


def register_parser(language: str, parser_class: type[BaseParser]) -> None:
    """Register a parser for a language."""
    _PARSER_REGISTRY[language.lower()] = parser_class


def get_parser(language: str, max_depth: int = MAX_NESTING_DEPTH) -> BaseParser:
    """
    Get a parser instance for the given language.

    Raises UnsupportedLanguageError if there is none.
    """
    language = language.lower()

    if language in _PARSER_REGISTRY:
        return _PARSER_REGISTRY[language](max_depth=max_depth)

    if language == "javascript":
        from .javascript import JavaScriptParser
        return JavaScriptParser(max_depth=max_depth)

    raise UnsupportedLanguageError(f"Unsupported language: {language}")


def detect_language(file_path: Path) -> Optional[str]:
    """Detect language from file extension."""
    return EXTENSION_MAP.get(file_path.suffix.lower())


__all__ = [
    "BaseParser",
    "ParsedModule",
    "EXTENSION_MAP",
    "SUPPORTED_LANGUAGES",
    "register_parser",
    "get_parser",
    "detect_language",
]
