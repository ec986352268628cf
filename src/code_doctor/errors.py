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

"""Code Doctor exceptions."""

from typing import Optional


class CodeDoctorError(Exception):
    """Base class for errors raised by code-doctor."""


class ParseError(CodeDoctorError):
    """Raised when source text is not independently parseable.

    The engine catches this per fragment pair and reports the structural
    comparison as unavailable instead of failing the whole analysis.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class UnsupportedLanguageError(CodeDoctorError):
    """Raised when no parser is available for a file's language."""
