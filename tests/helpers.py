from __future__ import annotations

from code_doctor.models import Fragment


def make_fragment(text: str, index: int = 0) -> Fragment:
    """Fragment from already-normalized text."""
    return Fragment(index=index, lines=text.split("\n"))
