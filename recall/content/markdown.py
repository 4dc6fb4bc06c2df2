from __future__ import annotations

import re
from typing import Iterator, Optional


_HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<title>.+?)(?:\s+#+)?\s*$")
_FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")
_QUESTION_MARKER = re.compile(
    r"^[\s>*_#-]*(?:\*\*|__)?\s*(?:Question\s*\d*|Q\d+)\s*:", re.IGNORECASE | re.MULTILINE
)
_ANSWER_MARKER = re.compile(r"^[\s>*_#-]*(?:\*\*|__)?\s*Answer\s*\d*\s*:", re.IGNORECASE | re.MULTILINE)


def _iter_prose_lines(text: str) -> Iterator[str]:
    """Yield lines outside fenced code blocks."""

    fence: str | None = None
    for line in text.splitlines():
        match = _FENCE_PATTERN.match(line)
        if match:
            marker = match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
            continue
        if fence is None:
            yield line


def extract_heading(text: str) -> Optional[str]:
    """Return the first level-one heading of a markdown document, if any."""

    for line in _iter_prose_lines(text):
        match = _HEADING_PATTERN.match(line)
        if match and len(match.group("hashes")) == 1:
            return match.group("title").strip() or None
    return None


def has_worked_answers(text: str) -> bool:
    """True when an ``Answer:`` marker appears after a ``Question:`` marker."""

    prose = "\n".join(_iter_prose_lines(text))
    question = _QUESTION_MARKER.search(prose)
    if question is None:
        return False
    return _ANSWER_MARKER.search(prose, question.end()) is not None


__all__ = ["extract_heading", "has_worked_answers"]
