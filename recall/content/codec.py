from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterable, Tuple

from recall.content.errors import MalformedNameError


# Sentinel order for names without a numeric prefix; sorts after every explicit order.
UNORDERED = sys.maxsize
MAX_EXPLICIT_ORDER = UNORDERED - 1

DEFAULT_DOCUMENT_EXTENSIONS: Tuple[str, ...] = (".md", ".mdx", ".markdown")

_PREFIX_PATTERN = re.compile(r"^(?P<order>\d+)[_-](?P<base>.+)$")
_SEPARATOR_PATTERN = re.compile(r"[_\s]")
_VALID_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
_WORD_SPLIT_PATTERN = re.compile(r"[_\-\s]+")


@dataclass(frozen=True, slots=True)
class OrderedName:
    """Decoded form of an ``NN_name`` filesystem entry."""

    raw: str
    order: int
    slug: str
    title: str
    base: str

    @property
    def has_explicit_order(self) -> bool:
        return self.order != UNORDERED

    @property
    def sort_key(self) -> Tuple[int, str, str]:
        return (self.order, self.slug, self.raw)


class PathOrderCodec:
    """Maps raw filesystem names to ``{order, slug, title}`` and back."""

    def __init__(self, document_extensions: Iterable[str] = DEFAULT_DOCUMENT_EXTENSIONS) -> None:
        self.document_extensions = tuple(ext.lower() for ext in document_extensions)

    def is_document(self, name: str) -> bool:
        return name.lower().endswith(self.document_extensions)

    def strip_extension(self, name: str) -> str:
        lowered = name.lower()
        for ext in self.document_extensions:
            if lowered.endswith(ext):
                return name[: -len(ext)]
        return name

    def decode(self, name: str, *, is_file: bool = False) -> OrderedName:
        stem = self.strip_extension(name) if is_file else name
        match = _PREFIX_PATTERN.match(stem)
        if match:
            order = min(int(match.group("order")), MAX_EXPLICIT_ORDER)
            base = match.group("base")
        else:
            order = UNORDERED
            base = stem

        slug = _SEPARATOR_PATTERN.sub("-", base.strip()).lower()
        if not slug:
            raise MalformedNameError(name, "empty name after removing the order prefix")
        if not _VALID_SLUG_PATTERN.match(slug):
            raise MalformedNameError(name, f"slug {slug!r} contains characters outside [a-z0-9-]")

        return OrderedName(raw=name, order=order, slug=slug, title=self.title_for(base), base=base)

    @staticmethod
    def title_for(base: str) -> str:
        words = [word for word in _WORD_SPLIT_PATTERN.split(base) if word]
        return " ".join(word[:1].upper() + word[1:] for word in words)

    @staticmethod
    def encode(order: int, base: str, *, width: int = 2, separator: str = "_") -> str:
        if order < 0:
            raise ValueError("order must be non-negative")
        if separator not in {"_", "-"}:
            raise ValueError("separator must be '_' or '-'")
        return f"{order:0{width}d}{separator}{base}"


__all__ = [
    "DEFAULT_DOCUMENT_EXTENSIONS",
    "MAX_EXPLICIT_ORDER",
    "OrderedName",
    "PathOrderCodec",
    "UNORDERED",
]
