from __future__ import annotations

from typing import Sequence, Tuple


class ContentIndexError(Exception):
    """Base class for every error raised by the content index."""


class MalformedNameError(ContentIndexError):
    """A filesystem name cannot be decoded into a valid slug."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Malformed entry name {name!r}: {reason}")
        self.name = name
        self.reason = reason


class DuplicateSlugError(ContentIndexError):
    """Two siblings collided after slugging. Recovered by renaming the later one."""

    def __init__(self, parent_path: Sequence[str], slug: str, renamed_to: str, raw_name: str) -> None:
        location = "/".join(parent_path) or "<root>"
        super().__init__(f"Slug {slug!r} under {location} already taken; {raw_name!r} renamed to {renamed_to!r}")
        self.parent_path: Tuple[str, ...] = tuple(parent_path)
        self.slug = slug
        self.renamed_to = renamed_to
        self.raw_name = raw_name


class ScanIOError(ContentIndexError):
    """A file or directory could not be read."""

    def __init__(self, location: str, reason: str, *, fatal: bool = False) -> None:
        super().__init__(f"Cannot read {location}: {reason}")
        self.location = location
        self.reason = reason
        self.fatal = fatal


class PrunedEntryError(ContentIndexError):
    """An entry was dropped while building the tree (empty category, topic without documents)."""

    def __init__(self, relative_path: Sequence[str], reason: str) -> None:
        super().__init__(f"Dropped {'/'.join(relative_path)}: {reason}")
        self.relative_path: Tuple[str, ...] = tuple(relative_path)
        self.reason = reason


class ResolutionError(ContentIndexError):
    """Base class for failures while resolving a route to content."""

    def __init__(self, message: str, path: Sequence[str]) -> None:
        super().__init__(message)
        self.path: Tuple[str, ...] = tuple(path)


class NotFoundError(ResolutionError):
    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(f"No navigation node at /{'/'.join(path)}", path)


class NotATopicError(ResolutionError):
    """The route points at a category, which has no content of its own."""

    def __init__(self, path: Sequence[str], redirect: Sequence[str] | None = None) -> None:
        super().__init__(f"/{'/'.join(path)} is a category, not a topic", path)
        self.redirect: Tuple[str, ...] | None = tuple(redirect) if redirect is not None else None


class VariantUnavailableError(ResolutionError):
    """The requested variant is missing; callers fall back to ``fallback``."""

    def __init__(self, path: Sequence[str], requested: str, fallback: str) -> None:
        super().__init__(f"Variant {requested!r} is not available for /{'/'.join(path)}", path)
        self.requested = requested
        self.fallback = fallback


class InvalidationDisabledError(ContentIndexError):
    """The index cache is frozen for the lifetime of the process."""


__all__ = [
    "ContentIndexError",
    "DuplicateSlugError",
    "InvalidationDisabledError",
    "MalformedNameError",
    "NotATopicError",
    "NotFoundError",
    "PrunedEntryError",
    "ResolutionError",
    "ScanIOError",
    "VariantUnavailableError",
]
