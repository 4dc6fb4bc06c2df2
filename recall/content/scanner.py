from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from recall.content.codec import DEFAULT_DOCUMENT_EXTENSIONS, OrderedName, PathOrderCodec
from recall.content.errors import ContentIndexError, MalformedNameError, PrunedEntryError, ScanIOError
from recall.content.markdown import extract_heading, has_worked_answers
from recall.content.source import ContentSource, SourceEntry
from recall.models.navigation import NodeKind, Variant

logger = logging.getLogger(__name__)

_ANSWERS_NAME_PATTERN = re.compile(r"(^|-)(answers?|with-answers|qa|q-and-a|solutions?)($|-)")
_QUESTIONS_NAME_PATTERN = re.compile(r"^(questions?|questions-only|question-bank)$")


@dataclass(slots=True)
class DocumentScannerConfig:
    """Configuration for walking a content tree."""

    document_extensions: Tuple[str, ...] = DEFAULT_DOCUMENT_EXTENSIONS
    max_depth: int = 8
    ignore_prefixes: Tuple[str, ...] = (".", "_")


@dataclass(frozen=True, slots=True)
class ScanEntry:
    """One directory or document discovered during a scan.

    ``relative_path`` holds raw names from the content root. Directory
    entries carry ``kind``; document entries carry ``variant``, ``heading``
    and ``location``.
    """

    relative_path: Tuple[str, ...]
    depth: int
    is_directory: bool
    ordered_name: OrderedName
    kind: Optional[NodeKind] = None
    variant: Optional[Variant] = None
    heading: Optional[str] = None
    location: Optional[str] = None

    @property
    def parent_path(self) -> Tuple[str, ...]:
        return self.relative_path[:-1]


@dataclass(slots=True)
class ScanResult:
    entries: List[ScanEntry] = field(default_factory=list)
    issues: List[ContentIndexError] = field(default_factory=list)


def classify_variant(name: OrderedName, text: str) -> Variant:
    """Decide which variant a document provides.

    The name wins when it is unambiguous; otherwise the body is checked
    for worked answers.
    """

    if _ANSWERS_NAME_PATTERN.search(name.slug):
        return Variant.QUESTIONS_AND_ANSWERS
    if _QUESTIONS_NAME_PATTERN.match(name.slug):
        return Variant.QUESTIONS_ONLY
    if has_worked_answers(text):
        return Variant.QUESTIONS_AND_ANSWERS
    return Variant.QUESTIONS_ONLY


class DocumentScanner:
    """Walk a content source and produce a flat listing of directories and documents."""

    def __init__(
        self,
        source: ContentSource,
        config: DocumentScannerConfig | None = None,
        *,
        codec: PathOrderCodec | None = None,
    ) -> None:
        self.source = source
        self.config = config or DocumentScannerConfig()
        self.codec = codec or PathOrderCodec(self.config.document_extensions)

    def scan(self) -> ScanResult:
        result = ScanResult()
        try:
            root_listing = self.source.list_entries(())
        except OSError as exc:
            raise ScanIOError(self.source.describe(), str(exc), fatal=True) from exc

        self._walk_directory((), root_listing, result)
        logger.info(
            "Scanned %s: %d entries, %d issues",
            self.source.describe(),
            len(result.entries),
            len(result.issues),
        )
        return result

    # ------------------------------------------------------------------ walking
    def _walk_directory(self, path: Tuple[str, ...], listing: Sequence[SourceEntry], result: ScanResult) -> None:
        visible = [entry for entry in listing if not entry.name.startswith(self.config.ignore_prefixes)]
        directories = [entry for entry in visible if entry.is_directory]
        documents = [entry for entry in visible if not entry.is_directory and self.codec.is_document(entry.name)]

        if documents and (directories or not path):
            reason = "document placed beside sub-directories" if path else "documents must live in a topic directory"
            for document in documents:
                self._record(result, PrunedEntryError(path + (document.name,), reason))
            documents = []

        for directory in directories:
            self._visit_directory(path + (directory.name,), result)

        for document in documents:
            self._visit_document(path + (document.name,), result)

    def _visit_directory(self, path: Tuple[str, ...], result: ScanResult) -> None:
        ordered = self._decode(path, is_file=False, result=result)
        if ordered is None:
            return
        if len(path) > self.config.max_depth:
            self._record(
                result,
                PrunedEntryError(path, f"nesting deeper than {self.config.max_depth} levels"),
            )
            return
        try:
            listing = self.source.list_entries(path)
        except OSError as exc:
            self._record(result, ScanIOError(self.source.location(path), str(exc)))
            return

        visible = [entry for entry in listing if not entry.name.startswith(self.config.ignore_prefixes)]
        has_subdirectories = any(entry.is_directory for entry in visible)
        kind = NodeKind.CATEGORY if has_subdirectories else NodeKind.TOPIC
        if not has_subdirectories and not any(self.codec.is_document(entry.name) for entry in visible):
            kind = NodeKind.CATEGORY

        result.entries.append(
            ScanEntry(
                relative_path=path,
                depth=len(path),
                is_directory=True,
                ordered_name=ordered,
                kind=kind,
            )
        )
        self._walk_directory(path, listing, result)

    def _visit_document(self, path: Tuple[str, ...], result: ScanResult) -> None:
        ordered = self._decode(path, is_file=True, result=result)
        if ordered is None:
            return
        location = self.source.location(path)
        try:
            text = self.source.read_entry(path)
        except (OSError, UnicodeDecodeError) as exc:
            self._record(result, ScanIOError(location, str(exc)))
            return

        result.entries.append(
            ScanEntry(
                relative_path=path,
                depth=len(path),
                is_directory=False,
                ordered_name=ordered,
                variant=classify_variant(ordered, text),
                heading=extract_heading(text),
                location=location,
            )
        )

    # ------------------------------------------------------------------ helpers
    def _decode(self, path: Tuple[str, ...], *, is_file: bool, result: ScanResult) -> OrderedName | None:
        try:
            return self.codec.decode(path[-1], is_file=is_file)
        except MalformedNameError as exc:
            self._record(result, exc)
            return None

    @staticmethod
    def _record(result: ScanResult, issue: ContentIndexError) -> None:
        logger.warning("Skipping entry: %s", issue)
        result.issues.append(issue)


__all__ = [
    "DocumentScanner",
    "DocumentScannerConfig",
    "ScanEntry",
    "ScanResult",
    "classify_variant",
]
