from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from recall.content.errors import ContentIndexError, DuplicateSlugError, PrunedEntryError
from recall.content.scanner import ScanEntry, ScanResult
from recall.content.source import ContentSource
from recall.models.navigation import NavigationNode, NodeKind, Variant

logger = logging.getLogger(__name__)

SlugPath = Tuple[str, ...]


@dataclass(slots=True)
class NavigationTreeConfig:
    """Configuration for assembling the navigation tree."""

    title_from_heading: bool = True
    root_title: str = "Home"


@dataclass(slots=True)
class NavigationIndex:
    """One published generation of the navigation tree."""

    root: NavigationNode
    path_index: Dict[SlugPath, NavigationNode]
    entries: List[ScanEntry] = field(default_factory=list)
    issues: List[ContentIndexError] = field(default_factory=list)
    source: Optional[ContentSource] = None
    generation: int = 0
    fingerprint: Optional[str] = None

    def get(self, path: Sequence[str]) -> NavigationNode | None:
        return self.path_index.get(tuple(path))

    def topics(self) -> Iterator[NavigationNode]:
        return (node for node in self.root.walk() if node.is_topic)

    def routes(self) -> List[SlugPath]:
        """Every addressable topic path in display order."""

        return [node.path for node in self.topics()]


class NavigationTreeBuilder:
    """Assemble scanner output into an ordered, pruned, slug-unique tree."""

    def __init__(self, config: NavigationTreeConfig | None = None) -> None:
        self.config = config or NavigationTreeConfig()

    def build(
        self,
        scan: ScanResult,
        *,
        source: ContentSource | None = None,
        generation: int = 0,
        fingerprint: str | None = None,
    ) -> NavigationIndex:
        issues: List[ContentIndexError] = list(scan.issues)
        groups: Dict[Tuple[str, ...], List[ScanEntry]] = defaultdict(list)
        for entry in scan.entries:
            groups[entry.parent_path].append(entry)

        root = NavigationNode(slug="", title=self.config.root_title, order=0, kind=NodeKind.CATEGORY)
        root.children = self._build_children((), groups, issues)

        path_index: Dict[SlugPath, NavigationNode] = {}
        self._publish(root, path_index)

        topic_count = sum(1 for node in path_index.values() if node.is_topic)
        logger.info(
            "Built navigation tree generation %d: %d categories, %d topics, %d issues",
            generation,
            len(path_index) - topic_count,
            topic_count,
            len(issues),
        )
        return NavigationIndex(
            root=root,
            path_index=path_index,
            entries=list(scan.entries),
            issues=issues,
            source=source,
            generation=generation,
            fingerprint=fingerprint,
        )

    # ------------------------------------------------------------------ construction
    def _build_children(
        self,
        parent_path: Tuple[str, ...],
        groups: Dict[Tuple[str, ...], List[ScanEntry]],
        issues: List[ContentIndexError],
    ) -> List[NavigationNode]:
        directories = sorted(
            (entry for entry in groups.get(parent_path, []) if entry.is_directory),
            key=lambda entry: entry.ordered_name.sort_key,
        )
        nodes: List[NavigationNode] = []
        for entry in directories:
            if entry.kind is NodeKind.TOPIC:
                node = self._build_topic(entry, groups, issues)
            else:
                node = self._build_category(entry, groups, issues)
            if node is not None:
                nodes.append(node)
        self._dedupe_slugs(parent_path, nodes, issues)
        return nodes

    def _build_category(
        self,
        entry: ScanEntry,
        groups: Dict[Tuple[str, ...], List[ScanEntry]],
        issues: List[ContentIndexError],
    ) -> NavigationNode | None:
        children = self._build_children(entry.relative_path, groups, issues)
        if not children:
            self._record(issues, PrunedEntryError(entry.relative_path, "category has no children"))
            return None
        name = entry.ordered_name
        return NavigationNode(
            slug=name.slug,
            title=name.title,
            order=name.order,
            kind=NodeKind.CATEGORY,
            children=children,
            source_path=entry.relative_path,
        )

    def _build_topic(
        self,
        entry: ScanEntry,
        groups: Dict[Tuple[str, ...], List[ScanEntry]],
        issues: List[ContentIndexError],
    ) -> NavigationNode | None:
        documents = sorted(
            (doc for doc in groups.get(entry.relative_path, []) if not doc.is_directory),
            key=lambda doc: doc.ordered_name.sort_key,
        )
        chosen: Dict[Variant, ScanEntry] = {}
        for document in documents:
            if document.variant is None or document.location is None:
                continue
            if document.variant in chosen:
                self._record(
                    issues,
                    PrunedEntryError(
                        document.relative_path,
                        f"second {document.variant.value} document for the same topic",
                    ),
                )
                continue
            chosen[document.variant] = document

        if not chosen:
            self._record(issues, PrunedEntryError(entry.relative_path, "topic has no readable documents"))
            return None

        name = entry.ordered_name
        node = NavigationNode(
            slug=name.slug,
            title=name.title,
            order=name.order,
            kind=NodeKind.TOPIC,
            variants={variant: document.location for variant, document in chosen.items()},
            source_path=entry.relative_path,
        )
        if self.config.title_from_heading:
            default = node.default_variant()
            heading = chosen[default].heading if default is not None else None
            if heading:
                node.title = heading
        return node

    def _dedupe_slugs(
        self,
        parent_path: Tuple[str, ...],
        nodes: List[NavigationNode],
        issues: List[ContentIndexError],
    ) -> None:
        natural = {node.slug for node in nodes}
        taken: set[str] = set()
        for node in nodes:
            if node.slug not in taken:
                taken.add(node.slug)
                continue
            counter = 2
            while f"{node.slug}-{counter}" in taken or f"{node.slug}-{counter}" in natural:
                counter += 1
            renamed = f"{node.slug}-{counter}"
            raw_name = node.source_path[-1] if node.source_path else node.slug
            self._record(issues, DuplicateSlugError(parent_path, node.slug, renamed, raw_name))
            node.slug = renamed
            taken.add(renamed)

    def _publish(self, node: NavigationNode, path_index: Dict[SlugPath, NavigationNode]) -> None:
        """Assign parents and paths top-down and register every node."""

        path_index[node.path] = node
        children = node.children
        node.children = []
        for child in children:
            node.add_child(child)
            self._publish(child, path_index)

    @staticmethod
    def _record(issues: List[ContentIndexError], issue: ContentIndexError) -> None:
        logger.warning("%s", issue)
        issues.append(issue)


__all__ = ["NavigationIndex", "NavigationTreeBuilder", "NavigationTreeConfig", "SlugPath"]
