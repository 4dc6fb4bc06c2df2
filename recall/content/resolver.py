from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Tuple

from recall.content.errors import NotATopicError, NotFoundError, ScanIOError, VariantUnavailableError
from recall.content.markdown import extract_heading
from recall.content.tree import NavigationIndex
from recall.models.content import DocumentContent, ResolvedContent
from recall.models.navigation import NavigationNode, Variant

logger = logging.getLogger(__name__)


def normalize_route(path: Sequence[str] | str) -> Tuple[str, ...]:
    """Turn ``"/javascript/fundamentals/"`` or a segment list into a slug tuple."""

    segments = path.split("/") if isinstance(path, str) else path
    return tuple(segment.strip() for segment in segments if segment and segment.strip())


class ContentResolver:
    """Map a route plus an optional variant to document content.

    The tree comes from ``index_provider`` on every call so that a rebuilt
    generation is picked up without recreating the resolver. Document bodies
    are read from the generation's source each time and never cached here.
    """

    def __init__(self, index_provider: Callable[[], NavigationIndex]) -> None:
        self._index_provider = index_provider

    def locate(self, path: Sequence[str] | str) -> NavigationNode:
        route = normalize_route(path)
        node = self._index_provider().get(route)
        if node is None:
            raise NotFoundError(route)
        return node

    def resolve(self, path: Sequence[str] | str, variant: Variant | str | None = None) -> ResolvedContent:
        index = self._index_provider()
        route = normalize_route(path)
        node = index.get(route)
        if node is None:
            raise NotFoundError(route)
        if not node.is_topic:
            first = node.first_topic()
            raise NotATopicError(route, redirect=first.path if first is not None else None)

        chosen = self._choose_variant(node, route, variant)
        content = self._load(index, node, chosen)
        siblings, previous, following = self._neighbours(node)
        return ResolvedContent(
            node=node,
            content=content,
            breadcrumb=self.breadcrumb(node),
            siblings=siblings,
            previous=previous,
            next=following,
        )

    # ------------------------------------------------------------------ navigation context
    @staticmethod
    def breadcrumb(node: NavigationNode) -> List[NavigationNode]:
        chain: List[NavigationNode] = []
        current: NavigationNode | None = node
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    @staticmethod
    def _neighbours(
        node: NavigationNode,
    ) -> Tuple[List[NavigationNode], NavigationNode | None, NavigationNode | None]:
        if node.parent is None:
            return [], None, None
        family = node.parent.children
        position = next(i for i, child in enumerate(family) if child is node)
        siblings = [child for child in family if child is not node]
        previous = family[position - 1] if position > 0 else None
        following = family[position + 1] if position + 1 < len(family) else None
        return siblings, previous, following

    # ------------------------------------------------------------------ content
    @staticmethod
    def _choose_variant(node: NavigationNode, route: Tuple[str, ...], variant: Variant | str | None) -> Variant:
        default = node.default_variant()
        if default is None:
            # Topics without variants are pruned at build time.
            raise NotFoundError(route)
        if variant is None:
            return default
        if isinstance(variant, str) and not isinstance(variant, Variant):
            try:
                variant = Variant.parse(variant)
            except ValueError:
                raise VariantUnavailableError(route, variant, default.value) from None
        if variant not in node.variants:
            raise VariantUnavailableError(route, variant.value, default.value)
        return variant

    @staticmethod
    def _load(index: NavigationIndex, node: NavigationNode, variant: Variant) -> DocumentContent:
        location = node.variants[variant]
        source = index.source
        if source is None:
            raise ScanIOError(location, "navigation index has no content source attached")
        try:
            body = source.read_entry(tuple(location.split("/")))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s for %s: %s", location, node.route, exc)
            raise ScanIOError(location, str(exc)) from exc

        heading = extract_heading(body)
        return DocumentContent(
            variant=variant,
            location=location,
            title=heading or node.title,
            body=body,
            heading=heading,
        )


__all__ = ["ContentResolver", "normalize_route"]
