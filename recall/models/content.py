from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from recall.models.navigation import NavigationNode, Variant


@dataclass(slots=True)
class DocumentContent:
    """A document body loaded for one variant of a topic."""

    variant: Variant
    location: str
    title: str
    body: str
    heading: Optional[str] = None


@dataclass(slots=True)
class ResolvedContent:
    """Result of resolving a route: the node, its document, and navigation context."""

    node: NavigationNode
    content: DocumentContent
    breadcrumb: List[NavigationNode] = field(default_factory=list)
    siblings: List[NavigationNode] = field(default_factory=list)
    previous: Optional[NavigationNode] = None
    next: Optional[NavigationNode] = None

    @property
    def available_variants(self) -> List[Variant]:
        return [variant for variant in Variant if variant in self.node.variants]


__all__ = ["DocumentContent", "ResolvedContent"]
