from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from recall.models.content import ResolvedContent
from recall.models.navigation import DEFAULT_VARIANT_PREFERENCE, NavigationNode


class NavigationNodeModel(BaseModel):
    slug: str
    title: str
    order: int
    kind: str
    path: List[str]
    variants: List[str] = Field(default_factory=list)
    children: List["NavigationNodeModel"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: NavigationNode) -> "NavigationNodeModel":
        return cls(
            slug=node.slug,
            title=node.title,
            order=node.order,
            kind=node.kind.value,
            path=list(node.path),
            variants=[variant.value for variant in DEFAULT_VARIANT_PREFERENCE if variant in node.variants],
            children=[cls.from_node(child) for child in node.children],
        )


NavigationNodeModel.model_rebuild()


class NodeRef(BaseModel):
    slug: str
    title: str
    kind: str
    path: List[str]
    route: str

    @classmethod
    def from_node(cls, node: NavigationNode) -> "NodeRef":
        return cls(slug=node.slug, title=node.title, kind=node.kind.value, path=list(node.path), route=node.route)


class SiteModel(BaseModel):
    title: str
    description: str


class NavigationResponse(BaseModel):
    site: SiteModel
    generation: int
    root: NavigationNodeModel


class RoutesResponse(BaseModel):
    generation: int
    routes: List[List[str]]


class ContentResponse(BaseModel):
    node: NodeRef
    variant: str
    requested_variant: Optional[str] = None
    available_variants: List[str]
    title: str
    body: str
    location: str
    breadcrumb: List[NodeRef]
    siblings: List[NodeRef]
    previous: Optional[NodeRef] = None
    next: Optional[NodeRef] = None

    @classmethod
    def from_resolved(cls, resolved: ResolvedContent, requested_variant: str | None = None) -> "ContentResponse":
        return cls(
            node=NodeRef.from_node(resolved.node),
            variant=resolved.content.variant.value,
            requested_variant=requested_variant,
            available_variants=[variant.value for variant in resolved.available_variants],
            title=resolved.content.title,
            body=resolved.content.body,
            location=resolved.content.location,
            breadcrumb=[NodeRef.from_node(node) for node in resolved.breadcrumb],
            siblings=[NodeRef.from_node(node) for node in resolved.siblings],
            previous=NodeRef.from_node(resolved.previous) if resolved.previous else None,
            next=NodeRef.from_node(resolved.next) if resolved.next else None,
        )


class InvalidateResponse(BaseModel):
    status: str
    generation: int


__all__ = [
    "ContentResponse",
    "InvalidateResponse",
    "NavigationNodeModel",
    "NavigationResponse",
    "NodeRef",
    "RoutesResponse",
    "SiteModel",
]
