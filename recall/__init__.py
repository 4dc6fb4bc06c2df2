"""Recall knowledge-base content index."""

from .models.navigation import NavigationNode, NodeKind, Variant
from .models.content import DocumentContent, ResolvedContent

__all__ = ["DocumentContent", "NavigationNode", "NodeKind", "ResolvedContent", "Variant"]
