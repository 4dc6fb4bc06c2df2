from __future__ import annotations

import logging
import threading
from typing import List, Sequence, Tuple

from recall.content.cache import IndexCache
from recall.content.pipeline import IndexPipeline
from recall.content.resolver import ContentResolver
from recall.content.scanner import DocumentScannerConfig
from recall.content.source import ContentSource, FileSystemContentSource
from recall.content.tree import NavigationIndex, NavigationTreeConfig
from recall.models.content import ResolvedContent
from recall.models.navigation import NavigationNode, Variant
from recall.server.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ContentService:
    """Wires the content source, index cache and resolver for one process."""

    def __init__(self, settings: Settings, source: ContentSource | None = None) -> None:
        self.settings = settings
        self.source = source or FileSystemContentSource(settings.content_root)
        self.pipeline = IndexPipeline(
            self.source,
            scanner_config=DocumentScannerConfig(
                document_extensions=tuple(settings.document_extensions),
                max_depth=settings.max_scan_depth,
            ),
            tree_config=NavigationTreeConfig(
                title_from_heading=settings.title_from_heading,
                root_title=settings.site_title,
            ),
        )
        self.cache = IndexCache(
            self.pipeline.build,
            fingerprint=self.pipeline.fingerprint,
            allow_invalidate=settings.is_development,
            watch=settings.watch_enabled,
            watch_interval=settings.watch_interval_seconds,
        )
        self.resolver = ContentResolver(self.cache.get)
        logger.info(
            "Content service ready for %s (environment=%s, watch=%s)",
            self.source.describe(),
            settings.environment,
            self.cache.watch,
        )

    # ------------------------------------------------------------------ public API
    def index(self) -> NavigationIndex:
        return self.cache.get()

    def get_navigation(self) -> NavigationNode:
        return self.cache.get().root

    def routes(self) -> List[Tuple[str, ...]]:
        return self.cache.get().routes()

    def resolve_content(self, path: Sequence[str] | str, variant: Variant | str | None = None) -> ResolvedContent:
        return self.resolver.resolve(path, variant)

    def invalidate(self) -> None:
        self.cache.invalidate()


_CONTENT_SERVICE: ContentService | None = None
_SERVICE_LOCK = threading.Lock()


def get_content_service_instance(settings: Settings) -> ContentService:
    global _CONTENT_SERVICE
    if _CONTENT_SERVICE is None:
        with _SERVICE_LOCK:
            if _CONTENT_SERVICE is None:
                _CONTENT_SERVICE = ContentService(settings)
    return _CONTENT_SERVICE


def set_content_service(service: ContentService | None) -> None:
    """Replace the process-wide service (used by tools and tests)."""

    global _CONTENT_SERVICE
    with _SERVICE_LOCK:
        _CONTENT_SERVICE = service


def get_navigation() -> NavigationNode:
    return get_content_service_instance(get_settings()).get_navigation()


def resolve_content(path: Sequence[str] | str, variant: Variant | str | None = None) -> ResolvedContent:
    return get_content_service_instance(get_settings()).resolve_content(path, variant)


__all__ = [
    "ContentService",
    "get_content_service_instance",
    "get_navigation",
    "resolve_content",
    "set_content_service",
]
