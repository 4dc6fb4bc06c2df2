from __future__ import annotations

from typing import Optional

from recall.content.scanner import DocumentScanner, DocumentScannerConfig
from recall.content.source import ContentSource
from recall.content.tree import NavigationIndex, NavigationTreeBuilder, NavigationTreeConfig


class IndexPipeline:
    """Coordinates scanning a content source and assembling the navigation tree."""

    def __init__(
        self,
        source: ContentSource,
        *,
        scanner_config: Optional[DocumentScannerConfig] = None,
        tree_config: Optional[NavigationTreeConfig] = None,
    ) -> None:
        self.source = source
        self.scanner = DocumentScanner(source, scanner_config)
        self.builder = NavigationTreeBuilder(tree_config)

    def build(self, generation: int = 0, fingerprint: str | None = None) -> NavigationIndex:
        scan = self.scanner.scan()
        return self.builder.build(scan, source=self.source, generation=generation, fingerprint=fingerprint)

    def fingerprint(self) -> str:
        return self.source.fingerprint()


__all__ = ["IndexPipeline"]
