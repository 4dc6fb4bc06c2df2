"""Content indexing: naming codec, scanning, tree building, resolution and caching."""

from .cache import IndexCache
from .codec import OrderedName, PathOrderCodec, UNORDERED
from .errors import (
    ContentIndexError,
    DuplicateSlugError,
    InvalidationDisabledError,
    MalformedNameError,
    NotATopicError,
    NotFoundError,
    PrunedEntryError,
    ResolutionError,
    ScanIOError,
    VariantUnavailableError,
)
from .pipeline import IndexPipeline
from .resolver import ContentResolver, normalize_route
from .scanner import DocumentScanner, DocumentScannerConfig, ScanEntry, ScanResult
from .source import ContentSource, FileSystemContentSource, InMemoryContentSource, SourceEntry
from .tree import NavigationIndex, NavigationTreeBuilder, NavigationTreeConfig

__all__ = [
    "ContentIndexError",
    "ContentResolver",
    "ContentSource",
    "DocumentScanner",
    "DocumentScannerConfig",
    "DuplicateSlugError",
    "FileSystemContentSource",
    "InMemoryContentSource",
    "IndexCache",
    "IndexPipeline",
    "InvalidationDisabledError",
    "MalformedNameError",
    "NavigationIndex",
    "NavigationTreeBuilder",
    "NavigationTreeConfig",
    "NotATopicError",
    "NotFoundError",
    "OrderedName",
    "PathOrderCodec",
    "PrunedEntryError",
    "ResolutionError",
    "ScanEntry",
    "ScanIOError",
    "ScanResult",
    "SourceEntry",
    "UNORDERED",
    "VariantUnavailableError",
    "normalize_route",
]
