"""Content resolution service package."""

from .router import router, get_content_service
from .service import ContentService, get_content_service_instance, get_navigation, resolve_content

__all__ = [
    "ContentService",
    "get_content_service",
    "get_content_service_instance",
    "get_navigation",
    "resolve_content",
    "router",
]
