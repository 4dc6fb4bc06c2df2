from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from recall.content.errors import NotATopicError, NotFoundError, ScanIOError, VariantUnavailableError
from recall.server.content.service import ContentService, get_content_service_instance
from recall.server.models import ContentResponse
from recall.server.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content", tags=["content"])


def get_content_service(settings: Settings = Depends(get_settings)) -> ContentService:
    return get_content_service_instance(settings)


@router.get("/{route:path}", response_model=ContentResponse)
def get_content(
    route: str,
    variant: str | None = Query(default=None, description="questionsOnly or questionsAndAnswers"),
    service: ContentService = Depends(get_content_service),
) -> ContentResponse:
    requested = None
    try:
        try:
            resolved = service.resolve_content(route, variant)
        except VariantUnavailableError as exc:
            logger.info("Falling back to %s for %s", exc.fallback, route)
            requested = exc.requested
            resolved = service.resolve_content(route, exc.fallback)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NotATopicError as exc:
        redirect = "/" + "/".join(exc.redirect) if exc.redirect is not None else None
        raise HTTPException(status_code=409, detail={"message": str(exc), "redirect": redirect}) from exc
    except ScanIOError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return ContentResponse.from_resolved(resolved, requested_variant=requested)


__all__ = ["router", "get_content_service"]
