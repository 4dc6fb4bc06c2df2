from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from recall.content.errors import InvalidationDisabledError, ScanIOError
from recall.content.tree import NavigationIndex
from recall.server.content import ContentService, get_content_service
from recall.server.models import (
    InvalidateResponse,
    NavigationNodeModel,
    NavigationResponse,
    RoutesResponse,
    SiteModel,
)
from recall.server.settings import Settings, get_settings

router = APIRouter(prefix="/api/navigation", tags=["navigation"])


def _load_index(service: ContentService) -> NavigationIndex:
    try:
        return service.index()
    except ScanIOError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.get("", response_model=NavigationResponse)
def get_navigation(
    settings: Settings = Depends(get_settings),
    service: ContentService = Depends(get_content_service),
) -> NavigationResponse:
    index = _load_index(service)
    return NavigationResponse(
        site=SiteModel(title=settings.site_title, description=settings.site_description),
        generation=index.generation,
        root=NavigationNodeModel.from_node(index.root),
    )


@router.get("/routes", response_model=RoutesResponse)
def list_routes(service: ContentService = Depends(get_content_service)) -> RoutesResponse:
    index = _load_index(service)
    return RoutesResponse(generation=index.generation, routes=[list(route) for route in index.routes()])


@router.post("/invalidate", response_model=InvalidateResponse)
def invalidate_navigation(service: ContentService = Depends(get_content_service)) -> InvalidateResponse:
    try:
        service.invalidate()
    except InvalidationDisabledError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return InvalidateResponse(status="invalidated", generation=service.cache.generation)


__all__ = ["router"]
