from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .content import router as content_router
from .navigation.router import router as navigation_router
from .settings import get_settings

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=f"{settings.site_title} API", version="0.1.0", description=settings.site_description)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(navigation_router)
app.include_router(content_router)


@app.get("/api/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["app"]
