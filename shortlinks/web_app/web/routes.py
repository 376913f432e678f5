"""Public redirect routes."""

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/", include_in_schema=False)
async def index(request: Request):
    """Service banner."""
    return {"service": "shortlinks", "docs": "/api/docs"}


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL (counts the click)."""
    registry = request.app.state.registry
    config = request.app.state.config

    link = await registry.resolve(short_code)

    return RedirectResponse(url=link.original_url, status_code=config.redirect_status_code)
