"""API routes implementation."""

from typing import Annotated, List

from fastapi import APIRouter, Path, Request, Response, status
from fastapi.responses import RedirectResponse
from datetime import datetime, timezone

from .schemas import (
    CreateLinkRequest,
    UpdateLinkRequest,
    LinkResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlinks.lib.database.models import ShortLink
from shortlinks.lib.common.urls import build_base_url, build_short_url

router = APIRouter()

LinkId = Annotated[int, Path(ge=1, description="Numeric id of the short link")]

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid request or expired link"},
    404: {"model": ErrorResponse, "description": "Link not found"},
}


def to_link_response(request: Request, link: ShortLink) -> LinkResponse:
    """Attach the display URL to a record."""
    config = request.app.state.config

    base_url = build_base_url(
        headers=dict(request.headers),
        configured_base_url=config.base_url,
        trust_forwarded=config.trust_forwarded_headers,
    )

    return LinkResponse(
        id=link.id,
        original_url=link.original_url,
        short_code=link.short_code,
        short_url=build_short_url(link.short_code, base_url, config.path_prefix),
        clicks=link.clicks,
        created_at=link.created_at,
        updated_at=link.updated_at,
        expires_at=link.expires_at,
    )


@router.post(
    "/urls",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERRORS[400]},
    summary="Create short URL",
    description="Create a shortened URL, optionally expiring after the given number of minutes.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a shortened URL."""
    registry = request.app.state.registry

    link = await registry.create(
        original_url=body.original_url,
        expires_in_minutes=body.expires_in_minutes,
    )

    return to_link_response(request, link)


@router.get(
    "/urls",
    response_model=List[LinkResponse],
    summary="List short URLs",
    description="List every short URL, including expired ones.",
)
async def list_links(request: Request):
    """List all short URLs."""
    registry = request.app.state.registry

    links = await registry.find_all()

    return [to_link_response(request, link) for link in links]


@router.get(
    "/urls/info/{short_code}",
    response_model=LinkResponse,
    responses=_ERRORS,
    summary="Get URL information",
    description="Look up a short code without counting a click.",
)
async def get_link_info(request: Request, short_code: str):
    """Get information about a short code."""
    registry = request.app.state.registry

    link = await registry.resolve_info(short_code)

    return to_link_response(request, link)


@router.get(
    "/urls/redirect/{short_code}",
    responses=_ERRORS,
    summary="Redirect",
    description="Redirect to the original URL and count the click.",
)
async def redirect_link(request: Request, short_code: str):
    """Redirect to the original URL."""
    registry = request.app.state.registry
    config = request.app.state.config

    link = await registry.resolve(short_code)

    return RedirectResponse(url=link.original_url, status_code=config.redirect_status_code)


@router.get(
    "/urls/{link_id}",
    response_model=LinkResponse,
    responses=_ERRORS,
    summary="Get short URL by id",
)
async def get_link(request: Request, link_id: LinkId):
    """Get a short URL by id."""
    registry = request.app.state.registry

    link = await registry.find_by_id(link_id)

    return to_link_response(request, link)


@router.patch(
    "/urls/{link_id}",
    response_model=LinkResponse,
    responses=_ERRORS,
    summary="Update short URL",
    description="Change the target URL or the lifetime of a short URL. Short codes cannot be changed.",
)
async def update_link(request: Request, body: UpdateLinkRequest, link_id: LinkId):
    """Update a short URL."""
    registry = request.app.state.registry

    link = await registry.update(link_id, body.model_dump(exclude_unset=True))

    return to_link_response(request, link)


@router.delete(
    "/urls/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERRORS,
    summary="Delete short URL",
)
async def delete_link(request: Request, link_id: LinkId):
    """Delete a short URL."""
    registry = request.app.state.registry

    await registry.remove(link_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry

    health = await registry.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
