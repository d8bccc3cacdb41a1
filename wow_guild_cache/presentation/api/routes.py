"""
Guild lookup routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Request
from fastapi.responses import JSONResponse, Response

from ...application.services import GuildRefreshService

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

router = APIRouter()


def get_guild_service(request: Request) -> GuildRefreshService:
    """Guild service dependency."""
    service = getattr(request.app.state, "guild_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


@router.get("/i/guild/{region}/{realm}/{name}")
async def get_guild(
    region: str = Path(..., pattern="^[A-Z]{2}$"),
    realm: str = Path(..., min_length=2),
    name: str = Path(..., min_length=2),
    service: GuildRefreshService = Depends(get_guild_service)
):
    """Cached guild if we have one, otherwise the live Blizzard profile."""
    outcome = await service.lookup_guild(region, realm, name)

    if outcome.body is None:
        return Response(status_code=outcome.status_code)

    return JSONResponse(
        content=outcome.body,
        status_code=outcome.status_code,
        media_type=JSON_MEDIA_TYPE
    )
