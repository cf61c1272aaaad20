"""
API endpoint for the channel catalog proxy.
"""
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.dependencies import get_catalog_service
from app.core.exceptions import MethodNotAllowedError
from app.services.catalog import CatalogService


router = APIRouter()


@router.api_route(
    "/youtube",
    methods=["GET", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
)
async def get_channel_catalog(
    request: Request,
    collection: Optional[str] = Query(
        default=None,
        description="Registered collection tag; omit for channel stats and all uploads",
    ),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    """
    Returns channel statistics and videos, or the videos of one collection.

    Served from the process cache while it is fresh; otherwise refetched from
    the YouTube Data API.

    Args:
        request: FastAPI request object (used for method dispatch).
        collection: Optional collection tag.
        catalog_service: The aggregator handling cache and upstream.

    Returns:
        The success envelope, or an empty 200 for OPTIONS.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200)
    if request.method != "GET":
        logger.warning(f"Rejected {request.method} request")
        raise MethodNotAllowedError()

    tag = collection or None
    logger.info(f"Incoming catalog request (collection={tag})")

    start_time = time.perf_counter()
    result = await catalog_service.get_catalog(tag)
    duration = time.perf_counter() - start_time
    logger.info(f"Catalog request served in {duration:.2f}s (cached={result.cached})")
    return JSONResponse(
        content=result.model_dump(by_alias=True, exclude_none=True, mode="json"),
    )
