import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from shortlink_app.exceptions import StorageError
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/{endpoint:path}")
async def redirect_to_original_url(
    endpoint: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    ``endpoint`` is either ``alias`` or ``category/alias``. A miss is a
    plain 404, never a server error. The hit is only counted once we know
    we are redirecting.
    """
    original_url = await url_service.resolve(endpoint)

    if not original_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="The short URL does not redirect to a valid location."
        )

    try:
        await url_service.record_hit(endpoint)
    except StorageError as e:
        # The visitor still gets redirected; only the counter is behind
        logger.warning("Hit not counted for %s: %s", endpoint, e)

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
