from typing import List

from fastapi import APIRouter, Depends
from shortlink_app.api.errors import ERROR_RESPONSES
from shortlink_app.schemas.url import URLResponse
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_admin_user, get_url_service

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(get_admin_user)],
)


@router.get("/urls", response_model=List[URLResponse])
async def list_all_urls(url_service: URLService = Depends(get_url_service)):
    return await url_service.list_all_urls()


@router.post("/urls/{url_id}/blacklist", response_model=URLResponse)
async def blacklist_url(url_id: int, url_service: URLService = Depends(get_url_service)):
    """Stop a URL from resolving; it stays listed for its owner"""
    return await url_service.blacklist_url(url_id)


@router.post("/urls/{url_id}/whitelist", response_model=URLResponse)
async def whitelist_url(url_id: int, url_service: URLService = Depends(get_url_service)):
    return await url_service.whitelist_url(url_id)
