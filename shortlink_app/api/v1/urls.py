from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from shortlink_app.api.errors import ERROR_RESPONSES
from shortlink_app.schemas.url import AliasUpdate, URLCreate, URLResponse
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_current_user, get_url_service
from shortlink_app.models.user import User

router = APIRouter(prefix="/urls", tags=["urls"], responses=ERROR_RESPONSES)


@router.post("/", response_model=URLResponse, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    url_data: URLCreate,
    user: User = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Create a short URL (random or custom alias, root or category scope)"""
    return await url_service.create_short_url(
        owner=user,
        original_url=url_data.original_url,
        want_custom=url_data.want_custom,
        custom_alias=url_data.custom_alias,
        category=url_data.category,
    )


@router.get("/", response_model=List[URLResponse])
async def list_urls(
    category: Optional[str] = None,
    user: User = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """List the caller's URLs in the root scope or in one category"""
    return await url_service.list_urls(user, category)


@router.delete("/{url_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_url(
    url_id: int,
    category: Optional[str] = None,
    user: User = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    success = await url_service.delete_url(url_id, user, category)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )


@router.patch("/{url_id}/alias", response_model=URLResponse)
async def update_category_alias(
    url_id: int,
    update: AliasUpdate,
    user: User = Depends(get_current_user),
    url_service: URLService = Depends(get_url_service)
):
    """Rename the alias of a category URL"""
    return await url_service.update_category_alias(url_id, user, update.new_alias)
