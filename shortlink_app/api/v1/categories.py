from typing import List

from fastapi import APIRouter, Depends, status
from shortlink_app.api.errors import ERROR_RESPONSES
from shortlink_app.schemas.url import CategoryCreate, CategoryResponse
from shortlink_app.services.category_service import CategoryService
from shortlink_app.dependencies import get_category_service, get_current_user
from shortlink_app.models.user import User

router = APIRouter(prefix="/categories", tags=["categories"], responses=ERROR_RESPONSES)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    return category_service.create_category(user, data.name)


@router.get("/", response_model=List[CategoryResponse])
def list_categories(
    user: User = Depends(get_current_user),
    category_service: CategoryService = Depends(get_category_service)
):
    return category_service.list_categories(user)
