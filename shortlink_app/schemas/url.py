from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import Optional
from datetime import datetime
from shortlink_app.config import settings


class URLCreate(BaseModel):
    original_url: str = Field(..., min_length=1, description="The URL to shorten; https:// is assumed if no scheme")
    want_custom: bool = Field(False, description="Use custom_alias instead of a random endpoint")
    custom_alias: Optional[str] = Field(None, description="Requested alias when want_custom is set")
    category: Optional[str] = Field(None, description="Category (suborg) to create the URL in; root if omitted")


class AliasUpdate(BaseModel):
    new_alias: str = Field(..., min_length=1)


class URLResponse(BaseModel):
    """Serializes the ShortURL model straight from its attributes"""
    id: int
    owner_id: int
    category: Optional[str] = None
    short_endpoint: str
    original_url: str
    hits: int
    last_hit_at: Optional[datetime] = None
    blacklisted: bool
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/{self.short_endpoint}"

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryResponse(BaseModel):
    id: int
    name: str
    owner_id: int
    url_count: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    kind: str
    detail: str
