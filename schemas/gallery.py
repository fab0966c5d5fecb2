from typing import Optional

from pydantic import Field

from schemas.base import CamelModel


class GalleryImageCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: str = Field(min_length=1)
    category: str = Field(min_length=1)


class GalleryImageResponse(GalleryImageCreate):
    id: int
