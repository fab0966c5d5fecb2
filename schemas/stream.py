from typing import Optional

from pydantic import Field

from schemas.base import CamelModel


class StreamCreate(CamelModel):
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    description: Optional[str] = None
    type: str = Field(min_length=1)
    is_featured: bool = False


class StreamResponse(StreamCreate):
    id: int
