from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel


class AnnouncementCreate(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    type: str = Field(min_length=1)
    image_url: Optional[str] = None


class AnnouncementResponse(AnnouncementCreate):
    id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # sqlite returns naive timestamps; they are stored in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
