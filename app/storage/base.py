from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from models.announcement import Announcement
from models.gallery import GalleryImage
from models.session import AdminSession
from models.site_settings import SiteSettings
from models.stream import Stream
from models.user import User


class Storage(ABC):
    """Everything the API layer is allowed to read or write.

    Payload arguments are plain dicts keyed by model attribute names
    (``is_featured``, ``image_url``, ...). Lookups of unknown ids return
    ``None``; deletes of unknown ids return ``False``.
    """

    # Users
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_admin_user(self) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: dict[str, Any]) -> User: ...

    @abstractmethod
    async def update_user_password(self, user_id: int, password_hash: str) -> Optional[User]: ...

    # Admin sessions
    @abstractmethod
    async def create_session(self, user_id: int, ttl: timedelta) -> AdminSession: ...

    @abstractmethod
    async def get_session(self, session_id: str) -> Optional[AdminSession]:
        """Return a live session; expired sessions are removed and reported missing."""

    @abstractmethod
    async def delete_session(self, session_id: str) -> bool: ...

    # Streams
    @abstractmethod
    async def get_all_streams(self) -> list[Stream]: ...

    @abstractmethod
    async def get_stream(self, stream_id: int) -> Optional[Stream]: ...

    @abstractmethod
    async def get_featured_stream(self) -> Optional[Stream]: ...

    @abstractmethod
    async def create_stream(self, data: dict[str, Any]) -> Stream:
        """Insert a stream; a featured insert clears the flag everywhere else."""

    @abstractmethod
    async def update_stream(self, stream_id: int, data: dict[str, Any]) -> Optional[Stream]:
        """Replace every mutable field; a featured update clears the flag everywhere else."""

    @abstractmethod
    async def set_featured_stream(self, stream_id: int) -> Optional[Stream]: ...

    @abstractmethod
    async def delete_stream(self, stream_id: int) -> bool: ...

    # Announcements
    @abstractmethod
    async def get_all_announcements(self) -> list[Announcement]:
        """Newest first by ``created_at``, then by id."""

    @abstractmethod
    async def get_announcement(self, announcement_id: int) -> Optional[Announcement]: ...

    @abstractmethod
    async def create_announcement(self, data: dict[str, Any]) -> Announcement: ...

    @abstractmethod
    async def update_announcement(self, announcement_id: int, data: dict[str, Any]) -> Optional[Announcement]:
        """Replace every mutable field, keeping ``id`` and ``created_at``."""

    @abstractmethod
    async def delete_announcement(self, announcement_id: int) -> bool: ...

    # Gallery
    @abstractmethod
    async def get_all_gallery_images(self) -> list[GalleryImage]: ...

    @abstractmethod
    async def get_gallery_image(self, image_id: int) -> Optional[GalleryImage]: ...

    @abstractmethod
    async def create_gallery_image(self, data: dict[str, Any]) -> GalleryImage: ...

    @abstractmethod
    async def update_gallery_image(self, image_id: int, data: dict[str, Any]) -> Optional[GalleryImage]: ...

    @abstractmethod
    async def delete_gallery_image(self, image_id: int) -> bool: ...

    # Site settings
    @abstractmethod
    async def get_site_settings(self) -> Optional[SiteSettings]: ...

    @abstractmethod
    async def initialize_site_settings(self, data: dict[str, Any]) -> SiteSettings:
        """Create the singleton row if absent, otherwise return it untouched."""

    @abstractmethod
    async def update_site_settings(self, patch: dict[str, Any]) -> Optional[SiteSettings]:
        """Merge top-level fields onto the row; ``None`` when no row exists."""


# Fields a client may write; identity and timestamps are server-owned.
STREAM_FIELDS = ("name", "url", "description", "type", "is_featured")
ANNOUNCEMENT_FIELDS = ("title", "content", "type", "image_url")
GALLERY_FIELDS = ("title", "description", "image_url", "category")
SITE_SETTINGS_FIELDS = ("site_title", "meta_description", "footer_text", "social_links", "theme_settings")


def pick(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    return {key: data.get(key) for key in fields}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # sqlite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def session_expired(session: AdminSession, now: Optional[datetime] = None) -> bool:
    return as_utc(session.expires_at) <= (now or utcnow())
