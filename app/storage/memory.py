import secrets
from datetime import timedelta
from typing import Any, Optional

from app.storage.base import (
    ANNOUNCEMENT_FIELDS,
    GALLERY_FIELDS,
    SITE_SETTINGS_FIELDS,
    STREAM_FIELDS,
    Storage,
    pick,
    session_expired,
    utcnow,
)
from models.announcement import Announcement
from models.gallery import GalleryImage
from models.session import AdminSession
from models.site_settings import SITE_SETTINGS_ID, SiteSettings
from models.stream import Stream
from models.user import User


class MemStorage(Storage):
    """Process-local storage backed by dicts. Rows are transient model instances."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.sessions: dict[str, AdminSession] = {}
        self.streams: dict[int, Stream] = {}
        self.announcements: dict[int, Announcement] = {}
        self.gallery_images: dict[int, GalleryImage] = {}
        self.site_settings: Optional[SiteSettings] = None

        self._user_id = 1
        self._stream_id = 1
        self._announcement_id = 1
        self._gallery_image_id = 1

    # Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def get_admin_user(self) -> Optional[User]:
        admins = sorted((u for u in self.users.values() if u.is_admin), key=lambda u: u.id)
        return admins[0] if admins else None

    async def create_user(self, data: dict[str, Any]) -> User:
        if await self.get_user_by_username(data["username"]):
            raise ValueError(f"username already taken: {data['username']}")
        user = User(
            id=self._user_id,
            username=data["username"],
            password=data["password"],
            is_admin=bool(data.get("is_admin")),
            created_at=utcnow(),
        )
        self._user_id += 1
        self.users[user.id] = user
        return user

    async def update_user_password(self, user_id: int, password_hash: str) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None
        user.password = password_hash
        user.updated_at = utcnow()
        return user

    # Admin sessions
    async def create_session(self, user_id: int, ttl: timedelta) -> AdminSession:
        now = utcnow()
        session = AdminSession(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + ttl,
        )
        self.sessions[session.id] = session
        return session

    async def get_session(self, session_id: str) -> Optional[AdminSession]:
        session = self.sessions.get(session_id)
        if session and session_expired(session):
            del self.sessions[session_id]
            return None
        return session

    async def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    # Streams
    async def get_all_streams(self) -> list[Stream]:
        return list(self.streams.values())

    async def get_stream(self, stream_id: int) -> Optional[Stream]:
        return self.streams.get(stream_id)

    async def get_featured_stream(self) -> Optional[Stream]:
        return next((s for s in self.streams.values() if s.is_featured), None)

    def _unfeature_others(self, stream_id: Optional[int]):
        for stream in self.streams.values():
            if stream.id != stream_id and stream.is_featured:
                stream.is_featured = False

    async def create_stream(self, data: dict[str, Any]) -> Stream:
        values = pick(data, STREAM_FIELDS)
        values["is_featured"] = bool(values["is_featured"])
        stream = Stream(id=self._stream_id, **values)
        self._stream_id += 1
        if stream.is_featured:
            self._unfeature_others(stream.id)
        self.streams[stream.id] = stream
        return stream

    async def update_stream(self, stream_id: int, data: dict[str, Any]) -> Optional[Stream]:
        stream = self.streams.get(stream_id)
        if not stream:
            return None
        values = pick(data, STREAM_FIELDS)
        values["is_featured"] = bool(values["is_featured"])
        if values["is_featured"]:
            self._unfeature_others(stream_id)
        for key, value in values.items():
            setattr(stream, key, value)
        return stream

    async def set_featured_stream(self, stream_id: int) -> Optional[Stream]:
        stream = self.streams.get(stream_id)
        if not stream:
            return None
        self._unfeature_others(stream_id)
        stream.is_featured = True
        return stream

    async def delete_stream(self, stream_id: int) -> bool:
        return self.streams.pop(stream_id, None) is not None

    # Announcements
    async def get_all_announcements(self) -> list[Announcement]:
        return sorted(
            self.announcements.values(),
            key=lambda a: (a.created_at, a.id),
            reverse=True,
        )

    async def get_announcement(self, announcement_id: int) -> Optional[Announcement]:
        return self.announcements.get(announcement_id)

    async def create_announcement(self, data: dict[str, Any]) -> Announcement:
        announcement = Announcement(
            id=self._announcement_id,
            created_at=utcnow(),
            **pick(data, ANNOUNCEMENT_FIELDS),
        )
        self._announcement_id += 1
        self.announcements[announcement.id] = announcement
        return announcement

    async def update_announcement(self, announcement_id: int, data: dict[str, Any]) -> Optional[Announcement]:
        announcement = self.announcements.get(announcement_id)
        if not announcement:
            return None
        for key, value in pick(data, ANNOUNCEMENT_FIELDS).items():
            setattr(announcement, key, value)
        return announcement

    async def delete_announcement(self, announcement_id: int) -> bool:
        return self.announcements.pop(announcement_id, None) is not None

    # Gallery
    async def get_all_gallery_images(self) -> list[GalleryImage]:
        return list(self.gallery_images.values())

    async def get_gallery_image(self, image_id: int) -> Optional[GalleryImage]:
        return self.gallery_images.get(image_id)

    async def create_gallery_image(self, data: dict[str, Any]) -> GalleryImage:
        image = GalleryImage(id=self._gallery_image_id, **pick(data, GALLERY_FIELDS))
        self._gallery_image_id += 1
        self.gallery_images[image.id] = image
        return image

    async def update_gallery_image(self, image_id: int, data: dict[str, Any]) -> Optional[GalleryImage]:
        image = self.gallery_images.get(image_id)
        if not image:
            return None
        for key, value in pick(data, GALLERY_FIELDS).items():
            setattr(image, key, value)
        return image

    async def delete_gallery_image(self, image_id: int) -> bool:
        return self.gallery_images.pop(image_id, None) is not None

    # Site settings
    async def get_site_settings(self) -> Optional[SiteSettings]:
        return self.site_settings

    async def initialize_site_settings(self, data: dict[str, Any]) -> SiteSettings:
        if self.site_settings:
            return self.site_settings
        self.site_settings = SiteSettings(id=SITE_SETTINGS_ID, **pick(data, SITE_SETTINGS_FIELDS))
        return self.site_settings

    async def update_site_settings(self, patch: dict[str, Any]) -> Optional[SiteSettings]:
        if not self.site_settings:
            return None
        for key, value in patch.items():
            if key in SITE_SETTINGS_FIELDS:
                setattr(self.site_settings, key, value)
        self.site_settings.updated_at = utcnow()
        return self.site_settings
