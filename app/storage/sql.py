import logging
import secrets
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

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

logger = logging.getLogger("streamsite.storage")


class SqlStorage(Storage):
    """Storage over SQLAlchemy async sessions; every call runs in its own transaction."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self.sessionmaker = sessionmaker

    async def _get(self, model, pk) -> Optional[Any]:
        async with self.sessionmaker() as db:
            return await db.get(model, pk)

    async def _delete(self, model, pk) -> bool:
        async with self.sessionmaker() as db:
            async with db.begin():
                result = await db.execute(delete(model).where(model.id == pk))
            return result.rowcount > 0

    # Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self.sessionmaker() as db:
            res = await db.execute(select(User).where(User.username == username))
            return res.scalar_one_or_none()

    async def get_admin_user(self) -> Optional[User]:
        async with self.sessionmaker() as db:
            res = await db.execute(select(User).where(User.is_admin.is_(True)).order_by(User.id).limit(1))
            return res.scalar_one_or_none()

    async def create_user(self, data: dict[str, Any]) -> User:
        user = User(
            username=data["username"],
            password=data["password"],
            is_admin=bool(data.get("is_admin")),
        )
        async with self.sessionmaker() as db:
            async with db.begin():
                db.add(user)
            await db.refresh(user)
        return user

    async def update_user_password(self, user_id: int, password_hash: str) -> Optional[User]:
        async with self.sessionmaker() as db:
            async with db.begin():
                user = await db.get(User, user_id)
                if not user:
                    return None
                user.password = password_hash
            await db.refresh(user)
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
        async with self.sessionmaker() as db:
            async with db.begin():
                db.add(session)
        return session

    async def get_session(self, session_id: str) -> Optional[AdminSession]:
        async with self.sessionmaker() as db:
            async with db.begin():
                session = await db.get(AdminSession, session_id)
                if session and session_expired(session):
                    await db.delete(session)
                    return None
            return session

    async def delete_session(self, session_id: str) -> bool:
        async with self.sessionmaker() as db:
            async with db.begin():
                result = await db.execute(delete(AdminSession).where(AdminSession.id == session_id))
            return result.rowcount > 0

    async def purge_expired_sessions(self) -> int:
        async with self.sessionmaker() as db:
            async with db.begin():
                result = await db.execute(delete(AdminSession).where(AdminSession.expires_at <= utcnow()))
        if result.rowcount:
            logger.info("Purged %d expired admin sessions", result.rowcount)
        return result.rowcount

    # Streams
    async def get_all_streams(self) -> list[Stream]:
        async with self.sessionmaker() as db:
            res = await db.execute(select(Stream).order_by(Stream.id))
            return list(res.scalars().all())

    async def get_stream(self, stream_id: int) -> Optional[Stream]:
        return await self._get(Stream, stream_id)

    async def get_featured_stream(self) -> Optional[Stream]:
        async with self.sessionmaker() as db:
            res = await db.execute(
                select(Stream).where(Stream.is_featured.is_(True)).order_by(Stream.id.desc()).limit(1)
            )
            return res.scalar_one_or_none()

    @staticmethod
    async def _unfeature_others(db: AsyncSession, stream_id: Optional[int]):
        stmt = update(Stream).where(Stream.is_featured.is_(True))
        if stream_id is not None:
            stmt = stmt.where(Stream.id != stream_id)
        # must run before the featured row is flushed; a partial unique index guards the column
        await db.execute(stmt.values(is_featured=False).execution_options(synchronize_session=False))

    async def create_stream(self, data: dict[str, Any]) -> Stream:
        values = pick(data, STREAM_FIELDS)
        values["is_featured"] = bool(values["is_featured"])
        stream = Stream(**values)
        async with self.sessionmaker() as db:
            async with db.begin():
                if stream.is_featured:
                    await self._unfeature_others(db, None)
                db.add(stream)
            await db.refresh(stream)
        return stream

    async def update_stream(self, stream_id: int, data: dict[str, Any]) -> Optional[Stream]:
        values = pick(data, STREAM_FIELDS)
        values["is_featured"] = bool(values["is_featured"])
        async with self.sessionmaker() as db:
            async with db.begin():
                stream = await db.get(Stream, stream_id)
                if not stream:
                    return None
                if values["is_featured"]:
                    await self._unfeature_others(db, stream_id)
                for key, value in values.items():
                    setattr(stream, key, value)
            await db.refresh(stream)
            return stream

    async def set_featured_stream(self, stream_id: int) -> Optional[Stream]:
        async with self.sessionmaker() as db:
            async with db.begin():
                stream = await db.get(Stream, stream_id)
                if not stream:
                    return None
                await self._unfeature_others(db, stream_id)
                stream.is_featured = True
            await db.refresh(stream)
            return stream

    async def delete_stream(self, stream_id: int) -> bool:
        return await self._delete(Stream, stream_id)

    # Announcements
    async def get_all_announcements(self) -> list[Announcement]:
        async with self.sessionmaker() as db:
            res = await db.execute(
                select(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc())
            )
            return list(res.scalars().all())

    async def get_announcement(self, announcement_id: int) -> Optional[Announcement]:
        return await self._get(Announcement, announcement_id)

    async def create_announcement(self, data: dict[str, Any]) -> Announcement:
        announcement = Announcement(created_at=utcnow(), **pick(data, ANNOUNCEMENT_FIELDS))
        async with self.sessionmaker() as db:
            async with db.begin():
                db.add(announcement)
            await db.refresh(announcement)
        return announcement

    async def update_announcement(self, announcement_id: int, data: dict[str, Any]) -> Optional[Announcement]:
        async with self.sessionmaker() as db:
            async with db.begin():
                announcement = await db.get(Announcement, announcement_id)
                if not announcement:
                    return None
                for key, value in pick(data, ANNOUNCEMENT_FIELDS).items():
                    setattr(announcement, key, value)
            await db.refresh(announcement)
            return announcement

    async def delete_announcement(self, announcement_id: int) -> bool:
        return await self._delete(Announcement, announcement_id)

    # Gallery
    async def get_all_gallery_images(self) -> list[GalleryImage]:
        async with self.sessionmaker() as db:
            res = await db.execute(select(GalleryImage).order_by(GalleryImage.id))
            return list(res.scalars().all())

    async def get_gallery_image(self, image_id: int) -> Optional[GalleryImage]:
        return await self._get(GalleryImage, image_id)

    async def create_gallery_image(self, data: dict[str, Any]) -> GalleryImage:
        image = GalleryImage(**pick(data, GALLERY_FIELDS))
        async with self.sessionmaker() as db:
            async with db.begin():
                db.add(image)
            await db.refresh(image)
        return image

    async def update_gallery_image(self, image_id: int, data: dict[str, Any]) -> Optional[GalleryImage]:
        async with self.sessionmaker() as db:
            async with db.begin():
                image = await db.get(GalleryImage, image_id)
                if not image:
                    return None
                for key, value in pick(data, GALLERY_FIELDS).items():
                    setattr(image, key, value)
            await db.refresh(image)
            return image

    async def delete_gallery_image(self, image_id: int) -> bool:
        return await self._delete(GalleryImage, image_id)

    # Site settings
    async def get_site_settings(self) -> Optional[SiteSettings]:
        return await self._get(SiteSettings, SITE_SETTINGS_ID)

    async def initialize_site_settings(self, data: dict[str, Any]) -> SiteSettings:
        existing = await self.get_site_settings()
        if existing:
            return existing
        row = SiteSettings(id=SITE_SETTINGS_ID, **pick(data, SITE_SETTINGS_FIELDS))
        try:
            async with self.sessionmaker() as db:
                async with db.begin():
                    db.add(row)
                await db.refresh(row)
            return row
        except IntegrityError:
            # another writer created the row first
            logger.info("Site settings already initialized by a concurrent request")
            return await self.get_site_settings()

    async def update_site_settings(self, patch: dict[str, Any]) -> Optional[SiteSettings]:
        async with self.sessionmaker() as db:
            async with db.begin():
                row = await db.get(SiteSettings, SITE_SETTINGS_ID)
                if not row:
                    return None
                for key, value in patch.items():
                    if key in SITE_SETTINGS_FIELDS:
                        setattr(row, key, value)
            await db.refresh(row)
            return row
