"""
tests.common

Shared fixtures for the storage and API tests.
"""

import asyncio
import random
from typing import Any

STREAM = {
    "name": "RENNSZ - Travel & IRL",
    "url": "https://www.twitch.tv/rennsz",
    "description": "Travel streams",
    "type": "IRL",
    "is_featured": False,
}

ANNOUNCEMENT = {
    "title": "Next Destination",
    "content": "Maldives next Monday.",
    "type": "Travel Update",
    "image_url": None,
}

GALLERY_IMAGE = {
    "title": "Bali Beachfront",
    "description": "Exclusive oceanfront property",
    "image_url": "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4",
    "category": "Travel Destinations",
}

SITE_SETTINGS = {
    "site_title": "RENNSZ",
    "meta_description": "Travel streams",
    "footer_text": "footer",
    "social_links": {"twitchMain": "https://www.twitch.tv/rennsz"},
    "theme_settings": {
        "currentTheme": "default",
        "primaryColor": "#4A00E0",
        "secondaryColor": "#F2C94C",
        "accentTeal": "#2DD4BF",
        "accentPurple": "#8B5CF6",
    },
}


def stream(**overrides: Any) -> dict[str, Any]:
    return {**STREAM, **overrides}


def announcement(**overrides: Any) -> dict[str, Any]:
    return {**ANNOUNCEMENT, **overrides}


def gallery_image(**overrides: Any) -> dict[str, Any]:
    return {**GALLERY_IMAGE, **overrides}


class StorageContract:
    """Behaviour every Storage backend must show.

    Mixed into an ``IsolatedAsyncioTestCase`` whose ``asyncSetUp`` assigns
    ``self.storage``.
    """

    storage = None

    async def featured_ids(self) -> list[int]:
        return [s.id for s in await self.storage.get_all_streams() if s.is_featured]

    async def test_create_featured_clears_others(self) -> None:
        """A featured insert unfeatures the previous featured stream."""
        first = await self.storage.create_stream(stream(is_featured=True))
        second = await self.storage.create_stream(stream(name="RENNSZINO", is_featured=True))
        self.assertEqual(await self.featured_ids(), [second.id])
        featured = await self.storage.get_featured_stream()
        self.assertEqual(featured.id, second.id)
        refreshed = await self.storage.get_stream(first.id)
        self.assertFalse(refreshed.is_featured)

    async def test_update_featured_clears_others(self) -> None:
        """Updating a stream to featured unfeatures every other stream."""
        first = await self.storage.create_stream(stream(is_featured=True))
        second = await self.storage.create_stream(stream(name="Gaming"))
        updated = await self.storage.update_stream(second.id, stream(name="Gaming", is_featured=True))
        self.assertTrue(updated.is_featured)
        self.assertEqual(updated.name, "Gaming")
        self.assertEqual(await self.featured_ids(), [second.id])
        self.assertFalse((await self.storage.get_stream(first.id)).is_featured)

    async def test_set_featured(self) -> None:
        """set_featured_stream moves the flag and reports unknown ids."""
        first = await self.storage.create_stream(stream(is_featured=True))
        second = await self.storage.create_stream(stream(name="Gaming"))
        result = await self.storage.set_featured_stream(second.id)
        self.assertEqual(result.id, second.id)
        self.assertTrue(result.is_featured)
        self.assertEqual(await self.featured_ids(), [second.id])
        self.assertIsNone(await self.storage.set_featured_stream(first.id + second.id + 100))
        self.assertEqual(await self.featured_ids(), [second.id])

    async def test_random_stream_writes_keep_one_featured(self) -> None:
        """Any sequence of stream writes leaves at most one featured stream."""
        rng = random.Random(1337)
        ids: list[int] = []
        for step in range(60):
            op = rng.choice(("create", "update", "feature", "delete"))
            if op == "create" or not ids:
                created = await self.storage.create_stream(
                    stream(name=f"s{step}", is_featured=rng.random() < 0.5)
                )
                ids.append(created.id)
            elif op == "update":
                await self.storage.update_stream(
                    rng.choice(ids), stream(name=f"u{step}", is_featured=rng.random() < 0.5)
                )
            elif op == "feature":
                await self.storage.set_featured_stream(rng.choice(ids))
            else:
                victim = rng.choice(ids)
                self.assertTrue(await self.storage.delete_stream(victim))
                ids.remove(victim)
            self.assertLessEqual(len(await self.featured_ids()), 1, f"after step {step} ({op})")

    async def test_concurrent_set_featured(self) -> None:
        """Racing feature requests on different streams leave exactly one featured."""
        ids = [(await self.storage.create_stream(stream(name=f"c{i}"))).id for i in range(8)]
        results = await asyncio.gather(
            *(self.storage.set_featured_stream(stream_id) for stream_id in ids),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        self.assertEqual(errors, [])
        featured = await self.featured_ids()
        self.assertEqual(len(featured), 1)
        self.assertIn(featured[0], ids)

    async def test_concurrent_featured_creates(self) -> None:
        """Racing featured inserts also leave exactly one featured."""
        results = await asyncio.gather(
            *(self.storage.create_stream(stream(name=f"n{i}", is_featured=True)) for i in range(6)),
            return_exceptions=True,
        )
        self.assertEqual([r for r in results if isinstance(r, BaseException)], [])
        self.assertEqual(len(await self.featured_ids()), 1)

    async def test_unknown_ids(self) -> None:
        """Updates of unknown ids return None, deletes return False."""
        self.assertIsNone(await self.storage.update_stream(999, stream()))
        self.assertFalse(await self.storage.delete_stream(999))
        self.assertIsNone(await self.storage.update_announcement(999, announcement()))
        self.assertFalse(await self.storage.delete_announcement(999))
        self.assertIsNone(await self.storage.update_gallery_image(999, gallery_image()))
        self.assertFalse(await self.storage.delete_gallery_image(999))

    async def test_delete_twice(self) -> None:
        """The second delete of the same row reports not found."""
        item = await self.storage.create_announcement(announcement())
        self.assertTrue(await self.storage.delete_announcement(item.id))
        self.assertFalse(await self.storage.delete_announcement(item.id))
        self.assertIsNone(await self.storage.get_announcement(item.id))

    async def test_announcements_newest_first(self) -> None:
        """Announcements list strictly newest first."""
        created = [await self.storage.create_announcement(announcement(title=f"a{i}")) for i in range(5)]
        listed = await self.storage.get_all_announcements()
        self.assertEqual([a.id for a in listed], [a.id for a in reversed(created)])
        stamps = [(a.created_at, a.id) for a in listed]
        self.assertEqual(stamps, sorted(stamps, reverse=True))

    async def test_announcement_update_keeps_identity(self) -> None:
        """Updating an announcement keeps its id and creation time."""
        original = await self.storage.create_announcement(announcement())
        created_at = original.created_at
        updated = await self.storage.update_announcement(
            original.id, announcement(title="Changed", content="New text", image_url="https://x/y.jpg")
        )
        self.assertEqual(updated.id, original.id)
        self.assertEqual(updated.created_at, created_at)
        self.assertEqual(updated.title, "Changed")
        self.assertEqual(updated.image_url, "https://x/y.jpg")

    async def test_gallery_insertion_order(self) -> None:
        """Gallery images come back in insertion order and update in place."""
        first = await self.storage.create_gallery_image(gallery_image(title="one"))
        second = await self.storage.create_gallery_image(gallery_image(title="two"))
        await self.storage.update_gallery_image(first.id, gallery_image(title="uno", description=None))
        listed = await self.storage.get_all_gallery_images()
        self.assertEqual([i.id for i in listed], [first.id, second.id])
        self.assertEqual(listed[0].title, "uno")
        self.assertIsNone(listed[0].description)

    async def test_site_settings_singleton(self) -> None:
        """Initialize is idempotent; update merges onto the existing row."""
        self.assertIsNone(await self.storage.get_site_settings())
        self.assertIsNone(await self.storage.update_site_settings({"site_title": "nope"}))
        first = await self.storage.initialize_site_settings(SITE_SETTINGS)
        second = await self.storage.initialize_site_settings({**SITE_SETTINGS, "site_title": "Other"})
        self.assertEqual(second.id, first.id)
        self.assertEqual(second.site_title, "RENNSZ")
        updated = await self.storage.update_site_settings({"footer_text": "new footer"})
        self.assertEqual(updated.footer_text, "new footer")
        self.assertEqual(updated.site_title, "RENNSZ")
        self.assertEqual(updated.social_links, SITE_SETTINGS["social_links"])
        self.assertEqual((await self.storage.get_site_settings()).footer_text, "new footer")

    async def test_admin_user_and_password(self) -> None:
        """The admin row is found and its password hash replaced."""
        self.assertIsNone(await self.storage.get_admin_user())
        await self.storage.create_user({"username": "viewer", "password": "h0", "is_admin": False})
        admin = await self.storage.create_user({"username": "admin", "password": "h1", "is_admin": True})
        self.assertEqual((await self.storage.get_admin_user()).id, admin.id)
        self.assertEqual((await self.storage.get_user_by_username("admin")).id, admin.id)
        updated = await self.storage.update_user_password(admin.id, "h2")
        self.assertEqual(updated.password, "h2")
        self.assertEqual((await self.storage.get_user(admin.id)).password, "h2")
        self.assertIsNone(await self.storage.update_user_password(999, "h3"))

    async def test_sessions(self) -> None:
        """Sessions resolve until deleted or expired."""
        from datetime import timedelta

        admin = await self.storage.create_user({"username": "admin", "password": "h", "is_admin": True})
        live = await self.storage.create_session(admin.id, timedelta(hours=24))
        self.assertEqual((await self.storage.get_session(live.id)).user_id, admin.id)
        self.assertTrue(await self.storage.delete_session(live.id))
        self.assertIsNone(await self.storage.get_session(live.id))
        self.assertFalse(await self.storage.delete_session(live.id))

        expired = await self.storage.create_session(admin.id, timedelta(seconds=-1))
        self.assertIsNone(await self.storage.get_session(expired.id))
