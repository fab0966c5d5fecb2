import logging

from app.config import settings
from app.security import hash_password
from app.services.themes import build_theme_settings
from app.storage.base import Storage

logger = logging.getLogger("streamsite.seed")

DEFAULT_SITE_SETTINGS = {
    "site_title": "RENNSZ - Premium Travel Streamer",
    "meta_description": (
        "Join RENNSZ on luxury travel adventures around the world. "
        "Premium travel streaming experiences from exotic destinations."
    ),
    "footer_text": "Made with ❤️ by sf.xen on discord",
    "social_links": {
        "twitchMain": "https://www.twitch.tv/rennsz",
        "twitchGaming": "https://www.twitch.tv/rennszino",
        "twitter": "https://x.com/rennsz96?s=21",
        "xCommunity": "https://x.com/i/communities/1823168507401634218",
        "instagram": "https://www.instagram.com/rennsz?igsh=MWhjYjg2ZDV4dHc0bw==",
        "discord": "https://discord.gg/hUTXCaSdKC",
    },
    "theme_settings": build_theme_settings("default"),
}

DEFAULT_STREAMS = [
    {
        "name": "RENNSZ - Travel & IRL",
        "url": "https://www.twitch.tv/rennsz",
        "description": "Join me as I explore luxurious destinations and share authentic travel experiences.",
        "type": "IRL",
        "is_featured": True,
    },
    {
        "name": "RENNSZINO - Gaming & Chill",
        "url": "https://www.twitch.tv/rennszino",
        "description": "Relaxed gaming sessions and chill vibes when we're not on the road.",
        "type": "Gaming",
        "is_featured": False,
    },
]

SAMPLE_ANNOUNCEMENTS = [
    {
        "title": "Next Destination: Maldives Luxury Resort",
        "content": (
            "Get ready for our next travel adventure! We'll be exploring the premium overwater villas "
            "and underwater experiences in the Maldives. Stream starts next Monday at 3 PM EST."
        ),
        "type": "Travel Update",
        "image_url": "https://images.unsplash.com/photo-1573843981267-be1999ff37cd",
    },
    {
        "title": "New Partnership: Luxury Travel Equipment",
        "content": (
            "Excited to announce our new partnership with PremiumGear! We'll be using their high-end "
            "streaming equipment during our travels for even better quality streams."
        ),
        "type": "Partnership",
        "image_url": "https://images.unsplash.com/photo-1616763355548-1b606f439f86",
    },
    {
        "title": "Subscriber Giveaway: Travel Package",
        "content": (
            "To celebrate hitting 50K followers, we're giving away a luxury weekend package to one lucky "
            "subscriber. Details on how to enter during tomorrow's stream!"
        ),
        "type": "Giveaway",
        "image_url": None,
    },
]

SAMPLE_GALLERY_IMAGES = [
    ("Bali Beachfront", "Exclusive oceanfront property",
     "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4", "Travel Destinations"),
    ("Dubai Penthouse", "Sky-high luxury accommodation",
     "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa", "Luxury Accommodations"),
    ("Mediterranean Yacht", "Private sailing experience",
     "https://images.unsplash.com/photo-1517957754642-2870518e16f8", "Travel Destinations"),
    ("Tokyo Skyline", "Urban luxury experience",
     "https://images.unsplash.com/photo-1540959733332-eab4deabeeaf", "Travel Destinations"),
    ("Premium Setup", "High-end streaming equipment",
     "https://images.unsplash.com/photo-1566073771259-6a8506099945", "Streaming Equipment"),
    ("Maldives Resort", "Crystal clear infinity pool",
     "https://images.unsplash.com/photo-1610641818989-c2051b5e2cfd", "Luxury Accommodations"),
    ("Swiss Alps Chalet", "Exclusive mountain getaway",
     "https://images.unsplash.com/photo-1578530332818-6ba472e67b9f", "Travel Destinations"),
    ("Live Streaming", "Behind the scenes look",
     "https://images.unsplash.com/photo-1570213489059-0aac6626cade", "Streaming Equipment"),
]


async def ensure_admin_user(storage: Storage):
    admin = await storage.get_admin_user()
    if admin:
        return admin
    admin = await storage.create_user({
        "username": settings.ADMIN_USERNAME,
        "password": hash_password(settings.ADMIN_PASSWORD),
        "is_admin": True,
    })
    logger.info("Created admin user %s", admin.username)
    return admin


async def seed_defaults(storage: Storage):
    if not await storage.get_site_settings():
        await storage.initialize_site_settings(DEFAULT_SITE_SETTINGS)
        logger.info("Initialized default site settings")
    if not await storage.get_all_streams():
        for stream in DEFAULT_STREAMS:
            await storage.create_stream(stream)
        logger.info("Created %d default streams", len(DEFAULT_STREAMS))


async def seed_sample_content(storage: Storage):
    if not await storage.get_all_announcements():
        for announcement in SAMPLE_ANNOUNCEMENTS:
            await storage.create_announcement(announcement)
    if not await storage.get_all_gallery_images():
        for title, description, image_url, category in SAMPLE_GALLERY_IMAGES:
            await storage.create_gallery_image({
                "title": title,
                "description": description,
                "image_url": image_url,
                "category": category,
            })


async def bootstrap(storage: Storage, *, defaults: bool | None = None, samples: bool | None = None):
    await ensure_admin_user(storage)
    if settings.SEED_DEFAULTS if defaults is None else defaults:
        await seed_defaults(storage)
    if settings.SEED_SAMPLE_CONTENT if samples is None else samples:
        await seed_sample_content(storage)
