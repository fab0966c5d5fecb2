from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func
from app.database import Base

SITE_SETTINGS_ID = 1  # the only row ever written


class SiteSettings(Base):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, default=SITE_SETTINGS_ID)
    site_title = Column(String, default="RENNSZ - Premium Travel Streamer")
    meta_description = Column(Text, nullable=True)
    footer_text = Column(String, default="Made with ❤️ by sf.xen on discord")
    social_links = Column(JSON, nullable=True)  # {"twitchMain": url, ...}
    theme_settings = Column(JSON, nullable=True)  # {"currentTheme": ..., "primaryColor": ...}
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
