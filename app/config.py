from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: list[str] = ["*"]
    CLIENT_DIST_DIR: str = ""
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///streamsite.db"
    DATABASE_ECHO: bool = False
    DB_CONNECT_RETRIES: int = 3
    DB_CONNECT_RETRY_DELAY: float = 1.0

    # Admin session
    SESSION_SECRET: str = "RENNSZ-streaming-secret"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "streamsite.sid"
    SESSION_MAX_AGE: int = 24 * 60 * 60
    COOKIE_SECURE: bool = False
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # Content
    SEED_DEFAULTS: bool = True
    SEED_SAMPLE_CONTENT: bool = False
    TRACKER_BASE_URL: str = "https://twitchtracker.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
