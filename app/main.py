import os

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import announcements, gallery, site_settings, streams
from app.api import auth as auth_api
from app.api import twitch as twitch_api
from app.config import settings
from app.database import AsyncSessionLocal, connect_with_retry, create_tables, engine
from app.errors import register_exception_handlers
from app.logging_setup import configure_logging
from app.security import AdminGateMiddleware, require_admin
from app.services.seed import bootstrap
from app.storage.base import Storage
from app.storage.sql import SqlStorage

logger = configure_logging()


def create_app(storage: Storage | None = None, *, seed: bool = True) -> FastAPI:
    """Build the API. Without an explicit storage the SQL backend is opened at startup."""
    app = FastAPI(title="RENNSZ streamer site")
    app.state.storage = storage
    app.state.owns_engine = storage is None

    # added before CORS so CORS wraps the gate
    app.add_middleware(AdminGateMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # public routes
    app.include_router(streams.router, prefix="/api/streams", tags=["streams"])
    app.include_router(announcements.router, prefix="/api/announcements", tags=["announcements"])
    app.include_router(gallery.router, prefix="/api/gallery", tags=["gallery"])
    app.include_router(site_settings.router, prefix="/api", tags=["site-settings"])
    app.include_router(twitch_api.router, prefix="/api/twitch", tags=["twitch"])
    app.include_router(auth_api.router, prefix="/api", tags=["auth"])

    # admin routes; the middleware has already authenticated these requests
    admin = [Depends(require_admin)]
    app.include_router(streams.admin_router, prefix="/api/admin/streams", tags=["admin"], dependencies=admin)
    app.include_router(
        announcements.admin_router, prefix="/api/admin/announcements", tags=["admin"], dependencies=admin
    )
    app.include_router(gallery.admin_router, prefix="/api/admin/gallery", tags=["admin"], dependencies=admin)
    app.include_router(site_settings.admin_router, prefix="/api/admin", tags=["admin"], dependencies=admin)

    @app.on_event("startup")
    async def startup():
        if app.state.storage is None:
            await connect_with_retry(engine)
            await create_tables(engine)
            sql_storage = SqlStorage(AsyncSessionLocal)
            await sql_storage.purge_expired_sessions()
            app.state.storage = sql_storage
        # the admin account is always ensured; content seeding can be switched off
        await bootstrap(app.state.storage, defaults=None if seed else False, samples=None if seed else False)

    @app.on_event("shutdown")
    async def shutdown():
        if app.state.owns_engine:
            await engine.dispose()

    # built web client, when present
    if settings.CLIENT_DIST_DIR and os.path.isdir(settings.CLIENT_DIST_DIR):
        from fastapi.staticfiles import StaticFiles
        app.mount("/", StaticFiles(directory=settings.CLIENT_DIST_DIR, html=True), name="client")
        logger.info("Serving client bundle from %s", settings.CLIENT_DIST_DIR)

    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
