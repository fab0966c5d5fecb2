import asyncio
import sys
from pathlib import Path

from sqlalchemy.engine import make_url


async def recreate_db(seed: bool = True):
    # Ensure project root on import path
    backend_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(backend_root))

    from app.config import settings  # type: ignore
    from app.database import AsyncSessionLocal, create_tables, engine  # type: ignore
    from app.services.seed import bootstrap  # type: ignore
    from app.storage.sql import SqlStorage  # type: ignore

    url = make_url(settings.DATABASE_URL)
    if not url.drivername.startswith("sqlite"):
        raise SystemExit(f"refusing to reset non-sqlite database: {url.render_as_string(hide_password=True)}")

    # Remove existing SQLite file
    if url.database and url.database != ":memory:":
        db_path = Path(url.database)
        if not db_path.is_absolute():
            db_path = Path.cwd() / db_path
        if db_path.exists():
            db_path.unlink()

    await create_tables(engine)
    if seed:
        await bootstrap(SqlStorage(AsyncSessionLocal))
    await engine.dispose()


if __name__ == '__main__':
    asyncio.run(recreate_db(seed="--no-seed" not in sys.argv[1:]))
    print('Database recreated.')
