from datetime import datetime, timezone

from sqlalchemy import inspect, text


async def ensure_migrations_table(conn):
    await conn.execute(text(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            name VARCHAR(255) PRIMARY KEY,
            applied_at VARCHAR(64)
        )
        """
    ))


async def has_migration(conn, name: str) -> bool:
    result = await conn.execute(text("SELECT 1 FROM schema_migrations WHERE name = :name"), {"name": name})
    return result.first() is not None


async def mark_migration(conn, name: str):
    await conn.execute(text("INSERT INTO schema_migrations(name, applied_at) VALUES (:name, :applied_at)"), {
        "name": name,
        "applied_at": datetime.now(timezone.utc).isoformat()
    })


async def index_exists(conn, table: str, index: str) -> bool:
    def _inspect(sync_conn):
        return any(item.get("name") == index for item in inspect(sync_conn).get_indexes(table))
    return await conn.run_sync(_inspect)


async def enforce_single_featured_stream(conn):
    # older databases may hold several featured rows; the newest one wins
    row = (await conn.execute(text(
        "SELECT MAX(id) FROM streams WHERE is_featured = :flag"
    ), {"flag": True})).first()
    keep_id = row[0] if row else None
    if keep_id is not None:
        await conn.execute(text(
            "UPDATE streams SET is_featured = :off WHERE is_featured = :on AND id != :keep_id"
        ), {"off": False, "on": True, "keep_id": keep_id})
    if await index_exists(conn, "streams", "uq_streams_single_featured"):
        return
    await conn.execute(text(
        "CREATE UNIQUE INDEX uq_streams_single_featured ON streams (is_featured) WHERE is_featured"
    ))


MIGRATIONS = [
    ("202501_enforce_single_featured_stream", enforce_single_featured_stream),
]


async def run_migrations(conn):
    await ensure_migrations_table(conn)
    for name, handler in MIGRATIONS:
        if await has_migration(conn, name):
            continue
        await handler(conn)
        await mark_migration(conn, name)
