# key-value store on top of a single sqlite table, plus connection helpers
import os.path
from contextlib import asynccontextmanager
from sqlite3 import Row
from typing import List, Optional

import aiosqlite

from utils.logger import get_logger

_logger = get_logger(__name__)

DB_PATH = "data/storefront.sqlite"
DB_INIT_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS kv (
        key   TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """,
]


async def _init_db(conn: aiosqlite.Connection) -> None:
    for statement in DB_INIT_STATEMENTS:
        await conn.execute(statement)
    await conn.commit()


async def _table_exists(conn: aiosqlite.Connection, table_name: str) -> bool:
    cur = await conn.execute(
        """
        SELECT name
        FROM sqlite_master
        WHERE type = 'table'
          AND name = ?;
        """,
        (table_name,),
    )
    row = await cur.fetchone()
    await cur.close()
    return row is not None


@asynccontextmanager
async def connect(path: Optional[str] = None) -> aiosqlite.Connection:
    """Async context manager yielding an aiosqlite connection.

    Creates the parent directory, and the kv table whenever it is missing,
    e.g. after the file was deleted while the app was running.
    """
    path = path or DB_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    conn = await aiosqlite.connect(path)
    try:
        conn.row_factory = Row
        if not await _table_exists(conn, "kv"):
            _logger.info(f"Initializing key-value store at {path}...")
            await _init_db(conn)
        yield conn
    finally:
        await conn.close()


class KeyValueStore:
    """
    String keys to string values, persisted in sqlite.

    Every call opens its own connection and commits before returning, so a
    single call is atomic for its key. Nothing spans more than one key.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or DB_PATH

    async def get(self, key: str) -> Optional[str]:
        async with connect(self.path) as conn:
            cur = await conn.execute("SELECT value FROM kv WHERE key = ?;", (key,))
            row = await cur.fetchone()
            await cur.close()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Store values must be str, got {type(value).__name__}.")
        async with connect(self.path) as conn:
            await conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value;
                """,
                (key, value),
            )
            await conn.commit()

    async def remove(self, key: str) -> None:
        async with connect(self.path) as conn:
            await conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
            await conn.commit()

    async def keys(self) -> List[str]:
        async with connect(self.path) as conn:
            cur = await conn.execute("SELECT key FROM kv ORDER BY key;")
            rows = await cur.fetchall()
            await cur.close()
        return [row[0] for row in rows]

    async def clear(self) -> None:
        async with connect(self.path) as conn:
            await conn.execute("DELETE FROM kv;")
            await conn.commit()
