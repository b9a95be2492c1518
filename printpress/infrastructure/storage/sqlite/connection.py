"""
aiosqlite connection pool for the ledger database.

Connections run in autocommit mode; writes go through ``transaction()``,
which opens ``BEGIN IMMEDIATE`` so a ledger cascade holds the database
write lock from its first statement to its commit.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from printpress.config import get_logger, get_settings

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Bounded set of connections to one SQLite file, opened on demand."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = Path(db_path)
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opened: list[aiosqlite.Connection] = []
        self._open_lock = asyncio.Lock()
        self._closed = False

    async def initialize(self) -> None:
        """Open the first connection so configuration errors surface early."""
        async with self.acquire():
            pass
        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        conn.row_factory = aiosqlite.Row
        return conn

    async def _checkout(self) -> aiosqlite.Connection:
        if self._closed:
            raise RuntimeError("connection pool is closed")
        if self._idle.empty():
            async with self._open_lock:
                if self._idle.empty() and len(self._opened) < self.pool_size:
                    conn = await self._open()
                    self._opened.append(conn)
                    return conn
        return await self._idle.get()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; it goes back to the pool on exit."""
        conn = await self._checkout()
        try:
            yield conn
        finally:
            if self._closed:
                await conn.close()
            else:
                self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection inside ``BEGIN IMMEDIATE``.

        Commits when the block exits cleanly; any exception rolls the whole
        block back and is re-raised.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                logger.warning("transaction_rolled_back", db_path=str(self.db_path))
                raise
            await conn.execute("COMMIT")

    async def ping(self) -> bool:
        """True if the database answers a trivial query."""
        try:
            async with self.acquire() as conn:
                rows = await conn.execute_fetchall("SELECT 1")
                return len(rows) == 1
        except aiosqlite.Error as e:
            logger.error("database_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        """Close every connection the pool has opened."""
        self._closed = True
        while not self._idle.empty():
            self._idle.get_nowait()
        for conn in self._opened:
            await conn.close()
        logger.info("connection_pool_closed", connections=len(self._opened))
        self._opened.clear()


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the process-wide pool for the configured database."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await pool.initialize()
        _pool = pool
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        pool, _pool = _pool, None
        await pool.close()


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a read connection from the global pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a connection inside a write transaction from the global pool."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
