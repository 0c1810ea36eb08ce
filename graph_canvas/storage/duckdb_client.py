"""
DuckDB client for graph storage.

Provides persistent or in-memory storage for nodes and edges.

Every unit of work runs on its own cursor (a separate DuckDB connection to
the same database), so transactions are isolated by DuckDB's MVCC. Write
transactions are additionally serialized with an asyncio.Lock.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import AsyncIterator, Iterator, Optional

import duckdb

from ..utils.constants import (
    DB_CONNECT_MAX_RETRIES,
    DB_CONNECT_RETRY_DELAY,
    DEFAULT_DB_PATH,
    MEMORY_DB_PATH,
)
from ..utils.exceptions import StoreError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class DuckDBClient:
    """
    DuckDB client for graph storage.

    Supports:
    - Persistent mode: data/graph.duckdb (local hosting)
    - In-memory mode: :memory: (tests, throwaway demos)

    The client is created once at startup, injected into the services and
    closed at shutdown.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """
        Initialize DuckDB client.

        Args:
            db_path: Path to DuckDB database file, or ":memory:" for in-memory.
        """
        self.db_path = db_path
        self._is_memory_mode = db_path == MEMORY_DB_PATH
        self._initialized = False
        self.conn: Optional[duckdb.DuckDBPyConnection] = None
        self._write_lock = asyncio.Lock()

    def initialize(self) -> None:
        """
        Open the DuckDB connection and create the schema.

        For persistent mode: creates the database file (and parent directory)
        if it doesn't exist, retrying while another process holds the lock.
        """
        if self._initialized:
            logger.warning("DuckDB already initialized")
            return

        if not self._is_memory_mode:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Initializing persistent DuckDB at: {self.db_path}")

            for attempt in range(1, DB_CONNECT_MAX_RETRIES + 1):
                try:
                    self.conn = duckdb.connect(self.db_path)
                    break
                except (duckdb.Error, OSError) as e:
                    if attempt == DB_CONNECT_MAX_RETRIES:
                        logger.error(
                            f"Failed to connect to DuckDB after {DB_CONNECT_MAX_RETRIES} attempts: {e}"
                        )
                        raise StoreError(f"Could not open graph store at {self.db_path}") from e
                    logger.warning(
                        f"DuckDB connection attempt {attempt} failed ({e}). "
                        f"Retrying in {DB_CONNECT_RETRY_DELAY}s..."
                    )
                    time.sleep(DB_CONNECT_RETRY_DELAY)
        else:
            logger.info("Initializing in-memory DuckDB")
            self.conn = duckdb.connect(MEMORY_DB_PATH)

        self._create_schema()

        self._initialized = True
        logger.info("DuckDB initialization complete")

    def _create_schema(self) -> None:
        """Create tables, sequences and indexes."""
        if not self.conn:
            raise RuntimeError("DuckDB connection not initialized")

        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT current_timestamp
            )
            """
        )

        # Sequences keep list order equal to insertion order
        self.conn.execute("CREATE SEQUENCE IF NOT EXISTS node_seq START 1")
        self.conn.execute("CREATE SEQUENCE IF NOT EXISTS edge_seq START 1")

        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS nodes (
                id VARCHAR PRIMARY KEY,
                seq BIGINT NOT NULL DEFAULT nextval('node_seq'),
                label VARCHAR NOT NULL,
                "type" VARCHAR NOT NULL DEFAULT 'default',
                properties JSON NOT NULL DEFAULT '{}',
                x DOUBLE NOT NULL DEFAULT 0,
                y DOUBLE NOT NULL DEFAULT 0,
                fx DOUBLE,
                fy DOUBLE,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
            """
        )

        # No foreign keys: endpoint existence is checked by the mutation service
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS edges (
                id VARCHAR PRIMARY KEY,
                seq BIGINT NOT NULL DEFAULT nextval('edge_seq'),
                source VARCHAR NOT NULL,
                target VARCHAR NOT NULL,
                label VARCHAR NOT NULL DEFAULT '',
                properties JSON NOT NULL DEFAULT '{}',
                directed BOOLEAN NOT NULL DEFAULT TRUE,
                created_at TIMESTAMP NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
            """
        )

        # Only edge endpoint columns are indexed; indexed columns are never updated
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_edges_source_target ON edges(source, target)"
        )
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_edges_target_source ON edges(target, source)"
        )

        self.conn.execute(
            "INSERT INTO schema_version (version) VALUES (?) ON CONFLICT DO NOTHING",
            (SCHEMA_VERSION,),
        )

        logger.info("Created tables and indexes")

    def cursor(self) -> duckdb.DuckDBPyConnection:
        """Open a new cursor on the shared database."""
        if not self.conn:
            raise RuntimeError("DuckDB connection not initialized")
        return self.conn.cursor()

    @contextmanager
    def snapshot(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        Read-only unit of work.

        All queries issued on the yielded cursor see one consistent snapshot
        of the database.

        Usage:
            with client.snapshot() as conn:
                nodes = node_store.list_all(conn)
                edges = edge_store.list_all(conn)
        """
        cur = self.cursor()
        try:
            cur.execute("BEGIN TRANSACTION")
            yield cur
            cur.execute("COMMIT")
        except duckdb.Error as e:
            self._rollback(cur)
            logger.error(f"DuckDB read failed: {e}", exc_info=True)
            raise StoreError("Graph store read failed") from e
        except BaseException:
            self._rollback(cur)
            raise
        finally:
            cur.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[duckdb.DuckDBPyConnection]:
        """
        Atomic write unit of work.

        Commits when the block completes, rolls back when it raises. Storage
        errors are re-raised as StoreError; any other exception (for example
        NotFoundError) propagates unchanged after the rollback.

        Usage:
            async with client.transaction() as conn:
                edge_store.delete_for_node(conn, node_id)
                node_store.delete(conn, node_id)
        """
        async with self._write_lock:
            cur = self.cursor()
            try:
                cur.execute("BEGIN TRANSACTION")
                yield cur
                cur.execute("COMMIT")
            except duckdb.Error as e:
                self._rollback(cur)
                logger.error(f"DuckDB transaction failed: {e}", exc_info=True)
                raise StoreError("Graph store write failed") from e
            except BaseException:
                self._rollback(cur)
                raise
            finally:
                cur.close()

    @staticmethod
    def _rollback(cur: duckdb.DuckDBPyConnection) -> None:
        try:
            cur.execute("ROLLBACK")
        except duckdb.Error as e:
            # Already aborted by DuckDB (failed COMMIT or conflict)
            logger.debug(f"Rollback skipped: {e}")

    def health_check(self) -> bool:
        """Run a trivial query against the store."""
        if not self.conn:
            return False
        try:
            cur = self.cursor()
            try:
                cur.execute("SELECT 1").fetchone()
            finally:
                cur.close()
            return True
        except duckdb.Error as e:
            logger.error(f"DuckDB health check failed: {e}")
            return False

    def close(self) -> None:
        """Close the DuckDB connection, flushing the WAL in persistent mode."""
        if not self.conn:
            return

        if not self._is_memory_mode:
            try:
                logger.info("Executing DuckDB CHECKPOINT before closing...")
                self.conn.execute("CHECKPOINT")
            except duckdb.Error as e:
                logger.warning(f"Failed to execute CHECKPOINT during close: {e}")

        self.conn.close()
        self.conn = None
        self._initialized = False
        logger.info("DuckDB connection closed")

    @property
    def is_initialized(self) -> bool:
        """Check if client is initialized."""
        return self._initialized

    @property
    def is_memory_mode(self) -> bool:
        return self._is_memory_mode
