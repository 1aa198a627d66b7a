"""
Database connection management and migrations.
"""
import asyncpg
import logging
from typing import Optional
from greenhouse_plugin.config import DATABASE_URL

logger = logging.getLogger(__name__)


async def create_db_pool(database_url: Optional[str] = None) -> asyncpg.Pool:
    """Create the database connection pool.

    - setup callback validates connections on acquire (like SQLAlchemy pool_pre_ping)
    - max_inactive_connection_lifetime recycles idle connections after ~5 min
    """
    url = database_url or DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required for the postgres store")

    # Accept SQLAlchemy-style postgresql+asyncpg:// URLs
    raw_url = url.replace("postgresql+asyncpg://", "postgresql://")

    async def setup_connection(conn):
        """Validate connection on acquire - equivalent to pool_pre_ping."""
        await conn.execute("SELECT 1")

    pool = await asyncpg.create_pool(
        raw_url,
        min_size=1,
        max_size=5,
        command_timeout=60,
        max_inactive_connection_lifetime=300.0,
        setup=setup_connection,
    )
    logger.info("Database connection pool created (min=1, max=5, idle_lifetime=300s)")
    return pool


async def close_db_pool(pool: Optional[asyncpg.Pool]):
    """Close the database connection pool."""
    if pool is not None:
        await pool.close()
        logger.info("Database connection pool closed")


async def run_schema_migrations(pool: asyncpg.Pool):
    """Ensure the document table used by the plugin collections exists."""
    await pool.execute("CREATE SCHEMA IF NOT EXISTS greenhouse;")
    await pool.execute("""
        CREATE TABLE IF NOT EXISTS greenhouse.documents (
            id UUID PRIMARY KEY,
            collection VARCHAR(255) NOT NULL,
            data JSONB NOT NULL DEFAULT '{}'::jsonb,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
        );
    """)
    await pool.execute("""
        CREATE INDEX IF NOT EXISTS idx_documents_collection_updated
        ON greenhouse.documents (collection, updated_at DESC);
    """)
    # Jobs are looked up by their Greenhouse id during upserts
    await pool.execute("""
        CREATE INDEX IF NOT EXISTS idx_documents_job_id
        ON greenhouse.documents ((data->>'jobId'))
        WHERE collection = 'greenhouse-jobs';
    """)
    logger.info("Greenhouse document schema ensured")
