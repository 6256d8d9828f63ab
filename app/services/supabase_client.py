import os
import asyncio
import logging
from typing import List, Dict, Any, Optional

import asyncpg
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

SUPABASE_DB_URL = os.getenv("SUPABASE_DB_URL") or os.getenv("DB_URL")
SUPABASE_DB_PASSWORD = os.getenv("SUPABASE_DB_PASSWORD")
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", "30"))

RESOURCE_STATS_QUERY = """
SELECT r.title,
       r.category_id,
       r.keywords,
       r.priority,
       c.name AS category_name
FROM ivor_resources r
LEFT JOIN ivor_categories c ON c.id = r.category_id
ORDER BY r.priority DESC
"""

_pool: Optional[asyncpg.Pool] = None
_pool_lock = asyncio.Lock()


class DataSourceError(Exception):
    """Raised when the shared database cannot serve a read."""


async def get_pool() -> asyncpg.Pool:
    """Get or create the shared connection pool."""
    global _pool
    if _pool is not None and not _pool._closed:
        return _pool

    async with _pool_lock:
        # Another request may have created the pool while this one waited
        if _pool is None or _pool._closed:
            if not SUPABASE_DB_URL:
                raise DataSourceError("SUPABASE_DB_URL (or DB_URL) must be set")
            try:
                _pool = await asyncpg.create_pool(
                    dsn=SUPABASE_DB_URL,
                    password=SUPABASE_DB_PASSWORD,
                    min_size=1,
                    max_size=10,
                    command_timeout=DB_COMMAND_TIMEOUT,
                    statement_cache_size=0,
                    timeout=10
                )
            except Exception as e:
                raise DataSourceError(f"Could not connect to Supabase: {e}") from e
    return _pool


async def close_pool():
    """Close the shared connection pool (call on app shutdown)."""
    global _pool
    if _pool is not None and not _pool._closed:
        await _pool.close()
        _pool = None


async def check_connection() -> bool:
    """Probe the knowledge base table once at startup"""
    try:
        pool = await get_pool()
        await pool.fetchval("SELECT count(*) FROM ivor_knowledge_base LIMIT 1")
        logger.info("Connected to Supabase for community intelligence analysis")
        return True
    except Exception as e:
        logger.warning(f"Supabase connection failed, using local analytics: {e}")
        return False


async def fetch_resource_stats() -> List[Dict[str, Any]]:
    """
    Read every resource with its category name, highest priority first.

    Returns:
        List of dicts with keys title, category_id, keywords, priority, category_name
    """
    pool = await get_pool()
    try:
        rows = await pool.fetch(RESOURCE_STATS_QUERY)
    except Exception as e:
        raise DataSourceError(f"Database query failed: {e}") from e

    logger.debug(f"Fetched {len(rows)} resource rows")
    return [dict(row) for row in rows]
