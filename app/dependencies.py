"""
Request-scoped providers for the route handlers.

Tests swap these out through ``app.dependency_overrides``.
"""

import random
from typing import List

from fastapi import Request

from app.models.schemas import ResourceGap
from app.services import supabase_client
from app.services.community_data import get_resource_gaps as load_resource_gaps
from app.services.trends import ResourceFetcher

_rng = random.Random()


def get_resource_fetcher() -> ResourceFetcher:
    return supabase_client.fetch_resource_stats


def get_resource_gaps() -> List[ResourceGap]:
    return load_resource_gaps()


def get_random_source() -> random.Random:
    return _rng


MAX_BODY_BYTES = 10 * 1024 * 1024


class RequestTooLarge(Exception):
    """Raised once a streamed request body passes ``MAX_BODY_BYTES``."""


async def read_limited_body(request: Request, limit: int = MAX_BODY_BYTES) -> bytes:
    """Read the body chunk by chunk, giving up as soon as it passes the limit"""
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise RequestTooLarge(f"body passed {limit} bytes")
        chunks.append(chunk)
    return b"".join(chunks)
