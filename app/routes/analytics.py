import logging
import random
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.dependencies import get_random_source, get_resource_fetcher, get_resource_gaps
from app.models.schemas import ResourceGap
from app.services.intelligence_overview import build_overview
from app.services.trends import ResourceFetcher, compute_trends

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/overview")
async def analytics_overview(
    fetch: ResourceFetcher = Depends(get_resource_fetcher),
    resource_gaps: List[ResourceGap] = Depends(get_resource_gaps),
    rng: random.Random = Depends(get_random_source)
):
    """Community intelligence overview: trends, resource gaps and derived insights"""
    try:
        trends = await compute_trends(fetch)
        return build_overview(trends, resource_gaps, rng)
    except Exception as e:
        logger.error(f"Analytics overview error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate community intelligence overview"}
        )
