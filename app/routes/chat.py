import json
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.dependencies import RequestTooLarge, get_resource_fetcher, get_resource_gaps, read_limited_body
from app.models.schemas import ChatRequest, ResourceGap
from app.services.community_chat import APOLOGY_RESPONSE, ERROR_MESSAGE, respond
from app.services.trends import ResourceFetcher

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("")
async def community_chat(
    request: Request,
    fetch: ResourceFetcher = Depends(get_resource_fetcher),
    resource_gaps: List[ResourceGap] = Depends(get_resource_gaps)
):
    """
    Chat integration for community intelligence.
    The body is validated here so that malformed input gets the apology reply.
    """
    try:
        body = await read_limited_body(request)
    except RequestTooLarge as e:
        logger.warning(f"Rejected chat request: {e}")
        return JSONResponse(status_code=413, content={"error": "Request body too large"})

    try:
        chat_request = ChatRequest.model_validate(json.loads(body))
        logger.info(f"Chat request received: {chat_request.message[:100]}")
        return await respond(chat_request.message, fetch, resource_gaps)
    except Exception as e:
        logger.error(f"Community intelligence chat error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": ERROR_MESSAGE, "response": APOLOGY_RESPONSE}
        )
