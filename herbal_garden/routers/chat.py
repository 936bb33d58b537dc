"""
Remedy Chat Router.

Symptom-based herb recommendations from the remedy knowledge base.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from garden_shared.errors import APIException, ErrorCode, UpstreamParseError
from herbal_garden.core.dependencies import ServiceContainer, get_container
from herbal_garden.services.chat_service import validate_query

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

PARSE_ERROR_MESSAGE = "Failed to parse AI response. Please try again."
INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/chat")
async def chat(request: Request, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """Answer a health question with herbs drawn from the knowledge base."""
    query = validate_query(await _read_json(request))

    try:
        return await container.chat.answer(query)
    except UpstreamParseError as e:
        logger.error("/chat parse error: %s", e)
        raise UpstreamParseError(PARSE_ERROR_MESSAGE) from e
    except Exception as e:
        logger.exception("/chat error: %s", e)
        raise APIException(INTERNAL_ERROR_MESSAGE, error_code=ErrorCode.INTERNAL_ERROR) from e
