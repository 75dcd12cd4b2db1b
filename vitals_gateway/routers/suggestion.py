"""
Health suggestion endpoint.

Turns a vital-sign reading into a plain-text health assessment.
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from vitals_gateway.exceptions import SuggestionError
from vitals_gateway.models import HealthReading, SuggestionResponse
from vitals_gateway.services.suggestion import SuggestionClient

INVALID_PAYLOAD_MESSAGE = "Invalid request payload"

router = APIRouter(tags=["suggestion"])


def get_suggestion_client(request: Request) -> SuggestionClient:
    """Return the suggestion client created in the application lifespan."""
    return request.app.state.suggestion_client


# The body is decoded as JSON whatever the Content-Type says, so the schema
# is declared here instead of through a body parameter.
_request_body = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": HealthReading.model_json_schema(by_alias=True)}},
    }
}


@router.post("/suggest", response_model=SuggestionResponse, openapi_extra=_request_body)
async def suggest(
    request: Request,
    client: SuggestionClient = Depends(get_suggestion_client),
) -> SuggestionResponse:
    """
    Get a health assessment and recommendations for a vital-sign reading.

    Args:
        request: Incoming request whose body is a HealthReading JSON object
        client: Shared suggestion client

    Returns:
        SuggestionResponse with the cleaned suggestion text

    Raises:
        HTTPException 400: Body is not valid JSON or not a valid HealthReading
        HTTPException 500: Missing credential, provider failure or empty result
    """
    body = await request.body()
    try:
        reading = HealthReading.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Rejected suggestion payload: {e.error_count()} validation error(s)")
        raise HTTPException(status_code=400, detail=INVALID_PAYLOAD_MESSAGE) from e

    logger.info(f"Suggestion requested (language={reading.language})")

    try:
        result = await client.get_suggestion(reading)
    except SuggestionError as e:
        logger.error(f"Suggestion failed: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get suggestion: {e}"
        ) from e

    logger.info(f"Suggestion complete: {len(result.text)} chars")
    return SuggestionResponse(suggestion=result.text)
