from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from statuspage.apps.api.openapi import DEFAULT_ERROR_RESPONSES
from statuspage.apps.api.response import SuccessEnvelope, success_response
from statuspage.domain.models import utc_now

router = APIRouter(tags=["health"], responses=DEFAULT_ERROR_RESPONSES)


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


@router.get("/health", response_model=SuccessEnvelope[HealthResponse])
async def health(request: Request) -> dict:
    payload = HealthResponse(status="ok", timestamp=utc_now())
    return success_response(request=request, data=payload)
