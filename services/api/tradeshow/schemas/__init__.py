"""Pydantic schemas for API request/response validation."""

from tradeshow.schemas.common import ErrorResponse
from tradeshow.schemas.portal import (
    PortalCreateRequest,
    PortalCreateResponse,
    PortalIdRequest,
    PortalItemIn,
    PortalStatusRequest,
    PortalSummary,
)

__all__ = [
    "ErrorResponse",
    "PortalCreateRequest",
    "PortalCreateResponse",
    "PortalIdRequest",
    "PortalItemIn",
    "PortalStatusRequest",
    "PortalSummary",
]
