"""
Pydantic Schemas for Request/Response Validation

Field names are snake_case in Python and camelCase on the wire
(``customerName``, ``totalPrice``...), matching existing clients.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from carbon_trace.database import SQLITE_MAX_INTEGER
from carbon_trace.services.ai.base import PromptKind


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemCreate(CamelModel):
    """Single item in an order."""
    item_name: str = Field(..., examples=["Bamboo Toothbrush"])
    unit_price: float = Field(..., examples=[4.5])
    quantity: int = Field(
        ..., ge=-SQLITE_MAX_INTEGER - 1, le=SQLITE_MAX_INTEGER, examples=[2]
    )
    carbon_saved: float = Field(..., examples=[0.3])


class OrderCreate(CamelModel):
    """
    Request schema for creating or replacing an order.

    Only types and the storable integer range are checked here; value rules (non-empty names,
    non-negative prices, positive quantities) are enforced by the database.
    """
    customer_name: str = Field(..., examples=["Alice"])
    items: List[OrderItemCreate] = Field(default_factory=list)
    total_price: float = Field(..., examples=[9.0])
    total_carbon_saved: float = Field(..., examples=[0.6])


class PromptRequest(BaseModel):
    """Free-text prompt for the AI proxy."""
    prompt: str = Field(..., examples=["Estimate the carbon footprint of a cotton t-shirt"])
    kind: Optional[PromptKind] = Field(
        None,
        description="Explicit prompt category; overrides substring matching for fallbacks",
    )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderItemResponse(CamelModel):
    """Line item as returned to clients."""
    id: int
    item_name: str
    unit_price: float
    quantity: int
    carbon_saved: float


class OrderResponse(CamelModel):
    """Order with its embedded items."""
    id: int
    customer_name: str
    total_price: float
    total_carbon_saved: float
    timestamp: datetime
    items: List[OrderItemResponse] = Field(default_factory=list)


class OrderListEnvelope(BaseModel):
    message: str = "success"
    data: List[OrderResponse]


class OrderEnvelope(BaseModel):
    message: str = "success"
    data: Optional[OrderResponse]


class ChangesEnvelope(BaseModel):
    message: str
    changes: int


class PromptResponse(BaseModel):
    response: str


class PromptErrorResponse(BaseModel):
    error: str
    response: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str


class HealthResponse(CamelModel):
    """Health check response."""
    status: str
    timestamp: datetime
    has_api_key: bool
