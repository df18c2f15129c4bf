"""
Pydantic Schemas for Request/Response Validation

Request bodies are validated before a handler runs; a failure is rendered
as a 400 ``ErrorResponse``. Response schemas are built from ORM objects
(``from_attributes``) so the password hash can never leak into a body.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from foodorder.models import Role


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class SignupRequest(BaseModel):
    """Body of POST /signup."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=1, max_length=128, examples=["password123"])


class LoginRequest(BaseModel):
    """Body of POST /login."""
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class OrderCreate(BaseModel):
    """Body of POST /make-order. ``name`` becomes the order owner."""
    name: Optional[str] = Field(None, max_length=100, examples=["Jane Doe"])
    restaurant: Optional[str] = Field(None, max_length=100, examples=["Pizza Palace"])
    food: Optional[str] = Field(None, max_length=100, examples=["Margherita"])
    drink: Optional[str] = Field(None, max_length=100, examples=["Lemonade"])


class OrderUpdate(BaseModel):
    """Body of PATCH /edit-order. Omitted fields are left unchanged."""
    id: int = Field(..., ge=1)
    restaurant: Optional[str] = Field(None, max_length=100)
    food: Optional[str] = Field(None, max_length=100)
    drink: Optional[str] = Field(None, max_length=100)


class MenuCreate(BaseModel):
    """Body of POST /create-menu."""
    restaurant: str = Field(..., min_length=1, max_length=100, examples=["Pizza Palace"])
    food: Optional[str] = Field(None, max_length=100)
    drink: Optional[str] = Field(None, max_length=100)


class MenuUpdate(BaseModel):
    """Body of PATCH /edit-menu. Omitted fields are left unchanged."""
    id: int = Field(..., ge=1)
    restaurant: Optional[str] = Field(None, min_length=1, max_length=100)
    food: Optional[str] = Field(None, max_length=100)
    drink: Optional[str] = Field(None, max_length=100)


class DeleteRequest(BaseModel):
    """Body of DELETE /delete-order and DELETE /delete-menu."""
    id: int = Field(..., ge=1)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserResponse(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class UserEnvelope(BaseModel):
    user: UserResponse


class MenuResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant: str
    food: Optional[str]
    drink: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuEnvelope(BaseModel):
    menu: MenuResponse


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner: str
    user_id: Optional[int]
    restaurant: Optional[str]
    food: Optional[str]
    drink: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderEnvelope(BaseModel):
    order: OrderResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class RootResponse(BaseModel):
    message: str
    version: str
    user: Optional[UserResponse] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime

