"""Pydantic request/response schemas for the storefront API.

These are separate from Protean commands (anti-corruption pattern). The
client speaks camelCase; field names here stay snake_case and are aliased.
Fields the domain validates itself are optional so that its messages reach
the client unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
class SignUpRequest(CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    address: str | None = None
    mobile: str | None = None


class CredentialsRequest(CamelModel):
    email: str | None = None
    password: str | None = None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    quantity: int | None = None
    status: str | None = None
    images: list[str] | None = None


class UpdateProductRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    quantity: int | None = None
    images: list[str] | None = None


class ChangeProductStatusRequest(CamelModel):
    status: str | None = None  # Omit to toggle


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    user_id: str | None = None
    product_id: str | None = None
    quantity: int = 1


class UpdateCartQuantityRequest(CamelModel):
    quantity: int | None = None


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class UpdateCheckoutStatusRequest(CamelModel):
    status: str | None = None


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------
class SubmitOrderFeedbackRequest(CamelModel):
    feedback: str | None = None
    rating: int | None = None
    user_id: str | None = None


class UpdateOrderFeedbackRequest(CamelModel):
    feedback: str | None = None
    rating: int | None = None


class FeedbackRequest(CamelModel):
    rating: int | None = None
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    success: bool = True
    message: str
