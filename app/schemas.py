# product_api/app/schemas.py

"""
Pydantic schemas for the Product API.
These define the data structures for incoming requests and outgoing responses.
The request schemas carry the field rules every product write must pass;
failures are raised as custom errors whose message is returned verbatim
to the client (see app/validation.py).
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

INVALID_ID = "Invalid id"
NAME_EMPTY = "Product name cannot be empty"
NAME_NOT_TEXT = "Product name must be text"
PRICE_EMPTY = "Product price cannot be empty"
PRICE_INVALID = "Invalid price"
AVAILABILITY_INVALID = "Invalid availability value"

# Message for a body field that was not sent at all.
MISSING_FIELD_MESSAGES = {
    "name": NAME_EMPTY,
    "price": PRICE_EMPTY,
    "availability": AVAILABILITY_INVALID,
}

# Bounds of the Numeric(10, 2) price column.
PRICE_STEP = Decimal("0.01")
PRICE_LIMIT = Decimal("100000000")

_BOOLEAN_STRINGS = {"true": True, "1": True, "false": False, "0": False}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# Schema for creating a new product.
# Used in POST /api/products/ endpoint.
class ProductCreate(BaseModel):
    name: str = Field(..., max_length=255, description="Name of the product.")
    price: Decimal = Field(
        ...,
        max_digits=10,
        decimal_places=2,
        description="Price of the product. Must be greater than 0, at most 2 decimal places.",
    )

    @field_validator("name", mode="before")
    @classmethod
    def name_not_empty(cls, value):
        if _is_blank(value):
            raise PydanticCustomError("name_empty", NAME_EMPTY)
        if not isinstance(value, str):
            raise PydanticCustomError("name_type", NAME_NOT_TEXT)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def price_positive_number(cls, value):
        if _is_blank(value):
            raise PydanticCustomError("price_empty", PRICE_EMPTY)
        # JSON booleans are not prices even though Python treats them as ints
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise PydanticCustomError("price_invalid", PRICE_INVALID)
        try:
            # str() keeps floats at their shortest repr: 0.1 stays 0.1
            price = Decimal(str(value).strip())
        except InvalidOperation:
            raise PydanticCustomError("price_invalid", PRICE_INVALID)
        if not price.is_finite() or price <= 0 or price >= PRICE_LIMIT:
            raise PydanticCustomError("price_invalid", PRICE_INVALID)
        # No rounding: 0.001 must not be stored as 0.00
        if price != price.quantize(PRICE_STEP):
            raise PydanticCustomError("price_invalid", PRICE_INVALID)
        return price.quantize(PRICE_STEP)


# Schema for replacing a product.
# PUT is a full replace, so availability is required alongside name and price.
# Used in PUT /api/products/{id} endpoint.
class ProductUpdate(ProductCreate):
    availability: bool = Field(..., description="Whether the product is available.")

    @field_validator("availability", mode="before")
    @classmethod
    def availability_boolean(cls, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _BOOLEAN_STRINGS:
            return _BOOLEAN_STRINGS[value.strip().lower()]
        raise PydanticCustomError("availability_invalid", AVAILABILITY_INVALID)


# List view of a product: no availability, no timestamps.
# Used in GET /api/products/ responses.
class ProductSummary(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str = Field(..., description="Name of the product.")
    price: float = Field(..., description="Price of the product.")

    model_config = ConfigDict(from_attributes=True)


# Full representation of a product.
# Used in GET by id, POST, PUT and PATCH responses.
class ProductResponse(ProductSummary):
    availability: bool = Field(..., description="Whether the product is available.")
    created_at: Optional[datetime] = Field(None, description="Timestamp when the product was created.")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the product was last updated.")


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    detail: str


class ValidationErrorItem(BaseModel):
    location: str = Field(..., description="Where the value came from: path or body.")
    field: Optional[str] = Field(None, description="Name of the offending field.")
    msg: str


class ValidationErrorResponse(BaseModel):
    errors: List[ValidationErrorItem]
