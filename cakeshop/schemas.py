"""
Request schemas

Every JSON body is validated against one of these pydantic models before any
write. Field names are camelCase on the wire and snake_case in Python.
"""
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import (AfterValidator, BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter,
                      ValidationError, field_validator)
from pydantic.alias_generators import to_camel

from cakeshop.errors import ValidationFailed
from cakeshop.models.order import OrderStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Accept an absolute http(s) URL and keep it exactly as submitted"""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError('Must be a valid URL') from None
    return value


Url = Annotated[str, AfterValidator(_check_url)]

# Prices are whole cents so that stored line prices always add up to the stored total
Price = Annotated[Decimal, Field(gt=0, decimal_places=2)]


def parse(schema, payload):
    """Validate a request payload, raising ``ValidationFailed`` with field errors"""
    try:
        return schema.model_validate(payload if payload is not None else {})
    except ValidationError as e:
        raise ValidationFailed.from_pydantic(e) from e


# Identity

class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(CamelModel):
    email: EmailStr


class NewPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)
    confirm_password: str

    @field_validator('confirm_password')
    @classmethod
    def passwords_match(cls, value, info):
        if 'password' in info.data and value != info.data['password']:
            raise ValueError("Passwords don't match")
        return value


class ProfileUpdateRequest(CamelModel):
    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)
    email: EmailStr


# Catalog

class ProductRequest(CamelModel):
    name: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    price: Price
    category: str = Field(..., min_length=1)
    image: Url
    images: List[Url] = Field(default_factory=list)
    stock: int = Field(..., ge=0)


class ReviewRequest(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=500)


# Cart and checkout

class CartAddRequest(CamelModel):
    product_id: int


class CartQuantityRequest(CamelModel):
    quantity: int


class CheckoutItem(CamelModel):
    product_id: int
    name: str
    price: Price
    quantity: int = Field(..., gt=0)


class CheckoutRequest(CamelModel):
    items: List[CheckoutItem] = Field(..., min_length=1)


# Orders

class ShippingAddress(CamelModel):
    full_name: str = Field(..., min_length=2)
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    state: str = Field(..., min_length=2)
    zip_code: str = Field(..., pattern=r'^\d{5}(-\d{4})?$')
    country: str = Field(..., min_length=2)
    phone: str = Field(..., pattern=r'^\+?[\d\s\-()]+$')


class OrderItemRequest(CamelModel):
    product_id: int
    product_name: str
    product_image: Optional[str] = None
    quantity: int = Field(..., gt=0)
    price: Price


class CreateOrderRequest(CamelModel):
    items: List[OrderItemRequest] = Field(..., min_length=1)
    shipping_address: ShippingAddress
    payment_intent_id: str = Field(..., min_length=1)


class UpdateOrderStatusRequest(CamelModel):
    status: OrderStatus
