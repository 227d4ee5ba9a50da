"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from shared.validation import NonEmptyStr, bounded_text

AddressLine = bounded_text(255)
ShortText = bounded_text(100)
Code = bounded_text(20)

# --- Request Schemas ---


class OrderItemRequest(BaseModel):
    product: NonEmptyStr
    quantity: int = Field(..., ge=1)
    # Accepted for compatibility with cart payloads; the catalogue price is used.
    price: float | None = None


class ShippingInfoRequest(BaseModel):
    address: AddressLine
    city: ShortText
    phone_number: Code
    postal_code: Code
    country: ShortText


class PaymentInfoRequest(BaseModel):
    id: str | None = Field(None, max_length=255)
    status: str | None = Field(None, max_length=50)
    method: str | None = Field(None, max_length=50)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product": "3f1c2a9e-0000-4000-8000-000000000001", "quantity": 2}],
                    "shipping_info": {
                        "address": "123 Elm Street",
                        "city": "Springfield",
                        "phone_number": "5550123",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "payment_info": {"id": "pay_123", "status": "succeeded"},
                }
            ]
        }
    }

    items: list[OrderItemRequest] = Field(..., min_length=1)
    shipping_info: ShippingInfoRequest
    payment_info: PaymentInfoRequest | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: Literal["Processing", "Shipped", "Delivered"]


# --- Response Schemas ---


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    image_url: str | None = None

    @classmethod
    def from_item(cls, item) -> OrderItemResponse:
        return cls(
            product_id=str(item.product_id),
            name=item.name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            image_url=item.image_url,
        )


class ShippingInfoResponse(BaseModel):
    address: str
    city: str
    phone_number: str
    postal_code: str
    country: str


class PaymentInfoResponse(BaseModel):
    id: str | None = None
    status: str | None = None
    method: str | None = None


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    shipping_info: ShippingInfoResponse
    payment_info: PaymentInfoResponse | None = None
    total_amount: float
    status: str
    created_at: datetime | None = None
    delivered_at: datetime | None = None

    @classmethod
    def from_order(cls, order, items=None) -> OrderResponse:
        shipping = order.shipping_info
        payment = order.payment_info
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[OrderItemResponse.from_item(item) for item in (order.items if items is None else items)],
            shipping_info=ShippingInfoResponse(
                address=shipping.address,
                city=shipping.city,
                phone_number=shipping.phone_number,
                postal_code=shipping.postal_code,
                country=shipping.country,
            ),
            payment_info=(
                PaymentInfoResponse(id=payment.transaction_id, status=payment.status, method=payment.method)
                if payment
                else None
            ),
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
            delivered_at=order.delivered_at,
        )


class OrderEnvelope(BaseModel):
    success: bool = True
    order: OrderResponse


class OrderList(BaseModel):
    success: bool = True
    count: int
    orders: list[OrderResponse]


class AdminOrderList(BaseModel):
    success: bool = True
    total_amount: float
    orders: list[OrderResponse]


class SellerStatsResponse(BaseModel):
    success: bool = True
    total_products: int
    total_orders: int
    total_revenue: float
    total_customers: int
