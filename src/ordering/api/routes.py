"""FastAPI endpoints for the Ordering domain."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AdminOrderList,
    OrderEnvelope,
    OrderList,
    OrderResponse,
    PlaceOrderRequest,
    SellerStatsResponse,
    UpdateOrderStatusRequest,
)
from ordering.order.order import Order
from ordering.order.placement import place_order
from ordering.order.reports import all_orders, seller_recent_orders, seller_stats
from ordering.order.status import change_status
from shared.access import Permission, Principal, requires
from shared.validation import read_payload, require_valid

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/new", status_code=201, response_model=OrderEnvelope)
async def create_order(
    request: Request, principal: Principal = Depends(requires(Permission.PLACE_ORDERS))
) -> OrderEnvelope:
    body = require_valid(PlaceOrderRequest, await read_payload(request))
    payment = body.payment_info
    order_id = place_order(
        user_id=principal.user_id,
        items=[{"product_id": item.product, "quantity": item.quantity} for item in body.items],
        shipping_info=body.shipping_info.model_dump(),
        payment_info=(
            {"transaction_id": payment.id, "status": payment.status, "method": payment.method} if payment else None
        ),
    )
    order = current_domain.repository_for(Order).get(order_id)
    return OrderEnvelope(order=OrderResponse.from_order(order))


@order_router.get("/me", response_model=OrderList)
async def my_orders(principal: Principal = Depends(requires(Permission.PLACE_ORDERS))) -> OrderList:
    orders = current_domain.repository_for(Order).for_user(principal.user_id)
    return OrderList(count=len(orders), orders=[OrderResponse.from_order(order) for order in orders])


# --- Reporting endpoints ---


@order_router.get("/admin/all", response_model=AdminOrderList)
async def list_all_orders(principal: Principal = Depends(requires(Permission.MANAGE_ORDERS))) -> AdminOrderList:
    orders, total_amount = all_orders()
    return AdminOrderList(total_amount=total_amount, orders=[OrderResponse.from_order(order) for order in orders])


@order_router.get("/seller/stats", response_model=SellerStatsResponse)
async def get_seller_stats(
    principal: Principal = Depends(requires(Permission.VIEW_SELLER_REPORTS)),
) -> SellerStatsResponse:
    stats = seller_stats(principal.user_id)
    return SellerStatsResponse(
        total_products=stats.total_products,
        total_orders=stats.total_orders,
        total_revenue=stats.total_revenue,
        total_customers=stats.total_customers,
    )


@order_router.get("/seller/recent", response_model=OrderList)
async def get_seller_recent_orders(
    principal: Principal = Depends(requires(Permission.VIEW_SELLER_REPORTS)),
) -> OrderList:
    recent = seller_recent_orders(principal.user_id)
    return OrderList(
        count=len(recent),
        orders=[OrderResponse.from_order(order, items=lines) for order, lines in recent],
    )


# --- Single order endpoints ---


@order_router.put("/admin/{order_id}", response_model=OrderEnvelope)
async def update_order_status(
    order_id: str, request: Request, principal: Principal = Depends(requires(Permission.MANAGE_ORDERS))
) -> OrderEnvelope:
    body = require_valid(UpdateOrderStatusRequest, await read_payload(request))
    change_status(order_id, body.status)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderEnvelope(order=OrderResponse.from_order(order))


@order_router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: str, principal: Principal = Depends(requires(Permission.PLACE_ORDERS))) -> OrderEnvelope:
    order = current_domain.repository_for(Order).get(order_id)
    principal.require_owner_or(order.user_id, Permission.MANAGE_ORDERS, "You are not authorized to view this order")
    return OrderEnvelope(order=OrderResponse.from_order(order))
