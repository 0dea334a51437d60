import logging
from typing import List

from tortoise.transactions import in_transaction

from ...common.pagination import Page
from ...core.errors import Forbidden, NotFound, ValidationFailed
from ..auth.models import Role, User
from ..auth.schemas import TokenClaims
from ..catalog.models import Product
from .models import Order, OrderItem
from .schemas import (
    OrderCreateSchema,
    OrderItemPublicSchema,
    OrderProductSchema,
    OrderPublicSchema,
    OrderUpdateSchema,
)

logger = logging.getLogger(__name__)

ORDER_RELATIONS = ("items__product",)


async def _to_order_public_schema(order: Order) -> OrderPublicSchema:
    # Ensure items__product is prefetched before calling this
    items_resp = []
    for item_model in order.items:
        product = item_model.product
        items_resp.append(OrderItemPublicSchema(
            id=item_model.id,
            product_id=item_model.product_id,
            count=item_model.count,
            product=OrderProductSchema.model_validate(product) if product else None,
        ))

    return OrderPublicSchema(
        id=order.id,
        user_id=order.user_id,
        items=items_resp,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


async def _ensure_products_exist(product_ids: List[int], conn) -> None:
    wanted = set(product_ids)
    found = set(await Product.filter(id__in=list(wanted)).using_db(conn).values_list("id", flat=True))
    missing = sorted(wanted - found)
    if missing:
        raise NotFound(f"Product {missing[0]} not found.")


async def _get_full_order(order_id: int) -> Order:
    order = await Order.get_or_none(id=order_id).prefetch_related(*ORDER_RELATIONS)
    if not order:
        raise NotFound("Order not found")
    return order


async def create_new_order(order_data: OrderCreateSchema, current_user: TokenClaims) -> OrderPublicSchema:
    """Creates an order for the caller with one line per listed product, all or nothing."""
    async with in_transaction() as conn:
        await _ensure_products_exist(order_data.product_id, conn)
        order = await Order.create(user_id=current_user.id, using_db=conn)
        for product_id in order_data.product_id:
            await OrderItem.create(
                order=order, product_id=product_id, count=order_data.count, using_db=conn
            )
        # Transaction commits automatically

    logger.info(f"User {current_user.id} created new order {order.id}")
    full_order = await _get_full_order(order.id)
    return await _to_order_public_schema(full_order)


async def list_my_orders(current_user: TokenClaims) -> List[OrderPublicSchema]:
    orders = (
        await Order.filter(user_id=current_user.id)
        .order_by("-created_at", "-id")
        .prefetch_related(*ORDER_RELATIONS)
    )
    logger.info(f"User {current_user.id} fetched their orders")
    return [await _to_order_public_schema(order) for order in orders]


async def list_all_orders(page: Page) -> List[OrderPublicSchema]:
    orders = (
        await Order.all()
        .order_by("-created_at", "-id")
        .offset(page.skip)
        .limit(page.limit)
        .prefetch_related(*ORDER_RELATIONS)
    )
    return [await _to_order_public_schema(order) for order in orders]


async def get_order(order_id: int, current_user: TokenClaims) -> OrderPublicSchema:
    order = await _get_full_order(order_id)
    # Admin can see any order, regular users only their own.
    if current_user.role != Role.ADMIN and order.user_id != current_user.id:
        raise Forbidden("Not authorized to access this order.")
    return await _to_order_public_schema(order)


async def update_order(order_id: int, order_data: OrderUpdateSchema) -> OrderPublicSchema:
    """Admin update: reassign the owner, replace the lines, or change every line's count."""
    order = await Order.get_or_none(id=order_id)
    if not order:
        raise NotFound("Order not found")
    update_data = order_data.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No fields for update")

    async with in_transaction() as conn:
        if "user_id" in update_data:
            if not await User.filter(id=update_data["user_id"]).using_db(conn).exists():
                raise NotFound("User not found")
            order.user_id = update_data["user_id"]
            await order.save(using_db=conn)

        if "product_id" in update_data:
            await _ensure_products_exist(update_data["product_id"], conn)
            count = update_data.get("count")
            if count is None:
                first = await OrderItem.filter(order_id=order.id).using_db(conn).first()
                count = first.count if first else 1
            await OrderItem.filter(order_id=order.id).using_db(conn).delete()
            for product_id in update_data["product_id"]:
                await OrderItem.create(order_id=order.id, product_id=product_id, count=count, using_db=conn)
        elif "count" in update_data:
            await OrderItem.filter(order_id=order.id).using_db(conn).update(count=update_data["count"])

    logger.info(f"Admin updated order {order_id}")
    full_order = await _get_full_order(order_id)
    return await _to_order_public_schema(full_order)


async def delete_order(order_id: int) -> None:
    order = await Order.get_or_none(id=order_id)
    if not order:
        raise NotFound("Order not found")
    await order.delete()
    logger.info(f"Admin deleted order {order_id}")
