from fastapi import APIRouter, Depends, status
from typing import List, Annotated

from ...common.pagination import Page, pagination
from ...common.schemas import MessageResponse
from ..auth.security import AdminUser, CurrentUser
from .schemas import OrderCreateSchema, OrderPublicSchema, OrderUpdateSchema
from . import service

router = APIRouter(
    prefix="/order",
    tags=["Orders"],
)


@router.get("/my-orders", response_model=List[OrderPublicSchema])
async def list_my_orders(current_user: CurrentUser):
    return await service.list_my_orders(current_user)


@router.get("/all", response_model=List[OrderPublicSchema])
async def list_all_orders(current_admin: AdminUser, page: Annotated[Page, Depends(pagination)]):
    return await service.list_all_orders(page)


@router.post("", response_model=OrderPublicSchema, status_code=status.HTTP_201_CREATED)
async def create_order(order_data: OrderCreateSchema, current_user: CurrentUser):
    return await service.create_new_order(order_data, current_user)


@router.get("/{order_id}", response_model=OrderPublicSchema)
async def get_order(order_id: int, current_user: CurrentUser):
    return await service.get_order(order_id, current_user)


@router.patch("/{order_id}", response_model=OrderPublicSchema)
async def update_order(order_id: int, order_data: OrderUpdateSchema, current_admin: AdminUser):
    return await service.update_order(order_id, order_data)


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(order_id: int, current_admin: AdminUser):
    await service.delete_order(order_id)
    return {"message": "Order deleted successfully"}
