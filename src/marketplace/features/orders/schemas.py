from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime


class OrderCreateSchema(BaseModel):
    product_id: List[int] = Field(..., min_length=1, description="IDs of the products to order, one line each")
    count: int = Field(..., ge=1, description="Units ordered for every listed product")


class OrderUpdateSchema(BaseModel):
    user_id: Optional[int] = Field(None, description="Reassign the order to another user")
    product_id: Optional[List[int]] = Field(None, min_length=1, description="Replace the order lines with these products")
    count: Optional[int] = Field(None, ge=1, description="New count for every order line")


class OrderProductSchema(BaseModel):
    id: int
    name: str
    price: int
    img: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemPublicSchema(BaseModel):
    id: int
    product_id: int
    count: int
    product: Optional[OrderProductSchema] = None

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class OrderPublicSchema(BaseModel):
    id: int
    user_id: int
    items: List[OrderItemPublicSchema]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
