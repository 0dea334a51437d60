import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CommentBase(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000, description="Comment body")
    star: float = Field(..., ge=0, le=5, description="Star rating from 0 to 5")


class CommentCreate(CommentBase):
    product_id: int = Field(..., description="ID of the product being reviewed")


class CommentUpdate(BaseModel):
    text: Optional[str] = Field(None, min_length=1, max_length=1000)
    star: Optional[float] = Field(None, ge=0, le=5)


class CommentResponse(CommentBase):
    id: int
    product_id: int
    user_id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
