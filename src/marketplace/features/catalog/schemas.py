from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime

# --- Category Schemas ---
class CategoryBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, description="Name of the category")

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50, description="New name of the category")

class CategoryResponse(CategoryBase):
    id: int
    created_at: datetime.datetime = Field(..., description="Timestamp of when the category was created")
    updated_at: datetime.datetime = Field(..., description="Timestamp of when the category was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )

# --- Product Schemas ---
class ProductBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, description="Name of the product")
    description: str = Field(..., min_length=2, max_length=150, description="Short product description")
    price: int = Field(..., ge=0, description="Price of the product")
    img: Optional[str] = Field(None, max_length=255, description="Image reference returned by /uploads")

class ProductCreate(ProductBase):
    category_id: int = Field(..., description="ID of the category to assign to the product")

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50, description="New name of the product")
    description: Optional[str] = Field(None, min_length=2, max_length=150, description="New description")
    price: Optional[int] = Field(None, ge=0, description="New price of the product")
    img: Optional[str] = Field(None, max_length=255, description="New image reference")
    category_id: Optional[int] = Field(None, description="ID of the new category to assign to the product")

class ProductCommentSummary(BaseModel):
    id: int
    text: str
    star: float
    user_id: int

    model_config = ConfigDict(from_attributes=True)

class ProductResponse(ProductBase):
    id: int
    author_id: int = Field(..., description="ID of the user who listed the product")
    category_id: int
    comments: List[ProductCommentSummary] = Field(default_factory=list, description="Comments left on the product")

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )
