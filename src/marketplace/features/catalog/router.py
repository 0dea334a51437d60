"""API routes for categories and products."""
from fastapi import APIRouter, status, Depends
from typing import List, Annotated

from ...common.pagination import Page, pagination
from ...common.schemas import MessageResponse
from ..auth.security import AdminOrSeller, AdminUser
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from . import service

categories_router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    responses={404: {"description": "Not found"}},
)

products_router = APIRouter(
    prefix="/products",
    tags=["Products"],
    responses={404: {"description": "Not found"}},
)


# --- Category Endpoints ---
@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new category",
)
async def create_category(category_in: CategoryCreate, current_admin: AdminUser):
    return await service.create_category(category_in)


@categories_router.get("/all", response_model=List[CategoryResponse], summary="List categories")
async def list_categories(page: Annotated[Page, Depends(pagination)]):
    return await service.list_categories(page)


@categories_router.get("/{category_id}", response_model=CategoryResponse, summary="Get a specific category")
async def get_category(category_id: int):
    return await service.get_category(category_id)


@categories_router.patch("/{category_id}", response_model=CategoryResponse, summary="Update a category")
async def update_category(category_id: int, category_in: CategoryUpdate, current_admin: AdminUser):
    return await service.update_category(category_id, category_in)


@categories_router.delete("/{category_id}", response_model=MessageResponse, summary="Delete a category")
async def delete_category(category_id: int, current_admin: AdminUser):
    await service.delete_category(category_id)
    return {"message": "Category successfully deleted"}


# --- Product Endpoints ---
@products_router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
async def create_product(product_in: ProductCreate, current_user: AdminOrSeller):
    return await service.create_product(product_in, current_user)


@products_router.get("/all", response_model=List[ProductResponse], summary="List products with comments")
async def list_products(page: Annotated[Page, Depends(pagination)]):
    return await service.list_products(page)


@products_router.get(
    "/category/{category_id}",
    response_model=List[ProductResponse],
    summary="List the products of one category",
)
async def list_products_by_category(category_id: int, page: Annotated[Page, Depends(pagination)]):
    return await service.list_products(page, category_id=category_id)


@products_router.get("/{product_id}", response_model=ProductResponse, summary="Get a specific product")
async def get_product(product_id: int):
    return await service.get_product(product_id)


@products_router.patch("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(product_id: int, product_in: ProductUpdate, current_user: AdminOrSeller):
    return await service.update_product(product_id, product_in)


@products_router.delete("/{product_id}", response_model=MessageResponse, summary="Delete a product")
async def delete_product(product_id: int, current_user: AdminOrSeller):
    await service.delete_product(product_id)
    return {"message": "Product deleted"}
