import logging
from typing import List, Optional

from tortoise.exceptions import IntegrityError

from ...common.pagination import Page
from ...core.errors import Conflict, InternalError, NotFound, ValidationFailed
from ..auth.schemas import TokenClaims
from .models import Category, Product
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCommentSummary,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


def _to_category_response(category: Category) -> CategoryResponse:
    """Converts a Category model instance to a CategoryResponse schema."""
    return CategoryResponse.model_validate(category)


def _to_product_response(product: Product, with_comments: bool = False) -> ProductResponse:
    """Converts a Product model instance to a ProductResponse schema.

    ``with_comments`` must only be set when ``comments`` was prefetched.
    """
    comments = []
    if with_comments:
        comments = [ProductCommentSummary.model_validate(c) for c in product.comments]

    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        img=product.img,
        author_id=product.author_id,
        category_id=product.category_id,
        comments=comments,
    )


async def _get_category_or_404(category_id: int) -> Category:
    category = await Category.get_or_none(id=category_id)
    if not category:
        raise NotFound("Category not found")
    return category


async def _get_product_or_404(product_id: int) -> Product:
    product = await Product.get_or_none(id=product_id)
    if not product:
        raise NotFound("This product not found")
    return product


# --- Categories ---

async def create_category(category_in: CategoryCreate) -> CategoryResponse:
    """
    Creates a new category.

    Args:
        category_in: The data for the new category.

    Returns:
        The created category.
    """
    if await Category.filter(name=category_in.name).exists():
        raise Conflict("This category already created")
    try:
        category = await Category.create(**category_in.model_dump())
    except IntegrityError:
        raise Conflict("This category already created")
    except Exception as e:
        logger.error(f"Error creating category: {e}", exc_info=True)
        raise InternalError("Error in create category")
    logger.info(f"Category created: {category}")
    return _to_category_response(category)


async def list_categories(page: Page) -> List[CategoryResponse]:
    """
    Lists categories.

    Returns:
        The categories on the requested page.
    """
    categories = await Category.all().order_by("id").offset(page.skip).limit(page.limit)
    return [_to_category_response(cat) for cat in categories]


async def get_category(category_id: int) -> CategoryResponse:
    category = await _get_category_or_404(category_id)
    return _to_category_response(category)


async def update_category(category_id: int, category_in: CategoryUpdate) -> CategoryResponse:
    """
    Updates a category.

    Args:
        category_id: The ID of the category to update.
        category_in: The new data for the category.

    Returns:
        The updated category.
    """
    category = await _get_category_or_404(category_id)
    update_data = category_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No fields for update")
    new_name = update_data.get("name")
    if new_name and new_name != category.name and await Category.filter(name=new_name).exists():
        raise Conflict("This category already created")
    for key, value in update_data.items():
        setattr(category, key, value)
    try:
        await category.save()
    except IntegrityError:
        raise Conflict("This category already created")
    except Exception as e:
        logger.error(f"Error updating category: {e}", exc_info=True)
        raise InternalError("Error in updated category")
    logger.info(f"Category updated: {category}")
    return _to_category_response(category)


async def delete_category(category_id: int) -> None:
    """
    Deletes a category and, through the foreign key, its products.

    Args:
        category_id: The ID of the category to delete.
    """
    category = await _get_category_or_404(category_id)
    await category.delete()
    logger.info(f"Category deleted: {category_id}")


# --- Products ---

async def create_product(product_in: ProductCreate, author: TokenClaims) -> ProductResponse:
    """
    Creates a new product listed by ``author``.

    Args:
        product_in: The data for the new product.
        author: Claims of the admin or seller creating it.

    Returns:
        The created product.
    """
    await _get_category_or_404(product_in.category_id)
    try:
        product = await Product.create(**product_in.model_dump(), author_id=author.id)
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise InternalError("Error creating product")
    logger.info(f"Product created: {product} by user {author.id}")
    return _to_product_response(product)


async def list_products(page: Page, category_id: Optional[int] = None) -> List[ProductResponse]:
    """
    Lists products with their comments, optionally restricted to one category.

    Args:
        page: Row window resolved from the ``limit``/``offset`` query.
        category_id: The ID of the category to filter by.

    Returns:
        The products on the requested page.
    """
    query = Product.all()
    if category_id is not None:
        query = query.filter(category_id=category_id)
    products = await query.order_by("id").offset(page.skip).limit(page.limit).prefetch_related("comments")
    return [_to_product_response(p, with_comments=True) for p in products]


async def get_product(product_id: int) -> ProductResponse:
    product = await _get_product_or_404(product_id)
    await product.fetch_related("comments")
    return _to_product_response(product, with_comments=True)


async def update_product(product_id: int, product_in: ProductUpdate) -> ProductResponse:
    """
    Updates a product. Any admin or seller may do so, not only its author.

    Args:
        product_id: The ID of the product to update.
        product_in: The new data for the product.

    Returns:
        The updated product.
    """
    product = await _get_product_or_404(product_id)
    update_data = product_in.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationFailed("No fields for update")

    if "category_id" in update_data:
        if update_data["category_id"] is None:
            raise ValidationFailed("category_id: cannot be null")
        await _get_category_or_404(update_data["category_id"])
    for required in ("name", "description", "price"):
        if required in update_data and update_data[required] is None:
            raise ValidationFailed(f"{required}: cannot be null")

    product.update_from_dict(update_data)
    try:
        await product.save()
    except Exception as e:
        logger.error(f"Error updating product: {e}", exc_info=True)
        raise InternalError("Error updating product")
    logger.info(f"Product updated: {product}")
    return _to_product_response(product)


async def delete_product(product_id: int) -> None:
    product = await _get_product_or_404(product_id)
    await product.delete()
    logger.info(f"Deleted product {product_id}")
