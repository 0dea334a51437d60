"""Comment operations. Only the author of a comment may change or remove it."""
import logging
from typing import List

from ...common.pagination import Page
from ...core.errors import InternalError, NotFound, NotYours, ValidationFailed
from ..auth.schemas import TokenClaims
from ..catalog.models import Product
from .models import Comment
from .schemas import CommentCreate, CommentResponse, CommentUpdate

logger = logging.getLogger(__name__)

NOT_YOURS_MESSAGE = "It is not your comment"


def _to_comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse.model_validate(comment)


async def _get_comment_or_404(comment_id: int) -> Comment:
    comment = await Comment.get_or_none(id=comment_id)
    if not comment:
        raise NotFound("Comment not found")
    return comment


def _ensure_owner(comment: Comment, current_user: TokenClaims) -> None:
    if comment.user_id != current_user.id:
        logger.warning(f"User {current_user.id} tried to modify comment {comment.id} of user {comment.user_id}")
        raise NotYours(NOT_YOURS_MESSAGE)


async def list_product_comments(product_id: int, page: Page) -> List[CommentResponse]:
    comments = (
        await Comment.filter(product_id=product_id)
        .order_by("id")
        .offset(page.skip)
        .limit(page.limit)
    )
    return [_to_comment_response(c) for c in comments]


async def get_comment(comment_id: int) -> CommentResponse:
    comment = await _get_comment_or_404(comment_id)
    return _to_comment_response(comment)


async def create_comment(comment_in: CommentCreate, current_user: TokenClaims) -> CommentResponse:
    """
    Creates a comment on a product, owned by the caller.

    Args:
        comment_in: Text, rating and target product.
        current_user: Claims of the authenticated author.

    Returns:
        The created comment.
    """
    if not await Product.filter(id=comment_in.product_id).exists():
        raise NotFound("This product not found")
    try:
        comment = await Comment.create(**comment_in.model_dump(), user_id=current_user.id)
    except Exception as e:
        logger.error(f"Error creating comment: {e}", exc_info=True)
        raise InternalError("Error to post comment")
    logger.info(f"User {current_user.id} commented on product {comment.product_id}")
    return _to_comment_response(comment)


async def update_comment(comment_id: int, comment_in: CommentUpdate, current_user: TokenClaims) -> CommentResponse:
    comment = await _get_comment_or_404(comment_id)
    _ensure_owner(comment, current_user)

    update_data = comment_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No fields for update")
    comment.update_from_dict(update_data)
    await comment.save()
    logger.info(f"Comment {comment.id} updated by user {current_user.id}")
    return _to_comment_response(comment)


async def delete_comment(comment_id: int, current_user: TokenClaims) -> None:
    comment = await _get_comment_or_404(comment_id)
    _ensure_owner(comment, current_user)
    await comment.delete()
    logger.info(f"Comment {comment_id} deleted by user {current_user.id}")
