from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from ...common.pagination import Page, pagination
from ...common.schemas import MessageResponse
from ..auth.security import CurrentUser
from . import service
from .schemas import CommentCreate, CommentResponse, CommentUpdate

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)


@router.get("/product/{product_id}", response_model=List[CommentResponse])
async def list_product_comments(
    product_id: int,
    current_user: CurrentUser,
    page: Annotated[Page, Depends(pagination)],
):
    return await service.list_product_comments(product_id, page)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, current_user: CurrentUser):
    return await service.get_comment(comment_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(comment_in: CommentCreate, current_user: CurrentUser):
    return await service.create_comment(comment_in, current_user)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(comment_id: int, comment_in: CommentUpdate, current_user: CurrentUser):
    return await service.update_comment(comment_id, comment_in, current_user)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(comment_id: int, current_user: CurrentUser):
    await service.delete_comment(comment_id, current_user)
    return {"message": "Comment successfully deleted"}
