import asyncio

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from conftest import claims_for
from marketplace.common.pagination import Page
from marketplace.features.catalog.models import Category, Product
from marketplace.features.comments import service
from marketplace.features.comments.models import Comment
from marketplace.features.comments.schemas import CommentCreate, CommentUpdate


@pytest.fixture
async def product(seller_user) -> Product:
    category = await Category.create(name="Fruits")
    return await Product.create(
        name="Apple", description="Red apple", price=10, author=seller_user, category=category
    )


async def test_create_comment_owned_by_caller(product, buyer_user):
    comment = await service.create_comment(
        CommentCreate(text="Tasty", star=4.5, product_id=product.id), claims_for(buyer_user)
    )
    assert comment.user_id == buyer_user.id
    assert comment.product_id == product.id
    assert comment.star == 4.5


async def test_comment_on_missing_product(buyer_user):
    with pytest.raises(HTTPException) as exc_info:
        await service.create_comment(CommentCreate(text="Tasty", star=4, product_id=9999), claims_for(buyer_user))
    assert exc_info.value.status_code == 404


async def test_list_product_comments(product, buyer_user, seller_user):
    await Comment.create(text="First", star=3, product=product, user=buyer_user)
    await Comment.create(text="Second", star=5, product=product, user=seller_user)
    comments = await service.list_product_comments(product.id, Page(limit=10, skip=0))
    assert [c.text for c in comments] == ["First", "Second"]
    assert await service.list_product_comments(9999, Page(limit=10, skip=0)) == []


async def test_only_owner_can_update(product, buyer_user, seller_user):
    comment = await Comment.create(text="Mine", star=3, product=product, user=buyer_user)
    with pytest.raises(HTTPException) as exc_info:
        await service.update_comment(comment.id, CommentUpdate(text="Hacked"), claims_for(seller_user))
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "It is not your comment"

    await comment.refresh_from_db()
    assert comment.text == "Mine"

    updated = await service.update_comment(comment.id, CommentUpdate(star=1), claims_for(buyer_user))
    assert updated.star == 1
    assert updated.text == "Mine"


async def test_only_owner_can_delete(product, buyer_user, admin_user):
    comment = await Comment.create(text="Mine", star=3, product=product, user=buyer_user)
    with pytest.raises(HTTPException) as exc_info:
        await service.delete_comment(comment.id, claims_for(admin_user))
    assert exc_info.value.status_code == 400
    assert await Comment.filter(id=comment.id).exists()

    await service.delete_comment(comment.id, claims_for(buyer_user))
    assert not await Comment.filter(id=comment.id).exists()


async def test_concurrent_updates_last_write_wins(product, buyer_user):
    comment = await Comment.create(text="Original", star=3, product=product, user=buyer_user)
    claims = claims_for(buyer_user)

    await asyncio.gather(
        service.update_comment(comment.id, CommentUpdate(text="First", star=1), claims),
        service.update_comment(comment.id, CommentUpdate(text="Second", star=2), claims),
    )

    await comment.refresh_from_db()
    assert (comment.text, comment.star) in {("First", 1), ("Second", 2)}


async def test_comment_routes(buyer_client: TestClient, seller_client: TestClient, product):
    response = buyer_client.post("/comments", json={"text": "Great", "star": 5, "product_id": product.id})
    assert response.status_code == 201, response.text
    comment_id = response.json()["id"]

    assert buyer_client.get(f"/comments/{comment_id}").json()["text"] == "Great"
    assert len(buyer_client.get(f"/comments/product/{product.id}").json()) == 1

    response = seller_client.patch(f"/comments/{comment_id}", json={"text": "Bad"})
    assert response.status_code == 400
    assert response.json() == {"message": "It is not your comment"}

    response = buyer_client.delete(f"/comments/{comment_id}")
    assert response.json() == {"message": "Comment successfully deleted"}
    assert buyer_client.get(f"/comments/{comment_id}").status_code == 404


def test_star_out_of_range(buyer_client: TestClient):
    response = buyer_client.post("/comments", json={"text": "Great", "star": 6, "product_id": 1})
    assert response.status_code == 400
    assert response.json()["message"].startswith("star")
