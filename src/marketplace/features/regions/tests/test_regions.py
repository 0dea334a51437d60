import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from marketplace.common.pagination import Page
from marketplace.features.auth.models import User
from marketplace.features.catalog.models import Category, Product
from marketplace.features.comments.models import Comment
from marketplace.features.orders.models import Order, OrderItem
from marketplace.features.regions import service
from marketplace.features.regions.models import Region
from marketplace.features.regions.schemas import RegionCreate, RegionUpdate


async def test_create_region():
    region = await service.create_region(RegionCreate(name="Samarkand"))
    assert region.id is not None
    assert region.name == "Samarkand"


async def test_create_duplicate_region_conflicts():
    with pytest.raises(HTTPException) as exc_info:
        await service.create_region(RegionCreate(name="Tashkent"))
    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "Region must be unique!"


async def test_list_regions_includes_users():
    regions = await service.list_regions(Page(limit=10, skip=0))
    assert len(regions) == 1
    assert {u.email for u in regions[0].users} == {
        "admin@example.com", "seller@example.com", "buyer@example.com", "pending@example.com",
    }


async def test_list_regions_pages():
    for name in ["Bukhara", "Khiva", "Namangan"]:
        await Region.create(name=name)
    first = await service.list_regions(Page(limit=2, skip=0))
    second = await service.list_regions(Page(limit=2, skip=2))
    assert [r.name for r in first] == ["Tashkent", "Bukhara"]
    assert [r.name for r in second] == ["Khiva", "Namangan"]
    assert await service.list_regions(Page(limit=2, skip=10)) == []


async def test_update_region(region):
    updated = await service.update_region(region.id, RegionUpdate(name="Toshkent"))
    assert updated.name == "Toshkent"
    assert (await Region.get(id=region.id)).name == "Toshkent"


async def test_update_region_without_fields(region):
    with pytest.raises(HTTPException) as exc_info:
        await service.update_region(region.id, RegionUpdate())
    assert exc_info.value.status_code == 400


async def test_update_region_to_taken_name(region):
    await Region.create(name="Fergana")
    with pytest.raises(HTTPException) as exc_info:
        await service.update_region(region.id, RegionUpdate(name="Fergana"))
    assert exc_info.value.status_code == 409


async def test_missing_region_is_not_found():
    with pytest.raises(HTTPException) as exc_info:
        await service.get_region(9999)
    assert exc_info.value.status_code == 404
    with pytest.raises(HTTPException):
        await service.delete_region(9999)


async def test_delete_region_cascades(region, seller_user, buyer_user):
    category = await Category.create(name="Fruits")
    product = await Product.create(
        name="Apple", description="Red apple", price=10, author=seller_user, category=category
    )
    await Comment.create(text="Tasty", star=5, product=product, user=buyer_user)
    order = await Order.create(user=buyer_user)
    await OrderItem.create(order=order, product=product, count=2)

    await service.delete_region(region.id)

    assert await Region.filter(id=region.id).count() == 0
    assert await User.all().count() == 0
    assert await Product.all().count() == 0
    assert await Comment.all().count() == 0
    assert await Order.all().count() == 0
    assert await OrderItem.all().count() == 0
    # Categories are not owned by users.
    assert await Category.all().count() == 1


def test_region_routes(admin_client: TestClient):
    response = admin_client.post("/regions", json={"name": "Andijan"})
    assert response.status_code == 201, response.text
    region_id = response.json()["id"]

    assert admin_client.get(f"/regions/{region_id}").json()["name"] == "Andijan"

    response = admin_client.get("/regions/all", params={"limit": 1, "offset": 2})
    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Andijan"]

    response = admin_client.patch(f"/regions/{region_id}", json={"name": "Andijon"})
    assert response.json()["name"] == "Andijon"

    response = admin_client.delete(f"/regions/{region_id}")
    assert response.json() == {"message": "Region deleted successfully"}
    assert admin_client.get(f"/regions/{region_id}").status_code == 404


def test_region_name_is_validated(admin_client: TestClient):
    response = admin_client.post("/regions", json={"name": "X"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("name")
