import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from conftest import claims_for
from marketplace.common.pagination import Page
from marketplace.features.catalog import service
from marketplace.features.catalog.models import Category, Product
from marketplace.features.catalog.schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from marketplace.features.comments.models import Comment


async def make_product(author, category, name="Apple", price=10) -> Product:
    return await Product.create(
        name=name, description=f"Fresh {name.lower()}", price=price, author=author, category=category
    )


async def test_create_and_get_category():
    created = await service.create_category(CategoryCreate(name="Fruits"))
    fetched = await service.get_category(created.id)
    assert fetched.name == "Fruits"


async def test_duplicate_category_conflicts():
    await service.create_category(CategoryCreate(name="Fruits"))
    with pytest.raises(HTTPException) as exc_info:
        await service.create_category(CategoryCreate(name="Fruits"))
    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "This category already created"


async def test_update_missing_category_is_not_found():
    with pytest.raises(HTTPException) as exc_info:
        await service.update_category(9999, CategoryUpdate(name="Nothing"))
    assert exc_info.value.status_code == 404


async def test_delete_category_removes_its_products(seller_user):
    category = await Category.create(name="Fruits")
    await make_product(seller_user, category)
    await service.delete_category(category.id)
    assert await Product.all().count() == 0


async def test_create_product_takes_author_from_token(seller_user):
    category = await Category.create(name="Fruits")
    product = await service.create_product(
        ProductCreate(name="Apple", description="Red apple", price=12, category_id=category.id),
        claims_for(seller_user),
    )
    assert product.author_id == seller_user.id
    assert product.category_id == category.id
    assert product.comments == []


async def test_create_product_in_missing_category(seller_user):
    with pytest.raises(HTTPException) as exc_info:
        await service.create_product(
            ProductCreate(name="Apple", description="Red apple", price=12, category_id=9999),
            claims_for(seller_user),
        )
    assert exc_info.value.status_code == 404


async def test_list_products_by_category_with_comments(seller_user, buyer_user):
    fruits = await Category.create(name="Fruits")
    tools = await Category.create(name="Tools")
    apple = await make_product(seller_user, fruits, "Apple")
    await make_product(seller_user, tools, "Hammer")
    await Comment.create(text="Crunchy", star=4, product=apple, user=buyer_user)

    products = await service.list_products(Page(limit=10, skip=0), category_id=fruits.id)
    assert [p.name for p in products] == ["Apple"]
    assert [c.text for c in products[0].comments] == ["Crunchy"]

    assert len(await service.list_products(Page(limit=10, skip=0))) == 2


async def test_list_products_pages(seller_user):
    category = await Category.create(name="Fruits")
    for i in range(5):
        await make_product(seller_user, category, f"Item {i}")
    page = await service.list_products(Page(limit=2, skip=2))
    assert [p.name for p in page] == ["Item 2", "Item 3"]


async def test_update_product(seller_user):
    category = await Category.create(name="Fruits")
    other = await Category.create(name="Berries")
    product = await make_product(seller_user, category)

    updated = await service.update_product(product.id, ProductUpdate(price=99, category_id=other.id))
    assert updated.price == 99
    assert updated.category_id == other.id
    assert updated.name == "Apple"


async def test_update_product_rejects_null_and_empty(seller_user):
    category = await Category.create(name="Fruits")
    product = await make_product(seller_user, category)
    with pytest.raises(HTTPException) as exc_info:
        await service.update_product(product.id, ProductUpdate())
    assert exc_info.value.status_code == 400
    with pytest.raises(HTTPException) as exc_info:
        await service.update_product(product.id, ProductUpdate(name=None))
    assert exc_info.value.status_code == 400


async def test_delete_missing_product():
    with pytest.raises(HTTPException) as exc_info:
        await service.delete_product(9999)
    assert exc_info.value.detail == "This product not found"


async def test_catalog_routes(admin_client: TestClient, seller_client: TestClient, client: TestClient):
    response = admin_client.post("/categories", json={"name": "Fruits"})
    assert response.status_code == 201
    category_id = response.json()["id"]

    # Categories and products are readable without a token.
    assert client.get("/categories/all").json()[0]["name"] == "Fruits"
    assert client.get(f"/categories/{category_id}").status_code == 200

    response = seller_client.post(
        "/products",
        json={"name": "Apple", "description": "Red apple", "price": 5, "category_id": category_id},
    )
    assert response.status_code == 201, response.text
    product_id = response.json()["id"]

    assert client.get(f"/products/{product_id}").json()["name"] == "Apple"
    assert [p["id"] for p in client.get(f"/products/category/{category_id}").json()] == [product_id]

    response = seller_client.patch(f"/products/{product_id}", json={"price": 7})
    assert response.json()["price"] == 7

    assert seller_client.delete(f"/products/{product_id}").json() == {"message": "Product deleted"}
    assert client.get(f"/products/{product_id}").status_code == 404

    assert seller_client.post("/categories", json={"name": "Tools"}).status_code == 403
    assert admin_client.delete(f"/categories/{category_id}").json() == {"message": "Category successfully deleted"}


def test_buyer_cannot_list_products_for_sale(buyer_client: TestClient):
    response = buyer_client.post(
        "/products", json={"name": "Apple", "description": "Red apple", "price": 5, "category_id": 1}
    )
    assert response.status_code == 403
