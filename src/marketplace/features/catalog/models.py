"""Data models for the product catalog, including Category and Product."""

from tortoise import fields, models
from ...common.models import TimestampMixin


# Category is defined first so Product can reference it without a forward ref.
class Category(TimestampMixin):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=50, unique=True)

    products: fields.ReverseRelation["Product"]

    def __str__(self):
        return self.name

    class Meta:
        table = "categories"


class Product(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=50)
    description = fields.CharField(max_length=150)
    price = fields.IntField(description="Price in whole currency units")
    img = fields.CharField(max_length=255, null=True, description="Image reference from /uploads")

    author: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="products", on_delete=fields.CASCADE
    )
    category: fields.ForeignKeyRelation[Category] = fields.ForeignKeyField(
        "models.Category", related_name="products", on_delete=fields.CASCADE
    )

    comments: fields.ReverseRelation["Comment"]
    order_items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"{self.name} (${self.price})"

    class Meta:
        table = "products"
