from tortoise import fields
from ...common.models import TimestampMixin


class Order(TimestampMixin):
    id = fields.IntField(primary_key=True)

    user: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="orders", on_delete=fields.CASCADE
    )

    items: fields.ReverseRelation["OrderItem"]  # Local forward reference

    def __str__(self):
        return f"Order {self.id} for user {self.user_id}"

    class Meta:
        table = "orders"


class OrderItem(TimestampMixin):
    id = fields.IntField(primary_key=True)

    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order",
        related_name="items",
        on_delete=fields.CASCADE,  # Refers to local Order model
    )
    product: fields.ForeignKeyRelation["Product"] = fields.ForeignKeyField(
        "models.Product",
        related_name="order_items",
        on_delete=fields.CASCADE,
    )

    count = fields.IntField(description="Units ordered, at least 1")

    def __str__(self):
        return f"{self.count} x product {self.product_id} for Order {self.order_id}"

    class Meta:
        table = "order_items"
        ordering = ["id"]
