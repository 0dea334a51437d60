from tortoise import fields

from ...common.models import TimestampMixin


class Comment(TimestampMixin):
    id = fields.IntField(primary_key=True)
    text = fields.CharField(max_length=1000)
    star = fields.FloatField()

    product: fields.ForeignKeyRelation["Product"] = fields.ForeignKeyField(
        "models.Product", related_name="comments", on_delete=fields.CASCADE
    )
    # Owner of the comment; only this user may edit or delete it.
    user: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="comments", on_delete=fields.CASCADE
    )

    def __str__(self):
        return f"Comment {self.id} ({self.star}*) on product {self.product_id}"

    class Meta:
        table = "comments"
        ordering = ["id"]
