from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin


class Role(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"
    BUYER = "buyer"


class UserStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=100)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    phone = fields.CharField(max_length=32)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharEnumField(Role, max_length=20, default=Role.BUYER)
    status = fields.CharEnumField(UserStatus, max_length=20, default=UserStatus.PENDING)
    year = fields.IntField()
    image = fields.CharField(max_length=255, null=True)

    region: fields.ForeignKeyRelation["Region"] = fields.ForeignKeyField(
        "models.Region", related_name="users", on_delete=fields.CASCADE
    )

    products: fields.ReverseRelation["Product"]
    comments: fields.ReverseRelation["Comment"]
    orders: fields.ReverseRelation["Order"]

    def __str__(self):
        return f"{self.email} ({self.role.value}, {self.status.value})"

    class Meta:
        table = "users"
