"""Common database building blocks shared by the feature models.

``TimestampMixin`` gives a model ``created_at`` / ``updated_at`` columns that
Tortoise fills in on insert and on every save."""

from tortoise import fields, models


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True
