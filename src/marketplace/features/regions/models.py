"""Data model for regions. A region groups the users registered in it."""

from tortoise import fields, models


class Region(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=50, unique=True)

    users: fields.ReverseRelation["User"]

    def __str__(self):
        return self.name

    class Meta:
        table = "regions"
