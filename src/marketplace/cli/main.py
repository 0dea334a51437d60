import asyncio
import logging

import typer
from fastapi import HTTPException
from tortoise import Tortoise

from ..core.config import TORTOISE_ORM_CONFIG
from ..features.auth.models import Role
from ..features.users import service as users_service
from ..features.users.schemas import UserCreate

logger = logging.getLogger(__name__)

app = typer.Typer(name="marketplace-cli", help="CLI for managing Marketplace application data.")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True)  # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


# User management commands
user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


@user_app.command("create-admin")
def create_admin_user_command(
    name: str = typer.Option(..., prompt=True, help="Display name for the new admin."),
    email: str = typer.Option(..., prompt=True, help="Email for the new admin."),
    phone: str = typer.Option(..., prompt=True, help="Phone number for the new admin."),
    year: int = typer.Option(..., prompt=True, help="Birth year of the new admin."),
    region_id: int = typer.Option(..., prompt=True, help="ID of an existing region."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new admin."),
):
    """Creates a new, already verified admin user."""
    try:
        user_in = UserCreate(
            name=name, email=email, phone=phone, year=year,
            region_id=region_id, password=password, role=Role.ADMIN,
        )
    except ValueError as e:
        _fail(str(e))
    asyncio.run(_create_admin_user(user_in))


async def _create_admin_user(user_in: UserCreate):
    """Async implementation for creating an admin user."""
    async with DBConnection():
        typer.echo(f"Attempting to create admin user: {user_in.email}...")
        try:
            user = await users_service.create_user(user_in)
        except HTTPException as e:
            _fail(str(e.detail))
        typer.secho(f"Admin user '{user.email}' created successfully with ID: {user.id}", fg=typer.colors.GREEN)


@user_app.command("set-role")
def set_role_command(
    email: str = typer.Argument(..., help="Email of the user to change."),
    role: Role = typer.Argument(..., help="New role: admin, seller or buyer."),
):
    """Changes the role of an existing user."""
    asyncio.run(_set_role(email, role))


async def _set_role(email: str, role: Role):
    async with DBConnection():
        try:
            await users_service.set_user_role(email, role)
        except HTTPException as e:
            _fail(str(e.detail))
        typer.secho(f"User '{email}' now has role '{role.value}'.", fg=typer.colors.GREEN)


@user_app.command("activate")
def activate_command(
    email: str = typer.Argument(..., help="Email of the user to activate."),
):
    """Marks an account as verified without an OTP."""
    asyncio.run(_activate(email))


async def _activate(email: str):
    async with DBConnection():
        try:
            await users_service.activate_user(email)
        except HTTPException as e:
            _fail(str(e.detail))
        typer.secho(f"User account '{email}' has been activated.", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
