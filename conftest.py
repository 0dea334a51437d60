"""
Root conftest for the pytest test suite.

Each test runs against a fresh in-memory SQLite database seeded with one
region and four users (active admin, seller and buyer plus a pending buyer).

Key Fixtures:
- `initialize_test_db`: (autouse) Creates and seeds a fresh DB schema for each test.
- `app_for_testing`: The FastAPI app with its production lifespan disabled and the
  OTP sender replaced by `RecordingOtpSender`.
- `otp_sender`: The recording sender, to read codes "emailed" during a test.
- `client`: A non-authenticated TestClient.
- `admin_client` / `seller_client` / `buyer_client`: TestClients carrying a bearer token.
- `admin_user` / `seller_user` / `buyer_user` / `pending_user`: The seeded rows.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tortoise import Tortoise

from marketplace.core.config import MODEL_MODULES
from marketplace.features.auth.models import Role, User, UserStatus
from marketplace.features.auth.notifications import get_otp_sender
from marketplace.features.auth.schemas import TokenClaims
from marketplace.features.auth.security import create_access_token, get_password_hash
from marketplace.features.regions.models import Region
from marketplace.main import app as actual_app

TEST_PASSWORD = "password123"


class RecordingOtpSender:
    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def send(self, recipient: str, code: str) -> None:
        self.sent.append((recipient, code))

    def last_code_for(self, recipient: str) -> str:
        codes = [code for to, code in self.sent if to == recipient]
        assert codes, f"No OTP was sent to {recipient}"
        return codes[-1]


async def add_user(email: str, role: Role, status: UserStatus, region: Region) -> User:
    return await User.create(
        name=email.split("@")[0],
        email=email,
        phone="+998901234567",
        year=1995,
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        status=status,
        region=region,
    )


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(id=user.id, role=user.role, status=user.status)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    region = await Region.create(name="Tashkent")
    await add_user("admin@example.com", Role.ADMIN, UserStatus.ACTIVE, region)
    await add_user("seller@example.com", Role.SELLER, UserStatus.ACTIVE, region)
    await add_user("buyer@example.com", Role.BUYER, UserStatus.ACTIVE, region)
    await add_user("pending@example.com", Role.BUYER, UserStatus.PENDING, region)

    yield

    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def region() -> Region:
    return await Region.get(name="Tashkent")


@pytest_asyncio.fixture
async def admin_user() -> User:
    return await User.get(email="admin@example.com")


@pytest_asyncio.fixture
async def seller_user() -> User:
    return await User.get(email="seller@example.com")


@pytest_asyncio.fixture
async def buyer_user() -> User:
    return await User.get(email="buyer@example.com")


@pytest_asyncio.fixture
async def pending_user() -> User:
    return await User.get(email="pending@example.com")


@pytest.fixture(scope="function")
def otp_sender() -> RecordingOtpSender:
    return RecordingOtpSender()


@pytest.fixture(scope="function")
def app_for_testing(otp_sender: RecordingOtpSender) -> Generator[FastAPI, Any, None]:
    """
    Provides a FastAPI application instance for testing, with its
    production lifespan manager disabled to allow the test DB fixture
    to manage the database connection.
    """
    original_lifespan = actual_app.router.lifespan_context

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        yield

    actual_app.router.lifespan_context = dummy_lifespan
    actual_app.dependency_overrides[get_otp_sender] = lambda: otp_sender

    yield actual_app

    actual_app.dependency_overrides.clear()
    actual_app.router.lifespan_context = original_lifespan


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    """
    Provides a non-authenticated starlette TestClient.
    """
    with TestClient(app_for_testing) as tc:
        yield tc


def _client_with_token(app: FastAPI, user: User) -> Generator[TestClient, Any, None]:
    with TestClient(app) as tc:
        tc.headers.update({"Authorization": f"Bearer {create_access_token(user)}"})
        yield tc


@pytest.fixture(scope="function")
def admin_client(app_for_testing: FastAPI, admin_user: User) -> Generator[TestClient, Any, None]:
    yield from _client_with_token(app_for_testing, admin_user)


@pytest.fixture(scope="function")
def seller_client(app_for_testing: FastAPI, seller_user: User) -> Generator[TestClient, Any, None]:
    yield from _client_with_token(app_for_testing, seller_user)


@pytest.fixture(scope="function")
def buyer_client(app_for_testing: FastAPI, buyer_user: User) -> Generator[TestClient, Any, None]:
    yield from _client_with_token(app_for_testing, buyer_user)
