import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient
from core.context import AppContext
from db.db_operation import MongoConnection, create_indexes
from settings.config import Settings
from utils.jwt_handler import TokenService
from utils.payment_gateway import StripeGateway
from main import create_app

ADMIN_EMAIL = "admin@bistro.com"
USER_EMAIL = "guest@bistro.com"
OTHER_EMAIL = "other@bistro.com"

@pytest.fixture
def test_settings():
    return Settings(ACCESS_TOKEN_SECRET="test-secret", STRIPE_SECRET_KEY="sk_test_dummy", USE_TRANSACTIONS=False)

@pytest.fixture
async def context(test_settings):
    mongo = MongoConnection(AsyncMongoMockClient(), "bistro_test")
    await create_indexes(mongo)
    return AppContext(
        settings=test_settings,
        mongo=mongo,
        tokens=TokenService(test_settings.ACCESS_TOKEN_SECRET, test_settings.ALGORITHM, test_settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        payment_gateway=StripeGateway(test_settings.STRIPE_SECRET_KEY, test_settings.PAYMENT_CURRENCY)
    )

@pytest.fixture
def mongo(context):
    return context.mongo

@pytest.fixture
async def client(context):
    app = create_app(context)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

@pytest.fixture
def auth_headers(context):
    def _headers(email: str) -> dict:
        token = context.tokens.issue({"email": email})
        return {"Authorization": f"Bearer {token}"}
    return _headers

@pytest.fixture
async def users(mongo):
    """An admin and two regular users."""
    await mongo.users_collection.insert_one({"email": ADMIN_EMAIL, "name": "Admin", "role": "admin"})
    await mongo.users_collection.insert_one({"email": USER_EMAIL, "name": "Guest", "role": "user"})
    await mongo.users_collection.insert_one({"email": OTHER_EMAIL, "name": "Other", "role": "user"})
    return {"admin": ADMIN_EMAIL, "user": USER_EMAIL, "other": OTHER_EMAIL}
