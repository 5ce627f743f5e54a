from fastapi import Request
from db.db_operation import MongoConnection
from settings.config import Settings
from utils.jwt_handler import TokenService
from utils.payment_gateway import StripeGateway

class AppContext:
    """
    Everything a handler or guard needs, built once at startup and kept on app.state.
    """

    def __init__(self, settings: Settings, mongo: MongoConnection, tokens: TokenService, payment_gateway: StripeGateway):
        self.settings = settings
        self.mongo = mongo
        self.tokens = tokens
        self.payment_gateway = payment_gateway

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            mongo=MongoConnection.from_uri(settings.MONGO_URI, settings.DB_NAME),
            tokens=TokenService(settings.ACCESS_TOKEN_SECRET, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            payment_gateway=StripeGateway(settings.STRIPE_SECRET_KEY, settings.PAYMENT_CURRENCY)
        )

def get_context(request: Request) -> AppContext:
    return request.app.state.context
