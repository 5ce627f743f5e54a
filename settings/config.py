from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """Configuration settings for the application."""
    PROJECT_NAME: str = "Bistro Boss API"
    MONGO_URI: str = "mongodb://localhost:27017"
    DB_NAME: str = "bistroDB"

    ACCESS_TOKEN_SECRET: str = "MySecretKey@123"  # Production: set in .env
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    STRIPE_SECRET_KEY: str = ""
    PAYMENT_CURRENCY: str = "usd"

    # needs a replica set / sharded cluster
    USE_TRANSACTIONS: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
