from datetime import datetime, timezone
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from core.exceptions import ValidationError
from utils.logger import get_logger

logger = get_logger("DB_OPERATION")

class MongoConnection:
    def __init__(self, client, db_name: str):
        logger.info("Initializing MongoDB Connection")
        self.client = client
        self.db = client[db_name]
        self.db_name = db_name
        self.users_collection = self.db["users"]
        self.menu_collection_name = "menu"
        self.menu_items = self.db[self.menu_collection_name]
        self.reviews = self.db["reviews"]
        self.carts = self.db["carts"]
        self.bookings = self.db["bookings"]
        self.payments = self.db["payments"]
        self.audit_logs = self.db["audit_logs"]

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str) -> "MongoConnection":
        return cls(AsyncIOMotorClient(mongo_uri), db_name)

    async def connect(self):
        try:
            # Force an actual connection & authentication check
            await self.db.command("ping")
            logger.info("Successfully connected to MongoDB and authenticated.")
            logger.info(f"Using Database: {self.db_name}")
        except Exception as e:
            logger.error(f"Could not connect to MongoDB: {e}")
            raise e

async def create_indexes(conn: MongoConnection):
    await conn.users_collection.create_index("email", unique=True)
    await conn.carts.create_index("email")
    await conn.bookings.create_index("email")
    await conn.payments.create_index("email")
    await conn.audit_logs.create_index("timestamp")
    logger.info("Indexes created")

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def to_object_id(value: str, label: str = "resource") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {label} id: {value}")

# the store assigns ids; client-sent ones are dropped
CLIENT_ID_FIELDS = ("_id", "id")

def strip_client_ids(doc: dict) -> dict:
    for field in CLIENT_ID_FIELDS:
        doc.pop(field, None)
    return doc

def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    return value

def serialize_doc(doc: dict | None) -> dict | None:
    if doc is None:
        return None
    return serialize_value(dict(doc))

# driver acknowledgements rendered the way the web client expects them
def insert_ack(result) -> dict:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}

def update_ack(result) -> dict:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": str(result.upserted_id) if result.upserted_id is not None else None
    }

def delete_ack(result) -> dict:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
