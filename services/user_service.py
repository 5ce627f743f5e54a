from pymongo.errors import DuplicateKeyError
from db.db_operation import MongoConnection, to_object_id, serialize_doc, insert_ack, update_ack, delete_ack, utcnow
from core.exceptions import NotFoundError
from core.authorization import is_admin, ADMIN_ROLE
from models.user import UserCreate
from services.admin_service import record_audit
from utils.logger import get_logger

logger = get_logger("USER_SERVICE")

USER_EXISTS_RESPONSE = {"message": "user already exists", "insertedId": None}

async def create_user(mongo: MongoConnection, user: UserCreate):
    """Insert the user unless the email is already registered. Role always starts as "user"."""
    logger.info(f"User create request received for email: {user.email}")
    users_collection = mongo.users_collection
    if await users_collection.find_one({"email": user.email}):
        logger.info(f"User already exists: {user.email}")
        return USER_EXISTS_RESPONSE

    user_dict = {
        **user.model_dump(exclude_none=True),
        "role": "user",
        "created_at": utcnow()
    }
    try:
        result = await users_collection.insert_one(user_dict)
    except DuplicateKeyError:
        # lost the race against a concurrent sign-in with the same email
        logger.info(f"User already exists (unique index): {user.email}")
        return USER_EXISTS_RESPONSE
    logger.info(f"User inserted into database with id: {result.inserted_id}")
    return insert_ack(result)

async def list_users(mongo: MongoConnection):
    cursor = mongo.users_collection.find({})
    users = await cursor.to_list(length=None)
    return [serialize_doc(u) for u in users]

async def check_admin(mongo: MongoConnection, email: str) -> dict:
    return {"admin": await is_admin(mongo, email)}

async def promote_to_admin(mongo: MongoConnection, user_id: str, actor_email: str):
    """
    Set role to admin. There is no way back to "user".
    """
    oid = to_object_id(user_id, "user")
    users_col = mongo.users_collection
    user = await users_col.find_one({"_id": oid})
    if not user:
        raise NotFoundError("User not found")

    result = await users_col.update_one(
        {"_id": oid},
        {"$set": {"role": ADMIN_ROLE, "updated_at": utcnow()}}
    )
    await record_audit(
        mongo, actor_email, "promote_user", "user", user_id,
        before={"role": user.get("role", "user")}, after={"role": ADMIN_ROLE}
    )
    logger.info(f"{actor_email} promoted {user.get('email')} to admin")
    return update_ack(result)

async def delete_user(mongo: MongoConnection, user_id: str, actor_email: str):
    oid = to_object_id(user_id, "user")
    result = await mongo.users_collection.delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFoundError("User not found")
    await record_audit(mongo, actor_email, "delete_user", "user", user_id)
    logger.info(f"{actor_email} deleted user {user_id}")
    return delete_ack(result)
