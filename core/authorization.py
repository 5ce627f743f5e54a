# core/authorization.py
from fastapi import Depends
from core.context import AppContext, get_context
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import ForbiddenError, NotFoundError
from db.db_operation import MongoConnection, to_object_id
from utils.logger import get_logger

logger = get_logger("Authorization")

ADMIN_ROLE = "admin"

async def is_admin(mongo: MongoConnection, email: str) -> bool:
    user = await mongo.users_collection.find_one({"email": email}, {"role": 1})
    return bool(user) and user.get("role") == ADMIN_ROLE

async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context)
) -> CurrentUser:
    """
    Role is read from the users collection, not from the token.
    """
    if not await is_admin(ctx.mongo, current_user.email):
        logger.warning(f"Forbidden: {current_user.email} is not an admin")
        raise ForbiddenError("Forbidden: admin access required")
    return current_user

def ensure_self(requested_email: str, current_user: CurrentUser):
    if requested_email != current_user.email:
        logger.warning(f"Forbidden: {current_user.email} requested data of {requested_email}")
        raise ForbiddenError("Forbidden: email does not match token")

async def authorize_and_fetch(ctx: AppContext, collection, resource_id: str, current_user: CurrentUser, label: str = "resource") -> dict:
    """
    Load the resource and allow the caller only if they own it (stored `email`)
    or are an admin. Returns the stored document.
    """
    oid = to_object_id(resource_id, label)
    doc = await collection.find_one({"_id": oid})
    if doc is None:
        raise NotFoundError(f"{label.capitalize()} not found")
    if doc.get("email") == current_user.email:
        return doc
    if await is_admin(ctx.mongo, current_user.email):
        logger.info(f"Admin {current_user.email} acting on {label} {resource_id} owned by {doc.get('email')}")
        return doc
    logger.warning(f"Forbidden: {current_user.email} is not the owner of {label} {resource_id}")
    raise ForbiddenError(f"Forbidden: not the owner of this {label}")
