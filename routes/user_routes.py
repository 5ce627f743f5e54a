from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
from core.authorization import require_admin, ensure_self
from core.context import AppContext, get_context
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import UpstreamFailure
from models.user import UserCreate, AdminCheck
from services.user_service import create_user, list_users, check_admin, promote_to_admin, delete_user
from utils.logger import get_logger

logger = get_logger("User_Route")

router = APIRouter(prefix="/users", tags=["Users"])

@router.post("")
async def register_user(user: UserCreate, ctx: AppContext = Depends(get_context)):
    try:
        return await create_user(ctx.mongo, user)
    except PyMongoError as e:
        logger.error(f"Database error during user registration: {e}")
        raise UpstreamFailure("Database error")

@router.get("", dependencies=[Depends(require_admin)])
async def get_all_users(ctx: AppContext = Depends(get_context)):
    return await list_users(ctx.mongo)

@router.get("/admin/{email}", response_model=AdminCheck)
async def get_admin_status(email: str, current_user: CurrentUser = Depends(get_current_user), ctx: AppContext = Depends(get_context)):
    ensure_self(email, current_user)
    return await check_admin(ctx.mongo, email)

@router.patch("/admin/{user_id}")
async def make_admin(user_id: str, current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await promote_to_admin(ctx.mongo, user_id, current_admin.email)
    except PyMongoError:
        logger.exception("Error promoting user")
        raise UpstreamFailure()

@router.delete("/{user_id}")
async def remove_user(user_id: str, current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await delete_user(ctx.mongo, user_id, current_admin.email)
    except PyMongoError:
        logger.exception("Error deleting user")
        raise UpstreamFailure()
