from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError
from core.authorization import ensure_self
from core.context import AppContext, get_context
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import UpstreamFailure
from models.cart import CartItemCreate
from services.cart_service import list_cart_items, add_cart_item, delete_cart_item
from utils.logger import get_logger

logger = get_logger("Cart_Route")
router = APIRouter(prefix="/carts", tags=["Carts"])

@router.get("")
async def api_list_cart(
    email: str | None = Query(None, description="Owner email, defaults to the caller"),
    current_user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context)
):
    email = email or current_user.email
    ensure_self(email, current_user)
    return await list_cart_items(ctx.mongo, email)

@router.post("")
async def api_add_cart_item(item: CartItemCreate, current_user: CurrentUser = Depends(get_current_user), ctx: AppContext = Depends(get_context)):
    try:
        return await add_cart_item(ctx.mongo, current_user.email, item)
    except PyMongoError:
        logger.exception("Error adding cart item")
        raise UpstreamFailure()

@router.delete("/{cart_id}")
async def api_delete_cart_item(cart_id: str, current_user: CurrentUser = Depends(get_current_user), ctx: AppContext = Depends(get_context)):
    logger.info(f"Trying to delete cart item with id: {cart_id}")
    try:
        return await delete_cart_item(ctx, cart_id, current_user)
    except PyMongoError:
        logger.exception("Error deleting cart item")
        raise UpstreamFailure()
