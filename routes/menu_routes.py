from fastapi import APIRouter, Depends, Body
from pymongo.errors import PyMongoError
from core.authorization import require_admin
from core.context import AppContext, get_context
from core.dependencies import CurrentUser
from core.exceptions import UpstreamFailure
from models.menu import MenuItemCreate, MenuItemUpdate
from services.menu_service import create_menu_item, list_menu_items, get_menu_item, update_menu_item, delete_menu_item
from utils.logger import get_logger

logger = get_logger("Menu_Route")
router = APIRouter(prefix="/menu", tags=["Menu"])

# Public
@router.get("")
async def api_list_menu(ctx: AppContext = Depends(get_context)):
    return await list_menu_items(ctx.mongo)

@router.get("/{item_id}")
async def api_get_menu_item(item_id: str, ctx: AppContext = Depends(get_context)):
    return await get_menu_item(ctx.mongo, item_id)

# Admin only
@router.post("")
async def api_create_menu_item(payload: MenuItemCreate = Body(...), current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await create_menu_item(ctx.mongo, payload, actor_email=current_admin.email)
    except PyMongoError:
        logger.exception("Error creating menu item")
        raise UpstreamFailure()

@router.patch("/{item_id}")
async def api_update_menu_item(item_id: str, payload: MenuItemUpdate = Body(...), current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await update_menu_item(ctx.mongo, item_id, payload, actor_email=current_admin.email)
    except PyMongoError:
        logger.exception("Error updating menu item")
        raise UpstreamFailure()

@router.delete("/{item_id}")
async def api_delete_menu_item(item_id: str, current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await delete_menu_item(ctx.mongo, item_id, actor_email=current_admin.email)
    except PyMongoError:
        logger.exception("Error deleting menu item")
        raise UpstreamFailure()
