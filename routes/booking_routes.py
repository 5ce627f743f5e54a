from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError
from core.authorization import ensure_self, require_admin
from core.context import AppContext, get_context
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import UpstreamFailure
from models.booking import BookingCreate
from services.booking_service import create_booking, list_bookings, delete_booking
from utils.logger import get_logger

logger = get_logger("Booking_Route")
router = APIRouter(tags=["Bookings"])

@router.post("/bookings")
async def api_create_booking(booking: BookingCreate, ctx: AppContext = Depends(get_context)):
    try:
        return await create_booking(ctx.mongo, booking)
    except PyMongoError:
        logger.exception("Error creating booking")
        raise UpstreamFailure()

@router.get("/bookings")
async def api_my_bookings(
    email: str | None = Query(None, description="Owner email, defaults to the caller"),
    current_user: CurrentUser = Depends(get_current_user),
    ctx: AppContext = Depends(get_context)
):
    email = email or current_user.email
    ensure_self(email, current_user)
    return await list_bookings(ctx.mongo, email)

@router.get("/admin/bookings", dependencies=[Depends(require_admin)])
async def api_all_bookings(ctx: AppContext = Depends(get_context)):
    return await list_bookings(ctx.mongo)

@router.delete("/bookings/{booking_id}")
async def api_delete_booking(booking_id: str, current_user: CurrentUser = Depends(get_current_user), ctx: AppContext = Depends(get_context)):
    try:
        return await delete_booking(ctx, booking_id, current_user)
    except PyMongoError:
        logger.exception("Error deleting booking")
        raise UpstreamFailure()
