from db.db_operation import MongoConnection, serialize_doc, insert_ack, delete_ack, strip_client_ids, utcnow
from core.authorization import authorize_and_fetch
from core.context import AppContext
from core.dependencies import CurrentUser
from core.exceptions import NotFoundError
from models.booking import BookingCreate
from utils.logger import get_logger

logger = get_logger("Booking_Service")

async def create_booking(mongo: MongoConnection, booking: BookingCreate):
    doc = {**strip_client_ids(booking.model_dump()), "created_at": utcnow()}
    result = await mongo.bookings.insert_one(doc)
    logger.info(f"Booking {result.inserted_id} created for {booking.email}")
    return insert_ack(result)

async def list_bookings(mongo: MongoConnection, email: str | None = None):
    """Bookings of one owner, or all of them when email is None."""
    query = {"email": email} if email is not None else {}
    docs = await mongo.bookings.find(query).to_list(length=None)
    return [serialize_doc(d) for d in docs]

async def delete_booking(ctx: AppContext, booking_id: str, current_user: CurrentUser):
    doc = await authorize_and_fetch(ctx, ctx.mongo.bookings, booking_id, current_user, label="booking")
    result = await ctx.mongo.bookings.delete_one({"_id": doc["_id"]})
    if result.deleted_count == 0:
        raise NotFoundError("Booking not found")
    logger.info(f"Booking {booking_id} deleted by {current_user.email}")
    return delete_ack(result)
