from db.db_operation import MongoConnection, serialize_doc, insert_ack, delete_ack, strip_client_ids, utcnow
from core.authorization import authorize_and_fetch
from core.context import AppContext
from core.dependencies import CurrentUser
from core.exceptions import NotFoundError
from models.cart import CartItemCreate, CART_STATUS_PENDING
from utils.logger import get_logger

logger = get_logger("Cart_Service")

async def list_cart_items(mongo: MongoConnection, email: str):
    docs = await mongo.carts.find({"email": email}).to_list(length=None)
    logger.info(f"Fetched {len(docs)} cart items for user {email}")
    return [serialize_doc(d) for d in docs]

async def add_cart_item(mongo: MongoConnection, owner_email: str, item: CartItemCreate):
    """Owner and status come from the server, never from the body."""
    doc = strip_client_ids(item.model_dump(exclude_none=True))
    doc.update({
        "email": owner_email,
        "status": CART_STATUS_PENDING,
        "created_at": utcnow()
    })
    result = await mongo.carts.insert_one(doc)
    logger.info(f"Cart item {result.inserted_id} added for {owner_email}")
    return insert_ack(result)

async def delete_cart_item(ctx: AppContext, cart_id: str, current_user: CurrentUser):
    doc = await authorize_and_fetch(ctx, ctx.mongo.carts, cart_id, current_user, label="cart item")
    result = await ctx.mongo.carts.delete_one({"_id": doc["_id"]})
    if result.deleted_count == 0:
        # retired by a settlement between the fetch and the delete
        raise NotFoundError("Cart item not found")
    logger.info(f"Cart item {cart_id} deleted by {current_user.email}")
    return delete_ack(result)
