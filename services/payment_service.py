import math
from decimal import Decimal, ROUND_HALF_UP
from fastapi import status
from pymongo.errors import PyMongoError
from db.db_operation import MongoConnection, to_object_id, serialize_doc, insert_ack, delete_ack, strip_client_ids, utcnow
from core.context import AppContext
from core.exceptions import NotFoundError, UpstreamFailure, ValidationError
from models.payment import PaymentCreate
from services.admin_service import record_audit
from utils.payment_gateway import PaymentGatewayError
from utils.logger import get_logger

logger = get_logger("Payment_Service")

def to_minor_units(price: float) -> int:
    """Dollars to cents, rounding half up."""
    cents = (Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)

def parse_price(value) -> float:
    """Positive finite number, else 400. Numeric strings are accepted."""
    if value is None or isinstance(value, bool):
        raise ValidationError("Price must be a positive number")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a positive number")
    if not math.isfinite(price) or price <= 0:
        raise ValidationError("Price must be a positive number")
    return price

async def create_charge_intent(ctx: AppContext, price) -> dict:
    amount = to_minor_units(parse_price(price))
    try:
        client_secret = await ctx.payment_gateway.create_charge_intent(amount)
    except PaymentGatewayError:
        raise UpstreamFailure("Payment provider error", status_code=status.HTTP_502_BAD_GATEWAY)
    return {"clientSecret": client_secret}

def _session_kwargs(session) -> dict:
    return {"session": session} if session is not None else {}

async def _ensure_carts_exist(mongo: MongoConnection, cart_ids: list, session=None):
    if not cart_ids:
        return
    cursor = mongo.carts.find({"_id": {"$in": cart_ids}}, {"_id": 1}, **_session_kwargs(session))
    found = {d["_id"] for d in await cursor.to_list(length=None)}
    missing = [str(c) for c in dict.fromkeys(cart_ids) if c not in found]
    if missing:
        logger.warning(f"Settlement rejected, cart items not found: {missing}")
        raise NotFoundError(f"Cart items not found: {', '.join(missing)}")

async def record_payment(mongo: MongoConnection, payment_doc: dict, session=None):
    return await mongo.payments.insert_one(payment_doc, **_session_kwargs(session))

async def retire_cart_items(mongo: MongoConnection, cart_ids: list, session=None):
    """Single delete keyed on the id set. Safe to run again for the same ids."""
    return await mongo.carts.delete_many({"_id": {"$in": cart_ids}}, **_session_kwargs(session))

async def _settle_in_transaction(mongo: MongoConnection, payment_doc: dict, cart_ids: list):
    async with await mongo.client.start_session() as session:
        async with session.start_transaction():
            await _ensure_carts_exist(mongo, cart_ids, session=session)
            payment_result = await record_payment(mongo, payment_doc, session=session)
            delete_result = await retire_cart_items(mongo, cart_ids, session=session)
    return payment_result, delete_result

async def _settle_in_steps(mongo: MongoConnection, payment_doc: dict, cart_ids: list):
    await _ensure_carts_exist(mongo, cart_ids)
    try:
        payment_result = await record_payment(mongo, payment_doc)
    except PyMongoError:
        logger.exception("Payment insert failed, no cart item was touched")
        raise UpstreamFailure("Payment could not be recorded")

    # the payment is durable from here on, even if the cleanup below fails
    payment_id = str(payment_result.inserted_id)
    try:
        delete_result = await retire_cart_items(mongo, cart_ids)
    except PyMongoError:
        logger.exception(
            "Payment recorded but cart cleanup failed",
            extra={"payment_id": payment_id, "cart_ids": [str(c) for c in cart_ids]}
        )
        raise UpstreamFailure({
            "message": "Payment recorded but cart cleanup failed",
            "paymentId": payment_id
        })
    return payment_result, delete_result

async def settle_payment(ctx: AppContext, payment: PaymentCreate) -> dict:
    """
    Record the payment, then retire the cart items it paid for.

    Ids are validated before any store call. Without transactions the two
    writes are separate operations: the payment insert is the durability point
    and a failed cleanup leaves stale cart rows that retire_payment_carts can
    remove later.
    """
    menu_item_ids = [to_object_id(i, "menu item") for i in payment.menuItemIds]
    cart_ids = [to_object_id(i, "cart") for i in payment.cartIds]

    payment_doc = strip_client_ids(payment.model_dump())
    payment_doc.update({
        "menuItemIds": menu_item_ids,
        "cartIds": cart_ids,
        "created_at": utcnow()
    })

    if ctx.settings.USE_TRANSACTIONS:
        payment_result, delete_result = await _settle_in_transaction(ctx.mongo, payment_doc, cart_ids)
    else:
        payment_result, delete_result = await _settle_in_steps(ctx.mongo, payment_doc, cart_ids)

    logger.info(
        "Payment settled",
        extra={"payment_id": str(payment_result.inserted_id), "user": payment.email, "retired": delete_result.deleted_count}
    )
    return {
        "paymentResult": insert_ack(payment_result),
        "deleteResult": delete_ack(delete_result),
        "retiredCartIds": [str(c) for c in dict.fromkeys(cart_ids)]
    }

async def retire_payment_carts(mongo: MongoConnection, payment_id: str, actor_email: str) -> dict:
    payment = await mongo.payments.find_one({"_id": to_object_id(payment_id, "payment")})
    if not payment:
        raise NotFoundError("Payment not found")
    cart_ids = payment.get("cartIds", [])
    result = await retire_cart_items(mongo, cart_ids)
    await record_audit(mongo, actor_email, "retire_payment_carts", "payment", payment_id,
                       after={"deletedCount": result.deleted_count})
    logger.info(f"{actor_email} retired {result.deleted_count} stale cart items of payment {payment_id}")
    return {
        "deleteResult": delete_ack(result),
        "retiredCartIds": [str(c) for c in dict.fromkeys(cart_ids)]
    }

async def list_payments(mongo: MongoConnection, email: str):
    docs = await mongo.payments.find({"email": email}).sort("created_at", -1).to_list(length=None)
    return [serialize_doc(d) for d in docs]
