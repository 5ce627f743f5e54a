from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
from core.authorization import ensure_self, require_admin
from core.context import AppContext, get_context
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import UpstreamFailure
from models.payment import PaymentCreate, PaymentIntentRequest, PaymentIntentOut
from services.payment_service import create_charge_intent, settle_payment, list_payments, retire_payment_carts
from utils.logger import get_logger

logger = get_logger("Payment_Route")
router = APIRouter(tags=["Payments"])

@router.post("/create-payment-intent", response_model=PaymentIntentOut)
async def api_create_payment_intent(payload: PaymentIntentRequest, ctx: AppContext = Depends(get_context)):
    return await create_charge_intent(ctx, payload.price)

@router.post("/payments")
async def api_settle_payment(payment: PaymentCreate, ctx: AppContext = Depends(get_context)):
    logger.info(f"Received payment from {payment.email} for {len(payment.cartIds)} cart items")
    try:
        return await settle_payment(ctx, payment)
    except PyMongoError:
        logger.exception("Store error during settlement")
        raise UpstreamFailure()

@router.get("/payments/{email}")
async def api_list_payments(email: str, current_user: CurrentUser = Depends(get_current_user), ctx: AppContext = Depends(get_context)):
    ensure_self(email, current_user)
    return await list_payments(ctx.mongo, email)

@router.post("/payments/{payment_id}/retire-carts")
async def api_retire_payment_carts(payment_id: str, current_admin: CurrentUser = Depends(require_admin), ctx: AppContext = Depends(get_context)):
    try:
        return await retire_payment_carts(ctx.mongo, payment_id, current_admin.email)
    except PyMongoError:
        logger.exception("Error retiring cart items")
        raise UpstreamFailure()
