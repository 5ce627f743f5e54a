import stripe
from fastapi.concurrency import run_in_threadpool
from utils.logger import get_logger

logger = get_logger("Payment_Gateway")

class PaymentGatewayError(Exception):
    pass

class StripeGateway:
    """
    Thin wrapper over the Stripe SDK. Only the client secret leaves this class.
    """

    def __init__(self, api_key: str, currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def _create_intent(self, amount: int):
        return stripe.PaymentIntent.create(
            amount=amount,
            currency=self.currency,
            payment_method_types=["card"],
            api_key=self.api_key
        )

    async def create_charge_intent(self, amount: int) -> str:
        """
        amount is in the smallest currency unit (cents for usd).
        """
        logger.info("Creating payment intent", extra={"amount": amount, "currency": self.currency})
        try:
            # the Stripe SDK is blocking
            intent = await run_in_threadpool(self._create_intent, amount)
        except stripe.StripeError as e:
            logger.error("Stripe payment intent creation failed", exc_info=e)
            raise PaymentGatewayError(str(e)) from e
        return intent.client_secret
