# redsaver/services/payments.py
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Protocol

import stripe
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    pass


class PaymentBridge(Protocol):
    async def create_intent(self, amount_minor: int, currency: str) -> str:
        ...


def to_minor_units(amount) -> int:
    """50 -> 5000; fractional major amounts are rounded to the nearest minor unit."""
    minor = Decimal(str(amount)) * 100
    return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StripePaymentBridge:
    def __init__(self, secret_key: Optional[str]):
        self._secret_key = secret_key

    async def create_intent(self, amount_minor: int, currency: str) -> str:
        if not self._secret_key:
            raise PaymentError("STRIPE_SECRET_KEY not configured")
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                amount=amount_minor,
                currency=currency,
                payment_method_types=["card"],
                api_key=self._secret_key,
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe payment intent creation failed")
            raise PaymentError(str(exc)) from exc
        return intent.client_secret
