# redsaver/routers/payments.py
from fastapi import APIRouter, Depends, Request

from redsaver.core.errors import BadRequest, UpstreamFailure
from redsaver.core.security import AUTHENTICATED
from redsaver.deps import get_payment_bridge
from redsaver.schemas import PaymentIntentIn, PaymentIntentOut
from redsaver.services.payments import PaymentError, to_minor_units

router = APIRouter(tags=["payments"])


@router.post("/create-payment-intent", dependencies=AUTHENTICATED, response_model=PaymentIntentOut)
async def create_payment_intent(body: PaymentIntentIn, request: Request, bridge=Depends(get_payment_bridge)):
    if not body.amount or body.amount <= 0:
        raise BadRequest("Amount required")
    currency = request.app.state.settings.payment_currency
    try:
        secret = await bridge.create_intent(to_minor_units(body.amount), currency)
    except PaymentError:
        raise UpstreamFailure("Stripe payment failed")
    return PaymentIntentOut(clientSecret=secret)
