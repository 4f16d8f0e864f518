"""Payment intents: a thin passthrough to the payment gateway."""

from protean.exceptions import ValidationError

from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import PaymentGatewayError
from storefront.shared.settings import store_setting
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def to_cents(amount: float) -> int:
    return int(round(amount * 100))


def create_payment_intent(amount, user_id, currency=None, metadata=None) -> dict:
    """Open an intent for ``amount`` (in major units) on behalf of ``user_id``."""
    if not amount or amount <= 0:
        raise ValidationError({"amount": ["Invalid payment amount"]})

    currency = currency or store_setting("DEFAULT_CURRENCY")
    try:
        intent = get_gateway().create_payment_intent(
            amount=to_cents(amount),
            currency=currency,
            metadata={"user_id": str(user_id), **(metadata or {})},
        )
    except PaymentGatewayError as exc:
        logger.warning("Payment intent creation failed", user_id=str(user_id), error=str(exc))
        raise ValidationError({"payment": [f"Payment initialization failed: {exc}"]}) from exc

    logger.info("Payment intent created", intent_id=intent.id, amount_cents=intent.amount, currency=currency)
    return {"client_secret": intent.client_secret, "payment_intent_id": intent.id}


def retrieve_payment_intent(intent_id) -> dict:
    if not intent_id:
        raise ValidationError({"payment_intent_id": ["Payment intent ID is required"]})

    try:
        intent = get_gateway().retrieve_payment_intent(intent_id)
    except PaymentGatewayError as exc:
        raise ValidationError({"payment": [f"Payment confirmation failed: {exc}"]}) from exc

    return {
        "payment_status": intent.status,
        "payment_intent_id": intent.id,
        "amount": intent.amount,
        "currency": intent.currency,
    }
