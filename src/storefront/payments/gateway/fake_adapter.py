"""Configurable fake payment gateway for development and testing.

Simulates a provider without any external calls. It can be configured at
runtime to reject requests or to report a particular intent status, which
makes payment flows predictable in tests and load runs.
"""

from dataclasses import replace
from uuid import uuid4

from storefront.payments.gateway.port import PaymentGateway, PaymentGatewayError, PaymentIntent


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.intent_status: str = "succeeded"
        self.intents: dict[str, PaymentIntent] = {}
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        intent_status: str = "succeeded",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.intent_status = intent_status

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": metadata,
            }
        )
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            amount=amount,
            currency=currency,
            status="requires_payment_method",
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id})

        intent = self.intents.get(intent_id)
        if intent is None:
            raise PaymentGatewayError(f"No such payment_intent: '{intent_id}'")
        return replace(intent, status=self.intent_status)
