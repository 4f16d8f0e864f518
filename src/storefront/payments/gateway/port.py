"""Payment gateway port (abstract interface).

The storefront only creates and looks up payment intents; card capture
happens between the client and the provider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class PaymentGatewayError(Exception):
    """The provider rejected the request or could not be reached."""


@dataclass(frozen=True)
class PaymentIntent:
    """A provider-side intent to collect ``amount`` (in cents)."""

    id: str
    client_secret: str
    amount: int
    currency: str
    status: str
    metadata: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntent:
        """Create an intent for ``amount`` cents."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """Look up an intent; raises PaymentGatewayError when it does not exist."""
        ...
