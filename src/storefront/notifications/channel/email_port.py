"""Outbound email port.

Customer emails leave the storefront through an ``EmailPort``. Adapters
deliver an ``OutgoingEmail`` and report back with an ``EmailReceipt``; they
never raise for a rejected message.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    body: str
    notification_type: str | None = None


@dataclass(frozen=True)
class EmailReceipt:
    delivered: bool
    message_id: str | None = None
    error: str | None = None


class EmailPort(ABC):
    @abstractmethod
    def send(self, email: OutgoingEmail) -> EmailReceipt:
        """Deliver one email and report whether the provider accepted it."""
