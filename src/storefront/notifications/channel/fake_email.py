"""In-memory email adapter used in development and tests."""

from uuid import uuid4

from storefront.notifications.channel.email_port import EmailPort, EmailReceipt, OutgoingEmail


class FakeEmailAdapter(EmailPort):
    """Keeps every accepted email in ``outbox``; can be told to reject mail."""

    def __init__(self):
        self.outbox: list[OutgoingEmail] = []
        self.rejection: str | None = None

    def reject_with(self, reason: str = "Mailbox unavailable") -> None:
        self.rejection = reason

    def accept_all(self) -> None:
        self.rejection = None

    def send(self, email: OutgoingEmail) -> EmailReceipt:
        if self.rejection:
            return EmailReceipt(delivered=False, error=self.rejection)

        self.outbox.append(email)
        return EmailReceipt(delivered=True, message_id=f"email-{uuid4().hex[:12]}")

    def sent_to(self, address: str) -> list[OutgoingEmail]:
        return [email for email in self.outbox if email.to == address]
