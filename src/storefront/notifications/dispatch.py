"""Render a template and hand it to the email channel, best effort.

Notification failures are logged and never propagate: a customer's order
must not fail because an email could not be sent.
"""

import structlog

from storefront.notifications.channel import get_email_channel
from storefront.notifications.channel.email_port import EmailReceipt, OutgoingEmail
from storefront.notifications.templates import get_template
from storefront.shared.settings import store_setting

logger = structlog.get_logger(__name__)


def send_email(notification_type: str, to: str | None, context: dict) -> EmailReceipt | None:
    """Send one templated email. Returns the channel's receipt, or None when nothing was sent."""
    if not to:
        logger.info("No recipient address, skipping email", notification_type=notification_type)
        return None

    context = {
        "store_name": store_setting("STORE_NAME"),
        "support_email": store_setting("SUPPORT_EMAIL"),
        "currency": store_setting("DEFAULT_CURRENCY"),
        **context,
    }

    try:
        rendered = get_template(notification_type).render(context)
        receipt = get_email_channel().send(
            OutgoingEmail(
                to=to,
                subject=rendered["subject"],
                body=rendered["body"],
                notification_type=notification_type,
            )
        )
    except Exception as exc:
        logger.warning("Email dispatch raised", notification_type=notification_type, to=to, error=str(exc))
        return None

    if not receipt.delivered:
        logger.warning("Email delivery failed", notification_type=notification_type, to=to, error=receipt.error)
    else:
        logger.info("Email sent", notification_type=notification_type, to=to, message_id=receipt.message_id)
    return receipt
