"""Active email channel.

``FakeEmailAdapter`` is installed until a provider adapter is registered with
``set_email_channel`` at startup.
"""

from storefront.notifications.channel.email_port import EmailPort
from storefront.notifications.channel.fake_email import FakeEmailAdapter

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        _email_channel = FakeEmailAdapter()
    return _email_channel


def set_email_channel(adapter: EmailPort) -> None:
    global _email_channel
    _email_channel = adapter


def reset_channels() -> None:
    global _email_channel
    _email_channel = None
