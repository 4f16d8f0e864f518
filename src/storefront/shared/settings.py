"""Store settings read from the ``[custom]`` section of ``domain.toml``."""

from protean.utils.globals import current_domain

MAX_PAGE_SIZE = 100

_DEFAULTS = {
    "STORE_NAME": "ElectroStore",
    "SUPPORT_EMAIL": "support@electrostore.example",
    "DEFAULT_CURRENCY": "usd",
    "PRODUCTS_PER_PAGE": 12,
    "ORDERS_PER_PAGE": 10,
    "REVIEWS_PER_PAGE": 10,
    "SHOWCASE_LIMIT": 8,
}


def store_setting(name: str):
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, _DEFAULTS.get(name))
