"""Helpers for reading ElectroStore API error bodies in load tests.

Every error response has the shape ``{"error": {"field": ["msg", ...]}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_DETAIL = 300


def error_messages(response: Response) -> dict[str, list[str]]:
    """The ``{field: [messages]}`` dict of an error response, or an empty dict."""
    try:
        body = response.json()
    except ValueError:
        return {}
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return {"_entity": [str(error)]} if error else {}
    return {field: msgs if isinstance(msgs, list) else [str(msgs)] for field, msgs in error.items()}


def extract_error_detail(response: Response) -> str:
    """One line describing why a request failed, for Locust failure messages and logs."""
    messages = error_messages(response)
    if not messages:
        return (getattr(response, "text", "") or "(empty response body)")[:_MAX_DETAIL]
    return " | ".join(f"{field}: {'; '.join(msgs)}" for field, msgs in messages.items())[:_MAX_DETAIL]


def is_insufficient_stock(response: Response) -> bool:
    """True when an order was turned away because stock ran out."""
    if response.status_code != 400:
        return False
    return any(msg.startswith("Insufficient stock") for msg in error_messages(response).get("stock", []))
