"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    """Tracks state for a single simulated product listing."""

    product_id: str | None = None
    review_count: int = 0
    current_status: str = "active"


@dataclass
class OrderState:
    """Tracks state for a single order lifecycle."""

    headers: dict = field(default_factory=dict)
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    total_price: float = 0.0
    payment_intent_id: str | None = None
    current_status: str = "processing"
