"""Stock alerts: surface products running low after an order."""

import structlog
from protean.utils.mixins import handle

from storefront.catalogue.events import LowStockDetected
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Product)
class StockAlertHandler:
    @handle(LowStockDetected)
    def on_low_stock(self, event: LowStockDetected) -> None:
        logger.warning(
            "Product stock at or below threshold",
            product_id=str(event.product_id),
            sku=event.sku,
            current_stock=event.current_stock,
            threshold=event.threshold,
        )
