"""Mixed storefront workload scenario.

Combines the catalogue and ordering journeys with weights that model
realistic storefront traffic. This is the recommended scenario for load
baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import ProductListingJourney, ShopperBrowsingJourney
from loadtests.scenarios.ordering import (
    AdminReportingJourney,
    OrderCancellationJourney,
    OrderFullLifecycleJourney,
)


class MixedWorkloadUser(HttpUser):
    """Browsing dominates; orders and admin work make up the rest."""

    wait_time = between(1, 3)
    tasks = {
        ShopperBrowsingJourney: 10,
        OrderFullLifecycleJourney: 4,
        OrderCancellationJourney: 2,
        ProductListingJourney: 1,
        AdminReportingJourney: 1,
    }
