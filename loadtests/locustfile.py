"""ElectroStore load testing entry point.

Locust discovers every user class imported here. Pick one on the command
line to run a single scenario.

Usage:
    locust -f loadtests/locustfile.py --host http://localhost:8000
    locust -f loadtests/locustfile.py MixedWorkloadUser
    locust -f loadtests/locustfile.py StockContentionUser --headless -u 100 -r 20 -t 120s

    # CI, with CSV output:
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
from collections import Counter

import requests
from locust import events

from loadtests.data_generators import admin_headers
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.catalogue import CatalogueUser  # noqa: F401
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.ordering import OrderingUser  # noqa: F401
from loadtests.scenarios.stress import StockContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")

# (status code, endpoint name) -> occurrences
_errors: Counter = Counter()

_STORE_FIGURES = ("total_products", "total_orders", "total_customers", "total_revenue")


@events.request.add_listener
def log_failed_request(request_type, name, response, exception, **_kw):
    """Log the API's error body for every failed request, so a 400 reads as its reason."""
    if exception:
        _errors[("exception", name)] += 1
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
        return
    if response is not None and response.status_code >= 400:
        _errors[(response.status_code, name)] += 1
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, extract_error_detail(response))


@events.test_start.add_listener
def reset_error_tally(environment, **_kwargs):
    _errors.clear()
    logger.info("Load test against %s", environment.host)


@events.test_stop.add_listener
def report(environment, **_kwargs):
    """Print the error tally and the store's dashboard figures."""
    if _errors:
        print("\n[LOADTEST] Errors by status and endpoint:")
        for (status, name), count in _errors.most_common():
            print(f"  {status:>9}  {count:>6}  {name}")

    try:
        stats = requests.get(
            f"{environment.host}/api/admin/dashboard/stats",
            headers=admin_headers(),
            timeout=5,
        ).json()
    except requests.RequestException as exc:
        print(f"\n[LOADTEST] Dashboard unavailable: {exc}")
        return

    print("\n[LOADTEST] Store figures after the run:")
    for key in _STORE_FIGURES:
        print(f"  {key}: {stats.get(key)}")
