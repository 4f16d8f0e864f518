"""Shared BDD fixtures and step definitions for the order lifecycle."""

import pytest
from protean.exceptions import InvalidStateError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.catalogue.product import Product
from storefront.notifications.channel import get_email_channel
from storefront.ordering.cancellation import CancelOrder
from storefront.ordering.order import Order
from storefront.ordering.status import UpdateOrderStatus
from storefront.shared.exceptions import ForbiddenError, InsufficientStockError


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """The last order placed and the last error captured."""
    return {"order_id": None, "exc": None}


def _product(products, name):
    return current_domain.repository_for(Product).get(products[name])


def _order(outcome):
    return current_domain.repository_for(Order).get(outcome["order_id"])


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f} with {stock:d} in stock'))
def _(create_product, products, name, price, stock):
    products[name] = create_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('customer "{customer_id}" has ordered {quantity:d} of "{name}"'))
def _(place_order, products, outcome, customer_id, quantity, name):
    outcome["order_id"] = place_order([{"product_id": products[name], "quantity": quantity}], customer_id=customer_id)


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{customer_id}" orders {quantity:d} of "{name}"'))
def _(place_order, products, outcome, customer_id, quantity, name):
    try:
        outcome["order_id"] = place_order(
            [{"product_id": products[name], "quantity": quantity}], customer_id=customer_id
        )
    except InsufficientStockError as exc:
        outcome["exc"] = exc


@when(parsers.cfparse('customer "{customer_id}" cancels the order'))
def _(outcome, customer_id):
    try:
        current_domain.process(
            CancelOrder(order_id=outcome["order_id"], requested_by=customer_id),
            asynchronous=False,
        )
    except (InvalidStateError, ForbiddenError) as exc:
        outcome["exc"] = exc


@given(parsers.cfparse('the admin marks the order "{status}"'))
@when(parsers.cfparse('the admin marks the order "{status}"'))
def _(outcome, status):
    current_domain.process(UpdateOrderStatus(order_id=outcome["order_id"], status=status), asynchronous=False)


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def _(outcome, status):
    assert _order(outcome).status == status


@then(parsers.cfparse("the order total is {total:f}"))
def _(outcome, total):
    assert _order(outcome).pricing.total_price == total


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(products, name, stock):
    assert _product(products, name).stock == stock


@then(parsers.cfparse('"{name}" is "{stock_status}"'))
def _(products, name, stock_status):
    assert _product(products, name).stock_status == stock_status


@then("the order is rejected for insufficient stock")
def _(outcome):
    assert isinstance(outcome["exc"], InsufficientStockError)


@then("the cancellation is refused")
def _(outcome):
    assert isinstance(outcome["exc"], InvalidStateError)


@then("the cancellation is forbidden")
def _(outcome):
    assert isinstance(outcome["exc"], ForbiddenError)


@then(parsers.cfparse('the customer received a "{subject}" email'))
def _(subject):
    assert subject in [email.subject for email in get_email_channel().outbox]
