"""Storefront-specific errors layered on Protean's exception hierarchy.

Protean already provides the rest of the taxonomy:

- ``ObjectNotFoundError``: missing order, product or review target
- ``ValidationError``: bad arguments (unknown status, rating out of range, ...)
- ``InvalidStateError``: operation not allowed in the aggregate's current state
- ``ExpectedVersionError``: a concurrent write won the race for an aggregate

All of them carry a ``messages`` dict of ``{field: [message, ...]}``.
"""

from protean.exceptions import InvalidOperationError, ProteanException, ValidationError


class InsufficientStockError(ValidationError):
    """The requested quantity exceeds the product's stock."""


class ForbiddenError(InvalidOperationError):
    """The principal is not allowed to act on the resource."""


class NotAuthenticatedError(ProteanException):
    """The request carried no principal."""
