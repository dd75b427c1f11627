"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly.  Each class carries a
stable ``code`` that clients use to tell "fix your input" apart from
"try again later".
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "INVALID_ARGUMENT"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the stock available for a product."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, only {available} in stock)"
        )


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart with no items."""

    code = "EMPTY_CART"


class NoOpTransitionError(ValidationError):
    """A status change to the status the order already has."""

    code = "NO_OP"


class InvalidTransitionError(ValidationError):
    """A status change not permitted by the order lifecycle."""

    code = "INVALID_TRANSITION"


class AuthenticationError(DomainException):
    """The caller could not be identified."""

    code = "UNAUTHORIZED"


class PermissionDeniedError(DomainException):
    """The caller is identified but lacks the required role."""

    code = "FORBIDDEN"
