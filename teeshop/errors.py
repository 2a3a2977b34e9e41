"""Checkout error taxonomy"""

from dataclasses import dataclass
from typing import Optional


class CheckoutError(Exception):
    """Base exception for recoverable checkout errors"""
    pass


@dataclass
class FieldError:
    """A single violated rule, scoped to one input field"""
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class CheckoutValidationError(CheckoutError):
    """One or more field-level violations in a checkout submission"""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(
            f"Checkout validation failed: {', '.join(e.field for e in self.errors)}"
        )

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


class InvalidCouponError(CheckoutError):
    """Submitted coupon code is not recognised"""

    def __init__(self, code: str):
        self.code = code
        super().__init__("Please check your coupon code and try again")


class EmptyCartError(CheckoutError):
    """Checkout attempted with no items in the cart"""

    def __init__(self):
        super().__init__("Please add items to your cart before checking out.")


class LineItemNotFoundError(CheckoutError):
    """Cart line item id is not in the cart"""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not in cart")


class CheckoutInProgressError(CheckoutError):
    """A checkout submission is already in flight for this session"""

    def __init__(self):
        super().__init__("An order is already being placed for this session")


class NetworkError(CheckoutError):
    """Failed request or non-2xx response from the storefront API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SessionNotFoundError(CheckoutError):
    """No active checkout session with this id"""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("Session not found")
