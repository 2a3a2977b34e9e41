"""Checkout models"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator

from .base import ApiModel


class PaymentMethod(str, Enum):
    CREDIT = "credit"
    PAYPAL = "paypal"
    BANK = "bank"


class PricingBreakdown(BaseModel):
    """
    Decomposition of an order's cost.

    Amounts keep full precision; rounding happens only in display().
    """
    subtotal: float
    discount: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    total: float

    def display(self) -> dict[str, str]:
        """Amounts formatted with two decimals for presentation"""
        return {
            name: f"{getattr(self, name):.2f}"
            for name in ("subtotal", "discount", "tax", "shipping", "total")
        }


BILLING_FIELDS = (
    "billing_first_name",
    "billing_last_name",
    "billing_address",
    "billing_city",
    "billing_state",
    "billing_zip_code",
    "billing_country",
)

CARD_FIELDS = ("card_name", "card_number", "expiry_date", "cvv")

SHIPPING_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
    "country",
)

TEXT_FIELDS = SHIPPING_FIELDS + CARD_FIELDS + BILLING_FIELDS


class CheckoutInput(ApiModel):
    """
    Checkout form submission: shipping, payment and billing sections.

    Text fields accept null and numbers so that a malformed value is reported
    by the section rules, together with every other invalid field.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Shipping
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "United States"

    # Payment
    payment_method: PaymentMethod = PaymentMethod.CREDIT
    card_name: str = ""
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""

    # Billing
    same_as_shipping: bool = True
    billing_first_name: str = ""
    billing_last_name: str = ""
    billing_address: str = ""
    billing_city: str = ""
    billing_state: str = ""
    billing_zip_code: str = ""
    billing_country: str = "United States"

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value
