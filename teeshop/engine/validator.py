"""
Checkout submission validation.

The submission is checked section by section: shipping, then payment, then
billing. Whether the payment and billing sections apply depends on the
payment method and the same-as-shipping flag. Every violated rule is
collected so that all invalid fields can be reported at once.
"""

import re
from datetime import date
from typing import Any, Callable, Optional, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import ValidationError

from ..errors import CheckoutValidationError, FieldError
from ..models.checkout import (
    BILLING_FIELDS,
    CARD_FIELDS,
    CheckoutInput,
    PaymentMethod,
)

CARD_NUMBER_PATTERN = re.compile(r"^[0-9]{13,19}$")
EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/([0-9]{2})$")
CVV_PATTERN = re.compile(r"^[0-9]{3,4}$")
WHITESPACE = re.compile(r"\s")

MIN_PHONE_LENGTH = 10
MIN_ZIP_LENGTH = 5

SectionValidator = Callable[[CheckoutInput, date], list[FieldError]]


def luhn_checksum_valid(number: str) -> bool:
    """
    Luhn check over a string of digits.

    From the rightmost digit, every second digit is doubled (minus 9 when
    the result exceeds 9) and the sum of all digits must be divisible by 10.
    """
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def card_expiry_boundary(expiry: str) -> date:
    """
    First day of the month after an MM/YY expiry.

    A card stays valid through the whole of its printed month.
    """
    match = EXPIRY_PATTERN.match(expiry)
    if not match:
        raise ValueError(f"Expiry date must be in MM/YY format: {expiry!r}")
    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if month == 12:
        return date(year + 1, 1, 1)
    return date(year, month + 1, 1)


def _is_valid_email(value: str) -> bool:
    # Syntax only: no DNS lookup, and reserved domains such as .test are allowed
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def _required(data: CheckoutInput, field: str, message: str) -> Optional[FieldError]:
    if not getattr(data, field).strip():
        return FieldError(field, message)
    return None


def validate_shipping(data: CheckoutInput, today: date) -> list[FieldError]:
    errors = [
        _required(data, "first_name", "First name is required"),
        _required(data, "last_name", "Last name is required"),
    ]

    if not _is_valid_email(data.email.strip()):
        errors.append(FieldError("email", "Valid email is required"))
    if len(data.phone.strip()) < MIN_PHONE_LENGTH:
        errors.append(FieldError("phone", "Phone number is required"))

    errors += [
        _required(data, "address", "Address is required"),
        _required(data, "city", "City is required"),
        _required(data, "state", "State is required"),
    ]

    if len(data.zip_code.strip()) < MIN_ZIP_LENGTH:
        errors.append(FieldError("zip_code", "ZIP code is required"))

    errors.append(_required(data, "country", "Country is required"))
    return [e for e in errors if e]


def _card_number_error(card_number: str) -> Optional[str]:
    if not card_number.strip():
        return "Card number is required"
    digits = WHITESPACE.sub("", card_number)
    if not CARD_NUMBER_PATTERN.match(digits):
        return "Card number must be 13-19 digits"
    if not luhn_checksum_valid(digits):
        return "Invalid card number"
    return None


def _expiry_error(expiry: str, today: date) -> Optional[str]:
    expiry = expiry.strip()
    if not expiry:
        return "Expiry date is required"
    if not EXPIRY_PATTERN.match(expiry):
        return "Expiry date must be in MM/YY format"
    if today >= card_expiry_boundary(expiry):
        return "Card has expired"
    return None


def _cvv_error(cvv: str) -> Optional[str]:
    cvv = cvv.strip()
    if not cvv:
        return "CVV is required"
    if not CVV_PATTERN.match(cvv):
        return "CVV must be 3-4 digits"
    return None


def validate_payment(data: CheckoutInput, today: date) -> list[FieldError]:
    """Card fields are only checked for credit card payments"""
    if data.payment_method != PaymentMethod.CREDIT:
        return []

    errors = [_required(data, "card_name", "Name on card is required")]
    for field, message in (
        ("card_number", _card_number_error(data.card_number)),
        ("expiry_date", _expiry_error(data.expiry_date, today)),
        ("cvv", _cvv_error(data.cvv)),
    ):
        if message:
            errors.append(FieldError(field, message))
    return [e for e in errors if e]


_BILLING_MESSAGES = {
    "billing_first_name": "Billing first name is required",
    "billing_last_name": "Billing last name is required",
    "billing_address": "Billing address is required",
    "billing_city": "Billing city is required",
    "billing_state": "Billing state is required",
    "billing_zip_code": "Billing ZIP code is required",
    "billing_country": "Billing country is required",
}


def validate_billing(data: CheckoutInput, today: date) -> list[FieldError]:
    """Billing fields are only checked when they differ from shipping"""
    if data.same_as_shipping:
        return []
    errors = [_required(data, field, _BILLING_MESSAGES[field]) for field in BILLING_FIELDS]
    return [e for e in errors if e]


SECTION_VALIDATORS: tuple[SectionValidator, ...] = (
    validate_shipping,
    validate_payment,
    validate_billing,
)


def wire_name(field: str) -> str:
    """camelCase form key for a CheckoutInput field, as the form submits it"""
    info = CheckoutInput.model_fields.get(field)
    if info is None or not info.alias:
        return field
    return info.alias


def _parse(
    data: Union[CheckoutInput, dict[str, Any]],
) -> tuple[CheckoutInput, list[FieldError]]:
    """
    Build a CheckoutInput, collecting values that cannot be parsed.

    Only non-text fields (payment method, same-as-shipping) can fail here.
    Those keys fall back to their defaults so the section rules still run
    over everything else.
    """
    if isinstance(data, CheckoutInput):
        return data, []
    try:
        return CheckoutInput.model_validate(data), []
    except ValidationError as e:
        failures = e.errors()

    if not isinstance(data, dict) or any(not error["loc"] for error in failures):
        raise CheckoutValidationError([
            FieldError("__root__", error["msg"]) for error in failures
        ])

    rejected = {wire_name(str(error["loc"][0])) for error in failures}
    errors = [
        FieldError(".".join(str(part) for part in error["loc"]), error["msg"])
        for error in failures
    ]
    remainder = {
        key: value for key, value in data.items() if wire_name(key) not in rejected
    }
    return CheckoutInput.model_validate(remainder), errors


def _normalize(data: CheckoutInput) -> CheckoutInput:
    updates: dict[str, Any] = {
        name: value.strip()
        for name, value in data.model_dump().items()
        if type(value) is str
    }
    updates["card_number"] = WHITESPACE.sub("", data.card_number)

    if data.payment_method != PaymentMethod.CREDIT:
        updates.update({field: "" for field in CARD_FIELDS})
    if data.same_as_shipping:
        updates.update({field: "" for field in BILLING_FIELDS})

    return data.model_copy(update=updates)


def validate_checkout(
    data: Union[CheckoutInput, dict[str, Any]],
    today: Optional[date] = None,
) -> CheckoutInput:
    """
    Validate a checkout submission.

    Args:
        data: Parsed CheckoutInput or the raw form payload
        today: Date used for the card expiry check (defaults to today)

    Returns:
        Normalized CheckoutInput

    Raises:
        CheckoutValidationError: with one entry per violated rule, keyed by
            the camelCase form field
    """
    checkout, errors = _parse(data)
    today = today or date.today()

    for section in SECTION_VALIDATORS:
        errors.extend(section(checkout, today))

    if errors:
        raise CheckoutValidationError([
            FieldError(wire_name(e.field), e.message) for e in errors
        ])
    return _normalize(checkout)
