"""Coupon code resolution"""

import logging
from typing import Optional

from ..errors import InvalidCouponError
from ..models.cart import Coupon

logger = logging.getLogger(__name__)

DEFAULT_COUPONS: dict[str, float] = {
    "SAVE10": 0.10,
    "FIRST20": 0.20,
}


class CouponResolver:
    """Maps a submitted code to a discount rate (case-insensitive)"""

    def __init__(self, table: Optional[dict[str, float]] = None):
        source = DEFAULT_COUPONS if table is None else table
        self.table = {code.upper(): rate for code, rate in source.items()}

    def resolve(self, code: str) -> Coupon:
        canonical = (code or "").strip().upper()
        rate = self.table.get(canonical)
        if rate is None:
            logger.warning(f"Rejected coupon code: {code!r}")
            raise InvalidCouponError(code)
        return Coupon(code=canonical, discount_rate=rate)


default_resolver = CouponResolver()
