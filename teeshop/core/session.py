"""Checkout session management.

A session is created on login and torn down on logout. It owns the cart and
the applied coupon for one user, replacing any global cart state.
"""

import uuid
import logging
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from ..engine.cart_store import CartStore
from ..engine.coupons import CouponResolver, default_resolver
from ..models.cart import Coupon

logger = logging.getLogger(__name__)


@dataclass
class CheckoutSession:
    """Shopping session for one authenticated user"""
    session_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartStore = field(default_factory=CartStore)
    coupon: Optional[Coupon] = None
    submitting: bool = False

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def apply_coupon(
        self, code: str, resolver: CouponResolver = default_resolver
    ) -> Coupon:
        """
        Apply a coupon code, replacing any coupon already applied.

        An invalid code raises InvalidCouponError and leaves the current
        coupon in place.
        """
        coupon = resolver.resolve(code)
        self.coupon = coupon
        self.touch()
        return coupon

    def remove_coupon(self) -> None:
        self.coupon = None
        self.touch()

    def reset(self) -> None:
        """Clear cart and coupon"""
        self.cart.clear()
        self.coupon = None
        self.touch()


class SessionManager:
    """Manages checkout sessions"""

    def __init__(self):
        self.sessions: dict[str, CheckoutSession] = {}

    def create_session(self, user_id: str) -> CheckoutSession:
        """Create a new session for a user (login)"""
        now = datetime.utcnow()
        session = CheckoutSession(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.session_id] = session
        logger.info(f"Session {session.session_id} started for user {user_id}")
        return session

    def get_session(self, session_id: str) -> Optional[CheckoutSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Tear down a session (logout)"""
        session = self.sessions.pop(session_id, None)
        if not session:
            return False
        session.reset()
        logger.info(f"Session {session_id} ended")
        return True

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions idle for longer than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            self.end_session(sid)
        return len(old_sessions)


# Singleton instance
session_manager = SessionManager()
