"""Shared route dependencies"""

from typing import Optional
from fastapi import Depends

from ..core.config import settings
from ..core.session import CheckoutSession, SessionManager, session_manager
from ..errors import SessionNotFoundError
from ..services.checkout_service import CheckoutService
from ..services.storefront_client import StorefrontClient

storefront_client: Optional[StorefrontClient] = None


def get_storefront_client() -> StorefrontClient:
    """Get or create storefront client"""
    global storefront_client
    if storefront_client is None:
        storefront_client = StorefrontClient(
            base_url=settings.storefront_api_url,
            timeout=settings.request_timeout,
        )
    return storefront_client


def get_session_manager() -> SessionManager:
    return session_manager


def get_checkout_service(
    client: StorefrontClient = Depends(get_storefront_client),
) -> CheckoutService:
    return CheckoutService(client)


def get_checkout_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> CheckoutSession:
    """Resolve the session from the path, 404 if unknown"""
    session = sessions.get_session(session_id)
    if not session:
        raise SessionNotFoundError(session_id)
    return session
