"""
Teeshop Checkout Application

Cart pricing, coupon handling and checkout submission for the custom
apparel storefront. Products, orders and reviews live in the storefront API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from .core.config import settings
from .errors import (
    CheckoutError,
    CheckoutInProgressError,
    CheckoutValidationError,
    EmptyCartError,
    InvalidCouponError,
    LineItemNotFoundError,
    NetworkError,
    SessionNotFoundError,
)
from .routes import session_router, cart_router, checkout_router, products_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Teeshop Checkout starting up...")
    logger.info(f"Storefront API: {settings.storefront_api_url}")

    yield

    logger.info("Teeshop Checkout shutting down...")
    from .routes.dependencies import storefront_client
    if storefront_client:
        await storefront_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Checkout pricing and payment validation for custom printed apparel",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(session_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(products_router)


ERROR_STATUS_CODES: dict[type, int] = {
    CheckoutValidationError: 422,
    InvalidCouponError: 400,
    EmptyCartError: 400,
    LineItemNotFoundError: 404,
    SessionNotFoundError: 404,
    CheckoutInProgressError: 409,
    NetworkError: 502,
}


@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    """Report recoverable checkout errors as {"error": ...}"""
    status_code = next(
        (code for cls, code in ERROR_STATUS_CODES.items() if isinstance(exc, cls)),
        400,
    )
    # Upstream client errors (e.g. unknown order) keep their status
    if isinstance(exc, NetworkError) and exc.status_code and 400 <= exc.status_code < 500:
        status_code = exc.status_code
    content: dict = {"error": str(exc)}
    if isinstance(exc, CheckoutValidationError):
        content["errors"] = [e.to_dict() for e in exc.errors]
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content=content)


@app.get("/")
async def home():
    return {
        "message": "Teeshop Checkout API",
        "docs": "/docs",
        "endpoints": {
            "session": "/api/session",
            "cart": "/api/cart",
            "checkout": "/api/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "teeshop-checkout"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "teeshop.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
