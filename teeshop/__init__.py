"""Checkout pricing and payment validation for the custom apparel storefront."""

__version__ = "1.0.0"
