"""
Notes Store Package

Storefront backend for digital academic notes.
Prices carts with tiered note discounts and a full-access bundle, and runs checkout.
"""

__version__ = "1.0.0"
