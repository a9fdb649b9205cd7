"""Engine subpackage - core pricing logic and cart."""
from .pricing_engine import PricingEngine, calculate_cart_totals
from .models import Product, CartItem, PricingResult
from .cart import Cart

__all__ = ['PricingEngine', 'calculate_cart_totals', 'Product', 'CartItem', 'PricingResult', 'Cart']
