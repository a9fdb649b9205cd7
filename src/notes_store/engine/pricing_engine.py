"""
Pricing Engine - Cart totals with tiered note discounts.

Notes are priced on the number of regular notes in the cart:
- 1-2 notes:   $10 each
- 3-4 notes:   $8 each
- 5-20 notes:  $7 each
- 21+ notes:   flat $89 (full access cap)

A bundle ("DaBao") item in the cart replaces all of the above with
bundle quantity × $89. Items outside the Note category are never discounted.
"""
from typing import Any, Iterable, Mapping, Optional, Union

from .models import CartItem, PricingResult


NOTE_CATEGORY = "Note"

BASE_PRICE = 10.0
TIER_1_PRICE = 8.0   # 3+ notes
TIER_2_PRICE = 7.0   # 5+ notes
FULL_ACCESS_PRICE = 89.0  # 21+ notes or bundle

TIER_1_MIN = 3
TIER_2_MIN = 5
FULL_ACCESS_MIN = 21

CartLike = Iterable[Union[CartItem, Mapping[str, Any]]]


def _money(amount: float) -> str:
    """Format a price for messages: $8 rather than $8.00 for whole amounts."""
    return f"${amount:g}"


def _field(item: Union[CartItem, Mapping[str, Any]], name: str) -> Any:
    if isinstance(item, Mapping):
        return item[name]
    return getattr(item, name)


def calculate_cart_totals(items: CartLike, bundle_id: Optional[str] = None) -> PricingResult:
    """
    Price a cart.

    Args:
        items: Cart line items (CartItem or mappings with id/category/price/quantity)
        bundle_id: Id of the full-access bundle product, or None if not configured

    Returns:
        PricingResult with total and the savings message to display
    """
    items = list(items)

    bundle_count = 0
    notes_count = 0
    others_total = 0.0

    for item in items:
        item_id = _field(item, 'id')
        quantity = int(_field(item, 'quantity'))

        if bundle_id is not None and item_id == bundle_id:
            bundle_count += quantity
        elif _field(item, 'category') == NOTE_CATEGORY:
            notes_count += quantity
        else:
            others_total += float(_field(item, 'price')) * quantity

    result = PricingResult(
        total=0.0,
        message="",
        notes_count=notes_count,
        bundle_count=bundle_count,
        others_total=others_total,
    )
    result.add_trace("Classification", f"{len(items)} line(s) in cart")
    result.add_trace("Regular Notes", "Note quantity excluding bundle", str(notes_count))
    if bundle_count:
        result.add_trace("Bundle", f"Bundle {bundle_id} in cart", str(bundle_count))

    if bundle_count > 0:
        result.notes_total = bundle_count * FULL_ACCESS_PRICE
        result.tier = "BUNDLE"
        result.message = "DaBao Active: All Notes Included!"
    elif notes_count >= FULL_ACCESS_MIN:
        result.notes_total = FULL_ACCESS_PRICE
        result.tier = "FULL_ACCESS"
        result.message = f"Full Access Price Cap Applied ({_money(FULL_ACCESS_PRICE)})"
    elif notes_count >= TIER_2_MIN:
        result.notes_total = notes_count * TIER_2_PRICE
        result.tier = "TIER_2"
        result.message = f"5-Pack Discount Applied ({_money(TIER_2_PRICE)}/note)"
    elif notes_count >= TIER_1_MIN:
        result.notes_total = notes_count * TIER_1_PRICE
        result.tier = "TIER_1"
        result.message = f"3-Pack Discount Applied ({_money(TIER_1_PRICE)}/note)"
    elif notes_count > 0:
        result.notes_total = notes_count * BASE_PRICE
        result.tier = "BASE"
        result.message = (
            f"Add {TIER_1_MIN - notes_count} more notes to save ({_money(TIER_1_PRICE)}/each)!"
        )

    result.add_trace("Notes Pricing", f"Tier {result.tier}", f"${result.notes_total:.2f}")
    result.add_trace("Other Items", "Full price × quantity", f"${others_total:.2f}")

    result.total = result.notes_total + others_total
    result.add_trace("Total", "Notes + other items", f"${result.total:.2f}")

    return result


class PricingEngine:
    """
    Binds the bundle product id so callers can price carts without passing it.

    Holds no cart state; every call recomputes from the given items.
    """

    def __init__(self, bundle_id: Optional[str] = None):
        self.bundle_id = bundle_id

    def calculate(self, items: CartLike) -> PricingResult:
        """Price a list of cart items."""
        return calculate_cart_totals(items, self.bundle_id)

    def quote(self, cart) -> dict:
        """
        Price a Cart (legacy dict format for display surfaces).

        Returns:
            Dict with total and message keys
        """
        return self.calculate(cart.items).to_dict()
