"""
Pricing engine tests - tier boundaries, bundle override and mixed carts.
"""
import pytest

from notes_store.engine import CartItem, PricingEngine, calculate_cart_totals
from notes_store.engine.pricing_engine import (
    BASE_PRICE,
    FULL_ACCESS_PRICE,
    TIER_1_PRICE,
    TIER_2_PRICE,
)

BUNDLE_ID = "dabao"


def notes(count: int, price: float = 10.0) -> list[CartItem]:
    """One line per note, quantity 1 each."""
    return [CartItem(id=f"note-{i}", category="Note", price=price) for i in range(count)]


def bundle(quantity: int = 1) -> CartItem:
    return CartItem(id=BUNDLE_ID, category="Note", price=89.0, quantity=quantity)


def tool(price: float = 15.0, quantity: int = 1, item_id: str = "tool-1") -> CartItem:
    return CartItem(id=item_id, category="Tool", price=price, quantity=quantity)


def test_empty_cart():
    result = calculate_cart_totals([], BUNDLE_ID)
    assert result.total == 0
    assert result.message == ""
    assert result.tier == "NONE"


def test_empty_cart_without_bundle_id():
    result = calculate_cart_totals([], None)
    assert result.total == 0
    assert result.message == ""


@pytest.mark.parametrize("count", [1, 2])
def test_base_tier(count):
    result = calculate_cart_totals(notes(count), BUNDLE_ID)
    assert result.total == count * BASE_PRICE
    assert result.message == f"Add {3 - count} more notes to save ($8/each)!"
    assert result.tier == "BASE"


@pytest.mark.parametrize("count", [3, 4])
def test_three_pack_tier(count):
    result = calculate_cart_totals(notes(count), BUNDLE_ID)
    assert result.total == count * TIER_1_PRICE
    assert result.message == "3-Pack Discount Applied ($8/note)"


@pytest.mark.parametrize("count", [5, 6, 12, 20])
def test_five_pack_tier(count):
    result = calculate_cart_totals(notes(count), BUNDLE_ID)
    assert result.total == count * TIER_2_PRICE
    assert result.message == "5-Pack Discount Applied ($7/note)"


@pytest.mark.parametrize("count", [21, 22, 50, 1000])
def test_full_access_cap(count):
    result = calculate_cart_totals(notes(count), BUNDLE_ID)
    assert result.total == FULL_ACCESS_PRICE
    assert result.message == "Full Access Price Cap Applied ($89)"
    assert result.tier == "FULL_ACCESS"


def test_twenty_notes_stay_below_cap():
    # 20 × $7 = $140 is more than the cap, but the cap only starts at 21 notes
    result = calculate_cart_totals(notes(20), BUNDLE_ID)
    assert result.total == 140.0
    assert result.tier == "TIER_2"


def test_quantity_counts_toward_tier():
    cart = [CartItem(id="cs101", category="Note", price=10.0, quantity=5)]
    result = calculate_cart_totals(cart, BUNDLE_ID)
    assert result.total == 35.0
    assert result.notes_count == 5


def test_tier_price_ignores_listed_note_price():
    result = calculate_cart_totals(notes(3, price=12.5), BUNDLE_ID)
    assert result.total == 24.0


@pytest.mark.parametrize("regular_count", [0, 1, 3, 6, 25])
def test_bundle_overrides_every_tier(regular_count):
    result = calculate_cart_totals([bundle()] + notes(regular_count), BUNDLE_ID)
    assert result.total == FULL_ACCESS_PRICE
    assert result.message == "DaBao Active: All Notes Included!"
    assert result.tier == "BUNDLE"


def test_bundle_quantity_multiplies():
    result = calculate_cart_totals([bundle(quantity=2)], BUNDLE_ID)
    assert result.total == 2 * FULL_ACCESS_PRICE
    assert result.bundle_count == 2


def test_bundle_not_recognised_without_bundle_id():
    # Catalog not loaded yet: the bundle line prices as a regular note
    result = calculate_cart_totals([bundle()], None)
    assert result.total == BASE_PRICE
    assert result.bundle_count == 0


def test_bundle_with_other_category_is_not_double_counted():
    item = CartItem(id=BUNDLE_ID, category="Bundle", price=89.0)
    result = calculate_cart_totals([item], BUNDLE_ID)
    assert result.total == FULL_ACCESS_PRICE
    assert result.others_total == 0


def test_other_items_are_never_discounted():
    cart = notes(6) + [tool(15.0, quantity=2), tool(5.5, item_id="tool-2")]
    result = calculate_cart_totals(cart, BUNDLE_ID)
    assert result.notes_total == 42.0
    assert result.others_total == pytest.approx(35.5)
    assert result.total == pytest.approx(77.5)


def test_only_other_items_has_no_message():
    result = calculate_cart_totals([tool(15.0)], BUNDLE_ID)
    assert result.total == 15.0
    assert result.message == ""


def test_other_items_added_to_bundle_price():
    result = calculate_cart_totals([bundle(), tool(15.0)], BUNDLE_ID)
    assert result.total == 104.0


def test_zero_price_items():
    result = calculate_cart_totals([tool(0.0, quantity=3)], BUNDLE_ID)
    assert result.total == 0
    assert result.message == ""


def test_accepts_mappings():
    cart = [
        {"id": "a", "category": "Note", "price": 10.0, "quantity": 2},
        {"id": "b", "category": "Tool", "price": 15.0, "quantity": 1},
    ]
    result = calculate_cart_totals(cart, BUNDLE_ID)
    assert result.total == 35.0


def test_line_order_does_not_matter():
    cart = notes(4) + [tool(15.0)]
    forward = calculate_cart_totals(cart, BUNDLE_ID)
    backward = calculate_cart_totals(list(reversed(cart)), BUNDLE_ID)
    assert forward.total == backward.total
    assert forward.message == backward.message


def test_idempotent():
    cart = notes(4) + [bundle(), tool()]
    first = calculate_cart_totals(cart, BUNDLE_ID)
    second = calculate_cart_totals(cart, BUNDLE_ID)
    assert first == second


def test_does_not_mutate_cart():
    cart = notes(3)
    snapshot = [CartItem(**vars(item)) for item in cart]
    calculate_cart_totals(cart, BUNDLE_ID)
    assert cart == snapshot


def test_trace_records_total():
    result = calculate_cart_totals(notes(3), BUNDLE_ID)
    text = result.get_trace_text()
    assert "Notes Pricing" in text
    assert "$24.00" in text


def test_to_dict_shape():
    assert calculate_cart_totals(notes(1), BUNDLE_ID).to_dict() == {
        "total": 10.0,
        "message": "Add 2 more notes to save ($8/each)!",
    }


def test_engine_binds_bundle_id():
    engine = PricingEngine(bundle_id=BUNDLE_ID)
    result = engine.calculate([bundle()] + notes(2))
    assert result.total == FULL_ACCESS_PRICE


# Reference scenarios

def test_scenario_a_two_notes():
    result = calculate_cart_totals(notes(2), BUNDLE_ID)
    assert result.total == pytest.approx(20.00)
    assert "Add 1 more notes to save" in result.message


def test_scenario_b_four_notes():
    result = calculate_cart_totals(notes(4), BUNDLE_ID)
    assert result.total == pytest.approx(32.00)
    assert result.message == "3-Pack Discount Applied ($8/note)"


def test_scenario_c_six_notes():
    result = calculate_cart_totals(notes(6), BUNDLE_ID)
    assert result.total == pytest.approx(42.00)
    assert result.message == "5-Pack Discount Applied ($7/note)"


def test_scenario_d_twenty_five_notes():
    result = calculate_cart_totals(notes(25), BUNDLE_ID)
    assert result.total == pytest.approx(89.00)


def test_scenario_e_bundle_with_notes():
    result = calculate_cart_totals([bundle()] + notes(3), BUNDLE_ID)
    assert result.total == pytest.approx(89.00)
    assert result.message == "DaBao Active: All Notes Included!"


def test_scenario_f_notes_and_tool():
    result = calculate_cart_totals(notes(2) + [tool(15.0)], BUNDLE_ID)
    assert result.total == pytest.approx(35.00)
