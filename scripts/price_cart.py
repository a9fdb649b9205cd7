#!/usr/bin/env python
"""
Price a cart from the command line and print the pricing trace.

Usage:
    python scripts/price_cart.py cs101=2 tool-formula=1
    python scripts/price_cart.py dabao-full-access cs101
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from notes_store.data.catalog import load_catalog
from notes_store.engine import Cart, PricingEngine


def parse_args(args: list[str]) -> dict[str, int]:
    quantities = {}
    for arg in args:
        product_id, _, qty = arg.partition('=')
        quantities[product_id] = quantities.get(product_id, 0) + int(qty or 1)
    return quantities


def main():
    catalog = load_catalog()
    engine = PricingEngine(bundle_id=catalog.bundle_id)

    if len(sys.argv) < 2:
        print("Available products:")
        for product in catalog.products:
            print(f"  {product.id:<16} {product.category:<6} ${product.price:>6.2f}  {product.name}")
        if catalog.bundle:
            print(f"  {catalog.bundle.id:<16} bundle ${catalog.bundle.price:>6.2f}  {catalog.bundle.name}")
        return

    try:
        cart = Cart.from_quantities(catalog, parse_args(sys.argv[1:]))
    except KeyError as e:
        print(f"❌ Unknown product: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    result = engine.calculate(cart.items)
    print(result.get_trace_text())
    print()
    print(f"Total:   ${result.total:.2f}")
    if result.message:
        print(f"Message: {result.message}")


if __name__ == "__main__":
    main()
