import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from notes_store import __version__
from notes_store.api import state
from notes_store.data.catalog import ALL_FILTER
from notes_store.engine.cart import Cart
from notes_store.engine.pricing_engine import calculate_cart_totals
from notes_store.services.checkout_service import CheckoutError


logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Notes Store API",
    description="Catalog, cart pricing and checkout for the academic notes storefront",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CartLine(BaseModel):
    id: str
    quantity: int = Field(default=1, ge=1)


class TotalsRequest(BaseModel):
    items: List[CartLine]
    bundle_id: Optional[str] = None


class CheckoutRequest(BaseModel):
    items: List[CartLine]
    email: str


def _build_cart(lines: List[CartLine]) -> Cart:
    quantities = {}
    for line in lines:
        quantities[line.id] = quantities.get(line.id, 0) + line.quantity
    try:
        return Cart.from_quantities(state.catalog, quantities)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Product {e} not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/")
async def root():
    return {"status": "online", "message": "Notes Store API Active"}


@app.get("/catalog")
async def get_catalog(filter_category: str = ALL_FILTER, search: Optional[str] = None):
    products = state.catalog.filter(filter_category, search or "")

    # The bundle card only shows on the unfiltered view
    bundle = None
    if filter_category == ALL_FILTER and not search and state.catalog.bundle:
        bundle = asdict(state.catalog.bundle)

    return {
        "bundle": bundle,
        "products": [asdict(p) for p in products],
        "filters": list(state.settings.filter_categories),
    }


@app.get("/catalog/{product_id}")
async def get_product(product_id: str):
    product = state.catalog.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    return asdict(product)


@app.post("/cart/totals")
async def cart_totals(req: TotalsRequest):
    cart = _build_cart(req.items)
    bundle_id = req.bundle_id or state.engine.bundle_id
    result = calculate_cart_totals(cart.items, bundle_id)
    return jsonable_encoder(result)


@app.post("/checkout")
async def checkout(req: CheckoutRequest):
    cart = _build_cart(req.items)
    try:
        result = state.checkout_service.checkout(cart, req.email, state.engine.bundle_id)
    except CheckoutError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Checkout failed")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "reference": result.order.reference,
        "status": result.intent.status,
        "redirect_url": result.intent.redirect_url,
        "amount": result.order.amount,
        "currency": result.order.currency,
        "message": result.order.pricing.message,
        "steps": result.intent.steps,
        "students_helped": result.students_helped,
    }


@app.get("/stats")
async def get_stats():
    return {
        "students_helped": state.counter.value,
        "products": len(state.catalog),
        "bundle_id": state.engine.bundle_id,
    }


@app.post("/system/reload")
async def reload_catalog():
    catalog = state.reload_catalog()
    return {"success": True, "products": len(catalog), "bundle_id": catalog.bundle_id}
