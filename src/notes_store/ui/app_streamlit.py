"""
Streamlit storefront for the Notes Store.

Features:
- Product grid with filter tabs and code/name search
- Full-access bundle card on the unfiltered view
- Cart sidebar with live savings message and total
- Simulated PayNow checkout with step log
"""
import streamlit as st
import pandas as pd
from datetime import datetime

from notes_store.config.settings import get_settings
from notes_store.data.catalog import load_catalog, ALL_FILTER
from notes_store.engine import Cart, PricingEngine
from notes_store.services.checkout_service import (
    CheckoutError,
    CheckoutService,
    SimulatedPayNowProvider,
)
from notes_store.services.counter_service import StudentsHelpedCounter


st.set_page_config(
    page_title="MAXNotes",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_catalog():
    """Get cached catalog."""
    return load_catalog()


@st.cache_resource
def get_counter():
    """Counter shared across sessions of this server process."""
    return StudentsHelpedCounter(initial=get_settings().students_helped)


try:
    settings = get_settings()
    catalog = get_catalog()
    engine = PricingEngine(bundle_id=catalog.bundle_id)
    checkout_service = CheckoutService(SimulatedPayNowProvider(), get_counter(), currency=settings.currency)
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()

if 'cart' not in st.session_state:
    st.session_state.cart = Cart()

cart: Cart = st.session_state.cart


# ============================================================================
# SIDEBAR: Cart
# ============================================================================
with st.sidebar:
    st.header("🛒 Your Selection")

    pricing = engine.calculate(cart.items)

    if len(cart) == 0:
        st.info("Cart is empty")
    else:
        if pricing.message:
            st.success(f"⚡ {pricing.message}")

        for item in cart:
            c1, c2 = st.columns([3, 1])
            with c1:
                st.markdown(f"**{item.name}**  \n`{item.code}` · {item.category} · ${item.price:.2f} × {item.quantity}")
            with c2:
                if st.button("Remove", key=f"remove_{item.id}"):
                    cart.remove_item(item.id)
                    st.rerun()

        st.divider()
        st.metric("Total", f"${pricing.total:,.2f}")

        with st.expander("🔍 Pricing Details"):
            st.text(pricing.get_trace_text())

        st.divider()
        st.subheader("Checkout")
        email = st.text_input("Email (Google account for Drive access)", key="checkout_email")

        if st.button("Pay with PayNow", type="primary", use_container_width=True):
            try:
                result = checkout_service.checkout(cart, email, engine.bundle_id)
                st.session_state.last_checkout = result
                st.rerun()
            except CheckoutError as e:
                st.error(str(e))

    last = st.session_state.get('last_checkout')
    if last is not None:
        with st.container(border=True):
            st.markdown(f"**Order {last.order.reference}** · ${last.order.amount:,.2f}")
            for step in last.intent.steps:
                st.caption(f"→ {step}")


# ============================================================================
# MAIN CONTENT: Catalog
# ============================================================================
st.title("ACADEMIC ESSENTIALS.")
st.caption("Curated notes, tools, and resources for students. Instant delivery to your Google Drive.")
st.metric("Students Helped", f"{get_counter().value:,}")

col1, col2 = st.columns([2, 1])
with col1:
    search_query = st.text_input("Search", placeholder="Search code or subject...", label_visibility="collapsed")
with col2:
    active_filter = st.selectbox("Filter", list(settings.filter_categories), label_visibility="collapsed")

products = catalog.filter(active_filter, search_query)

cards = []
if active_filter == ALL_FILTER and not search_query and catalog.bundle:
    cards.append(catalog.bundle)
cards.extend(products)

if not cards:
    st.info("No resources found.")

grid = st.columns(4)
for i, product in enumerate(cards):
    with grid[i % 4]:
        with st.container(border=True):
            if product.image:
                st.image(product.image, use_container_width=True)
            is_bundle = product.id == catalog.bundle_id
            st.markdown(f"**{product.name}**" + (" ⭐" if is_bundle else ""))
            st.caption(f"{product.code} · {product.filter_category}")
            st.write(product.description)
            st.markdown(f"**${product.price:.2f}**")
            if st.button("➕ Add", key=f"add_{product.id}"):
                cart.add_item(product)
                st.rerun()

with st.expander("📊 Catalog Table"):
    st.dataframe(
        pd.DataFrame([{
            'Code': p.code,
            'Name': p.name,
            'Category': p.category,
            'Filter': p.filter_category,
            'Price': p.price,
        } for p in products]),
        use_container_width=True,
        hide_index=True
    )

st.caption(f"© {datetime.now().year} MAXNotes · {len(catalog)} resources")
