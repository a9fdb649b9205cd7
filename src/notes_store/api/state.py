"""
Shared service instances for the API routes.
"""
from ..config.settings import get_settings
from ..data.catalog import load_catalog
from ..engine.pricing_engine import PricingEngine
from ..services.checkout_service import CheckoutService, SimulatedPayNowProvider
from ..services.counter_service import StudentsHelpedCounter


settings = get_settings()
catalog = load_catalog(settings=settings)
engine = PricingEngine(bundle_id=catalog.bundle_id)
counter = StudentsHelpedCounter(initial=settings.students_helped)
checkout_service = CheckoutService(
    provider=SimulatedPayNowProvider(),
    counter=counter,
    currency=settings.currency,
)


def reload_catalog():
    """Reload the catalog from disk and rebind the engine's bundle id."""
    global catalog
    catalog = load_catalog(settings=settings)
    engine.bundle_id = catalog.bundle_id
    return catalog
