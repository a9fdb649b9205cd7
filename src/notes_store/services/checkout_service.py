"""
Checkout Service - Turns a priced cart into a payment and settles the cart.

Payment is delegated to a PaymentProvider. A provider either confirms the
payment directly (the simulated PayNow flow shipped here) or returns a
redirect target for a hosted payment page. The cart is only cleared and the
counter only bumped once a payment is confirmed.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..engine.cart import Cart
from ..engine.models import CartItem, PricingResult
from ..engine.pricing_engine import calculate_cart_totals
from .counter_service import StudentsHelpedCounter


logger = logging.getLogger(__name__)

STATUS_CONFIRMED = "confirmed"
STATUS_REDIRECT = "redirect"
STATUS_FAILED = "failed"


class CheckoutError(Exception):
    """Checkout could not be completed."""


@dataclass
class Order:
    """A cart snapshot with its amount due."""
    reference: str
    email: str
    amount: float
    currency: str
    items: list[CartItem]
    pricing: PricingResult
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass
class PaymentIntent:
    """Outcome of asking a provider to take payment."""
    status: str
    reference: str
    redirect_url: Optional[str] = None
    steps: list[str] = field(default_factory=list)

    def log(self, message: str):
        """Record a checkout step."""
        self.steps.append(message)
        logger.info("[%s] %s", self.reference, message)


@dataclass
class CheckoutResult:
    """What the checkout surface shows after a checkout attempt."""
    order: Order
    intent: PaymentIntent
    students_helped: int

    @property
    def completed(self) -> bool:
        return self.intent.status == STATUS_CONFIRMED


class PaymentProvider(ABC):
    """Creates a payment for an order and reports a redirect or confirmation."""

    name = "provider"

    @abstractmethod
    def create_payment(self, order: Order) -> PaymentIntent:
        ...


class SimulatedPayNowProvider(PaymentProvider):
    """
    Simulated PayNow QR flow.

    No money moves: the QR code, the wait and the bank confirmation are
    recorded as steps and the payment is confirmed immediately.
    """

    name = "paynow"

    def __init__(self, uen: str = "MAXNOTES"):
        self.uen = uen

    def create_payment(self, order: Order) -> PaymentIntent:
        intent = PaymentIntent(status=STATUS_FAILED, reference=order.reference)

        if order.amount <= 0:
            intent.log(f"Nothing to pay: amount {order.currency} {order.amount:.2f}")
            return intent

        intent.log(f"Generating PayNow QR code for {order.currency} {order.amount:.2f} to {self.uen}")
        intent.log("Awaiting payment confirmation")
        intent.log(f"Payment received ({order.reference})")
        intent.log(f"Granting Google Drive access to {order.email}")
        intent.status = STATUS_CONFIRMED
        return intent


class CheckoutService:
    """Prices the cart, takes payment, and settles the cart on success."""

    def __init__(self, provider: PaymentProvider, counter: StudentsHelpedCounter, currency: str = "SGD"):
        self.provider = provider
        self.counter = counter
        self.currency = currency

    def build_order(self, cart: Cart, email: str, bundle_id: Optional[str] = None) -> Order:
        """
        Validate checkout input and snapshot the cart as an order.

        Raises:
            CheckoutError: invalid email or empty cart
        """
        email = (email or "").strip()
        if not email or "@" not in email:
            raise CheckoutError("A valid email address is required to deliver your notes")

        if cart.line_count == 0:
            raise CheckoutError("Cart is empty")

        items = cart.items
        pricing = calculate_cart_totals(items, bundle_id)

        return Order(
            reference=f"MN-{uuid.uuid4().hex[:10].upper()}",
            email=email,
            amount=pricing.total,
            currency=self.currency,
            items=items,
            pricing=pricing,
        )

    def checkout(self, cart: Cart, email: str, bundle_id: Optional[str] = None) -> CheckoutResult:
        """
        Run checkout for a cart.

        On confirmed payment the counter is increased by the units sold and the
        cart is cleared. A redirect leaves the cart as-is.

        Raises:
            CheckoutError: invalid input or the provider failed the payment
        """
        order = self.build_order(cart, email, bundle_id)
        logger.info("Checkout %s: %d item(s), %s %.2f via %s",
                    order.reference, order.item_count, order.currency, order.amount, self.provider.name)

        intent = self.provider.create_payment(order)

        if intent.status == STATUS_FAILED:
            reason = intent.steps[-1] if intent.steps else "payment failed"
            raise CheckoutError(f"Payment failed: {reason}")

        if intent.status == STATUS_CONFIRMED:
            students_helped = self.counter.increment(order.item_count)
            cart.clear()
        else:
            students_helped = self.counter.value

        return CheckoutResult(order=order, intent=intent, students_helped=students_helped)
