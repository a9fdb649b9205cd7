"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class Product:
    """A purchasable catalog entry (a set of notes, a tool, or the bundle)."""
    id: str
    code: str
    name: str
    price: float
    category: str  # "Note", "Tool", ...
    description: str = ""
    tags: list[str] = field(default_factory=list)
    image: str = ""
    filter_category: str = "Others"
    google_drive_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> 'Product':
        """Create Product from a catalog record (camelCase or snake_case keys)."""
        return cls(
            id=str(data['id']),
            code=str(data.get('code') or ''),
            name=str(data.get('name') or ''),
            price=float(data.get('price') or 0.0),
            category=str(data.get('category') or ''),
            description=str(data.get('description') or ''),
            tags=list(data.get('tags') or []),
            image=str(data.get('image') or ''),
            filter_category=str(data.get('filterCategory') or data.get('filter_category') or 'Others'),
            google_drive_id=str(data.get('googleDriveId') or data.get('google_drive_id') or ''),
        )


@dataclass
class CartItem:
    """A single line in the cart: one distinct product and its quantity."""
    id: str
    category: str
    price: float
    quantity: int = 1
    name: str = ""
    code: str = ""

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> 'CartItem':
        return cls(
            id=product.id,
            category=product.category,
            price=product.price,
            quantity=quantity,
            name=product.name,
            code=product.code,
        )


@dataclass
class PricingResult:
    """
    Result of pricing a cart.

    total and message are what the cart and checkout surfaces display;
    the remaining fields break the total down for inspection.
    """
    total: float
    message: str
    notes_total: float = 0.0
    others_total: float = 0.0
    tier: str = "NONE"
    notes_count: int = 0
    bundle_count: int = 0
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the pricing trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to the {total, message} shape consumed by display surfaces."""
        return {
            "total": self.total,
            "message": self.message,
        }
