"""
Canonical record model for one priced product sighting.

ProductObservation instances are created once, by the record validator, and
never mutated afterwards.  Every downstream stage (filtering, grouping,
aggregation) works on ordered sequences of these records.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductObservation:
    """One product seen at one retailer in one location, with its price."""

    product_id: str
    description: str
    unit_price: float
    retailer_name: str
    state_code: str
    city: str = ""
    neighborhood: str = ""
    details: str = ""
    image_ref: str | None = None
    unit_original_price: float | None = None
    unit_min_price: float | None = None
    merchant_id: str = ""

    @property
    def location_label(self) -> str:
        """'Retailer - City', as shown next to cheapest/priciest prices."""
        return f"{self.retailer_name} - {self.city}"

    @property
    def has_image(self) -> bool:
        return bool(self.image_ref and self.image_ref.strip())
