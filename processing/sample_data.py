"""
Demo dataset used when no catalog CSV is available.

Generates a small, reproducible set of observations across five products,
four retailers and five states so every dashboard view has something to
show.  The same seed always yields the same observations.
"""

import logging
import random

from processing.models import ProductObservation

logger = logging.getLogger(__name__)

_DESCRIPTIONS: list[str] = [
    "Leite Condensado",
    "Leite UHT",
    "Queijo Minas",
    "Manteiga",
    "Iogurte",
]
_RETAILERS: list[str] = ["Atacadão", "Extra", "Carrefour", "Pão de Açúcar"]
_LOCATIONS: list[tuple[str, str]] = [
    ("SP", "São Paulo"),
    ("RJ", "Rio de Janeiro"),
    ("MG", "Belo Horizonte"),
    ("CE", "Fortaleza"),
    ("PE", "Recife"),
]


def generate_sample_observations(count: int = 50, seed: int = 7) -> list[ProductObservation]:
    """
    Build *count* demo observations.

    Prices: selling 5-25, original 8-33, minimum 3-18 (BRL, 2 decimals).
    """
    rng = random.Random(seed)
    observations: list[ProductObservation] = []

    for i in range(count):
        state_code, city = _LOCATIONS[i % len(_LOCATIONS)]
        observations.append(ProductObservation(
            product_id=f"CAMP_{i + 1}",
            description=_DESCRIPTIONS[i % len(_DESCRIPTIONS)],
            unit_price=round(rng.random() * 20 + 5, 2),
            unit_original_price=round(rng.random() * 25 + 8, 2),
            unit_min_price=round(rng.random() * 15 + 3, 2),
            details="Produto Camponesa Premium",
            image_ref=None,
            retailer_name=_RETAILERS[i % len(_RETAILERS)],
            state_code=state_code,
            city=city,
            neighborhood="Centro",
            merchant_id=f"MERC_{i + 1}",
        ))

    logger.info(f"Generated {len(observations)} sample observations (seed={seed})")
    return observations
