"""
Dashboard style constants and small formatting helpers.

Single source of truth for the colours used by the Streamlit views and the
Excel export: brand palette, map marker bands and region coverage bands.
Also builds product card image URLs.
"""

import logging

from config.schema import MISSING_IMAGE_VALUES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Brand palette
# ---------------------------------------------------------------------------
COLOR_VIRIDIAN = "#36846E"        # primary: headers, histogram
COLOR_GIANTS_ORANGE = "#ED6637"   # accent: scatter points
COLOR_WHITE = "#FFFFFF"

# ---------------------------------------------------------------------------
# Map marker colours by average price (BRL)
# ---------------------------------------------------------------------------
MARKER_NO_DATA = "#666666"
MARKER_CHEAP = "#22c55e"          # avg < 10
MARKER_MEDIUM = "#f59e0b"         # 10 <= avg < 20
MARKER_EXPENSIVE = "#ef4444"      # avg >= 20

MARKER_CHEAP_UPPER = 10.0
MARKER_MEDIUM_UPPER = 20.0

# ---------------------------------------------------------------------------
# Region coverage bands: (minimum coverage %, colour, label)
# ---------------------------------------------------------------------------
COVERAGE_BANDS: list[tuple[float, str, str]] = [
    (80.0, "#16a34a", "Alta"),
    (50.0, "#ca8a04", "Média"),
    (20.0, "#ea580c", "Baixa"),
    (0.0, "#dc2626", "Crítica"),
]


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def marker_color(avg_price: float) -> str:
    """
    Marker colour for a map location.

    Args:
        avg_price: Average price of the location's observations.
                   Zero or negative means "no price data".

    Returns:
        Hex colour string.
    """
    if avg_price <= 0:
        return MARKER_NO_DATA
    if avg_price < MARKER_CHEAP_UPPER:
        return MARKER_CHEAP
    if avg_price < MARKER_MEDIUM_UPPER:
        return MARKER_MEDIUM
    return MARKER_EXPENSIVE


def coverage_band(coverage: float) -> tuple[str, str]:
    """(colour, label) for a region coverage percentage."""
    for minimum, color, label in COVERAGE_BANDS:
        if coverage >= minimum:
            return color, label
    _, color, label = COVERAGE_BANDS[-1]
    return color, label


def coverage_color(coverage: float) -> str:
    return coverage_band(coverage)[0]


def format_brl(value: float) -> str:
    """
    Format a price as Brazilian reais.

    Examples:
        8.75      → "R$ 8,75"
        1234.5    → "R$ 1.234,50"
    """
    formatted = f"{value:,.2f}"
    # swap separators: 1,234.50 → 1.234,50
    formatted = formatted.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"R$ {formatted}"


def format_percent(value: float, decimals: int = 0) -> str:
    return f"{value:.{decimals}f}%"


# ---------------------------------------------------------------------------
# Product images
# ---------------------------------------------------------------------------
IMAGE_CDN_URL = "https://static.ifood-static.com.br/image/upload/t_low/pratos/{ref}?imwidth=128"


def image_url(image_ref: str | None) -> str | None:
    """
    Card image URL for a product's image reference.

    Bare references are catalog image ids served from the CDN; full URLs
    pass through unchanged.

    Examples:
        "abc/123.jpg"           → "https://static.ifood-static.com.br/.../abc/123.jpg?imwidth=128"
        "https://x.com/a.png"   → "https://x.com/a.png"
        None / "" / "N/A"       → None (the card shows a placeholder)
    """
    if image_ref is None:
        return None
    ref = image_ref.strip()
    if ref.lower() in MISSING_IMAGE_VALUES:
        return None
    if ref.startswith(("http://", "https://")):
        return ref
    return IMAGE_CDN_URL.format(ref=ref)
