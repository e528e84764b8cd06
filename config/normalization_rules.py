"""
Deterministic rule tables for description normalization, product grouping,
category classification and price bucketing.

The normalizer applies the word lists in a fixed order (units → packaging →
modifiers → brand), so each list only needs to cover what survives the
previous step.  All entries are lowercase and accent-free because the
normalizer lower-cases and strips diacritics before any removal.
"""

# ---------------------------------------------------------------------------
# Quantity units — removed when directly preceded by an integer ("395g",
# "1 l").  A single optional space is allowed between number and unit.
# ---------------------------------------------------------------------------
UNIT_TOKENS: tuple[str, ...] = (
    "g",
    "gr",
    "grama",
    "gramas",
    "ml",
    "l",
    "litro",
    "litros",
    "kg",
    "kilo",
    "kilos",
    "mg",
)

# ---------------------------------------------------------------------------
# Packaging words.  Multi-word variants are regex fragments; order matters
# inside the alternation ("tetra pack" before "tetra").
# ---------------------------------------------------------------------------
PACKAGING_TOKENS: tuple[str, ...] = (
    "embalagem",
    "caixa",
    "pote",
    "pacote",
    "unidade",
    "un",
    "und",
    "cx",
    "pct",
    "lata",
    "vidro",
    r"tetra\s?pack",
    "tetra",
    "pack",
)

# Generic marketing modifiers that do not distinguish products.
MODIFIER_TOKENS: tuple[str, ...] = (
    "tradicional",
    "natural",
    "original",
    "especial",
    "premium",
)

# Brand name(s) carried by every row of the catalog.
BRAND_TOKENS: tuple[str, ...] = (
    "camponesa",
)

# ---------------------------------------------------------------------------
# Similarity grouping
# ---------------------------------------------------------------------------
SIMILARITY_THRESHOLD: float = 0.8
MIN_SHARED_WORDS: int = 2
# Words of this length or shorter are ignored when comparing keys.
MAX_IGNORED_WORD_LENGTH: int = 1

# ---------------------------------------------------------------------------
# Category classifier — evaluated top to bottom, first match wins.
# Matched against the lower-cased raw description (accents kept).
# ---------------------------------------------------------------------------
CATEGORY_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("Leite Condensado", ("leite condensado",)),
    ("Leite em Pó", ("leite em pó",)),
    ("Leite UHT", ("leite uht", "leite integral", "leite desnatado")),
    ("Doce de Leite", ("doce de leite",)),
    ("Manteiga", ("manteiga",)),
    ("Requeijão", ("requeijão",)),
    ("Queijo", ("queijo",)),
    ("Creme de Leite", ("creme de leite",)),
]

DEFAULT_CATEGORY: str = "Outros"

# Sentinel used by every filter selector for "no restriction".
ALL: str = "all"

# ---------------------------------------------------------------------------
# Price bands for the filter engine (BRL).
#   low:    price <  LOW_BAND_UPPER
#   medium: LOW_BAND_UPPER <= price <= HIGH_BAND_LOWER
#   high:   price >  HIGH_BAND_LOWER
# ---------------------------------------------------------------------------
LOW_BAND_UPPER: float = 8.0
HIGH_BAND_LOWER: float = 15.0

PRICE_BANDS: dict[str, str] = {
    "all": "Todas as faixas",
    "low": "Até R$ 8",
    "medium": "R$ 8 - R$ 15",
    "high": "Acima de R$ 15",
}

# ---------------------------------------------------------------------------
# Price histogram — half-open [lower, upper) buckets, last one unbounded.
# ---------------------------------------------------------------------------
PRICE_HISTOGRAM_BUCKETS: list[tuple[str, float, float | None]] = [
    ("R$ 0-5", 0.0, 5.0),
    ("R$ 5-10", 5.0, 10.0),
    ("R$ 10-15", 10.0, 15.0),
    ("R$ 15-20", 15.0, 20.0),
    ("R$ 20+", 20.0, None),
]
