"""
Canonical schema for the pricing catalog CSV.

Defines the column order, which columns must be populated for a row to become
a ProductObservation, and the fixed set of valid Brazilian state codes (UFs).
"""

# Canonical column names in the order the catalog export writes them.
# Every DataFrame handed to the validator uses these names.
CATALOG_COLUMNS: list[str] = [
    "product_id",
    "description",
    "unit_price",
    "unit_original_price",
    "unit_min_price",
    "details",
    "image_ref",
    "retailer_name",
    "state_code",
    "city",
    "neighborhood",
    "merchant_id",
]

# Columns that must be present in the mapped DataFrame.
REQUIRED_COLUMNS: list[str] = [
    "description",
    "unit_price",
    "retailer_name",
    "state_code",
]

# The 26 states plus the Federal District.
VALID_STATE_CODES: tuple[str, ...] = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO",
    "MA", "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI",
    "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)

TOTAL_STATES: int = len(VALID_STATE_CODES)

# Placeholder strings the export uses for "no image".
MISSING_IMAGE_VALUES: set[str] = {"", "n/a", "na", "none", "null"}
