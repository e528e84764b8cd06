"""
Column name mapping configuration.

Maps raw CSV header names to canonical catalog column names.  The marketplace
export mixes English and Portuguese headers ("mercado", "uf"), so known
aliases are listed explicitly; anything else falls through to fuzzy matching
in processing/column_mapper.py.
"""

# ---------------------------------------------------------------------------
# Exact matches: raw name (lowercase) → canonical column name
# ---------------------------------------------------------------------------
EXACT_MATCHES: dict[str, str] = {
    "product_id": "product_id",
    "description": "description",
    "unit_price": "unit_price",
    "unit_original_price": "unit_original_price",
    "unit_min_price": "unit_min_price",
    "details": "details",
    "image_ref": "image_ref",
    "retailer_name": "retailer_name",
    "state_code": "state_code",
    "city": "city",
    "neighborhood": "neighborhood",
    "merchant_id": "merchant_id",
}

# ---------------------------------------------------------------------------
# Known renames: raw name (lowercase) → canonical column name
# ---------------------------------------------------------------------------
KNOWN_RENAMES: dict[str, str] = {
    # Retailer
    "mercado": "retailer_name",
    "market": "retailer_name",
    "retailer": "retailer_name",
    "loja": "retailer_name",
    # State
    "uf": "state_code",
    "estado": "state_code",
    "state": "state_code",
    # Image
    "logo_url": "image_ref",
    "image_url": "image_ref",
    "imagem": "image_ref",
    # Description
    "descricao": "description",
    "descrição": "description",
    "produto": "description",
    # Prices
    "preco": "unit_price",
    "preço": "unit_price",
    "price": "unit_price",
    "preco_original": "unit_original_price",
    "preco_minimo": "unit_min_price",
    # Location
    "cidade": "city",
    "bairro": "neighborhood",
    "merchant": "merchant_id",
    "id": "product_id",
}
