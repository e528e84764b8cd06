"""
Chart data — turns aggregation results into pandas DataFrames.

The Streamlit views and the Excel export both read these frames, so column
names here are the display names shown to users.

Public API:
    groups_frame(groups) → DataFrame
    states_frame(states) → DataFrame
    regions_frame(regions) → DataFrame
    markers_frame(markers) → DataFrame
    histogram_frame(histogram) → DataFrame
    retailers_frame(retailers) → DataFrame
    listings_frame(observations) → DataFrame
    scatter_frame(observations, limit) → DataFrame
"""

import logging
from typing import Sequence

import pandas as pd

from analysis.calculations import HistogramBucket, RetailerAggregate, StateAggregate
from analysis.product_groups import ProductGroup
from analysis.regional import CityMarker, RegionAggregate
from output.style import coverage_band
from processing.models import ProductObservation

logger = logging.getLogger(__name__)

SCATTER_LIMIT = 150

GROUP_COLUMNS: list[str] = [
    "Produto",
    "Categoria",
    "Preço Médio",
    "Preço Mínimo",
    "Preço Máximo",
    "Variação",
    "Mercados",
    "Estados",
    "Observações",
    "Melhor Preço em",
    "Maior Preço em",
]

STATE_COLUMNS: list[str] = [
    "UF",
    "Estado",
    "Região",
    "Observações",
    "Mercados",
    "Preço Médio",
    "Preço Mínimo",
    "Preço Máximo",
]

REGION_COLUMNS: list[str] = [
    "Região",
    "Estados Ativos",
    "Total de Estados",
    "Cobertura (%)",
    "Nível de Cobertura",
    "Observações",
    "Mercados",
    "Preço Médio",
]


def groups_frame(groups: Sequence[ProductGroup]) -> pd.DataFrame:
    """One row per product group, in the given order."""
    rows = [
        {
            "Produto": group.description,
            "Categoria": group.category,
            "Preço Médio": group.avg_price,
            "Preço Mínimo": group.min_price,
            "Preço Máximo": group.max_price,
            "Variação": group.price_variation,
            "Mercados": group.market_count,
            "Estados": group.state_count,
            "Observações": group.total_products,
            "Melhor Preço em": group.min_price_location,
            "Maior Preço em": group.max_price_location,
        }
        for group in groups
    ]
    return pd.DataFrame(rows, columns=GROUP_COLUMNS)


def states_frame(states: Sequence[StateAggregate]) -> pd.DataFrame:
    rows = [
        {
            "UF": agg.state_code,
            "Estado": agg.state_name,
            "Região": agg.region or "",
            "Observações": agg.count,
            "Mercados": agg.distinct_retailers,
            "Preço Médio": agg.avg_price,
            "Preço Mínimo": agg.min_price,
            "Preço Máximo": agg.max_price,
        }
        for agg in states
    ]
    return pd.DataFrame(rows, columns=STATE_COLUMNS)


def regions_frame(regions: Sequence[RegionAggregate]) -> pd.DataFrame:
    rows = []
    for region in regions:
        _, level = coverage_band(region.coverage)
        rows.append({
            "Região": region.name,
            "Estados Ativos": region.active_states,
            "Total de Estados": region.total_states,
            "Cobertura (%)": region.coverage,
            "Nível de Cobertura": level,
            "Observações": region.product_count,
            "Mercados": region.retailer_count,
            "Preço Médio": region.avg_price,
        })
    return pd.DataFrame(rows, columns=REGION_COLUMNS)


def markers_frame(markers: Sequence[CityMarker]) -> pd.DataFrame:
    """
    Map points.  ``lat``/``lon``/``color``/``size`` are the column names
    ``st.map`` reads.
    """
    columns = ["city", "state", "lat", "lon", "color", "size", "products", "retailers", "avg_price"]
    rows = [
        {
            "city": marker.city,
            "state": marker.state_code,
            "lat": marker.latitude,
            "lon": marker.longitude,
            "color": marker.color,
            "size": 20000 + marker.product_count * 500,
            "products": marker.product_count,
            "retailers": marker.retailer_count,
            "avg_price": marker.avg_price,
        }
        for marker in markers
    ]
    return pd.DataFrame(rows, columns=columns)


def histogram_frame(histogram: Sequence[HistogramBucket]) -> pd.DataFrame:
    """Bucket label as index so ``st.bar_chart`` keeps bucket order."""
    frame = pd.DataFrame(
        {"Faixa": [bucket.label for bucket in histogram],
         "Quantidade": [bucket.count for bucket in histogram]},
    )
    return frame.set_index("Faixa")


def retailers_frame(retailers: Sequence[RetailerAggregate]) -> pd.DataFrame:
    columns = ["Mercado", "Observações", "Preço Médio", "Preço Mínimo", "Preço Máximo", "Localidades"]
    rows = [
        {
            "Mercado": agg.retailer,
            "Observações": agg.count,
            "Preço Médio": agg.avg_price,
            "Preço Mínimo": agg.min_price,
            "Preço Máximo": agg.max_price,
            "Localidades": agg.locations,
        }
        for agg in retailers
    ]
    return pd.DataFrame(rows, columns=columns)


def listings_frame(observations: Sequence[ProductObservation]) -> pd.DataFrame:
    """Individual listings: retailer, place and price."""
    columns = ["Mercado", "Cidade", "UF", "Bairro", "Preço"]
    rows = [
        {
            "Mercado": obs.retailer_name,
            "Cidade": obs.city,
            "UF": obs.state_code,
            "Bairro": obs.neighborhood,
            "Preço": obs.unit_price,
        }
        for obs in observations
    ]
    return pd.DataFrame(rows, columns=columns)


def scatter_frame(
    observations: Sequence[ProductObservation],
    limit: int = SCATTER_LIMIT,
) -> pd.DataFrame:
    """
    Original price vs. selling price for the first *limit* observations.

    Observations without an original price are plotted at their selling
    price (no markdown).
    """
    sample = list(observations[:limit])
    frame = pd.DataFrame(
        {
            "Preço Original": [
                obs.unit_original_price if obs.unit_original_price is not None else obs.unit_price
                for obs in sample
            ],
            "Preço de Venda": [obs.unit_price for obs in sample],
            "Mercado": [obs.retailer_name for obs in sample],
        },
        columns=["Preço Original", "Preço de Venda", "Mercado"],
    )
    logger.debug(f"Scatter frame: {len(frame)} of {len(observations)} observations")
    return frame
