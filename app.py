"""
Streamlit entry point — Catalog Price Dashboard UI.

User flow:
  1. Sidebar data source (CSV upload, or the CATALOG_CSV_PATH secret /
     catalog.csv; falls back to the demo dataset)
  2. Sidebar filters (category, state, retailer, price band) and sort
  3. Search box + headline metrics
  4. Tabs: Produtos (group grid + per-group analysis), Mapa (markers,
     region and state tables), Análise de Preços (histogram + scatter)
  5. Download the Excel export

Contains NO business logic — only calls processing/analysis modules and
displays results.
"""

import io
import logging
from datetime import datetime

import streamlit as st

from analysis.calculations import price_histogram
from analysis.dashboard_data import build_dashboard
from analysis.filters import FilterCriteria, filter_options
from analysis.group_analysis import analyze_group
from analysis.product_groups import GroupSort
from config.normalization_rules import ALL, PRICE_BANDS
from config.regions import MAP_ZOOM
from output.chart_data import (
    groups_frame,
    histogram_frame,
    listings_frame,
    markers_frame,
    regions_frame,
    retailers_frame,
    scatter_frame,
    states_frame,
)
from output.style import COLOR_GIANTS_ORANGE, COLOR_VIRIDIAN, format_brl, format_percent, image_url
from processing.catalog_loader import load_observations
from processing.sample_data import generate_sample_observations
from utils.excel_formatter import workbook_bytes

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = "catalog.csv"
GRID_PAGE_SIZE = 24

SORT_LABELS: dict[GroupSort, str] = {
    GroupSort.NAME: "Nome",
    GroupSort.PRICE_ASC: "Menor preço",
    GroupSort.PRICE_DESC: "Maior preço",
    GroupSort.MARKETS: "Mais mercados",
    GroupSort.VARIATION: "Maior variação",
}


# ═══════════════════════════════════════════════════════════════════════════
# Page configuration
# ═══════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Catalog Price Dashboard",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ═══════════════════════════════════════════════════════════════════════════
# Data loading
# ═══════════════════════════════════════════════════════════════════════════

@st.cache_data(ttl=3600, show_spinner="Carregando catálogo...")
def _load_from_path(path: str):
    return load_observations(path)


@st.cache_data(show_spinner="Carregando catálogo...")
def _load_from_upload(content: bytes, name: str):
    buffer = io.BytesIO(content)
    buffer.name = name
    return load_observations(buffer)


@st.cache_data
def _demo_observations():
    return generate_sample_observations()


st.sidebar.title("🛒 Catálogo")

uploaded_file = st.sidebar.file_uploader("Arquivo CSV", type=["csv"])
catalog_path = st.secrets.get("CATALOG_CSV_PATH", DEFAULT_CATALOG_PATH)

if uploaded_file is not None:
    load_result = _load_from_upload(uploaded_file.getvalue(), uploaded_file.name)
    source_label = uploaded_file.name
else:
    load_result = _load_from_path(catalog_path)
    source_label = catalog_path

observations = load_result.observations
using_demo = False

if not load_result.ok or not observations:
    for error in load_result.errors:
        st.sidebar.error(error)
    logger.warning(f"No observations from '{source_label}', using demo data")
    observations = _demo_observations()
    using_demo = True
    st.sidebar.warning("Catálogo indisponível — exibindo dados de demonstração.")
else:
    st.sidebar.success(f"{len(observations)} registros de '{source_label}'")
    if load_result.rejected:
        with st.sidebar.expander(f"⚠️ {len(load_result.rejected)} linhas rejeitadas"):
            for rejected in load_result.rejected[:50]:
                st.write(f"Linha {rejected.row_index}: {rejected.reason}")
    if load_result.unmapped_columns:
        st.sidebar.caption(f"Colunas ignoradas: {', '.join(load_result.unmapped_columns)}")


# ═══════════════════════════════════════════════════════════════════════════
# Sidebar — Filters
# ═══════════════════════════════════════════════════════════════════════════

options = filter_options(observations)

st.sidebar.divider()
st.sidebar.subheader("Filtros")


def _label_all(value: str) -> str:
    return "Todos" if value == ALL else value


category = st.sidebar.selectbox("Categoria", options.categories, format_func=_label_all)
state = st.sidebar.selectbox("Estado", options.states, format_func=_label_all)
retailer = st.sidebar.selectbox("Mercado", options.retailers, format_func=_label_all)
price_band = st.sidebar.selectbox(
    "Faixa de preço",
    list(PRICE_BANDS),
    format_func=lambda band: PRICE_BANDS[band],
)
sort_by = st.sidebar.selectbox(
    "Ordenar por",
    list(GroupSort),
    format_func=lambda option: SORT_LABELS[option],
)


# ═══════════════════════════════════════════════════════════════════════════
# Main area — Title, search and headline metrics
# ═══════════════════════════════════════════════════════════════════════════

st.title("🛒 Catalog Price Dashboard")
st.caption("Preços de produtos lácteos por mercado, estado e região.")
if using_demo:
    st.info("Dados de demonstração — carregue um CSV na barra lateral.")

search = st.text_input("🔍 Buscar produto, mercado ou cidade", "")

criteria = FilterCriteria(
    category=category,
    state=state,
    retailer=retailer,
    price_band=price_band,
    search=search,
)
dashboard = build_dashboard(observations, criteria, sort_by)
overview = dashboard.overview

col1, col2, col3, col4 = st.columns(4)
col1.metric("Produtos", overview.total_products)
col2.metric("Preço Médio", format_brl(overview.avg_price))
col3.metric("Lojas", overview.total_stores)
col4.metric("Estados", overview.total_states)

if dashboard.is_empty:
    st.warning("Nenhum produto encontrado para os filtros selecionados.")
    st.stop()

tab_products, tab_map, tab_prices = st.tabs(["Produtos", "Mapa", "Análise de Preços"])


# ═══════════════════════════════════════════════════════════════════════════
# Tab 1: Product groups
# ═══════════════════════════════════════════════════════════════════════════

with tab_products:
    st.subheader(f"{len(dashboard.groups)} grupos de produtos")

    page_count = max(1, -(-len(dashboard.groups) // GRID_PAGE_SIZE))
    page = st.number_input("Página", min_value=1, max_value=page_count, value=1, step=1)
    start = (page - 1) * GRID_PAGE_SIZE

    for group in dashboard.groups[start:start + GRID_PAGE_SIZE]:
        with st.container(border=True):
            image_col, info_col, price_col = st.columns([1, 3, 2])
            with image_col:
                card_image = image_url(group.representative.image_ref)
                if card_image:
                    st.image(card_image, width=96)
                else:
                    st.markdown("🛒")
            with info_col:
                st.markdown(f"**{group.description}**")
                st.caption(
                    f"{group.category} · {group.market_count} mercados · "
                    f"{group.state_count} estados · {group.total_products} registros"
                )
            with price_col:
                st.markdown(f"Médio: **{format_brl(group.avg_price)}**")
                st.caption(
                    f"Mín {format_brl(group.min_price)} ({group.min_price_location}) · "
                    f"Máx {format_brl(group.max_price)}"
                )
                if group.price_variation > 0:
                    st.caption(f"Variação: {format_brl(group.price_variation)}")

            with st.expander("📈 Análise"):
                analysis = analyze_group(group)
                insights = analysis.insights

                a1, a2, a3, a4 = st.columns(4)
                a1.metric("Mediana", format_brl(analysis.median_price))
                a2.metric("Variação Total", format_brl(analysis.total_variance))
                a3.metric("Cobertura Nacional", format_percent(analysis.national_coverage))
                a4.metric("Mercados", group.market_count)

                st.markdown("**Distribuição de preços**")
                st.bar_chart(histogram_frame(analysis.histogram), color=COLOR_VIRIDIAN)

                left, right = st.columns(2)
                with left:
                    st.markdown("**Menores preços**")
                    st.dataframe(listings_frame(analysis.cheapest_listings), hide_index=True)
                    st.markdown("**Por estado**")
                    st.dataframe(states_frame(analysis.state_breakdown), hide_index=True)
                with right:
                    st.markdown("**Maiores preços**")
                    st.dataframe(listings_frame(analysis.priciest_listings), hide_index=True)
                    st.markdown("**Ranking de mercados**")
                    st.dataframe(retailers_frame(analysis.retailer_ranking), hide_index=True)

                st.markdown("**Insights**")
                if insights.cheapest_state:
                    st.write(
                        f"- Estado mais econômico: **{insights.cheapest_state}** "
                        f"({format_brl(insights.cheapest_state_avg)})"
                    )
                st.write(f"- Variação entre estados: {format_brl(insights.interstate_spread)}")
                if insights.top_state:
                    st.write(
                        f"- Concentração: {format_percent(insights.top_state_share)} "
                        f"em {insights.top_state}"
                    )
                if insights.best_retailer:
                    st.write(f"- Comprar em **{insights.best_retailer}** para melhor preço médio")
                if insights.priciest_location:
                    st.write(f"- Evitar compras em {insights.priciest_location}")
                if insights.expansion_candidates:
                    st.write(f"- Expandir presença em {', '.join(insights.expansion_candidates)}")


# ═══════════════════════════════════════════════════════════════════════════
# Tab 2: Map and regional rollup
# ═══════════════════════════════════════════════════════════════════════════

with tab_map:
    markers = markers_frame(dashboard.markers)
    if markers.empty:
        st.info("Nenhuma cidade de referência com dados.")
    else:
        st.map(markers, latitude="lat", longitude="lon", color="color", size="size", zoom=MAP_ZOOM)
        st.caption(
            "Cor média por cidade: "
            "verde < R$ 10 · laranja < R$ 20 · vermelho ≥ R$ 20"
        )

    st.subheader("Regiões")
    st.dataframe(regions_frame(dashboard.regions), hide_index=True, use_container_width=True)

    st.subheader("Estados")
    st.dataframe(states_frame(dashboard.states), hide_index=True, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# Tab 3: Price analysis
# ═══════════════════════════════════════════════════════════════════════════

with tab_prices:
    st.subheader("Distribuição de preços")
    st.bar_chart(histogram_frame(price_histogram(dashboard.observations)), color=COLOR_VIRIDIAN)

    st.subheader("Preço original × preço de venda")
    st.scatter_chart(
        scatter_frame(dashboard.observations),
        x="Preço Original",
        y="Preço de Venda",
        color=COLOR_GIANTS_ORANGE,
    )

    st.subheader("Grupos")
    st.dataframe(groups_frame(dashboard.groups), hide_index=True, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# Download
# ═══════════════════════════════════════════════════════════════════════════

st.divider()

timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
st.download_button(
    label="📥 Baixar Excel",
    data=workbook_bytes(dashboard),
    file_name=f"catalogo_precos_{timestamp}.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    type="primary",
    use_container_width=True,
)
