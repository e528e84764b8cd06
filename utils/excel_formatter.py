"""
Excel formatter — writes the dashboard export workbook.

Sheet 1: "Produtos" — product groups for the current selection, with
         auto-filters, number formats and column widths.
Sheet 2: "Estados" — per-state rollup.
Sheet 3: "Regiões" — per-region rollup with coverage colour fill.
Sheet 4: "Resumo" — headline numbers and the active filters.

Public API:
    build_workbook(dashboard) → openpyxl.Workbook
    format_and_save(dashboard, output_path) → Path
    workbook_bytes(dashboard) → bytes
"""

import io
import logging
from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
import pandas as pd

from analysis.dashboard_data import DashboardData
from output.chart_data import groups_frame, regions_frame, states_frame
from output.style import COLOR_VIRIDIAN, COLOR_WHITE, coverage_color

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Constants
# ═══════════════════════════════════════════════════════════════════════════

_HEADER_FILL = PatternFill(
    start_color=COLOR_VIRIDIAN.lstrip("#"),
    end_color=COLOR_VIRIDIAN.lstrip("#"),
    fill_type="solid",
)
_HEADER_FONT = Font(color=COLOR_WHITE.lstrip("#"), bold=True, size=11)
_NORMAL_FONT = Font(size=10)
_BOLD_FONT = Font(bold=True, size=10)

# Max column width (characters) to prevent excessively wide columns
_MAX_COL_WIDTH = 50
_MIN_COL_WIDTH = 8

_PRICE_FORMAT = '"R$" #,##0.00'

# Number format strings for openpyxl, by display column name
_NUMBER_FORMATS: dict[str, str] = {
    "Preço Médio": _PRICE_FORMAT,
    "Preço Mínimo": _PRICE_FORMAT,
    "Preço Máximo": _PRICE_FORMAT,
    "Variação": _PRICE_FORMAT,
    "Mercados": "#,##0",
    "Estados": "#,##0",
    "Observações": "#,##0",
    "Estados Ativos": "#,##0",
    "Total de Estados": "#,##0",
    "Cobertura (%)": "0.0",
}


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_workbook(dashboard: DashboardData) -> openpyxl.Workbook:
    """
    Build the export workbook for one dashboard pass.

    Args:
        dashboard: Output of ``build_dashboard``.

    Returns:
        An in-memory openpyxl Workbook with four sheets.
    """
    workbook = openpyxl.Workbook()

    groups_sheet = workbook.active
    groups_sheet.title = "Produtos"
    _write_frame_sheet(groups_sheet, groups_frame(dashboard.groups))

    states_sheet = workbook.create_sheet("Estados")
    _write_frame_sheet(states_sheet, states_frame(dashboard.states))

    regions_sheet = workbook.create_sheet("Regiões")
    regions_df = regions_frame(dashboard.regions)
    _write_frame_sheet(regions_sheet, regions_df)
    _fill_coverage_column(regions_sheet, regions_df)

    summary_sheet = workbook.create_sheet("Resumo")
    _write_summary_sheet(summary_sheet, dashboard)

    return workbook


def format_and_save(dashboard: DashboardData, output_path: Path) -> Path:
    """
    Write the export workbook to *output_path*.

    Returns:
        The output_path (same as input, for convenience).
    """
    workbook = build_workbook(dashboard)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(str(output_path))
    workbook.close()

    logger.info(f"Excel file saved to '{output_path}'")
    return output_path


def workbook_bytes(dashboard: DashboardData) -> bytes:
    """The export workbook as .xlsx bytes, for download buttons."""
    workbook = build_workbook(dashboard)
    buffer = io.BytesIO()
    workbook.save(buffer)
    workbook.close()

    logger.info(
        f"Excel export built: {len(dashboard.groups)} groups, "
        f"{len(dashboard.states)} states, {len(dashboard.regions)} regions"
    )
    return buffer.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
# Sheets
# ═══════════════════════════════════════════════════════════════════════════

def _write_frame_sheet(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
    dataframe: pd.DataFrame,
) -> None:
    """
    Write a DataFrame as a table: styled header, data rows, number formats,
    column widths, auto-filter and a frozen header row.
    """
    columns = list(dataframe.columns)

    for col_idx, col_name in enumerate(columns, start=1):
        cell = worksheet.cell(row=1, column=col_idx, value=col_name)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center")

    for row_offset, record in enumerate(dataframe.itertuples(index=False)):
        excel_row = row_offset + 2  # 1-based, header is row 1
        for col_idx, value in enumerate(record, start=1):
            # Convert NaN to None for cleaner Excel output
            if pd.isna(value):
                value = None
            cell = worksheet.cell(row=excel_row, column=col_idx, value=value)
            cell.font = _NORMAL_FONT

    _apply_number_formats(worksheet, columns, len(dataframe))
    _auto_fit_column_widths(worksheet)

    if columns:
        last_col_letter = get_column_letter(len(columns))
        last_row = len(dataframe) + 1
        worksheet.auto_filter.ref = f"A1:{last_col_letter}{last_row}"

    worksheet.freeze_panes = "A2"


def _fill_coverage_column(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
    regions_df: pd.DataFrame,
) -> None:
    """Colour each coverage cell with its coverage band colour."""
    if "Cobertura (%)" not in regions_df.columns:
        return

    col_idx = list(regions_df.columns).index("Cobertura (%)") + 1
    for row_offset, coverage in enumerate(regions_df["Cobertura (%)"]):
        color = coverage_color(float(coverage)).lstrip("#")
        cell = worksheet.cell(row=row_offset + 2, column=col_idx)
        cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        cell.font = Font(color=COLOR_WHITE.lstrip("#"), bold=True, size=10)


def _write_summary_sheet(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
    dashboard: DashboardData,
) -> None:
    """Headline numbers and the filter selection the export was taken with."""
    current_row = 1

    worksheet.cell(row=current_row, column=1, value="Resumo do Catálogo").font = Font(bold=True, size=14)
    current_row += 2

    overview = dashboard.overview
    summary_items = [
        ("Total de Produtos", overview.total_products),
        ("Preço Médio", overview.avg_price),
        ("Lojas", overview.total_stores),
        ("Estados", overview.total_states),
        ("Grupos de Produtos", len(dashboard.groups)),
    ]

    for label, value in summary_items:
        worksheet.cell(row=current_row, column=1, value=label).font = _BOLD_FONT
        cell = worksheet.cell(row=current_row, column=2, value=value)
        cell.font = _NORMAL_FONT
        if label == "Preço Médio":
            cell.number_format = _PRICE_FORMAT
        current_row += 1

    # ── Active filters ────────────────────────────────────────────────
    current_row += 2
    worksheet.cell(row=current_row, column=1, value="Filtros").font = Font(bold=True, size=12)
    current_row += 1

    criteria = dashboard.criteria
    filter_items = [
        ("Categoria", criteria.category),
        ("Estado", criteria.state),
        ("Mercado", criteria.retailer),
        ("Faixa de Preço", criteria.price_band),
        ("Busca", criteria.search or "-"),
        ("Ordenação", dashboard.sort_by.value),
    ]
    for label, value in filter_items:
        worksheet.cell(row=current_row, column=1, value=label).font = _BOLD_FONT
        worksheet.cell(row=current_row, column=2, value=value).font = _NORMAL_FONT
        current_row += 1

    _auto_fit_column_widths(worksheet)


# ═══════════════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════════════

def _apply_number_formats(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
    columns: list[str],
    row_count: int,
) -> None:
    """
    Apply Excel number formats to numeric columns.

    Args:
        worksheet: The worksheet to format.
        columns: List of column names in order.
        row_count: Number of data rows (excluding header).
    """
    for col_offset, col_name in enumerate(columns):
        fmt = _NUMBER_FORMATS.get(col_name)
        if fmt is None:
            continue

        col_idx = col_offset + 1
        for row_idx in range(2, row_count + 2):  # skip header row
            worksheet.cell(row=row_idx, column=col_idx).number_format = fmt


def _auto_fit_column_widths(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
) -> None:
    """
    Set column widths from content length, clamped between _MIN_COL_WIDTH
    and _MAX_COL_WIDTH.
    """
    for column_cells in worksheet.columns:
        max_length = _MIN_COL_WIDTH
        col_letter = get_column_letter(column_cells[0].column)

        for cell in column_cells:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))

        worksheet.column_dimensions[col_letter].width = min(max_length + 2, _MAX_COL_WIDTH)
