"""
Prediction Excel Export Service.
Generates Excel reports for crop yield predictions.
"""
from io import BytesIO
from datetime import datetime
from typing import Any, Optional
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter
from openpyxl.chart import BarChart, Reference

from cropadvisor.services.prediction_models import FarmInput, PredictionResult

BRAND_GREEN = "16A34A"
BRAND_DARK = "15803D"
HEADER_BG = "DCFCE7"

PRIORITY_FILLS = {
    "high": "FEE2E2",
    "medium": "FEF3C7",
    "low": "DCFCE7",
}


class PredictionExcelService:
    """Service for generating prediction Excel reports."""

    def __init__(self):
        self.header_fill = PatternFill(start_color=BRAND_DARK, end_color=BRAND_DARK, fill_type="solid")
        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.title_font = Font(bold=True, size=16, color=BRAND_DARK)
        self.subtitle_font = Font(bold=True, size=12, color=BRAND_DARK)
        self.light_fill = PatternFill(start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid")
        self.border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

    def _apply_header_style(self, ws, row_num: int, max_col: int):
        """Apply header styling to a row."""
        for col in range(1, max_col + 1):
            cell = ws.cell(row=row_num, column=col)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
            cell.border = self.border

    def _auto_adjust_columns(self, ws):
        """Auto-adjust column widths."""
        for column in ws.columns:
            max_length = 0
            column_letter = get_column_letter(column[0].column)
            for cell in column:
                if cell.value is not None:
                    max_length = max(max_length, len(str(cell.value)))
            ws.column_dimensions[column_letter].width = min(max(max_length + 2, 12), 60)

    def generate_prediction_excel(
        self,
        farm_input: FarmInput,
        result: PredictionResult,
        generated_at: Optional[datetime] = None
    ) -> BytesIO:
        """
        Generate Excel report for a prediction.

        Args:
            farm_input: Inputs the prediction was computed from
            result: Engine output
            generated_at: Timestamp printed in the summary (defaults to now)

        Returns:
            BytesIO with Excel file content
        """
        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        self._create_summary_sheet(wb, farm_input, result, generated_at or datetime.now())
        self._create_fertilizer_sheet(wb, result)
        self._create_suggestions_sheet(wb, result)

        buffer = BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer

    def _create_summary_sheet(self, wb, farm_input: FarmInput, result: PredictionResult, generated_at: datetime) -> Any:
        ws = wb.create_sheet("Summary")
        row = 1

        ws.cell(row=row, column=1, value="CROP YIELD PREDICTION REPORT").font = self.title_font
        ws.merge_cells(f'A{row}:D{row}')
        row += 1

        ws.cell(row=row, column=1, value=f"Generated: {generated_at.strftime('%d/%m/%Y %H:%M')}").font = Font(italic=True)
        row += 2

        ws.cell(row=row, column=1, value="FARM INPUTS").font = self.subtitle_font
        row += 1

        info_data = [
            ("Location:", farm_input.location or "N/A"),
            ("Crop:", result.crop),
            ("Area (ha):", farm_input.area_hectares),
            ("Annual Rainfall (mm):", farm_input.rainfall_mm),
            ("Average Temperature (°C):", farm_input.temperature_c),
            ("Soil Type:", farm_input.soil_type or "N/A"),
            ("Primary Fertilizer:", farm_input.selected_fertilizer),
            ("Fertilizer Amount (kg):", farm_input.fertilizer_amount_kg),
        ]
        for label, value in info_data:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row += 1
        ws.cell(row=row, column=1, value="PREDICTED YIELD").font = self.subtitle_font
        row += 1
        ws.cell(row=row, column=1, value="Yield (t/ha):").font = Font(bold=True)
        yield_cell = ws.cell(row=row, column=2, value=result.yield_tons_per_hectare)
        yield_cell.fill = self.light_fill
        yield_cell.font = Font(bold=True, size=12, color=BRAND_DARK)
        row += 1
        ws.cell(row=row, column=1, value="Estimated Production (t):").font = Font(bold=True)
        ws.cell(row=row, column=2, value=round(result.yield_tons_per_hectare * farm_input.area_hectares, 1))

        self._auto_adjust_columns(ws)
        return ws

    def _create_fertilizer_sheet(self, wb, result: PredictionResult) -> Any:
        ws = wb.create_sheet("Fertilizer Plan")
        headers = ["Fertilizer", "Amount", "Unit", "Purpose"]
        for col, header in enumerate(headers, 1):
            ws.cell(row=1, column=col, value=header)
        self._apply_header_style(ws, 1, len(headers))

        row = 2
        for rec in result.fertilizer_recommendations:
            ws.cell(row=row, column=1, value=rec.name)
            ws.cell(row=row, column=2, value=rec.amount_kg)
            ws.cell(row=row, column=3, value=rec.unit)
            ws.cell(row=row, column=4, value=rec.purpose)
            for col in range(1, len(headers) + 1):
                ws.cell(row=row, column=col).border = self.border
            row += 1

        if result.fertilizer_recommendations:
            chart = BarChart()
            chart.type = "bar"
            chart.style = 10
            chart.title = "Fertilizer Plan"
            chart.x_axis.title = "Fertilizer"
            chart.y_axis.title = "kg"

            data = Reference(ws, min_col=2, max_col=2, min_row=1, max_row=row - 1)
            cats = Reference(ws, min_col=1, min_row=2, max_row=row - 1)
            chart.add_data(data, titles_from_data=True)
            chart.set_categories(cats)
            chart.width = 18
            chart.height = 10
            ws.add_chart(chart, "F2")

        self._auto_adjust_columns(ws)
        return ws

    def _create_suggestions_sheet(self, wb, result: PredictionResult) -> Any:
        ws = wb.create_sheet("Suggestions")
        headers = ["#", "Priority", "Title", "Description"]
        for col, header in enumerate(headers, 1):
            ws.cell(row=1, column=col, value=header)
        self._apply_header_style(ws, 1, len(headers))

        row = 2
        for idx, suggestion in enumerate(result.optimization_suggestions, 1):
            ws.cell(row=row, column=1, value=idx)
            priority_cell = ws.cell(row=row, column=2, value=suggestion.priority)
            color = PRIORITY_FILLS.get(suggestion.priority)
            if color:
                priority_cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
            ws.cell(row=row, column=3, value=suggestion.title)
            ws.cell(row=row, column=4, value=suggestion.description).alignment = Alignment(wrap_text=True)
            for col in range(1, len(headers) + 1):
                ws.cell(row=row, column=col).border = self.border
            row += 1

        if not result.optimization_suggestions:
            ws.cell(row=row, column=1, value="No optimization suggestions for these conditions.")

        self._auto_adjust_columns(ws)
        return ws


prediction_excel_service = PredictionExcelService()
