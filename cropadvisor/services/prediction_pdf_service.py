"""
Prediction PDF Report Service.
Generates PDF reports for crop yield predictions.
"""
import io
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.colors import HexColor
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER
import logging

from cropadvisor.services.prediction_models import FarmInput, PredictionResult

logger = logging.getLogger(__name__)

BRAND_COLOR = HexColor("#16a34a")
SECONDARY_COLOR = HexColor("#15803d")
TEXT_COLOR = HexColor("#374151")
LIGHT_BG = HexColor("#f0fdf4")
HEADER_BG = HexColor("#dcfce7")
GRID_COLOR = HexColor("#d1d5db")

PRIORITY_COLORS = {
    "high": "#ef4444",
    "medium": "#f59e0b",
    "low": "#22c55e",
}


def create_prediction_pdf_report(
    farm_input: FarmInput,
    result: PredictionResult,
    generated_at: Optional[datetime] = None
) -> bytes:
    """
    Generate a PDF report for a crop yield prediction.

    Args:
        farm_input: Inputs the prediction was computed from
        result: Engine output
        generated_at: Timestamp printed in the header (defaults to now)

    Returns:
        PDF file as bytes
    """
    buffer = io.BytesIO()
    generated_at = generated_at or datetime.now()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.6*inch,
        leftMargin=0.6*inch,
        topMargin=0.7*inch,
        bottomMargin=0.6*inch,
        title="Crop Yield Prediction Report",
    )

    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Title'],
        fontSize=16,
        textColor=BRAND_COLOR,
        spaceAfter=6,
        alignment=TA_CENTER
    )

    heading_style = ParagraphStyle(
        'CustomHeading',
        parent=styles['Heading2'],
        fontSize=11,
        textColor=BRAND_COLOR,
        spaceBefore=8,
        spaceAfter=4
    )

    body_style = ParagraphStyle(
        'CustomBody',
        parent=styles['Normal'],
        fontSize=8,
        textColor=TEXT_COLOR,
        spaceAfter=3
    )

    yield_style = ParagraphStyle(
        'YieldValue',
        parent=styles['Normal'],
        fontSize=20,
        leading=24,
        textColor=SECONDARY_COLOR,
        alignment=TA_CENTER
    )

    story = []
    story.append(Paragraph("CROP YIELD PREDICTION", title_style))
    story.append(Paragraph(f"Generated {generated_at.strftime('%d/%m/%Y %H:%M')}", body_style))
    story.append(Spacer(1, 6))

    # ---------------- Inputs ----------------
    story.append(Paragraph("Farm Inputs", heading_style))
    input_data = [
        ["Location:", farm_input.location or "N/A", "Crop:", result.crop],
        ["Area (ha):", f"{farm_input.area_hectares:g}", "Soil type:", farm_input.soil_type or "N/A"],
        ["Rainfall (mm):", f"{farm_input.rainfall_mm:g}", "Temperature (°C):", f"{farm_input.temperature_c:g}"],
        ["Fertilizer:", farm_input.selected_fertilizer, "Amount (kg):", f"{farm_input.fertilizer_amount_kg:g}"],
    ]
    input_table = Table(input_data, colWidths=[1.1*inch, 2.3*inch, 1.2*inch, 2.3*inch])
    input_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), LIGHT_BG),
        ('BACKGROUND', (2, 0), (2, -1), LIGHT_BG),
        ('TEXTCOLOR', (0, 0), (-1, -1), TEXT_COLOR),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTNAME', (2, 0), (2, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ('PADDING', (0, 0), (-1, -1), 4),
    ]))
    story.append(input_table)
    story.append(Spacer(1, 8))

    # ---------------- Yield ----------------
    story.append(Paragraph("Predicted Yield", heading_style))
    story.append(Paragraph(f"{result.yield_tons_per_hectare} tons/hectare", yield_style))
    story.append(Spacer(1, 8))

    # ---------------- Fertilizers ----------------
    story.append(Paragraph("Fertilizer Recommendations", heading_style))
    fert_rows = [["Fertilizer", "Amount", "Purpose"]]
    for rec in result.fertilizer_recommendations:
        fert_rows.append([rec.name, f"{rec.amount_kg} {rec.unit}", rec.purpose])
    fert_table = Table(fert_rows, colWidths=[2.0*inch, 1.2*inch, 3.7*inch], repeatRows=1)
    fert_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, 0), (-1, -1), TEXT_COLOR),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (1, 1), (1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ('PADDING', (0, 0), (-1, -1), 4),
    ]))
    story.append(fert_table)
    story.append(Paragraph("Conduct soil tests regularly to adjust these recommendations.", body_style))
    story.append(Spacer(1, 8))

    # ---------------- Suggestions ----------------
    story.append(Paragraph("Optimization Suggestions", heading_style))
    if result.optimization_suggestions:
        for suggestion in result.optimization_suggestions:
            color = PRIORITY_COLORS.get(suggestion.priority, "#374151")
            story.append(Paragraph(
                f'<font color="{color}"><b>[{suggestion.priority.upper()}]</b></font> '
                f'<b>{escape(suggestion.title)}</b>',
                body_style
            ))
            story.append(Paragraph(escape(suggestion.description), body_style))
    else:
        story.append(Paragraph("No optimization suggestions for these conditions.", body_style))

    try:
        doc.build(story)
    except Exception as e:
        logger.error(f"Error building prediction PDF for {result.crop}: {e}")
        raise

    return buffer.getvalue()
