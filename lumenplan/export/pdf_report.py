from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from lumenplan.models.room import ContaminationLevel, LightingRequirements, RoomDimensions
from lumenplan.results.types import LightingComputation


@dataclass(frozen=True)
class PDFPaths:
    pdf_path: Path


def _kv_table(rows):
    t = Table(rows, colWidths=[6.0 * cm, 11.7 * cm])
    t.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ROWBACKGROUNDS", (0, 0), (-1, -1), [colors.whitesmoke, colors.white]),
                ("BOX", (0, 0), (-1, -1), 0.5, colors.lightgrey),
                ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("LEFTPADDING", (0, 0), (-1, -1), 6),
                ("RIGHTPADDING", (0, 0), (-1, -1), 6),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return t


def _bom_table(computation: LightingComputation):
    rows = [["Item", "Quantity", "Unit", "Notes"]]
    for item in computation.results.bill_of_materials:
        rows.append([item.name, f"{item.quantity:g}", item.unit, item.description or ""])

    t = Table(rows, colWidths=[4.5 * cm, 2.4 * cm, 1.8 * cm, 9.0 * cm])
    t.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("BOX", (0, 0), (-1, -1), 0.5, colors.lightgrey),
                ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("LEFTPADDING", (0, 0), (-1, -1), 4),
                ("RIGHTPADDING", (0, 0), (-1, -1), 4),
                ("TOPPADDING", (0, 0), (-1, -1), 3),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    return t


def build_calculation_pdf(
    computation: LightingComputation,
    room: RoomDimensions,
    requirements: LightingRequirements,
    out_pdf_path: Path,
    name: Optional[str] = None,
) -> PDFPaths:
    """
    Write a one-document summary of a calculation:
      - Room and requirement inputs
      - Lumen-method factors and fixture layout
      - Estimated illuminance distribution and energy metrics
      - Bill of materials
    """
    out_pdf_path = Path(out_pdf_path).expanduser().resolve()
    out_pdf_path.parent.mkdir(parents=True, exist_ok=True)

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    h2 = styles["Heading2"]
    body = styles["BodyText"]

    res = computation.results
    title = name or "Lighting Calculation"

    pdf = SimpleDocTemplate(
        str(out_pdf_path),
        pagesize=A4,
        leftMargin=1.6 * cm,
        rightMargin=1.6 * cm,
        topMargin=1.6 * cm,
        bottomMargin=1.6 * cm,
        title=title,
        author="Lumenplan",
    )

    story = []
    story.append(Paragraph(title, title_style))
    story.append(Spacer(1, 0.25 * cm))

    story.append(Paragraph("Inputs", h2))
    contamination = ContaminationLevel.parse(requirements.contamination_level).value
    story.append(
        _kv_table(
            [
                ["Room (L x W x H)", f"{room.length:g} x {room.width:g} x {room.height:g} m"],
                ["Workplane height", f"{room.workplane_height:g} m"],
                ["Floor area", f"{room.floor_area:.2f} m²"],
                ["Target illuminance", f"{requirements.target_illuminance:g} lx"],
                ["Flux per lamp", f"{requirements.flux_per_lamp:g} lm"],
                ["Contamination", contamination],
                ["Maintenance interval", f"{requirements.maintenance_interval} year(s)"],
                ["Reflectances (ceiling / wall)", f"{requirements.ceiling_reflectance:g} / {requirements.wall_reflectance:g}"],
            ]
        )
    )
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Lumen Method", h2))
    lay = res.layout
    story.append(
        _kv_table(
            [
                ["Room cavity ratio", f"{res.room_cavity_ratio:.2f}"],
                ["Coefficient of utilization", f"{res.coefficient_of_utilization:.3f}"],
                ["Maintenance factor", f"{res.maintenance_factor:.2f}"],
                ["Number of fixtures", str(res.number_of_lamps)],
                ["Layout (rows x columns)", f"{lay.rows} x {lay.columns}"],
                ["Spacing (length / width)", f"{lay.length_spacing:.2f} / {lay.width_spacing:.2f} m"],
            ]
        )
    )
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Illuminance & Energy", h2))
    dist = res.illuminance_distribution
    energy = res.energy_metrics
    story.append(
        _kv_table(
            [
                ["Average illuminance", f"{dist.average:.2f} lx"],
                ["Minimum / maximum (estimated)", f"{dist.minimum:.2f} / {dist.maximum:.2f} lx"],
                ["Uniformity", f"{dist.uniformity:.2f}"],
                ["Total power", f"{energy.total_power:.2f} W"],
                ["Power density", f"{energy.power_density:.2f} W/m²"],
                ["Efficiency rating", energy.efficiency_rating],
            ]
        )
    )
    story.append(
        Paragraph(
            "Minimum and maximum are fixed-ratio estimates of the average, not a simulated field.",
            body,
        )
    )
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Bill of Materials", h2))
    story.append(_bom_table(computation))

    pdf.build(story)
    return PDFPaths(pdf_path=out_pdf_path)
