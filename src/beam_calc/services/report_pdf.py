from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from beam_calc.domain.beam import SupportType
from beam_calc.domain.results import AnalysisResult
from beam_calc.engine.diagrams import MomentProfile
from beam_calc.sections.section_model import SectionModel
from beam_calc.view.renderer_vm import render_diagrams_png

logger = logging.getLogger(__name__)

# Nota: este módulo solo consume AnalysisResult + MomentProfile; no recalcula nada.


@dataclass(frozen=True)
class ReportHeader:
    titulo: str = "Memoria de Cálculo - Viga"
    proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


def build_report_pdf(
    result: AnalysisResult,
    profile: MomentProfile,
    *,
    section: SectionModel,
    header: Optional[ReportHeader] = None,
    page_size=pagesizes.A4,
) -> bytes:
    """Memoria de cálculo en PDF (A4) como bytes, lista para enviar por HTTP."""
    buf = io.BytesIO()
    with tempfile.TemporaryDirectory() as td:
        img_path = os.path.join(td, "diagramas.png")
        try:
            render_diagrams_png(profile, img_path, section=section)
        except Exception:
            # el PDF sale igual, sin figura
            logger.exception("No se pudo generar la figura de diagramas.")
            img_path = ""
        _build(buf, result, section=section, header=header or ReportHeader(), img_path=img_path, page_size=page_size)
    return buf.getvalue()


def export_report_pdf(
    out_pdf_path: str,
    result: AnalysisResult,
    profile: MomentProfile,
    *,
    section: SectionModel,
    header: Optional[ReportHeader] = None,
) -> str:
    data = build_report_pdf(result, profile, section=section, header=header)
    with open(out_pdf_path, "wb") as f:
        f.write(data)
    return out_pdf_path


def _build(out, result: AnalysisResult, *, section: SectionModel, header: ReportHeader, img_path: str, page_size) -> None:
    spec = result.spec

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    story: List[object] = []

    # ----------------- Encabezado -----------------
    story.append(Paragraph(header.titulo, styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    fecha = header.fecha or datetime.now()
    meta_rows = [
        ["Proyecto:", header.proyecto or "-"],
        ["Autor:", header.autor or "-"],
        ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 5 * mm))

    # ----------------- Base teórica -----------------
    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    base = [
        "Viga de Euler-Bernoulli de un tramo, prismática (EI constante), material elástico lineal y pequeñas deformaciones.",
        "Carga uniformemente distribuida w sobre toda la luz; w > 0 hacia abajo.",
        "Sección de referencia fijada por configuración (E, I, S); no se deriva de los datos de entrada.",
        "Momento informado en el sentido gobernante: positivo (tracción abajo) en simplemente apoyada, "
        "y en voladizo el momento de empotramiento (tracción arriba) también se informa positivo para w > 0, como en el diagrama.",
    ]
    story.extend(_bullets(base, styles))
    story.append(Spacer(1, 2 * mm))

    story.append(Paragraph("Ecuaciones principales", styles["Heading3"]))
    story.extend(_mono_block(_equations(spec.support_type), styles))
    story.append(Spacer(1, 4 * mm))

    # ----------------- Datos -----------------
    story.append(Paragraph("Datos del caso", styles["Heading2"]))
    dims = [
        ["Tipo de apoyo", spec.support_type.label],
        ["Longitud L [m]", _f(spec.length, 4)],
        ["Carga w [N/m]", _f(spec.load, 4)],
        ["E [Pa]", f"{section.E:.4g}"],
        ["I [m⁴]", f"{section.I:.4g}"],
        ["S [m³]", f"{section.S:.4g}"],
    ]
    t = Table(dims, colWidths=[55 * mm, 125 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 4 * mm))

    # ----------------- Resultados -----------------
    story.append(Paragraph("Reacciones", styles["Heading3"]))
    rrows = [["Apoyo", "Fuerza [N]", "Momento [N·m]"]]
    for name, r in result.reactions.items():
        rrows.append([name, _f(r.force, 4), _f(r.moment, 4)])
    t = Table(rrows, colWidths=[40 * mm, 70 * mm, 70 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Resultados", styles["Heading2"]))
    res_rows = [
        ["M máx [N·m]", _f(result.max_moment, 4)],
        ["x de M máx [m]", _f(result.x_max_moment, 4)],
        ["Tensión σ [Pa]", _f(result.stress, 2)],
        ["Flecha máx [m]", f"{result.deflection:.6g}"],
        ["Residual ΣFy [N]", f"{result.residual_force:.3g}"],
    ]
    t = Table(res_rows, colWidths=[80 * mm, 100 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 4 * mm))

    # ----------------- Figuras -----------------
    story.append(Paragraph("Diagramas", styles["Heading2"]))
    if img_path and os.path.exists(img_path):
        story.append(_img(img_path, max_w=180 * mm, max_h=150 * mm))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph("(Sin imagen: diagramas no disponibles)", styles["Small"]))

    doc.build(story)


# ----------------- helpers -----------------

def _equations(support_type: SupportType) -> List[str]:
    if support_type is SupportType.SIMPLY_SUPPORTED:
        return [
            "R_izq = R_der = w·L/2          (ΣFy = 0, simetría)",
            "V(x) = R_izq - w·x",
            "M(x) = R_izq·x - w·x²/2",
            "V(x) = 0 en x = L/2  ⇒  M_max = w·L²/8",
            "σ = M_max / S",
            "δ_max = 5·w·L⁴ / (384·E·I)   (centro de luz)",
        ]
    return [
        "R_emp = w·L ;  M_emp = w·L²/2   (ΣFy = 0, ΣM = 0)",
        "V(x) = w·(L - x)",
        "M(x) = w·(L - x)²/2             (máximo en el empotramiento)",
        "M_max = w·L²/2",
        "σ = M_max / S",
        "δ_max = w·L⁴ / (8·E·I)         (extremo libre)",
    ]


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _bullets(items: List[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {it}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _mono_block(lines: List[str], styles):
    out: List[object] = []
    for ln in lines:
        out.append(Paragraph(ln.replace(" ", "&nbsp;"), styles["MonoSmall"]))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
