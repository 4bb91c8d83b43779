from __future__ import annotations

from beam_calc.domain.beam import BeamSpec, SupportType
from beam_calc.domain.results import SectionResponse
from beam_calc.sections.section_model import SectionModel, check_section_model


def bending_stress(M: float, section: SectionModel) -> float:
    """σ = M / S  [Pa]"""
    return float(M) / float(section.S)


def max_deflection(spec: BeamSpec, section: SectionModel) -> float:
    """
    Flecha máxima con carga uniforme y EI constante:
      - simplemente apoyada (centro de luz): 5·w·L⁴ / (384·E·I)
      - voladizo (extremo libre):            w·L⁴ / (8·E·I)
    """
    L = spec.length
    L4 = L * L * L * L
    EI = section.EI
    if spec.support_type is SupportType.SIMPLY_SUPPORTED:
        return 5.0 * spec.load * L4 / (384.0 * EI)
    return spec.load * L4 / (8.0 * EI)


def evaluate(spec: BeamSpec, max_moment: float, section: SectionModel) -> SectionResponse:
    """
    Respuesta de la sección de referencia al momento máximo.

    No hay errores propios más allá de una sección mal configurada
    (InvalidSectionModel); la entrada ya viene validada.
    """
    check_section_model(section)
    return SectionResponse(
        stress=bending_stress(max_moment, section),
        deflection=max_deflection(spec, section),
    )
