from __future__ import annotations

import logging
from typing import Any, Optional

from beam_calc.domain.beam import BeamSpec
from beam_calc.domain.results import AnalysisResult
from beam_calc.engine.diagrams import MomentProfile, build_profile
from beam_calc.engine.statics import equilibrium_residual, solve
from beam_calc.engine.validate import validate
from beam_calc.sections.response import evaluate
from beam_calc.sections.section_model import SectionModel
from beam_calc.services.settings import get_settings

logger = logging.getLogger(__name__)


def analyze_spec(spec: BeamSpec, section: SectionModel) -> AnalysisResult:
    statics = solve(spec)
    resp = evaluate(spec, statics.max_moment, section)

    return AnalysisResult(
        spec=spec,
        reactions=statics.reactions,
        max_moment=statics.max_moment,
        stress=resp.stress,
        deflection=resp.deflection,
        x_max_moment=statics.x_max_moment,
        residual_force=equilibrium_residual(spec, statics.reactions),
    )


def analyze(
    length: Any,
    load: Any,
    support_type: Any,
    *,
    section: Optional[SectionModel] = None,
    allow_negative_load: Optional[bool] = None,
) -> AnalysisResult:
    """
    Validador -> solver de estática -> evaluador de sección.

    `section` y `allow_negative_load` toman por defecto la configuración de proceso.
    Cualquier error de entrada se levanta antes de resolver (sin resultados parciales).
    """
    if section is None or allow_negative_load is None:
        settings = get_settings()
        if section is None:
            section = settings.section
        if allow_negative_load is None:
            allow_negative_load = settings.allow_negative_load

    spec = validate(length, load, support_type, allow_negative_load=allow_negative_load, section=section)
    result = analyze_spec(spec, section)

    logger.info(
        "Análisis %s: L=%g m, w=%g N/m -> M_max=%g N·m, σ=%g Pa, flecha=%g m",
        spec.support_type.value, spec.length, spec.load,
        result.max_moment, result.stress, result.deflection,
    )
    return result


def moment_profile(spec: BeamSpec, n_points: Optional[int] = None) -> MomentProfile:
    if n_points is None:
        n_points = get_settings().profile_points
    return build_profile(spec, n_points)
