from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, ValidationError

from beam_calc.domain.errors import BeamCalcError
from beam_calc.domain.results import AnalysisResult
from beam_calc.engine.pipeline import analyze, moment_profile
from beam_calc.sections.section_model import SectionModel
from beam_calc.services.report_pdf import ReportHeader, build_report_pdf
from beam_calc.services.settings import Settings, get_settings

logger = logging.getLogger(__name__)

Body = Dict[str, Any]


class BeamRequest(BaseModel):
    """
    Cuerpo de /beam/calculate y /beam/report.

    Solo chequea la forma (tipos JSON); la semántica (L > 0, carga finita,
    apoyo conocido) la resuelve el validador del motor para que los errores
    salgan con su código propio.
    """
    model_config = ConfigDict(extra="ignore")

    # null llega cuando el formulario manda NaN; lo rechaza el validador con su código
    length: Optional[StrictFloat] = Field(..., description="Longitud de la viga [m]")
    load: Optional[StrictFloat] = Field(..., description="Carga uniforme [N/m], + hacia abajo")
    support_type: Optional[StrictStr] = Field(..., description="simply_supported | cantilever")


def error_body(code: str, detail: str) -> Body:
    return {"detail": detail, "code": code}


def _request_error_detail(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'inválido')}" if loc else str(err.get("msg", "inválido")))
    return "Solicitud inválida: " + "; ".join(parts)


def _run(payload: Any, settings: Settings) -> Union[AnalysisResult, Tuple[int, Body]]:
    if not isinstance(payload, dict):
        return 422, error_body("invalid_request", "Solicitud inválida: se esperaba un objeto JSON.")
    try:
        req = BeamRequest.model_validate(payload)
    except ValidationError as e:
        return 422, error_body("invalid_request", _request_error_detail(e))

    try:
        return analyze(
            req.length,
            req.load,
            req.support_type,
            section=settings.section,
            allow_negative_load=settings.allow_negative_load,
        )
    except BeamCalcError as e:
        logger.info("Entrada rechazada (%s): %s", e.code, e.message)
        return 422, error_body(e.code, e.message)


def calculate(payload: Any, settings: Optional[Settings] = None) -> Tuple[int, Body]:
    """POST /beam/calculate -> (status, cuerpo JSON)."""
    settings = settings or get_settings()
    try:
        out = _run(payload, settings)
        if isinstance(out, tuple):
            return out
        return 200, out.to_dict()
    except Exception:
        logger.exception("Error inesperado en /beam/calculate")
        return 500, error_body("internal_error", "Internal error")


def report(
    payload: Any,
    settings: Optional[Settings] = None,
    header: Optional[ReportHeader] = None,
) -> Tuple[int, Union[bytes, Body]]:
    """POST /beam/report -> (status, PDF bytes | cuerpo JSON de error)."""
    settings = settings or get_settings()
    try:
        out = _run(payload, settings)
        if isinstance(out, tuple):
            return out
        section: SectionModel = settings.section
        profile = moment_profile(out.spec, settings.profile_points)
        return 200, build_report_pdf(out, profile, section=section, header=header)
    except Exception:
        logger.exception("Error inesperado en /beam/report")
        return 500, error_body("internal_error", "Internal error")
