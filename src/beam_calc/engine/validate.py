from __future__ import annotations

import math
from typing import Any, Optional, Union

from beam_calc.domain.beam import BeamSpec, SupportType
from beam_calc.domain.errors import InvalidGeometry, InvalidLoad, UnknownSupportType
from beam_calc.sections.section_model import SectionModel, check_section_model


def _as_number(v: Any) -> float | None:
    # bool es subclase de int: no lo aceptamos como longitud/carga
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    try:
        return float(v)
    except OverflowError:
        return None


def parse_support_type(value: Union[SupportType, str, Any]) -> SupportType:
    """
    Acepta el enum o su valor string. Normaliza mayúsculas, espacios y guiones:
    "Simply Supported", "simply-supported" => SupportType.SIMPLY_SUPPORTED
    """
    if isinstance(value, SupportType):
        return value
    if not isinstance(value, str):
        raise UnknownSupportType(f"Tipo de apoyo inválido: {value!r}.")

    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return SupportType(key)
    except ValueError:
        valid = ", ".join(s.value for s in SupportType)
        raise UnknownSupportType(
            f"Tipo de apoyo desconocido: {value!r}. Valores válidos: {valid}."
        ) from None


def validate(
    length: Any,
    load: Any,
    support_type: Any,
    *,
    allow_negative_load: bool = True,
    section: Optional[SectionModel] = None,
) -> BeamSpec:
    """
    Chequea que geometría y carga tengan sentido físico y arma el BeamSpec.

    Errores:
      - InvalidGeometry: length <= 0, no finito o no numérico
      - InvalidLoad: load no finito o no numérico; negativo si allow_negative_load=False
      - UnknownSupportType: apoyo fuera de {simply_supported, cantilever}

    También rechaza combinaciones cuyos resultados (w·L²/2, w·L⁴, y con `section`
    σ y flecha) no entran en un float finito.
    """
    L = _as_number(length)
    if L is None or not math.isfinite(L) or L <= 0.0:
        raise InvalidGeometry(f"Longitud inválida: {length!r} (debe ser un número finito > 0 m).")

    w = _as_number(load)
    if w is None or not math.isfinite(w):
        raise InvalidLoad(f"Carga inválida: {load!r} (debe ser un número finito en N/m).")
    if w < 0.0 and not allow_negative_load:
        raise InvalidLoad(f"Carga negativa no permitida: {w:g} N/m.")

    st = parse_support_type(support_type)

    _check_range(L, w, section)

    return BeamSpec(length=L, load=w, support_type=st)


def _check_range(L: float, w: float, section: Optional[SectionModel]) -> None:
    L4 = L * L * L * L
    if not math.isfinite(L4):
        raise InvalidGeometry(f"Longitud fuera de rango: {L:g} m (L⁴ no es finito).")

    # peor caso: voladizo (M = w·L²/2, flecha = w·L⁴/8EI)
    aw = abs(w)
    M = aw * L * L / 2.0
    if not math.isfinite(M) or not math.isfinite(aw * L4):
        raise InvalidLoad(f"Carga fuera de rango: w={w:g} N/m con L={L:g} m da resultados no finitos.")

    if section is None:
        return
    check_section_model(section)
    stress = M / section.S
    deflection = aw * L4 / (8.0 * section.EI)
    if not (math.isfinite(stress) and math.isfinite(deflection)):
        raise InvalidLoad(
            f"Carga fuera de rango: w={w:g} N/m con L={L:g} m da tensión o flecha no finitas para la sección."
        )
