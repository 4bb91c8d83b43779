from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from beam_calc.domain.errors import InvalidSectionModel

# Sección de referencia: rectángulo macizo de acero 100 mm x 200 mm (ancho x alto).
REF_B_M = 0.100
REF_H_M = 0.200
DEFAULT_E = 200e9  # Pa (acero)


def _rect_I(b: float, h: float) -> float:
    """I de un rectángulo b (ancho) x h (alto) respecto a su eje baricéntrico horizontal."""
    return (b * h**3) / 12.0


def _rect_S(b: float, h: float) -> float:
    """Módulo resistente elástico W = I / (h/2)."""
    return (b * h**2) / 6.0


DEFAULT_I = _rect_I(REF_B_M, REF_H_M)  # m^4
DEFAULT_S = _rect_S(REF_B_M, REF_H_M)  # m^3


@dataclass(frozen=True)
class SectionModel:
    """
    Constantes de sección fijadas por configuración (el contrato no trae sección):
      - I [m^4]  momento de inercia
      - S [m^3]  módulo resistente
      - E [Pa]   módulo de elasticidad
    """
    I: float = DEFAULT_I
    S: float = DEFAULT_S
    E: float = DEFAULT_E

    @property
    def EI(self) -> float:
        return self.E * self.I

    def check(self) -> "SectionModel":
        check_section_model(self)
        return self

    def as_dict(self) -> Dict[str, float]:
        return {"I": self.I, "S": self.S, "E": self.E}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SectionModel":
        unknown = set(data) - {"I", "S", "E"}
        if unknown:
            raise InvalidSectionModel(f"Claves de sección desconocidas: {sorted(unknown)}")
        values: Dict[str, float] = {}
        for k, v in data.items():
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise InvalidSectionModel(f"Sección: {k} debe ser numérico (recibido {v!r}).")
            values[k] = float(v)
        return cls(**values).check()


def check_section_model(section: SectionModel) -> None:
    """E, I y S deben ser finitos y > 0; si no, la sección no sirve para calcular."""
    for name in ("E", "I", "S"):
        v = float(getattr(section, name))
        if not math.isfinite(v) or v <= 0.0:
            raise InvalidSectionModel(f"Sección mal configurada: {name}={v:g} (debe ser > 0).")
    EI = float(section.E) * float(section.I)
    if not math.isfinite(EI) or EI <= 0.0:
        raise InvalidSectionModel(f"Sección mal configurada: E·I={EI:g} fuera de rango.")


def rectangular_section(b_m: float, h_m: float, E_pa: float = DEFAULT_E) -> SectionModel:
    return SectionModel(I=_rect_I(b_m, h_m), S=_rect_S(b_m, h_m), E=float(E_pa)).check()
