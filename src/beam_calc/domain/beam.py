from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SupportType(str, Enum):
    """Condiciones de apoyo soportadas por el motor."""
    SIMPLY_SUPPORTED = "simply_supported"
    CANTILEVER = "cantilever"

    @property
    def label(self) -> str:
        return {
            SupportType.SIMPLY_SUPPORTED: "Simplemente apoyada",
            SupportType.CANTILEVER: "Voladizo (empotrada en x=0)",
        }[self]


@dataclass(frozen=True)
class BeamSpec:
    """
    Viga de un tramo con carga uniforme sobre toda la luz.

    Unidades SI:
      - length [m]
      - load [N/m]  (+ hacia abajo; negativo = carga hacia arriba)

    Solo se construye a partir de engine.validate.validate().
    """
    length: float
    load: float
    support_type: SupportType

    @property
    def total_load(self) -> float:
        """Resultante de la distribuida: w·L [N]."""
        return self.load * self.length
