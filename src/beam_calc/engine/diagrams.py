from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

import numpy as np

from beam_calc.domain.beam import BeamSpec, SupportType
from beam_calc.sections.section_model import SectionModel


class ProfileSample(NamedTuple):
    x: float       # m
    shear: float   # N
    moment: float  # N·m


@dataclass(frozen=True)
class MomentProfile:
    """
    Diagramas V(x) y M(x) en forma cerrada para carga uniforme en toda la luz.

    Es un iterable finito y reiniciable: cada iter() vuelve a recorrer
    n_points estaciones equiespaciadas en [0, L] (extremos incluidos).
    El solver no lo usa; existe para la memoria y los gráficos.

    Convención de signos:
    - M positivo en el sentido gobernante: flexión positiva (sagging) en la
      simplemente apoyada, negativa (hogging) en el voladizo. Así max(M) == M_max
      para w >= 0.
    - Voladizo empotrado en x=0, libre en x=L.
    - Flecha + hacia abajo para carga + hacia abajo.
    """
    spec: BeamSpec
    n_points: int = 101

    def __post_init__(self):
        if int(self.n_points) < 2:
            raise ValueError(f"MomentProfile: n_points debe ser >= 2 (recibido {self.n_points}).")

    def __len__(self) -> int:
        return int(self.n_points)

    def __iter__(self) -> Iterator[ProfileSample]:
        x, V, M = self.sample()
        for xi, Vi, Mi in zip(x.tolist(), V.tolist(), M.tolist()):
            yield ProfileSample(xi, Vi, Mi)

    @property
    def x_start(self) -> float:
        return 0.0

    @property
    def x_end(self) -> float:
        return float(self.spec.length)

    def eval_V(self, x: float) -> float:
        return float(self._eval_V_array(np.asarray([x], dtype=float))[0])

    def eval_M(self, x: float) -> float:
        return float(self._eval_M_array(np.asarray([x], dtype=float))[0])

    def eval_deflection(self, x: float, section: SectionModel) -> float:
        return float(self._eval_v_array(np.asarray([x], dtype=float), section)[0])

    # -------------------------
    # Evaluadores vectorizados
    # -------------------------
    def _eval_V_array(self, x: np.ndarray) -> np.ndarray:
        L = self.spec.length
        w = self.spec.load
        if self.spec.support_type is SupportType.SIMPLY_SUPPORTED:
            return w * L / 2.0 - w * x
        return w * (L - x)

    def _eval_M_array(self, x: np.ndarray) -> np.ndarray:
        L = self.spec.length
        w = self.spec.load
        if self.spec.support_type is SupportType.SIMPLY_SUPPORTED:
            return w * L * x / 2.0 - w * x * x / 2.0
        # medido desde el extremo libre: crece hacia el empotramiento
        t = L - x
        return w * t * t / 2.0

    def _eval_v_array(self, x: np.ndarray, section: SectionModel) -> np.ndarray:
        """
        Elástica (EI constante):
        - simplemente apoyada: v = w·x·(L³ - 2·L·x² + x³) / (24·EI)
        - voladizo:            v = w·x²·(6·L² - 4·L·x + x²) / (24·EI)
        """
        L = self.spec.length
        w = self.spec.load
        EI = section.EI
        if self.spec.support_type is SupportType.SIMPLY_SUPPORTED:
            return w * x * (L**3 - 2.0 * L * x * x + x**3) / (24.0 * EI)
        return w * x * x * (6.0 * L * L - 4.0 * L * x + x * x) / (24.0 * EI)

    # -------------------------
    # Muestreo
    # -------------------------
    def stations(self) -> np.ndarray:
        return np.linspace(self.x_start, self.x_end, int(self.n_points), dtype=float)

    def sample(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Devuelve (x, V, M) listos para plot."""
        x = self.stations()
        return x, self._eval_V_array(x), self._eval_M_array(x)

    def sample_deflection(self, section: SectionModel) -> Tuple[np.ndarray, np.ndarray]:
        x = self.stations()
        return x, self._eval_v_array(x, section)


def build_profile(spec: BeamSpec, n_points: Optional[int] = None) -> MomentProfile:
    if n_points is None:
        return MomentProfile(spec=spec)
    return MomentProfile(spec=spec, n_points=int(n_points))
