from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple

from beam_calc.domain.beam import BeamSpec, SupportType


@dataclass(frozen=True)
class Reaction:
    force: float         # N, + arriba
    moment: float = 0.0  # N·m, solo empotramiento


@dataclass(frozen=True)
class ReactionSet(Mapping[str, Reaction]):
    """
    Reacciones por ubicación de apoyo:
      - simplemente apoyada: "left", "right"
      - voladizo: "fixed" (fuerza + momento de empotramiento)
    """
    support_type: SupportType
    # pares (ubicación, reacción) en orden
    entries: Tuple[Tuple[str, Reaction], ...] = ()

    def __getitem__(self, key: str) -> Reaction:
        for k, r in self.entries:
            if k == key:
                return r
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(k for k, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def total_force(self) -> float:
        return float(sum(r.force for _, r in self.entries))

    def to_dict(self) -> Dict[str, Any]:
        if self.support_type is SupportType.CANTILEVER:
            return {k: {"force": r.force, "moment": r.moment} for k, r in self.entries}
        return {k: r.force for k, r in self.entries}


@dataclass(frozen=True)
class StaticsResult:
    reactions: ReactionSet
    max_moment: float     # N·m
    x_max_moment: float   # m, posición del momento gobernante


@dataclass(frozen=True)
class SectionResponse:
    stress: float      # Pa
    deflection: float  # m, + hacia abajo


@dataclass(frozen=True)
class AnalysisResult:
    spec: BeamSpec
    reactions: ReactionSet
    max_moment: float
    stress: float
    deflection: float

    # extras para la memoria
    x_max_moment: float = 0.0
    residual_force: float = 0.0   # ΣFy, debería ~0

    def to_dict(self) -> Dict[str, Any]:
        """Forma de respuesta de /beam/calculate."""
        return {
            "reactions": self.reactions.to_dict(),
            "max_moment": self.max_moment,
            "stress": self.stress,
            "deflection": self.deflection,
        }
