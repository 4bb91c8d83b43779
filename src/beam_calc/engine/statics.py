from __future__ import annotations

from beam_calc.domain.beam import BeamSpec, SupportType
from beam_calc.domain.results import Reaction, ReactionSet, StaticsResult


def _solve_simply_supported(spec: BeamSpec) -> StaticsResult:
    L = spec.length
    w = spec.load

    # Simetría: cada apoyo toma la mitad de w·L
    R = w * L / 2.0
    reactions = ReactionSet(
        support_type=spec.support_type,
        entries=(("left", Reaction(force=R)), ("right", Reaction(force=R))),
    )

    # V(x) = R - w·x = 0  =>  x = L/2 ;  M(L/2) = w·L²/8
    return StaticsResult(
        reactions=reactions,
        max_moment=w * L * L / 8.0,
        x_max_moment=L / 2.0,
    )


def _solve_cantilever(spec: BeamSpec) -> StaticsResult:
    L = spec.length
    w = spec.load

    M_fixed = w * L * L / 2.0
    reactions = ReactionSet(
        support_type=spec.support_type,
        entries=(("fixed", Reaction(force=w * L, moment=M_fixed)),),
    )

    # M(x) crece monótonamente desde el extremo libre; máximo en el empotramiento
    return StaticsResult(reactions=reactions, max_moment=M_fixed, x_max_moment=0.0)


def solve(spec: BeamSpec) -> StaticsResult:
    """
    Reacciones y momento máximo en forma cerrada (sin muestreo).

    Ecuaciones:
      ΣFy = 0  =>  ΣR = w·L
      Simplemente apoyada: R_izq = R_der = w·L/2 ;  M_max = w·L²/8 en x=L/2
      Voladizo (empotrado en x=0): R = w·L ; M_emp = w·L²/2 ;  M_max = M_emp
    """
    if spec.support_type is SupportType.SIMPLY_SUPPORTED:
        return _solve_simply_supported(spec)
    return _solve_cantilever(spec)


def equilibrium_residual(spec: BeamSpec, reactions: ReactionSet) -> float:
    """ΣFy = ΣR - w·L (debería ~0)."""
    return reactions.total_force() - spec.total_load
