from __future__ import annotations

from typing import Optional

import numpy as np
from matplotlib.figure import Figure

from beam_calc.engine.diagrams import MomentProfile
from beam_calc.sections.section_model import SectionModel


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def _symmetric_ylim(ax, y: np.ndarray, pad: float = 1.15):
    ymax = float(np.max(np.abs(y))) if len(y) else 1.0
    if ymax <= 0.0:
        ymax = 1.0
    ax.set_ylim(-ymax * pad, ymax * pad)


def _annotate_extreme(ax, x: np.ndarray, y: np.ndarray, units: str, decimals: int = 2):
    """Marca el extremo de mayor |y| y lo rotula dentro del recuadro."""
    if len(x) == 0:
        return
    i = int(np.argmax(np.abs(y)))
    xi = float(x[i])
    yi = float(y[i])
    if abs(yi) < 1e-12:
        return

    x_min, x_max = ax.get_xlim()
    y_min, y_max = ax.get_ylim()
    mx = 0.03 * max(x_max - x_min, 1e-9)
    my = 0.03 * max(y_max - y_min, 1e-9)

    ax.scatter([xi], [yi], s=18, zorder=6)
    va = "bottom" if yi >= 0 else "top"
    ty = yi + my if yi >= 0 else yi - my
    ax.text(
        _clamp(xi, x_min + mx, x_max - mx),
        _clamp(ty, y_min + my, y_max - my),
        f"{_fmt_plain(yi, decimals)} {units}",
        ha="center", va=va, fontsize=8, zorder=7,
    )


# -------------------------
# Render
# -------------------------
def render_shear(ax, profile: MomentProfile):
    ax.clear()
    x, V, _ = profile.sample()

    ax.plot(x, V)
    ax.axhline(0.0, linewidth=1.0)
    ax.set_xlim(profile.x_start, profile.x_end)
    _symmetric_ylim(ax, V)

    ax.set_ylabel("V [N]")
    ax.set_title("Diagrama de Corte V(x)")
    ax.grid(True, alpha=0.25)


def render_moment(ax, profile: MomentProfile):
    ax.clear()
    x, _, M = profile.sample()

    ax.plot(x, M)
    ax.axhline(0.0, linewidth=1.0)
    ax.set_xlim(profile.x_start, profile.x_end)
    _symmetric_ylim(ax, M)

    _annotate_extreme(ax, x, M, "N·m")

    ax.set_ylabel("M [N·m]")
    ax.set_title("Diagrama de Momento Flector M(x)")
    ax.grid(True, alpha=0.25)


def render_deflection(ax, profile: MomentProfile, section: SectionModel):
    ax.clear()
    x, v = profile.sample_deflection(section)

    # flecha + hacia abajo: se dibuja invertida para que "baje"
    ax.plot(x, -v * 1e3)
    ax.axhline(0.0, linewidth=1.0)
    ax.set_xlim(profile.x_start, profile.x_end)
    _symmetric_ylim(ax, v * 1e3)

    _annotate_extreme(ax, x, -v * 1e3, "mm", decimals=3)

    ax.set_ylabel("v [mm]")
    ax.set_title("Elástica v(x)")
    ax.grid(True, alpha=0.25)


def render_diagrams_png(
    profile: MomentProfile,
    out_path: str,
    section: Optional[SectionModel] = None,
    dpi: int = 150,
) -> str:
    """Figura apilada V / M (/ elástica si hay sección) guardada como PNG."""
    n = 3 if section is not None else 2
    fig = Figure(figsize=(8.0, 2.6 * n))
    axes = fig.subplots(n, 1, sharex=True)

    render_shear(axes[0], profile)
    render_moment(axes[1], profile)
    if section is not None:
        render_deflection(axes[2], profile, section)
    axes[-1].set_xlabel("x [m]")

    fig.tight_layout()
    fig.savefig(out_path, dpi=dpi)
    return out_path
