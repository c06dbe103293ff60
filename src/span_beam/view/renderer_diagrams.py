from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from span_beam.domain.results import DiagramSequence
from span_beam.view.style import DiagramStyle

DEFAULT_STYLE = DiagramStyle()


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


def _series(sequence: DiagramSequence, attr: str) -> Tuple[np.ndarray, np.ndarray]:
    x = np.array([p.position for p in sequence], dtype=float)
    y = np.array([getattr(p, attr) for p in sequence], dtype=float)
    return x, y


# -------------------------
# Extremos a rotular
# -------------------------
def extrema_to_annotate(x: np.ndarray, y: np.ndarray, *, x_span: float) -> List[Tuple[str, int]]:
    """
    Estaciones del diagrama que merecen rótulo, como ("max"/"min", índice).

    Candidatos: picos interiores (cambio de signo de la pendiente, salteando
    tramos planos) y el máximo/mínimo global. Se descartan los de |y| menor al
    1 % del pico y los que caen a menos del 3 % del ancho del eje de otro ya
    elegido (gana el de mayor |y|). Resultado ordenado por x.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if y.size == 0:
        return []
    peak = float(np.max(np.abs(y)))
    if peak <= 0.0:
        return []

    kinds: Dict[int, str] = {}
    if y.size >= 5:
        dy = np.diff(y)
        steps = np.flatnonzero(np.abs(dy) > 1e-6 * peak)
        rising = dy[steps] > 0
        for k in np.flatnonzero(rising[:-1] != rising[1:]):
            kinds[int(steps[k]) + 1] = "max" if rising[k] else "min"
    kinds.setdefault(int(np.argmax(y)), "max")
    kinds.setdefault(int(np.argmin(y)), "min")

    min_dx = 0.03 * max(x_span, 1e-9)
    ranked = sorted((i for i in kinds if abs(y[i]) >= 0.01 * peak), key=lambda i: -abs(y[i]))
    picked: List[int] = []
    for i in ranked:
        if all(abs(x[i] - x[j]) >= min_dx for j in picked):
            picked.append(i)

    return [(kinds[i], i) for i in sorted(picked, key=lambda i: x[i])]


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, unit: str, style: DiagramStyle):
    x_min, x_max = ax.get_xlim()
    x_span = float(x_max - x_min)
    picked = extrema_to_annotate(x, y, x_span=x_span)
    if not picked:
        return

    y_min, y_max = ax.get_ylim()
    y_span = float(y_max - y_min) or 1.0
    mx = 0.03 * x_span
    my = 0.03 * y_span

    for kind, i in picked:
        xi = float(x[i])
        yi = float(y[i])
        ax.scatter([xi], [yi], s=18, zorder=6)

        if kind == "max":
            tx, ty, va = xi, yi + my, "bottom"
        else:
            tx, ty, va = xi, yi - my, "top"

        tx = _clamp(tx, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)

        ax.text(tx, ty, f"{_fmt_plain(yi, 2)} {unit}", ha="center", va=va, fontsize=style.font_size, zorder=7)


# -------------------------
# Render
# -------------------------
def _render_series(
    ax,
    x: np.ndarray,
    y: np.ndarray,
    *,
    ylabel: str,
    title: str,
    unit: str,
    style: DiagramStyle,
    y_zoom: float = 1.0,
    xlim: Optional[Tuple[float, float]] = None,
    annotate: bool = False,
):
    ax.clear()
    ax.plot(x, y, linewidth=style.line_lw)
    if len(x):
        ax.fill_between(x, y, 0.0, alpha=style.fill_alpha)
    ax.axhline(0.0, linewidth=style.axis_lw)

    if xlim is not None:
        ax.set_xlim(xlim[0], xlim[1])
    elif len(x):
        ax.set_xlim(float(x[0]), float(x[-1]))

    ymax = float(np.max(np.abs(y))) if len(y) else 0.0
    if ymax <= 0.0:
        ymax = 1.0
    ax.set_ylim(-ymax * y_zoom * style.y_pad, ymax * y_zoom * style.y_pad)

    if annotate and style.annotate_extrema:
        _annotate_extrema(ax, x, y, unit, style)

    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=style.grid_alpha)


def render_shear(ax, sequence: DiagramSequence, style: DiagramStyle = DEFAULT_STYLE, **kw):
    x, V = _series(sequence, "shear")
    _render_series(ax, x, V, ylabel="V [N]", title="Diagrama de Corte V(x)", unit="N", style=style, **kw)


def render_moment(ax, sequence: DiagramSequence, style: DiagramStyle = DEFAULT_STYLE, **kw):
    x, M = _series(sequence, "moment")
    _render_series(
        ax, x, M, ylabel="M [N·m]", title="Diagrama de Momento Flector M(x)", unit="N·m",
        style=style, annotate=True, **kw,
    )
    ax.set_xlabel("x [m]")


def render_torsion(ax, sequence: DiagramSequence, style: DiagramStyle = DEFAULT_STYLE, **kw):
    x, T = _series(sequence, "torsion")
    _render_series(ax, x, T, ylabel="T [N·m]", title="Diagrama de Torsor T(x)", unit="N·m", style=style, **kw)


def render_deflection(ax, sequence: DiagramSequence, style: DiagramStyle = DEFAULT_STYLE, **kw):
    x, w = _series(sequence, "deflection")
    _render_series(
        ax, x, w * style.deflection_scale, ylabel="w [mm]", title="Elástica w(x)", unit="mm",
        style=style, annotate=True, **kw,
    )
    ax.set_xlabel("x [m]")


def render_stresses(ax, sequence: DiagramSequence, style: DiagramStyle = DEFAULT_STYLE):
    """Tensiones (MPa) superpuestas, von Mises destacada."""
    ax.clear()
    series: Sequence[Tuple[str, str]] = (
        ("normal_stress", "σ normal"),
        ("shear_stress", "τ corte"),
        ("torsional_stress", "τ torsión"),
    )
    for attr, label in series:
        x, y = _series(sequence, attr)
        ax.plot(x, y, linewidth=style.line_lw, label=label)
    x, vm = _series(sequence, "von_mises_stress")
    ax.plot(x, vm, linewidth=2.0 * style.line_lw, label="σ von Mises")

    if len(x):
        ax.set_xlim(float(x[0]), float(x[-1]))
    ax.set_ylabel("σ [MPa]")
    ax.set_xlabel("x [m]")
    ax.set_title("Tensiones")
    ax.legend(fontsize=style.font_size)
    ax.grid(True, alpha=style.grid_alpha)
