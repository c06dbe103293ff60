from __future__ import annotations

import logging
import math
from typing import Iterable, Tuple

import numpy as np

from span_beam.domain.cases import SpanLoads
from span_beam.domain.loads import Load
from span_beam.domain.results import Reactions
from span_beam.domain.supports import Supports
from span_beam.engine.internal_forces import InternalForces
from span_beam.engine.normalize import clip_to_span

logger = logging.getLogger(__name__)


def _simple_support_reactions(data: SpanLoads) -> Tuple[float, float]:
    """
    Reacciones de viga simplemente apoyada (brazo de palanca), sumando
    la contribución de todas las cargas del tramo.
    """
    xa = data.x_a
    L = data.span

    Ra = 0.0
    Rb = 0.0

    for pf in data.point_forces:
        rb = pf.P_down * (pf.x - xa) / L
        Rb += rb
        Ra += pf.P_down - rb

    for dl in data.dist_loads:
        F_res = dl.q_down * (dl.b - dl.a)
        x_cent = 0.5 * (dl.a + dl.b)
        rb = F_res * (x_cent - xa) / L
        Rb += rb
        Ra += F_res - rb

    # Momento horario M: ΣM_A = Rb·L - M = 0
    for pm in data.moments:
        Rb += pm.M_cw / L
        Ra -= pm.M_cw / L

    return Ra, Rb


def _jump_M_at(f: InternalForces, x0: float) -> float:
    """Salto exacto de M en x0 por momentos aplicados."""
    if not f.pm_x.size:
        return 0.0
    mask = np.isclose(f.pm_x, x0, atol=1e-9)
    return float(np.sum(f.pm_M[mask])) if np.any(mask) else 0.0


def _rotation_integrals(f: InternalForces) -> Tuple[float, float]:
    """
    A0 = ∫ M0·(1-ξ) dx,  B0 = ∫ M0·ξ dx  sobre [x_a, x_b],  ξ = (x - x_a)/L

    M0 es cuadrática por tramos y ξ lineal => integrando cúbico por tramos:
    Simpson entre breakpoints es exacto. En el extremo derecho de cada tramo
    se usa el límite por izquierda (se descuenta el salto por momentos).
    """
    xa = f.x_a
    L = f.span
    bps = f.breakpoints()

    A0 = 0.0
    B0 = 0.0
    for i in range(len(bps) - 1):
        p = float(bps[i])
        q = float(bps[i + 1])
        if q <= p:
            continue
        m = 0.5 * (p + q)
        Mp = f.eval_M(p)
        Mm = f.eval_M(m)
        Mq = f.eval_M(q) - _jump_M_at(f, q)

        xi = [(p - xa) / L, (m - xa) / L, (q - xa) / L]
        w = (q - p) / 6.0
        A0 += w * (Mp * (1 - xi[0]) + 4 * Mm * (1 - xi[1]) + Mq * (1 - xi[2]))
        B0 += w * (Mp * xi[0] + 4 * Mm * xi[1] + Mq * xi[2])

    return A0, B0


def _fixed_end_moments(data: SpanLoads, Ra0: float) -> Tuple[float, float]:
    """
    Momentos de empotramiento por compatibilidad de giros (EI constante):
      giro en A nulo  <=>  ∫ M·(1-ξ) dx = 0
      giro en B nulo  <=>  ∫ M·ξ dx = 0
    con M = M0 + Ma·(1-ξ) + Mb·ξ.

    Para una puntual P (a, b) da los clásicos -P·a·b²/L² y -P·a²·b/L².
    """
    sup = data.supports
    L = data.span
    f0 = InternalForces.from_span_loads(data, R_a=Ra0, M_a=0.0)
    A0, B0 = _rotation_integrals(f0)

    if sup.start.is_fixed and sup.end.is_fixed:
        Ma = (2.0 * B0 - 4.0 * A0) / L
        Mb = (2.0 * A0 - 4.0 * B0) / L
    elif sup.start.is_fixed:
        Ma = -3.0 * A0 / L
        Mb = 0.0
    elif sup.end.is_fixed:
        Ma = 0.0
        Mb = -3.0 * B0 / L
    else:
        Ma = Mb = 0.0
    return Ma, Mb


def solve_reactions(data: SpanLoads) -> Reactions:
    L = data.span
    if not math.isfinite(L) or L <= 0:
        logger.debug("Tramo nulo o inválido (L=%r): reacciones nulas", L)
        return Reactions()

    Ra, Rb = _simple_support_reactions(data)

    Ma = Mb = 0.0
    sup = data.supports
    if sup.start.is_fixed or sup.end.is_fixed:
        Ma, Mb = _fixed_end_moments(data, Ra)
        # corrección por empotramiento: M(x) = M0 + Ma·(1-ξ) + Mb·ξ
        adjustment = (Mb - Ma) / L
        Ra += adjustment
        Rb -= adjustment

    logger.debug("Reacciones (%s, L=%g): Ra=%g Rb=%g Ma=%g Mb=%g", sup.case, L, Ra, Rb, Ma, Mb)
    return Reactions(reaction_a=Ra, reaction_b=Rb, moment_a=Ma, moment_b=Mb)


def compute_reactions(loads: Iterable[Load], supports: Supports) -> Reactions:
    """
    Reacciones de la viga de un tramo (a precisión completa).

    - Solo cuenta la parte de cada carga dentro de [A, B]
    - Si el tramo es nulo devuelve todo 0 (sin excepción)
    - Redondear con Reactions.rounded() solo para presentar
    """
    return solve_reactions(clip_to_span(loads, supports))
