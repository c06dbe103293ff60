from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from span_beam.domain.cases import SpanLoads
from span_beam.domain.loads import Load
from span_beam.domain.results import Reactions
from span_beam.domain.supports import Supports
from span_beam.engine.normalize import clip_to_span

_TOL = 1e-9


@dataclass(frozen=True)
class InternalForces:
    """
    Esfuerzos internos V(x), M(x), T(x) en el tramo [x_a, x_b] por superposición.

    Convención:
    - Reacciones + arriba; cargas puntuales/distribuidas + abajo
    - M(x) positivo = tracciona fibra inferior; momento aplicado horario => salto +
    - M(x_a) = M_a (momento de empotramiento, 0 si el apoyo no es empotrado)
    - Fuera de [x_a, x_b] todo vale 0
    """
    x_a: float
    x_b: float

    R_a: float
    M_a: float

    pf_x: np.ndarray          # posiciones
    pf_P: np.ndarray          # N (+ abajo)

    dl_a: np.ndarray          # inicio
    dl_b: np.ndarray          # fin
    dl_q: np.ndarray          # N/m (+ abajo)

    pm_x: np.ndarray          # posición
    pm_M: np.ndarray          # N·m (+ horario)

    tq_x: np.ndarray
    tq_T: np.ndarray          # N·m

    @classmethod
    def from_span_loads(cls, data: SpanLoads, *, R_a: float, M_a: float = 0.0) -> "InternalForces":
        return cls(
            x_a=data.x_a,
            x_b=data.x_b,
            R_a=float(R_a),
            M_a=float(M_a),
            pf_x=np.array([p.x for p in data.point_forces], dtype=float),
            pf_P=np.array([p.P_down for p in data.point_forces], dtype=float),
            dl_a=np.array([d.a for d in data.dist_loads], dtype=float),
            dl_b=np.array([d.b for d in data.dist_loads], dtype=float),
            dl_q=np.array([d.q_down for d in data.dist_loads], dtype=float),
            pm_x=np.array([m.x for m in data.moments], dtype=float),
            pm_M=np.array([m.M_cw for m in data.moments], dtype=float),
            tq_x=np.array([t.x for t in data.torques], dtype=float),
            tq_T=np.array([t.T for t in data.torques], dtype=float),
        )

    @property
    def span(self) -> float:
        return float(self.x_b - self.x_a)

    def eval_V(self, x: float) -> float:
        return float(self.eval_V_array(np.asarray([x], dtype=float))[0])

    def eval_M(self, x: float) -> float:
        return float(self.eval_M_array(np.asarray([x], dtype=float))[0])

    def eval_T(self, x: float) -> float:
        return float(self.eval_T_array(np.asarray([x], dtype=float))[0])

    # -------------------------
    # Evaluadores vectorizados
    # -------------------------
    def _in_span(self, x: np.ndarray) -> np.ndarray:
        if self.span <= 0:
            return np.zeros_like(x, dtype=bool)
        return (x >= self.x_a - _TOL) & (x <= self.x_b + _TOL)

    def eval_V_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        V = np.full_like(x, self.R_a, dtype=float)

        # puntuales: V -= P * H(x-xi)
        if self.pf_x.size:
            H = (x[:, None] >= self.pf_x[None, :]).astype(float)
            V -= H @ self.pf_P

        # distribuidas uniformes: V -= q * clip(x-a, 0, (b-a))
        if self.dl_a.size:
            a = self.dl_a[None, :]
            b = self.dl_b[None, :]
            lx = np.clip(x[:, None] - a, 0.0, b - a)
            V -= np.sum(self.dl_q[None, :] * lx, axis=1)

        return np.where(self._in_span(x), V, 0.0)

    def eval_M_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        M = self.R_a * (x - self.x_a) + self.M_a

        # puntuales: M -= P*(x-xi)*H(x-xi)
        if self.pf_x.size:
            dx = (x[:, None] - self.pf_x[None, :])
            H = (dx >= 0.0).astype(float)
            M -= np.sum(self.pf_P[None, :] * dx * H, axis=1)

        # distribuidas: M -= q * integral_a^{min(x,b)} (x-ξ) dξ
        # - x<a: 0
        # - a<=x<=b: q*(x-a)^2/2
        # - x>b: q*(b-a)*(x - (a+b)/2)
        if self.dl_a.size:
            a = self.dl_a[None, :]
            b = self.dl_b[None, :]
            q = self.dl_q[None, :]

            xcol = x[:, None]
            in1 = (xcol >= a) & (xcol <= b)
            in2 = (xcol > b)

            t = (xcol - a)
            M -= np.sum(q * (t * t) * 0.5 * in1, axis=1)

            L = (b - a)
            xc = 0.5 * (a + b)
            M -= np.sum(q * L * (xcol - xc) * in2, axis=1)

        # momentos aplicados: M += M0 * H(x-xk)
        if self.pm_x.size:
            Hm = (x[:, None] >= self.pm_x[None, :]).astype(float)
            M += Hm @ self.pm_M

        return np.where(self._in_span(x), M, 0.0)

    def eval_T_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        T = np.zeros_like(x, dtype=float)
        if self.tq_x.size:
            H = (x[:, None] >= self.tq_x[None, :]).astype(float)
            T += H @ self.tq_T
        return np.where(self._in_span(x), T, 0.0)

    def breakpoints(self) -> np.ndarray:
        """Posiciones (dentro del tramo) donde V o M cambian de ley."""
        xs = [float(self.x_a), float(self.x_b)]
        xs += list(self.pf_x.astype(float))
        xs += list(self.pm_x.astype(float))
        xs += list(self.dl_a.astype(float))
        xs += list(self.dl_b.astype(float))
        xs = [x for x in xs if self.x_a <= x <= self.x_b]
        return np.array(sorted(set(xs)), dtype=float)


def build_internal_forces(loads: Iterable[Load], reactions: Reactions, supports: Supports) -> InternalForces:
    data = clip_to_span(loads, supports)
    M_a = reactions.moment_a if supports.start.is_fixed else 0.0
    return InternalForces.from_span_loads(data, R_a=reactions.reaction_a, M_a=M_a)


def shear_at(x: float, loads: Iterable[Load], reactions: Reactions, supports: Supports) -> float:
    return build_internal_forces(loads, reactions, supports).eval_V(x)


def moment_at(x: float, loads: Iterable[Load], reactions: Reactions, supports: Supports) -> float:
    return build_internal_forces(loads, reactions, supports).eval_M(x)


def torsion_at(x: float, loads: Iterable[Load], supports: Supports) -> float:
    data = clip_to_span(loads, supports)
    return InternalForces.from_span_loads(data, R_a=0.0).eval_T(x)
