from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from span_beam.domain.geometry import BeamGeometry, SectionProperties
from span_beam.domain.loads import Load
from span_beam.domain.results import Reactions
from span_beam.domain.supports import Supports
from span_beam.engine.internal_forces import InternalForces, build_internal_forces
from span_beam.engine.settings import AnalysisSettings, DEFAULT_SETTINGS
from span_beam.materials.material_db import DEFAULT_MATERIAL, Material
from span_beam.sections.rectangular import compute_section_properties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeflectionTable:
    """
    Elástica por viga conjugada, precalculada una vez por juego de datos.

    La curvatura κ = M/(E·I) se integra con N paneles (regla del punto medio)
    sobre [x_a, x_b] y se guardan sumas acumuladas:

      S_k = Σ_{i<k} κ_i·h           (giro acumulado)
      T_k = Σ_{i<k} κ_i·h·xm_i      (primer momento)

    de modo que W0(x) = ∫_{x_a}^{x} (x-s)·κ(s) ds = x·S(x) - T(x) sale en O(1).

    Elástica:  w(x) = θ_a·(x - x_a) + W0(x),   θ(x) = θ_a + S(x)
    (w + hacia arriba, en m; θ en rad)

    Fuera del tramo la viga sigue la tangente rígida en el apoyo más cercano.
    """
    x_a: float
    x_b: float
    h: float
    edges: np.ndarray
    kappa: np.ndarray
    S: np.ndarray
    T: np.ndarray
    theta_a: float

    @classmethod
    def empty(cls, x_a: float, x_b: float) -> "DeflectionTable":
        z = np.zeros(1, dtype=float)
        return cls(x_a=float(x_a), x_b=float(x_b), h=0.0, edges=z, kappa=np.zeros(0), S=z, T=z, theta_a=0.0)

    def _partial(self, x: np.ndarray):
        """S(x), T(x) para x dentro del tramo (panel parcial incluido)."""
        n = self.kappa.size
        k = np.floor((x - self.x_a) / self.h).astype(int)
        k = np.clip(k, 0, n - 1)
        d = x - self.edges[k]
        kap = self.kappa[k]
        S_x = self.S[k] + kap * d
        T_x = self.T[k] + kap * d * (self.edges[k] + 0.5 * d)
        return S_x, T_x

    def _inside(self, x: np.ndarray):
        xi = np.clip(x, self.x_a, self.x_b)
        S_x, T_x = self._partial(xi)
        w = self.theta_a * (xi - self.x_a) + xi * S_x - T_x
        th = self.theta_a + S_x
        return xi, w, th

    def deflection_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if self.kappa.size == 0:
            return np.zeros_like(x)
        xi, w, th = self._inside(x)
        # fuera del tramo: tangente en el apoyo (xi ya está recortado)
        return w + th * (x - xi)

    def slope_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if self.kappa.size == 0:
            return np.zeros_like(x)
        _, _, th = self._inside(x)
        return th

    def deflection(self, x: float) -> float:
        return float(self.deflection_array(np.asarray([x], dtype=float))[0])

    def slope(self, x: float) -> float:
        return float(self.slope_array(np.asarray([x], dtype=float))[0])


def _start_slope(supports: Supports, W0_end: float, L: float) -> float:
    """
    Giro en A según el caso de borde (viga conjugada):

      fixed-fixed / fixed-pin / fixed-roller -> A empotrado: θ_a = 0
      pin-fixed / simplemente apoyada        -> w(x_b) = 0: θ_a = -W0(x_b)/L

    En todos los casos w(x_a) = 0. Con empotramiento las condiciones restantes
    (w(x_b) = 0 o θ(x_b) = 0) se cumplen por compatibilidad de las reacciones.
    """
    if supports.start.is_fixed:
        return 0.0
    return -W0_end / L


def tabulate_deflection(
    forces: InternalForces,
    supports: Supports,
    *,
    EI: float,
    panels: int = DEFAULT_SETTINGS.panels,
) -> DeflectionTable:
    x_a = float(supports.start.position)
    x_b = float(supports.end.position)
    L = x_b - x_a
    if not np.isfinite(L) or L <= 0:
        return DeflectionTable.empty(x_a, x_b)

    n = max(int(panels), 1)
    h = L / n
    edges = x_a + h * np.arange(n + 1, dtype=float)
    xm = edges[:-1] + 0.5 * h
    kappa = forces.eval_M_array(xm) / EI

    S = np.concatenate(([0.0], np.cumsum(kappa * h)))
    T = np.concatenate(([0.0], np.cumsum(kappa * h * xm)))

    W0_end = x_b * S[-1] - T[-1]
    theta_a = _start_slope(supports, W0_end, L)
    logger.debug("Elástica %s: N=%d, EI=%g, θ_a=%g", supports.case, n, EI, theta_a)

    return DeflectionTable(
        x_a=x_a, x_b=x_b, h=h, edges=edges, kappa=kappa, S=S, T=T, theta_a=theta_a,
    )


def build_deflection_table(
    loads: Iterable[Load],
    reactions: Reactions,
    supports: Supports,
    geometry: BeamGeometry,
    material: Material = DEFAULT_MATERIAL,
    *,
    section: Optional[SectionProperties] = None,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> DeflectionTable:
    if section is None:
        section = compute_section_properties(geometry, epsilon=settings.epsilon)
    EI = max(float(material.elastic_modulus) * section.moment_of_inertia, settings.epsilon)
    forces = build_internal_forces(loads, reactions, supports)
    return tabulate_deflection(forces, supports, EI=EI, panels=settings.panels)


def deflection_at(
    x: float,
    loads: Iterable[Load],
    reactions: Reactions,
    supports: Supports,
    geometry: BeamGeometry,
    material: Material = DEFAULT_MATERIAL,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> float:
    """Flecha en x (m, + hacia arriba)."""
    return build_deflection_table(loads, reactions, supports, geometry, material, settings=settings).deflection(x)


def slope_at(
    x: float,
    loads: Iterable[Load],
    reactions: Reactions,
    supports: Supports,
    geometry: BeamGeometry,
    material: Material = DEFAULT_MATERIAL,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> float:
    return build_deflection_table(loads, reactions, supports, geometry, material, settings=settings).slope(x)
