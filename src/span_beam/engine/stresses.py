from __future__ import annotations

import math
from typing import Iterable, Optional

from span_beam.domain.geometry import BeamGeometry, SectionProperties
from span_beam.domain.loads import Load
from span_beam.domain.results import Reactions, StressState
from span_beam.domain.supports import Supports
from span_beam.engine.internal_forces import build_internal_forces
from span_beam.engine.settings import AnalysisSettings, DEFAULT_SETTINGS
from span_beam.sections.rectangular import compute_section_properties, first_moment_of_area


def _dim(v: float, eps: float) -> float:
    v = float(v)
    return v if math.isfinite(v) and v > eps else eps


def combine_stresses(
    *,
    V: float,
    M: float,
    T: float,
    geometry: BeamGeometry,
    section: SectionProperties,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> StressState:
    """
    Tensiones en la sección a partir de V, M, T (N, N·m, N·m) -> MPa:

      σ   = |M| / S
      τ_V = |V·Q| / (I·w),  Q = w·h²/8          (eje neutro)
      τ_T = |T·h| / (2·J_t)                      (fibra exterior, aprox.)
      σ_vm = sqrt(σ² + 3·(τ_V² + τ_T²))
    """
    eps = settings.epsilon
    scale = settings.stress_scale

    w = _dim(geometry.width, eps)
    h = _dim(geometry.height, eps)
    Q = first_moment_of_area(w, h)

    sigma = abs(M) / max(section.section_modulus, eps) / scale
    tau_v = abs(V * Q) / max(section.moment_of_inertia * w, eps) / scale
    tau_t = abs(T * h) / max(2.0 * section.torsional_constant, eps) / scale
    sigma_vm = math.sqrt(sigma**2 + 3.0 * (tau_v**2 + tau_t**2))

    return StressState(
        normal_stress=sigma,
        shear_stress=tau_v,
        torsional_stress=tau_t,
        von_mises_stress=sigma_vm,
    )


def stresses_at(
    x: float,
    loads: Iterable[Load],
    reactions: Reactions,
    supports: Supports,
    geometry: BeamGeometry,
    section: Optional[SectionProperties] = None,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> StressState:
    if section is None:
        section = compute_section_properties(geometry, epsilon=settings.epsilon)
    f = build_internal_forces(loads, reactions, supports)
    return combine_stresses(
        V=f.eval_V(x),
        M=f.eval_M(x),
        T=f.eval_T(x),
        geometry=geometry,
        section=section,
        settings=settings,
    )
