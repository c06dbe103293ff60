from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Optional, Union

import numpy as np

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.loads import Load
from span_beam.domain.results import (
    BeamAnalysis, DiagramPoint, DiagramSequence, DiagramSummary, Peak
)
from span_beam.domain.supports import Supports
from span_beam.engine.deflection import tabulate_deflection
from span_beam.engine.internal_forces import build_internal_forces
from span_beam.engine.reactions import compute_reactions
from span_beam.engine.settings import AnalysisSettings, DEFAULT_SETTINGS
from span_beam.engine.stresses import combine_stresses
from span_beam.engine.validation import validate_geometry, validate_load, validate_supports
from span_beam.materials.material_db import DEFAULT_MATERIAL, Material, MaterialDB
from span_beam.sections.rectangular import compute_section_properties

logger = logging.getLogger(__name__)


def generate_diagram(
    geometry: BeamGeometry,
    loads: Iterable[Load],
    supports: Supports,
    station_count: Optional[int] = None,
    *,
    material: Material = DEFAULT_MATERIAL,
    include_deflection: bool = True,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> DiagramSequence:
    """
    Muestrea la viga en station_count + 1 estaciones equiespaciadas de 0 a L
    (por defecto settings.station_count). station_count < 1 es un error de
    programación: ValueError.

    Todo se recalcula desde cero (reacciones, esfuerzos, tensiones y elástica);
    la tabla de curvaturas se arma una sola vez y se reutiliza en cada estación.
    Valores a precisión completa: usar format_diagram() para presentar.
    """
    n = settings.station_count if station_count is None else int(station_count)
    if n < 1:
        raise ValueError(f"station_count debe ser >= 1 (recibido {station_count!r})")

    L = float(geometry.length)
    if not math.isfinite(L) or L <= 0:
        logger.warning("generate_diagram: longitud de viga inválida (%r), diagrama vacío", geometry.length)
        return ()

    loads = tuple(loads)

    section = compute_section_properties(geometry, epsilon=settings.epsilon)
    reactions = compute_reactions(loads, supports)
    forces = build_internal_forces(loads, reactions, supports)

    x = np.linspace(0.0, L, n + 1)
    V = forces.eval_V_array(x)
    M = forces.eval_M_array(x)
    T = forces.eval_T_array(x)

    if include_deflection:
        EI = max(float(material.elastic_modulus) * section.moment_of_inertia, settings.epsilon)
        table = tabulate_deflection(forces, supports, EI=EI, panels=settings.panels)
        w = table.deflection_array(x)
        th = table.slope_array(x)
    else:
        w = np.zeros_like(x)
        th = np.zeros_like(x)

    out: List[DiagramPoint] = []
    for i in range(n + 1):
        st = combine_stresses(
            V=float(V[i]), M=float(M[i]), T=float(T[i]),
            geometry=geometry, section=section, settings=settings,
        )
        out.append(DiagramPoint(
            position=float(x[i]),
            shear=float(V[i]),
            moment=float(M[i]),
            torsion=float(T[i]),
            normal_stress=st.normal_stress,
            shear_stress=st.shear_stress,
            torsional_stress=st.torsional_stress,
            von_mises_stress=st.von_mises_stress,
            deflection=float(w[i]),
            slope=float(th[i]),
        ))

    logger.debug("Diagrama generado: %d estaciones, L=%g m", len(out), L)
    return tuple(out)


def format_diagram(sequence: DiagramSequence, settings: AnalysisSettings = DEFAULT_SETTINGS) -> DiagramSequence:
    """Redondeo de presentación: 3 decimales fuerzas/tensiones, 6 flecha/giro."""
    fd = settings.force_decimals
    dd = settings.deflection_decimals
    return tuple(
        replace(
            p,
            position=round(p.position, fd),
            shear=round(p.shear, fd),
            moment=round(p.moment, fd),
            torsion=round(p.torsion, fd),
            normal_stress=round(p.normal_stress, fd),
            shear_stress=round(p.shear_stress, fd),
            torsional_stress=round(p.torsional_stress, fd),
            von_mises_stress=round(p.von_mises_stress, fd),
            deflection=round(p.deflection, dd),
            slope=round(p.slope, dd),
        )
        for p in sequence
    )


def _peak(sequence: DiagramSequence, attr: str) -> Peak:
    if not sequence:
        return Peak(position=0.0, value=0.0)
    p = max(sequence, key=lambda pt: abs(getattr(pt, attr)))
    return Peak(position=p.position, value=getattr(p, attr))


def summarize_diagram(
    sequence: DiagramSequence,
    material: Material = DEFAULT_MATERIAL,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> DiagramSummary:
    """Valores extremos (por |valor|) y factor de utilización σ_vm,max / fy."""
    vm = _peak(sequence, "von_mises_stress")
    return DiagramSummary(
        max_shear=_peak(sequence, "shear"),
        max_moment=_peak(sequence, "moment"),
        max_torsion=_peak(sequence, "torsion"),
        max_von_mises=vm,
        max_deflection=_peak(sequence, "deflection"),
        utilization=abs(vm.value) / max(float(material.yield_strength), settings.epsilon),
    )


def analyze_beam(
    geometry: BeamGeometry,
    loads: Iterable[Load],
    supports: Supports,
    material: Union[Material, str] = DEFAULT_MATERIAL,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> BeamAnalysis:
    """
    Corrida completa para la UI: sección, reacciones, diagrama y resumen.

    Las validaciones no bloquean el cálculo: sus mensajes vuelven en notes
    para que quien llama decida si advertir o rechazar.
    material puede ser un Material o el id de uno del catálogo (MaterialDB);
    un id desconocido levanta KeyError.
    """
    if isinstance(material, str):
        material = MaterialDB.builtin().require(material)
    loads = tuple(loads)
    notes: List[str] = []

    for res in (validate_geometry(geometry), validate_supports(supports, geometry.length)):
        if not res.valid:
            notes.append(res.message or "")
    for ld in loads:
        res = validate_load(ld, geometry.length)
        if not res.valid:
            notes.append(f"Carga id={ld.id}: {res.message}")

    for n in notes:
        logger.warning(n)

    section = compute_section_properties(geometry, epsilon=settings.epsilon)
    reactions = compute_reactions(loads, supports)
    diagram = generate_diagram(
        geometry, loads, supports, material=material, settings=settings,
    )
    summary = summarize_diagram(diagram, material, settings)

    logger.info(
        "Análisis %s L=%g m: Ra=%.3f Rb=%.3f, σvm,max=%.3f MPa (%.0f%% fy)",
        supports.case, float(geometry.length), reactions.reaction_a, reactions.reaction_b,
        summary.max_von_mises.value, 100.0 * summary.utilization,
    )

    return BeamAnalysis(
        section=section,
        reactions=reactions,
        diagram=diagram,
        summary=summary,
        notes=notes,
    )
