from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Tuple

from span_beam.domain.cases import SpanLoads
from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.load_set import LoadSet
from span_beam.domain.loads import (
    Load, LoadType,
    ClippedPointForce, ClippedDistUniform, ClippedPointMoment, ClippedTorque
)
from span_beam.domain.supports import Support, Supports

logger = logging.getLogger(__name__)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _inside(x: float, lo: float, hi: float, tol: float = 1e-9) -> bool:
    return (x >= lo - tol) and (x <= hi + tol)


def clip_to_span(loads: Iterable[Load], supports: Supports) -> SpanLoads:
    """
    Lleva las cargas al tramo [A, B]:
      - puntuales y momentos fuera del tramo se ignoran
      - distribuidas se recortan al solape con [A, B]
      - torsores se conservan tal cual (el torsor se transmite sin decaer)
    Cargas no finitas o de tipo desconocido se ignoran con una nota.
    """
    xa = float(supports.start.position)
    xb = float(supports.end.position)
    notes: List[str] = []

    pfs: List[ClippedPointForce] = []
    dls: List[ClippedDistUniform] = []
    pms: List[ClippedPointMoment] = []
    tqs: List[ClippedTorque] = []

    for ld in loads:
        try:
            kind = LoadType.coerce(ld.type)
        except ValueError:
            notes.append(f"Carga id={ld.id}: tipo desconocido {ld.type!r}. Se ignoró.")
            continue

        x = float(ld.position)
        mag = float(ld.magnitude)
        if not (math.isfinite(x) and math.isfinite(mag)):
            notes.append(f"Carga id={ld.id}: posición/magnitud no finita. Se ignoró.")
            continue

        if kind is LoadType.TORSION:
            tqs.append(ClippedTorque(x=x, T=mag))
            continue

        if kind is LoadType.DISTRIBUTED:
            Lq = float(ld.length) if ld.length is not None else 0.0
            if not math.isfinite(Lq) or Lq <= 0:
                notes.append(f"Distribuida id={ld.id}: longitud <= 0. Se ignoró.")
                continue
            a = _clamp(x, xa, xb)
            b = _clamp(x + Lq, xa, xb)
            if b <= a + 1e-12:
                notes.append(f"Distribuida id={ld.id} fuera del tramo [{xa:g},{xb:g}] m: se ignoró.")
                continue
            if abs(a - x) > 1e-9 or abs(b - (x + Lq)) > 1e-9:
                notes.append(f"Distribuida id={ld.id} recortada de [{x:g},{x + Lq:g}] m a [{a:g},{b:g}] m.")
            dls.append(ClippedDistUniform(a=a, b=b, q_down=mag))
            continue

        if not _inside(x, xa, xb):
            notes.append(f"Carga id={ld.id} ({kind.value}) en x={x:g} m fuera del tramo: se ignoró.")
            continue
        x = _clamp(x, xa, xb)

        if kind is LoadType.POINT:
            pfs.append(ClippedPointForce(x=x, P_down=mag))
        else:
            pms.append(ClippedPointMoment(x=x, M_cw=mag))

    for n in notes:
        logger.debug(n)

    return SpanLoads(
        supports=supports,
        point_forces=pfs,
        dist_loads=dls,
        moments=pms,
        torques=tqs,
        notes=notes,
    )


def resize_beam(
    geometry: BeamGeometry,
    loads: LoadSet,
    supports: Supports,
    new_length: float,
) -> Tuple[BeamGeometry, LoadSet, Supports]:
    """
    Cambia la longitud de la viga manteniendo la integridad de los datos:
      - position de cada carga se acota a [0, L]
      - length de distribuidas se acota a L - position
      - los apoyos se acotan a [0, L] (el inicial no pasa al final)
    Longitudes no positivas o no finitas se ignoran (se devuelve todo igual).
    """
    L = float(new_length)
    if not math.isfinite(L) or L <= 0:
        logger.warning("resize_beam: longitud inválida %r, sin cambios", new_length)
        return geometry, loads, supports

    new_loads = []
    for ld in loads:
        pos = min(float(ld.position), L)
        length = ld.length
        if length is not None:
            length = min(float(length), L - pos)
        new_loads.append(replace(ld, position=pos, length=length))

    xb = min(float(supports.end.position), L)
    xa = min(float(supports.start.position), xb)
    new_supports = Supports(
        start=Support(position=xa, kind=supports.start.kind),
        end=Support(position=xb, kind=supports.end.kind),
    )

    return geometry.with_length(L), LoadSet(tuple(new_loads)), new_supports
