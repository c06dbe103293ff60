from __future__ import annotations

from dataclasses import dataclass
from typing import List

from span_beam.domain.loads import (
    ClippedPointForce, ClippedDistUniform, ClippedPointMoment, ClippedTorque
)
from span_beam.domain.supports import Supports


@dataclass
class SpanLoads:
    """
    Cargas ya recortadas al tramo [A, B] entre apoyos, listas para el motor.
    Lo que queda fuera del tramo no se transmite a los apoyos.
    """
    supports: Supports
    point_forces: List[ClippedPointForce]
    dist_loads: List[ClippedDistUniform]
    moments: List[ClippedPointMoment]
    torques: List[ClippedTorque]
    notes: List[str]

    @property
    def x_a(self) -> float:
        return float(self.supports.start.position)

    @property
    def x_b(self) -> float:
        return float(self.supports.end.position)

    @property
    def span(self) -> float:
        return float(self.supports.span)
