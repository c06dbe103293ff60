from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class BeamGeometry:
    """
    Viga prismática de sección rectangular.
    Todas las dimensiones en m.
    """
    length: float
    height: float = 0.2
    width: float = 0.1

    def with_length(self, length: float) -> "BeamGeometry":
        return replace(self, length=float(length))


@dataclass(frozen=True)
class SectionProperties:
    """Propiedades de la sección (m², m⁴, m³)."""
    area: float
    moment_of_inertia: float
    section_modulus: float
    polar_moment_of_inertia: float
    torsional_constant: float
