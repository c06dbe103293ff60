from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from span_beam.domain.geometry import SectionProperties


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)


@dataclass(frozen=True)
class Reactions:
    """
    Reacciones de apoyo.

    Convención:
    - reaction_a / reaction_b en N, + hacia arriba
    - moment_a / moment_b en N·m: momento flector interno en el apoyo
      (positivo = tracciona fibra inferior). Solo != 0 si el apoyo es empotrado.
    """
    reaction_a: float = 0.0
    reaction_b: float = 0.0
    moment_a: float = 0.0
    moment_b: float = 0.0

    def rounded(self, decimals: int = 3) -> "Reactions":
        return Reactions(
            reaction_a=round(self.reaction_a, decimals),
            reaction_b=round(self.reaction_b, decimals),
            moment_a=round(self.moment_a, decimals),
            moment_b=round(self.moment_b, decimals),
        )


@dataclass(frozen=True)
class StressState:
    """Tensiones en MPa (todas >= 0)."""
    normal_stress: float
    shear_stress: float
    torsional_stress: float
    von_mises_stress: float


@dataclass(frozen=True)
class DiagramPoint:
    position: float
    shear: float
    moment: float
    torsion: float
    normal_stress: float
    shear_stress: float
    torsional_stress: float
    von_mises_stress: float
    deflection: float
    slope: float = 0.0


DiagramSequence = Tuple[DiagramPoint, ...]


@dataclass(frozen=True)
class Peak:
    position: float
    value: float


@dataclass(frozen=True)
class DiagramSummary:
    max_shear: Peak
    max_moment: Peak
    max_torsion: Peak
    max_von_mises: Peak
    max_deflection: Peak
    utilization: float  # max von Mises / fy


@dataclass(frozen=True)
class BeamAnalysis:
    section: SectionProperties
    reactions: Reactions
    diagram: DiagramSequence
    summary: DiagramSummary
    notes: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.notes
