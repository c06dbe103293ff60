from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SupportKind(str, Enum):
    PIN = "pin"
    ROLLER = "roller"
    FIXED = "fixed"

    @classmethod
    def coerce(cls, value: Union["SupportKind", str]) -> "SupportKind":
        if isinstance(value, SupportKind):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class Support:
    """Apoyo con posición conocida (m). Todos restringen el desplazamiento vertical."""
    position: float
    kind: SupportKind = SupportKind.PIN

    @property
    def is_fixed(self) -> bool:
        return self.kind is SupportKind.FIXED


@dataclass(frozen=True)
class Supports:
    """
    Par de apoyos de la viga de un tramo:
      - start (A), end (B) con 0 <= A < B <= L
    """
    start: Support
    end: Support

    @property
    def span(self) -> float:
        return float(self.end.position - self.start.position)

    @property
    def case(self) -> str:
        """Caso de borde ("fixed-fixed", "fixed-pin", "pin-roller", ...)."""
        return f"{self.start.kind.value}-{self.end.kind.value}"

    @classmethod
    def simply_supported(cls, beam_length: float) -> "Supports":
        return cls(
            start=Support(position=0.0, kind=SupportKind.PIN),
            end=Support(position=float(beam_length), kind=SupportKind.ROLLER),
        )
