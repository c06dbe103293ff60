from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class LoadType(str, Enum):
    POINT = "point"
    DISTRIBUTED = "distributed"
    MOMENT = "moment"
    TORSION = "torsion"

    @classmethod
    def coerce(cls, value: Union["LoadType", str]) -> "LoadType":
        """Acepta el enum o su texto ("point", "Distributed", ...)."""
        if isinstance(value, LoadType):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class Load:
    """
    Carga sobre la viga (registro inmutable).

    Convención de signos (magnitud ingresada por el usuario):
      - point:       N, + hacia abajo
      - distributed: N/m, + hacia abajo, sobre [position, position + length]
      - moment:      N·m, + horario
      - torsion:     N·m, torsor alrededor del eje de la viga
    """
    id: int
    type: LoadType
    position: float          # m desde el extremo izquierdo
    magnitude: float
    length: Optional[float] = None  # m, solo para distributed


@dataclass(frozen=True)
class ClippedPointForce:
    x: float
    P_down: float


@dataclass(frozen=True)
class ClippedDistUniform:
    a: float
    b: float
    q_down: float


@dataclass(frozen=True)
class ClippedPointMoment:
    x: float
    M_cw: float


@dataclass(frozen=True)
class ClippedTorque:
    x: float
    T: float
