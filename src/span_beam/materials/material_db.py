from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

PA_PER_MPA = 1e6


@dataclass(frozen=True)
class Material:
    """
    Material elástico lineal.

      - elastic_modulus en Pa (rigidez a flexión E·I para la elástica)
      - yield_strength en MPa (referencia para el factor de utilización)
    """
    id: str
    elastic_modulus: float
    yield_strength: float
    family: str = ""
    notes: str = ""

    @property
    def elastic_modulus_mpa(self) -> float:
        return float(self.elastic_modulus) / PA_PER_MPA


STEEL_S250 = Material(id="S250", elastic_modulus=200e9, yield_strength=250.0, family="Acero")
STEEL_S355 = Material(id="S355", elastic_modulus=200e9, yield_strength=355.0, family="Acero")
ALUMINIUM_6061_T6 = Material(id="AL6061-T6", elastic_modulus=69e9, yield_strength=276.0, family="Aluminio")
TIMBER_C24 = Material(
    id="C24", elastic_modulus=11e9, yield_strength=24.0, family="Madera",
    notes="fm,k (flexión característica) como referencia",
)

DEFAULT_MATERIAL = STEEL_S250


class MaterialDB:
    def __init__(self, materials: List[Material]):
        self.materials: List[Material] = list(materials)
        self.by_id: Dict[str, Material] = {m.id.strip(): m for m in self.materials if m.id.strip()}

    def ids(self) -> List[str]:
        return [m.id for m in self.materials]

    def get(self, mat_id: str) -> Optional[Material]:
        return self.by_id.get((mat_id or "").strip())

    def require(self, mat_id: str) -> Material:
        m = self.get(mat_id)
        if m is None:
            raise KeyError(f"Material desconocido: {mat_id!r}. Disponibles: {self.ids()}")
        return m

    @classmethod
    def builtin(cls) -> "MaterialDB":
        return cls([STEEL_S250, STEEL_S355, ALUMINIUM_6061_T6, TIMBER_C24])
