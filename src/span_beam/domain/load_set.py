from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple, Union

from span_beam.domain.loads import Load, LoadType
from span_beam.domain.results import ValidationResult
from span_beam.engine.validation import validate_load

_FIELDS = ("type", "position", "magnitude", "length")


def _next_free_id(used: set[int]) -> int:
    return max(used, default=0) + 1


@dataclass(frozen=True)
class LoadSet:
    """
    Colección ordenada e inmutable de cargas.

    Cada operación devuelve un LoadSet nuevo; el estado mutable queda en la UI.
    Los ids se asignan como max(id)+1, así que al quitar la última carga su id
    vuelve a quedar libre.
    """
    loads: Tuple[Load, ...] = ()

    def __iter__(self) -> Iterator[Load]:
        return iter(self.loads)

    def __len__(self) -> int:
        return len(self.loads)

    def ids(self) -> List[int]:
        return [ld.id for ld in self.loads]

    def get(self, load_id: int) -> Optional[Load]:
        for ld in self.loads:
            if ld.id == load_id:
                return ld
        return None

    def _index(self, load_id: int) -> int:
        for i, ld in enumerate(self.loads):
            if ld.id == load_id:
                return i
        raise KeyError(f"No existe la carga id={load_id}")

    def add(
        self,
        type: Union[LoadType, str],
        position: float,
        magnitude: float,
        length: Optional[float] = None,
    ) -> Tuple["LoadSet", Load]:
        load = Load(
            id=_next_free_id(set(self.ids())),
            type=LoadType.coerce(type),
            position=float(position),
            magnitude=float(magnitude),
            length=None if length is None else float(length),
        )
        return LoadSet(self.loads + (load,)), load

    def remove(self, load_id: int) -> "LoadSet":
        i = self._index(load_id)
        return LoadSet(self.loads[:i] + self.loads[i + 1:])

    def update(self, load_id: int, field: str, value, beam_length: float) -> Tuple["LoadSet", ValidationResult]:
        """
        Modifica un campo de una carga.

        - position se acota a [0, L]; length a [0, L - position]
        - se re-valida la carga completa: si no es válida se rechaza el cambio
          (se devuelve el mismo LoadSet con el mensaje)
        """
        if field not in _FIELDS:
            raise ValueError(f"Campo de carga desconocido: {field!r}. Válidos: {_FIELDS}")

        i = self._index(load_id)
        old = self.loads[i]
        L = float(beam_length)

        if field == "type":
            try:
                new = replace(old, type=LoadType.coerce(value))
            except ValueError:
                return self, ValidationResult.fail(f"Tipo de carga desconocido: {value!r}.")
        else:
            try:
                v = float(value)
            except (TypeError, ValueError):
                return self, ValidationResult.fail(f"Valor no numérico para {field}: {value!r}.")

            if field == "position" and math.isfinite(v) and math.isfinite(L):
                v = max(0.0, min(L, v))
            elif field == "length" and math.isfinite(v) and math.isfinite(L):
                v = max(0.0, min(L - float(old.position), v))
            new = replace(old, **{field: v})

        res = validate_load(new, L)
        if not res.valid:
            return self, res
        loads = list(self.loads)
        loads[i] = new
        return LoadSet(tuple(loads)), res

    def validate(self, beam_length: float) -> List[Tuple[int, ValidationResult]]:
        """Resultados inválidos por id (lista vacía => todo OK)."""
        out: List[Tuple[int, ValidationResult]] = []
        for ld in self.loads:
            res = validate_load(ld, beam_length)
            if not res.valid:
                out.append((ld.id, res))
        return out
