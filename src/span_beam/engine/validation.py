from __future__ import annotations

import math

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.loads import Load, LoadType
from span_beam.domain.results import ValidationResult
from span_beam.domain.supports import Supports


def _finite(v) -> bool:
    try:
        return math.isfinite(float(v))
    except (TypeError, ValueError):
        return False


def validate_beam_length(value) -> ValidationResult:
    if not _finite(value) or float(value) <= 0:
        return ValidationResult.fail("La longitud de la viga debe ser un número positivo.")
    return ValidationResult.ok()


def validate_geometry(geometry: BeamGeometry) -> ValidationResult:
    res = validate_beam_length(geometry.length)
    if not res.valid:
        return res
    for name, v in (("altura", geometry.height), ("ancho", geometry.width)):
        if not _finite(v) or float(v) <= 0:
            return ValidationResult.fail(f"La {name} de la sección debe ser un número positivo.")
    return ValidationResult.ok()


def validate_load(load: Load, beam_length: float) -> ValidationResult:
    """
    Valida una carga contra la longitud de la viga. Nunca levanta excepción:
    devuelve ValidationResult con el primer problema encontrado.
    """
    res = validate_beam_length(beam_length)
    if not res.valid:
        return res
    L = float(beam_length)

    try:
        kind = LoadType.coerce(load.type)
    except ValueError:
        return ValidationResult.fail(f"Tipo de carga desconocido: {load.type!r}.")

    if not _finite(load.position) or float(load.position) < 0 or float(load.position) > L:
        return ValidationResult.fail(f"La posición de la carga debe estar entre 0 y {L:g} m.")

    if not _finite(load.magnitude):
        return ValidationResult.fail("La magnitud de la carga debe ser un número.")

    if kind is LoadType.DISTRIBUTED:
        if load.length is None or not _finite(load.length) or float(load.length) <= 0:
            return ValidationResult.fail("La longitud de la carga distribuida debe ser positiva.")
        if float(load.position) + float(load.length) > L + 1e-9:
            return ValidationResult.fail("La carga distribuida debe quedar dentro de la viga.")

    return ValidationResult.ok()


def validate_supports(supports: Supports, beam_length: float) -> ValidationResult:
    res = validate_beam_length(beam_length)
    if not res.valid:
        return res
    L = float(beam_length)
    a = supports.start.position
    b = supports.end.position
    if not _finite(a) or not _finite(b):
        return ValidationResult.fail("Las posiciones de los apoyos deben ser números.")
    if float(a) < 0 or float(b) > L:
        return ValidationResult.fail(f"Los apoyos deben estar entre 0 y {L:g} m.")
    if float(a) >= float(b):
        return ValidationResult.fail("El apoyo inicial debe estar antes que el apoyo final.")
    return ValidationResult.ok()
