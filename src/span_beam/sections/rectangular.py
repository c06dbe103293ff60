from __future__ import annotations

import logging
import math

from span_beam.domain.geometry import BeamGeometry, SectionProperties
from span_beam.engine.settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


def _rect_Ix_about_centroid(b: float, h: float) -> float:
    """Ix de un rectángulo b (ancho) x h (alto), respecto a su centroide (eje horizontal)."""
    return (b * h**3) / 12.0


def _torsional_constant(b: float, h: float) -> float:
    """
    Constante torsional aproximada de un rectángulo (Saint-Venant):
      J_t = a·c³·(1/3 − 0.21·(c/a)·(1 − (c/a)⁴/12)),  a = lado mayor, c = lado menor
    """
    a = max(b, h)
    c = min(b, h)
    r = c / a
    return a * c**3 * (1.0 / 3.0 - 0.21 * r * (1.0 - r**4 / 12.0))


def _usable(v: float, epsilon: float) -> bool:
    return math.isfinite(v) and v > epsilon


def first_moment_of_area(width: float, height: float) -> float:
    """Q en el eje neutro de un rectángulo: w·h²/8 (m³)."""
    return float(width) * float(height) ** 2 / 8.0


def compute_section_properties(geometry: BeamGeometry, *, epsilon: float = DEFAULT_SETTINGS.epsilon) -> SectionProperties:
    """
    Propiedades de la sección rectangular w x h.

    Geometría degenerada (w o h <= 0, NaN) no levanta excepción: las dimensiones
    se llevan a epsilon y cada propiedad queda acotada inferiormente por epsilon,
    para que las tensiones aguas abajo sigan siendo finitas.
    """
    w = float(geometry.width)
    h = float(geometry.height)

    if not _usable(w, epsilon) or not _usable(h, epsilon):
        logger.warning("Sección degenerada (w=%s, h=%s): se acota a epsilon=%g", w, h, epsilon)
        w = w if _usable(w, epsilon) else epsilon
        h = h if _usable(h, epsilon) else epsilon

    area = max(w * h, epsilon)
    I = max(_rect_Ix_about_centroid(w, h), epsilon)
    S = max(2.0 * I / h, epsilon)
    J_polar = max((w * h**3 + h * w**3) / 12.0, epsilon)
    J_t = max(_torsional_constant(w, h), epsilon)

    return SectionProperties(
        area=area,
        moment_of_inertia=I,
        section_modulus=S,
        polar_moment_of_inertia=J_polar,
        torsional_constant=J_t,
    )
