from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class DiagramStyle:
    line_lw: float = 1.5
    axis_lw: float = 1.0
    fill_alpha: float = 0.15
    grid_alpha: float = 0.25

    # margen vertical sobre el máximo |y|
    y_pad: float = 1.15

    annotate_extrema: bool = True
    font_size: int = 8

    # Escala de la flecha para graficar (m -> mm)
    deflection_scale: float = 1000.0
