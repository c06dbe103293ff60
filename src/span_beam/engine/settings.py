from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisSettings:
    station_count: int = 100       # estaciones del diagrama (=> station_count + 1 puntos)
    panels: int = 1000             # paneles de integración para la elástica

    # Redondeo solo para presentación
    force_decimals: int = 3
    deflection_decimals: int = 6

    stress_scale: float = 1e6      # Pa -> MPa
    epsilon: float = 1e-12


DEFAULT_SETTINGS = AnalysisSettings()
