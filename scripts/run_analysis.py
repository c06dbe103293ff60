# path: scripts/run_analysis.py
import os
import sys
import traceback

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from span_beam.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.load_set import LoadSet
from span_beam.domain.supports import Support, Supports, SupportKind
from span_beam.engine.diagram import analyze_beam
from span_beam.view.renderer_diagrams import (
    render_deflection, render_moment, render_shear, render_stresses, render_torsion
)


def main(out_png: str = "beam_analysis.png", material_id: str = "S250"):
    beam = BeamGeometry(length=5.0, height=0.2, width=0.1)

    loads = LoadSet()
    loads, _ = loads.add("point", position=2.5, magnitude=50_000)
    loads, _ = loads.add("distributed", position=0.0, magnitude=5_000, length=2.0)
    loads, _ = loads.add("torsion", position=1.0, magnitude=2_000)

    supports = Supports(
        start=Support(position=0.0, kind=SupportKind.PIN),
        end=Support(position=4.0, kind=SupportKind.ROLLER),
    )

    # material por id del catálogo (S250, S355, AL6061-T6, C24)
    res = analyze_beam(beam, loads, supports, material=material_id)
    logger.info("Material %s: utilización %.3f", material_id, res.summary.utilization)
    for n in res.notes:
        logger.warning(n)

    fig, axes = plt.subplots(5, 1, figsize=(8, 14), sharex=True)
    render_shear(axes[0], res.diagram)
    render_moment(axes[1], res.diagram)
    render_torsion(axes[2], res.diagram)
    render_stresses(axes[3], res.diagram)
    render_deflection(axes[4], res.diagram)
    fig.tight_layout()
    fig.savefig(out_png, dpi=120)
    plt.close(fig)
    logger.info("Diagramas guardados en %s", out_png)


if __name__ == "__main__":
    main(*sys.argv[1:3])
