from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.load_set import LoadSet
from span_beam.domain.supports import Supports
from span_beam.engine.diagram import format_diagram, generate_diagram

beam = BeamGeometry(length=5.0, height=0.2, width=0.1)

loads = LoadSet()
loads, _ = loads.add("point", position=2.5, magnitude=50)
loads, _ = loads.add("torsion", position=1.0, magnitude=20)

supports = Supports.simply_supported(beam.length)

diag = format_diagram(generate_diagram(beam, loads, supports, station_count=10))
for p in diag:
    print(
        f"x={p.position:5.2f}  V={p.shear:8.3f}  M={p.moment:8.3f}  T={p.torsion:6.2f}  "
        f"σvm={p.von_mises_stress:7.3f} MPa  w={p.deflection:.6f} m"
    )
