# path: tests/test_deflection.py
import pytest

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.loads import Load, LoadType
from span_beam.domain.supports import Support, Supports, SupportKind
from span_beam.engine.deflection import build_deflection_table, deflection_at, slope_at
from span_beam.engine.reactions import compute_reactions
from span_beam.materials.material_db import Material

GEO = BeamGeometry(length=4.0, height=0.2, width=0.1)
STEEL = Material(id="test", elastic_modulus=200e9, yield_strength=250.0)
EI = 200e9 * 0.1 * 0.2**3 / 12


def _supports(ka, kb, a=0.0, b=4.0):
    return Supports(Support(a, SupportKind.coerce(ka)), Support(b, SupportKind.coerce(kb)))


def _table(loads, sup, geo=GEO):
    r = compute_reactions(loads, sup)
    return build_deflection_table(loads, r, sup, geo, STEEL)


def test_simply_supported_midspan_point_load():
    P, L = 1000.0, 4.0
    loads = [Load(id=1, type=LoadType.POINT, position=2.0, magnitude=P)]
    sup = _supports("pin", "roller")
    r = compute_reactions(loads, sup)

    w_mid = deflection_at(2.0, loads, r, sup, GEO, STEEL)
    assert w_mid == pytest.approx(-P * L**3 / (48 * EI), rel=1e-4)
    assert slope_at(0.0, loads, r, sup, GEO, STEEL) == pytest.approx(-P * L**2 / (16 * EI), rel=1e-4)
    assert slope_at(2.0, loads, r, sup, GEO, STEEL) == pytest.approx(0.0, abs=1e-9)


def test_simply_supported_udl():
    q, L = 1000.0, 4.0
    loads = [Load(id=1, type=LoadType.DISTRIBUTED, position=0.0, magnitude=q, length=L)]
    t = _table(loads, _supports("pin", "roller"))
    assert t.deflection(2.0) == pytest.approx(-5 * q * L**4 / (384 * EI), rel=1e-4)


def test_fixed_fixed_udl():
    q, L = 1000.0, 4.0
    loads = [Load(id=1, type=LoadType.DISTRIBUTED, position=0.0, magnitude=q, length=L)]
    t = _table(loads, _supports("fixed", "fixed"))
    assert t.deflection(2.0) == pytest.approx(-q * L**4 / (384 * EI), rel=1e-3)
    assert t.slope(0.0) == 0.0
    assert t.slope(4.0) == pytest.approx(0.0, abs=1e-4 * abs(t.slope(1.0)))


@pytest.mark.parametrize("ka,kb", [
    ("pin", "roller"), ("roller", "pin"), ("fixed", "roller"), ("fixed", "pin"),
    ("pin", "fixed"), ("fixed", "fixed"),
])
def test_support_boundary_conditions(ka, kb):
    loads = [
        Load(id=1, type=LoadType.POINT, position=1.3, magnitude=2500),
        Load(id=2, type=LoadType.DISTRIBUTED, position=2.0, magnitude=800, length=1.5),
        Load(id=3, type=LoadType.MOMENT, position=3.1, magnitude=-400),
    ]
    t = _table(loads, _supports(ka, kb))
    w_max = max(abs(t.deflection(0.1 * i * 4.0)) for i in range(11))
    assert w_max > 0

    assert t.deflection(0.0) == pytest.approx(0.0, abs=1e-12)
    assert abs(t.deflection(4.0)) <= 1e-4 * w_max

    theta_ref = max(abs(t.slope(x)) for x in (0.5, 1.5, 2.5, 3.5))
    if ka == "fixed":
        assert t.slope(0.0) == 0.0
    if kb == "fixed":
        assert abs(t.slope(4.0)) <= 1e-4 * theta_ref


def test_overhang_follows_support_tangent():
    sup = _supports("pin", "roller", a=1.0, b=4.0)
    geo = BeamGeometry(length=5.0, height=0.2, width=0.1)
    loads = [Load(id=1, type=LoadType.POINT, position=2.5, magnitude=1000)]
    t = _table(loads, sup, geo)

    assert t.deflection(1.0) == pytest.approx(0.0, abs=1e-12)
    assert t.deflection(4.0) == pytest.approx(0.0, abs=1e-12)
    assert t.deflection(0.0) == pytest.approx(-t.slope(1.0) * 1.0)
    assert t.deflection(5.0) == pytest.approx(t.slope(4.0) * 1.0)
    # la flecha en el tramo es hacia abajo, los voladizos suben
    assert t.deflection(2.5) < 0
    assert t.deflection(0.0) > 0


def test_zero_span_gives_zero_deflection():
    sup = _supports("pin", "roller", a=2.0, b=2.0)
    loads = [Load(id=1, type=LoadType.POINT, position=2.0, magnitude=1000)]
    t = _table(loads, sup)
    assert t.deflection(1.0) == 0.0
    assert t.slope(3.0) == 0.0


def test_stiffer_material_deflects_less():
    loads = [Load(id=1, type=LoadType.POINT, position=2.0, magnitude=1000)]
    sup = _supports("pin", "roller")
    r = compute_reactions(loads, sup)
    soft = Material(id="soft", elastic_modulus=10e9, yield_strength=20.0)
    w_soft = deflection_at(2.0, loads, r, sup, GEO, soft)
    w_steel = deflection_at(2.0, loads, r, sup, GEO, STEEL)
    assert w_soft == pytest.approx(w_steel * 20.0, rel=1e-9)
