# path: tests/test_diagram.py
import pytest

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.load_set import LoadSet
from span_beam.domain.loads import Load, LoadType
from span_beam.domain.supports import Support, Supports, SupportKind
from span_beam.engine.diagram import analyze_beam, format_diagram, generate_diagram, summarize_diagram
from span_beam.engine.settings import AnalysisSettings
from span_beam.materials.material_db import DEFAULT_MATERIAL

GEO = BeamGeometry(length=5.0, height=0.2, width=0.1)
SS_5 = Supports.simply_supported(5.0)
MID_LOAD = [Load(id=1, type=LoadType.POINT, position=2.5, magnitude=50)]


def test_station_count_and_positions():
    seq = generate_diagram(GEO, MID_LOAD, SS_5)
    assert len(seq) == 101
    assert seq[0].position == 0.0
    assert seq[-1].position == 5.0
    xs = [p.position for p in seq]
    assert all(b > a for a, b in zip(xs, xs[1:]))

    seq = generate_diagram(GEO, MID_LOAD, SS_5, station_count=20)
    assert len(seq) == 21


def test_station_count_from_settings():
    seq = generate_diagram(GEO, MID_LOAD, SS_5, settings=AnalysisSettings(station_count=50))
    assert len(seq) == 51
    assert seq[-1].position == 5.0

    seq = generate_diagram(GEO, MID_LOAD, SS_5, station_count=1)
    assert [p.position for p in seq] == [0.0, 5.0]


@pytest.mark.parametrize("count", [0, -3])
def test_station_count_below_one_is_rejected(count):
    with pytest.raises(ValueError):
        generate_diagram(GEO, MID_LOAD, SS_5, station_count=count)


def test_generate_is_idempotent():
    ls = LoadSet()
    ls, _ = ls.add("point", 1.7, 120)
    ls, _ = ls.add("distributed", 0.5, 30, 3.0)
    ls, _ = ls.add("torsion", 2.0, 15)
    assert generate_diagram(GEO, ls, SS_5) == generate_diagram(GEO, ls, SS_5)


def test_midspan_values_and_symmetry():
    seq = generate_diagram(GEO, MID_LOAD, SS_5)
    mid = seq[50]
    assert mid.position == pytest.approx(2.5)
    assert mid.moment == pytest.approx(62.5)
    for i in range(101):
        assert seq[i].moment == pytest.approx(seq[100 - i].moment, abs=1e-9)
        assert seq[i].deflection == pytest.approx(seq[100 - i].deflection, rel=1e-6, abs=1e-15)


def test_deflection_zero_at_pin_and_roller():
    seq = generate_diagram(GEO, MID_LOAD, SS_5)
    assert seq[0].deflection == pytest.approx(0.0, abs=1e-15)
    assert seq[-1].deflection == pytest.approx(0.0, abs=1e-15)
    assert seq[50].deflection < 0


def test_without_deflection():
    seq = generate_diagram(GEO, MID_LOAD, SS_5, include_deflection=False)
    assert all(p.deflection == 0.0 and p.slope == 0.0 for p in seq)


def test_invalid_beam_length_gives_empty_diagram():
    assert generate_diagram(BeamGeometry(length=0.0), MID_LOAD, SS_5) == ()


def test_format_diagram_rounds_for_presentation():
    loads = [Load(id=1, type=LoadType.POINT, position=1.0, magnitude=10)]
    sup = Supports.simply_supported(3.0)
    seq = generate_diagram(BeamGeometry(length=3.0), loads, sup, station_count=7)
    out = format_diagram(seq)
    assert len(out) == len(seq)
    for raw, p in zip(seq, out):
        assert p.shear == round(raw.shear, 3)
        assert p.moment == round(raw.moment, 3)
        assert p.von_mises_stress == round(raw.von_mises_stress, 3)
        assert p.deflection == round(raw.deflection, 6)

    coarse = format_diagram(seq, AnalysisSettings(force_decimals=1))
    assert coarse[1].moment == round(seq[1].moment, 1)


def test_summary_peaks_and_utilization():
    seq = generate_diagram(GEO, MID_LOAD, SS_5)
    s = summarize_diagram(seq)
    assert s.max_moment.value == pytest.approx(62.5)
    assert s.max_moment.position == pytest.approx(2.5)
    assert abs(s.max_shear.value) == pytest.approx(25.0)
    assert s.max_deflection.position == pytest.approx(2.5)
    assert s.utilization == pytest.approx(s.max_von_mises.value / DEFAULT_MATERIAL.yield_strength)


def test_analyze_beam_reports_validation_notes_without_blocking():
    loads = [
        Load(id=1, type=LoadType.POINT, position=2.5, magnitude=50),
        Load(id=2, type=LoadType.POINT, position=7.0, magnitude=50),
    ]
    sup = Supports(Support(0.0, SupportKind.PIN), Support(5.0, SupportKind.ROLLER))
    res = analyze_beam(GEO, loads, sup)
    assert not res.valid
    assert any("id=2" in n for n in res.notes)
    # la carga fuera de la viga no se transmite
    assert res.reactions.reaction_a == pytest.approx(25.0)
    assert len(res.diagram) == 101
    assert res.section.area == pytest.approx(0.02)


def test_analyze_beam_fixed_case():
    sup = Supports(Support(0.0, SupportKind.FIXED), Support(5.0, SupportKind.FIXED))
    res = analyze_beam(GEO, MID_LOAD, sup)
    assert res.valid
    assert res.reactions.moment_a == pytest.approx(-31.25)
    assert res.diagram[0].moment == pytest.approx(-31.25)
    assert res.diagram[0].slope == 0.0
    assert abs(res.summary.max_moment.value) == pytest.approx(31.25)
    assert res.diagram[50].moment == pytest.approx(31.25)


def test_analyze_beam_accepts_text_load_types():
    loads = [Load(id=1, type="point", position=2.5, magnitude=50)]
    res = analyze_beam(GEO, loads, SS_5)
    assert res.valid
    assert res.notes == []
    assert res.reactions.reaction_a == pytest.approx(25.0)


def test_analyze_beam_material_by_catalogue_id():
    steel = analyze_beam(GEO, MID_LOAD, SS_5)
    alu = analyze_beam(GEO, MID_LOAD, SS_5, material="AL6061-T6")
    s355 = analyze_beam(GEO, MID_LOAD, SS_5, material="S355")

    assert alu.diagram[50].deflection == pytest.approx(steel.diagram[50].deflection * 200.0 / 69.0)
    assert s355.summary.utilization == pytest.approx(steel.summary.utilization * 250.0 / 355.0)
    with pytest.raises(KeyError):
        analyze_beam(GEO, MID_LOAD, SS_5, material="unobtainium")
