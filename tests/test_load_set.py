# path: tests/test_load_set.py
import math

import pytest

from span_beam.domain.geometry import BeamGeometry
from span_beam.domain.load_set import LoadSet
from span_beam.domain.loads import LoadType
from span_beam.domain.supports import Support, Supports, SupportKind
from span_beam.engine.normalize import resize_beam


def _two_loads():
    ls = LoadSet()
    ls, a = ls.add("point", position=2.5, magnitude=50)
    ls, b = ls.add(LoadType.DISTRIBUTED, position=1.0, magnitude=-5, length=2.0)
    return ls, a, b


def test_add_assigns_ids():
    ls, a, b = _two_loads()
    assert (a.id, b.id) == (1, 2)
    assert len(ls) == 2
    assert b.type is LoadType.DISTRIBUTED
    assert ls.get(2) == b


def test_remove_reclaims_highest_id():
    ls, _, _ = _two_loads()
    ls = ls.remove(2)
    assert ls.ids() == [1]
    ls, c = ls.add("moment", position=1.0, magnitude=3.0)
    assert c.id == 2


def test_remove_unknown_id():
    ls, _, _ = _two_loads()
    with pytest.raises(KeyError):
        ls.remove(99)


def test_update_clamps_position_and_length():
    ls, _, _ = _two_loads()
    ls2, res = ls.update(1, "position", 9.0, beam_length=5.0)
    assert res.valid
    assert ls2.get(1).position == 5.0

    ls3, res = ls2.update(2, "length", 10.0, beam_length=5.0)
    assert res.valid
    assert ls3.get(2).length == pytest.approx(4.0)
    # el original no cambia
    assert ls.get(1).position == 2.5


def test_update_rejects_invalid_magnitude():
    ls, _, _ = _two_loads()
    ls2, res = ls.update(1, "magnitude", float("nan"), beam_length=5.0)
    assert not res.valid
    assert ls2 is ls
    assert ls2.get(1).magnitude == 50


def test_update_rejects_zero_length_distributed():
    ls, _, _ = _two_loads()
    ls2, res = ls.update(2, "length", -3.0, beam_length=5.0)
    assert not res.valid
    assert ls2.get(2).length == 2.0


def test_update_type():
    ls, _, _ = _two_loads()
    ls2, res = ls.update(1, "type", "torsion", beam_length=5.0)
    assert res.valid
    assert ls2.get(1).type is LoadType.TORSION

    ls3, res = ls.update(1, "type", "wind", beam_length=5.0)
    assert not res.valid
    assert ls3 is ls

    # point -> distributed sin longitud: rechazado
    _, res = ls.update(1, "type", "distributed", beam_length=5.0)
    assert not res.valid


def test_update_unknown_field():
    ls, _, _ = _two_loads()
    with pytest.raises(ValueError):
        ls.update(1, "color", "red", beam_length=5.0)


def test_validate_set():
    ls, _, _ = _two_loads()
    assert ls.validate(5.0) == []
    bad = ls.validate(2.0)
    assert [i for i, _ in bad] == [1, 2]


def test_resize_beam_clips_loads_and_supports():
    geo = BeamGeometry(length=5.0)
    ls, _, _ = _two_loads()
    sup = Supports(Support(0.0, SupportKind.PIN), Support(5.0, SupportKind.ROLLER))

    geo2, ls2, sup2 = resize_beam(geo, ls, sup, 2.0)
    assert geo2.length == 2.0
    assert ls2.get(1).position == 2.0
    assert ls2.get(2).position == 1.0
    assert ls2.get(2).length == pytest.approx(1.0)
    assert sup2.end.position == 2.0
    assert sup2.start.kind is SupportKind.PIN
    assert ls2.validate(2.0) == []


def test_resize_beam_ignores_invalid_length():
    geo = BeamGeometry(length=5.0)
    ls, _, _ = _two_loads()
    sup = Supports.simply_supported(5.0)
    out = resize_beam(geo, ls, sup, math.nan)
    assert out == (geo, ls, sup)
