import pytest

from ctfread.rng import INT64_MAX, INT64_MIN, Mappings, Range, RangeSet


def test_rng_set_intersect_uint():
    rs = RangeSet([Range(1, 200), Range(150, 300)], signed=False)
    assert rs.intersects_uint(1)
    assert rs.intersects_uint(100)
    assert rs.intersects_uint(150)
    assert rs.intersects_uint(200)
    assert rs.intersects_uint(300)

    assert not rs.intersects_uint(0)
    assert not rs.intersects_uint(301)
    assert not rs.intersects_uint(4294967295)

    assert rs.intersects_sint(1)
    assert rs.intersects_sint(300)
    assert not rs.intersects_sint(0)
    assert not rs.intersects_sint(INT64_MAX)
    assert not rs.intersects_sint(-20)


def test_rng_set_intersect_sint():
    rs = RangeSet(
        [Range(-100, 200), Range(INT64_MAX, INT64_MAX), Range(INT64_MIN, INT64_MIN + 200)],
        signed=True,
    )
    assert rs.intersects_uint(100)
    assert rs.intersects_uint(0)
    assert rs.intersects_uint(200)
    assert rs.intersects_uint(INT64_MAX)

    assert rs.intersects_sint(0)
    assert rs.intersects_sint(-100)
    assert rs.intersects_sint(INT64_MAX)

    assert not rs.intersects_uint(INT64_MAX + 1)


def test_rng_set_intersect_rng_set():
    rs_a = RangeSet([(1, 200), (150, 300)])
    rs_b = RangeSet([(250, 250), (600, 700)])
    rs_c = RangeSet([(301, 400), (700, 800)])
    assert rs_a.intersects_range_set(rs_b)
    assert rs_b.intersects_range_set(rs_c)
    assert not rs_a.intersects_range_set(rs_c)
    assert not rs_c.intersects_range_set(rs_a)


def test_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        Range(5, 4)


def test_range_set_domain_checks():
    with pytest.raises(ValueError):
        RangeSet([(-1, 3)], signed=False)
    with pytest.raises(ValueError):
        RangeSet([(0, INT64_MAX + 1)], signed=True)
    rs = RangeSet([(0, 3)])
    with pytest.raises(ValueError):
        rs.intersects_uint(-1)
    with pytest.raises(ValueError):
        rs.intersects_sint(INT64_MAX + 1)
    assert len(rs) == 1


def test_mappings_find_in_definition_order():
    maps = Mappings(
        {
            "RUNNING": [(0, 0)],
            "WAITING": [(1, 3), (10, 10)],
            "ANY": [(0, 10)],
        }
    )
    assert len(maps) == 3
    assert maps.find(0) == ["RUNNING", "ANY"]
    assert maps.find(2) == ["WAITING", "ANY"]
    assert maps.find(10) == ["WAITING", "ANY"]
    assert maps.find(11) == []
    assert maps.find_first(5) == "ANY"
    assert maps.find_first(11) is None


def test_mappings_name_listed_once_with_overlapping_ranges():
    maps = Mappings([("X", [(0, 10), (5, 15)])])
    assert maps.find(7) == ["X"]


def test_mappings_signed():
    maps = Mappings({"NEG": [(-10, -1)], "POS": [(1, 10)]}, signed=True)
    assert maps.find(-5) == ["NEG"]
    assert maps.find(0) == []
    assert maps.names == ("NEG", "POS")


def test_mappings_signedness_mismatch():
    with pytest.raises(ValueError):
        Mappings({"A": RangeSet([(0, 1)], signed=True)}, signed=False)