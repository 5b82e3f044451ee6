import logging
import math

import pytest
from shapely.geometry import LineString, Polygon

from quakegeo import geometry
from quakegeo.coordinates import EARTH_RADIUS_MEAN
from quakegeo.errors import EmptyCollectionError, FormatError, RangeError
from quakegeo.point import Point
from quakegeo.sequence import (
    PointSequence,
    PointSequenceBuilder,
    format_points,
    parse_points,
)
from quakegeo.vector import Vector

DEGREE_KM = EARTH_RADIUS_MEAN * math.pi / 180.0


def equator_trace(count: int, spacing_km: float) -> PointSequence:
    """Points spaced ``spacing_km`` apart heading east along the equator."""
    origin = Point(0.0, 0.0)
    return PointSequence(
        [origin]
        + [geometry.location(origin, math.pi / 2, i * spacing_km) for i in range(1, count)]
    )


@pytest.fixture
def trace():
    return PointSequence(
        [Point(34.0, -118.0, 0.0), Point(34.1, -118.1, 2.0), Point(34.3, -118.15, 4.0)]
    )


def test_sequence_creation_and_basic_properties(trace):
    assert len(trace) == 3
    assert trace[0] == Point(34.0, -118.0, 0.0)
    assert trace[-1] == Point(34.3, -118.15, 4.0)
    assert trace.first() is trace[0]
    assert trace.last() is trace[2]
    assert list(trace) == [trace[0], trace[1], trace[2]]
    assert Point(34.1, -118.1, 2.0) in trace


def test_sequence_slice_is_sequence(trace):
    head = trace[:2]
    assert isinstance(head, PointSequence)
    assert len(head) == 2


def test_sequence_allows_duplicates():
    a = Point(1.0, 1.0)
    seq = PointSequence([a, a, a])
    assert len(seq) == 3
    assert seq.length() == 0.0


def test_empty_sequence_rejected():
    with pytest.raises(EmptyCollectionError):
        PointSequence([])
    with pytest.raises(EmptyCollectionError):
        PointSequenceBuilder().build()


def test_sequence_rejects_non_points():
    with pytest.raises(TypeError):
        PointSequence([Point(0.0, 0.0), (1.0, 1.0)])


def test_sequence_is_immutable(trace):
    with pytest.raises(TypeError):
        trace[0] = Point(0.0, 0.0)
    with pytest.raises(AttributeError):
        trace._points = ()
    with pytest.raises(AttributeError):
        trace.extra = 1


def test_sequence_equality_and_hash(trace):
    same = PointSequence(list(trace))
    assert trace == same
    assert hash(trace) == hash(same)
    assert trace != trace.reverse()
    assert trace != list(trace)


def test_of_returns_existing_sequence(trace):
    assert PointSequence.of(trace) is trace
    assert PointSequence.of([Point(0.0, 0.0)]) == PointSequence([Point(0.0, 0.0)])


def test_builder():
    builder = PointSequenceBuilder()
    builder.add(Point(0.0, 0.0))
    builder.add_coordinates(1.0, 1.0, 5.0)
    builder.extend([Point(2.0, 2.0), Point(3.0, 3.0)])
    assert len(builder) == 4

    seq = builder.build()
    assert len(seq) == 4
    assert seq[1] == Point(1.0, 1.0, 5.0)
    assert builder.build() is seq


def test_builder_frozen_after_build():
    builder = PointSequenceBuilder()
    builder.add(Point(0.0, 0.0))
    builder.build()
    with pytest.raises(RuntimeError):
        builder.add(Point(1.0, 1.0))
    with pytest.raises(RuntimeError):
        builder.add_coordinates(1.0, 1.0)
    with pytest.raises(RuntimeError):
        builder.extend([Point(1.0, 1.0)])


def test_builder_extend_is_all_or_nothing():
    builder = PointSequenceBuilder()
    with pytest.raises(TypeError):
        builder.extend([Point(0.0, 0.0), "not a point"])
    assert len(builder) == 0


def test_length_and_distances():
    seq = PointSequence([Point(0.0, 0.0), Point(0.0, 1.0), Point(0.0, 2.0)])
    assert seq.distances() == pytest.approx([DEGREE_KM, DEGREE_KM])
    assert seq.length() == pytest.approx(2 * DEGREE_KM)
    assert PointSequence([Point(0.0, 0.0)]).length() == 0.0
    assert PointSequence([Point(0.0, 0.0)]).distances() == []


def test_length_ignores_depth():
    flat = PointSequence([Point(0.0, 0.0), Point(0.0, 1.0)])
    dipping = PointSequence([Point(0.0, 0.0, 0.0), Point(0.0, 1.0, 20.0)])
    assert dipping.length() == flat.length()


def test_depth_and_bounds(trace):
    assert trace.depth() == pytest.approx(2.0)
    box = trace.bounds()
    assert box.min == Point(34.0, -118.15)
    assert box.max == Point(34.3, -118.0)


def test_reverse(trace):
    reversed_trace = trace.reverse()
    assert reversed_trace.first() is trace.last()
    assert reversed_trace.last() is trace.first()
    assert reversed_trace.reverse() == trace


def test_translate(trace):
    moved = trace.translate(Vector(0.0, DEGREE_KM, 1.0))
    assert len(moved) == len(trace)
    for original, shifted in zip(trace, moved):
        assert shifted.latitude == pytest.approx(original.latitude + 1.0)
        assert shifted.longitude == pytest.approx(original.longitude)
        assert shifted.depth == pytest.approx(original.depth + 1.0)


def test_partition_even_split():
    seq = equator_trace(4, 10.0)
    parts = seq.partition(15.0)

    assert len(parts) == 2
    assert parts[0].first() == seq.first()
    assert parts[-1].last() == seq.last()
    assert parts[0].last() == parts[1].first()
    assert parts[0].length() == pytest.approx(15.0, abs=1e-6)
    assert parts[1].length() == pytest.approx(15.0, abs=1e-6)


def test_partition_rounds_to_nearest_count():
    # 20 km / 15 km = 1.33 rounds to one part; two 15 km parts need 30 km
    # (see test_partition_even_split)
    seq = equator_trace(3, 10.0)
    parts = seq.partition(15.0)
    assert len(parts) == 1
    assert parts[0] == seq


def test_partition_single_segment():
    seq = equator_trace(2, 26.0)
    parts = seq.partition(10.0)
    assert len(parts) == 3
    for part in parts:
        assert part.length() == pytest.approx(26.0 / 3, abs=1e-6)
    assert sum(p.length() for p in parts) == pytest.approx(seq.length())


def test_partition_no_op_when_short(trace):
    parts = trace.partition(trace.length() + 1.0)
    assert parts == [trace]
    assert parts[0] is trace


def test_partition_sum_matches_length(trace):
    parts = trace.partition(5.0)
    assert len(parts) > 1
    assert sum(p.length() for p in parts) == pytest.approx(trace.length(), rel=1e-5)
    for prev, nxt in zip(parts, parts[1:]):
        assert prev.last() == nxt.first()


def test_resample():
    seq = equator_trace(3, 10.0)
    resampled = seq.resample(3.0)

    assert resampled.first() == seq.first()
    assert resampled.last() == seq.last()
    assert len(resampled) == 8
    # interior spacing is length / ceil(length / spacing)
    for d in resampled.distances()[:-1]:
        assert d == pytest.approx(20.0 / 7, abs=1e-6)


def test_resample_keeps_final_spacing():
    seq = equator_trace(4, 10.0)
    resampled = seq.resample(3.0)
    spacing = seq.length() / math.ceil(seq.length() / 3.0)

    assert len(resampled) == math.ceil(seq.length() / 3.0) + 1
    assert resampled.last() == seq.last()
    assert max(resampled.distances()) <= spacing * (1 + 1e-6)
    assert resampled.distances()[-1] == pytest.approx(spacing, rel=1e-6)


def test_resample_drops_corner_vertices():
    seq = PointSequence([Point(0.0, 0.0), Point(0.0, 1.0), Point(1.0, 1.0)])
    resampled = seq.resample(0.8 * DEGREE_KM)
    assert resampled.first() == seq.first()
    assert resampled.last() == seq.last()
    # the corner falls between the new points and is cut off
    corner = seq[1]
    assert min(geometry.horz_distance(p, corner) for p in resampled) > 0.3 * DEGREE_KM


def test_resample_no_op_when_short(trace):
    assert trace.resample(trace.length()) is trace


@pytest.mark.parametrize("bad", [0.0, -1.0, math.nan, math.inf])
def test_resample_and_partition_reject_bad_values(trace, bad):
    with pytest.raises(RangeError):
        trace.resample(bad)
    with pytest.raises(RangeError):
        trace.partition(bad)


def test_partition_logs_summary(trace, caplog):
    caplog.set_level(logging.DEBUG, logger="quakegeo.sequence")
    trace.partition(5.0)
    assert "partitions" in caplog.text


def test_shapely_views(trace):
    line = trace.to_linestring()
    assert isinstance(line, LineString)
    assert list(line.coords) == [(p.longitude, p.latitude) for p in trace]

    polygon = trace.to_polygon()
    assert isinstance(polygon, Polygon)
    assert polygon.exterior.is_closed

    with pytest.raises(ValueError):
        PointSequence([Point(0.0, 0.0)]).to_linestring()


def test_format_and_parse_points(trace):
    text = format_points(trace)
    assert text.splitlines()[0] == "-118.00000,34.00000,0.00000"
    assert str(trace) == text
    assert parse_points(text) == trace
    assert parse_points("  1,2,3\t4,5,6  ") == PointSequence(
        [Point(2.0, 1.0, 3.0), Point(5.0, 4.0, 6.0)]
    )


def test_parse_points_errors():
    with pytest.raises(EmptyCollectionError):
        parse_points("   ")
    with pytest.raises(FormatError):
        parse_points("1,2,3 4,5")
