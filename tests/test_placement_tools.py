"""Tests for placement_tools module."""
import math

import pytest

from trackgen.errors import DegenerateLineError
from trackgen.tools import geometry as v
from trackgen.tools.placement_tools import (
    build_segment_line,
    build_segment_path,
    generate_grid,
    generate_hoop_loop,
    generate_node_mesh,
    generate_random_scatter,
    segment_type_id,
)
from trackgen.context import GenerationContext, sequential_ids


class TestSegmentTypeId:

    def test_formats_whole_lengths(self):
        assert segment_type_id(5, 1) == "DrawingBoardCylinder0.5mx5m01"
        assert segment_type_id(1.0, "3") == "DrawingBoardCylinder0.5mx1m03"


class TestBuildSegmentLine:

    def test_ten_metres_along_x(self, context):
        pieces = build_segment_line(1, (0, 0, 0), (10, 0, 0), context)
        assert len(pieces) == 2
        assert [p.itemID for p in pieces] == ["DrawingBoardCylinder0.5mx5m01"] * 2
        assert pieces[0].position == pytest.approx((0, 0, 0))
        assert pieces[1].position == pytest.approx((5, 0, 0))
        assert pieces[0].rotation == pieces[1].rotation
        assert pieces[0].rotation == pytest.approx((math.pi / 2, math.pi / 2, 0))

    def test_orientation_points_along_line(self, context):
        pieces = build_segment_line(2, (1, 2, 3), (4, 8, -3), context)
        axis = v.rotate_euler(pieces[0].rotation, v.UP)
        assert axis == pytest.approx(v.unit((3, 6, -6)), abs=1e-12)

    def test_degenerate_line_raises(self, context):
        with pytest.raises(DegenerateLineError):
            build_segment_line(1, (0, 0, 0), (0, 0, 0), context)

    def test_degenerate_line_is_value_error(self, context):
        with pytest.raises(ValueError):
            build_segment_line(1, (2, 2, 2), (2, 2, 2), context)

    def test_mixed_units_tile_contiguously(self, context):
        pieces = build_segment_line(3, (0, 0, 0), (0, 0, 12), context)
        assert [p.itemID for p in pieces] == [
            "DrawingBoardCylinder0.5mx5m03",
            "DrawingBoardCylinder0.5mx5m03",
            "DrawingBoardCylinder0.5mx1m03",
            "DrawingBoardCylinder0.5mx1m03",
        ]
        assert [p.position[2] for p in pieces] == pytest.approx([0, 5, 10, 11])

    def test_fractional_piece_pulled_back_by_leftover(self, context):
        pieces = build_segment_line(1, (0, 0, 0), (0, 0, 12.5), context)
        assert len(pieces) == 5
        last = pieces[-1]
        assert last.itemID == "DrawingBoardCylinder0.5mx1m01"
        # Walking position after 5+5+1+1 is 12; pulled back by the 0.5 leftover.
        assert last.position == pytest.approx((0, 0, 11.5))

    def test_short_line_is_one_fractional_piece(self, context):
        pieces = build_segment_line(4, (0, 0, 0), (0.4, 0, 0), context)
        assert len(pieces) == 1
        assert pieces[0].itemID == "DrawingBoardCylinder0.5mx1m04"
        assert pieces[0].position == pytest.approx((-0.4, 0, 0))

    def test_diagonal_line_float_drift(self, context):
        # |(3, 4, 0)| * 2 = 10 exactly after tidying; no stray leftover piece.
        pieces = build_segment_line(1, (0, 0, 0), (6, 8, 0), context)
        assert len(pieces) == 2

    def test_whole_pieces_cover_line(self, context):
        start, end = (1, -2, 3), (13, 7, 11)
        pieces = build_segment_line(1, start, end, context)
        length = v.distance(start, end)
        direction = v.unit(v.sub(end, start))
        covered = 0.0
        for piece in pieces:
            if "x5m" in piece.itemID:
                size = 5
            else:
                size = 1
            expected = v.add(start, v.scale(covered, direction))
            if covered + size <= length + 1e-9:
                assert piece.position == pytest.approx(expected)
                covered += size
        assert length - covered < 1

    def test_ids_unique(self, context):
        pieces = build_segment_line(1, (0, 0, 0), (0, 30, 0), context)
        assert len({p.id for p in pieces}) == len(pieces)


class TestBuildSegmentPath:

    def test_chains_lines_and_skips_repeats(self, context):
        points = [(0, 0, 0), (5, 0, 0), (5, 0, 0), (5, 5, 0)]
        pieces = build_segment_path(2, points, context)
        assert len(pieces) == 2
        assert pieces[1].position == pytest.approx((5, 0, 0))


class TestCompositeGenerators:

    def test_grid_positions(self, context):
        pieces = generate_grid("cube1", (2, 2, 2), 7, offset=(0, 3, 0), context=context)
        assert len(pieces) == 8
        assert pieces[0].position == (0, 21, 0)
        assert pieces[-1].position == (7, 28, 7)
        assert all(p.itemID == "DrawingBoardCube1mx1m04" for p in pieces)

    def test_hoop_loop(self, context):
        radius = 4
        pieces = generate_hoop_loop((0, 5, 0), radius, 10, context=context)
        assert len(pieces) == 10
        assert all(p.itemID == "ASLLightHoopGate01" for p in pieces)
        centre = (0, 5 + radius, 0)
        for p in pieces:
            assert v.distance(p.position, centre) == pytest.approx(radius)
        # First hoop sits at the bottom of the loop.
        assert pieces[0].position == pytest.approx((0, 5, 0), abs=1e-9)

    def test_hoop_loop_empty(self, context):
        assert generate_hoop_loop((0, 0, 0), 3, 0, context=context) == []

    def test_node_mesh(self, context):
        pieces = generate_node_mesh((2, 1, 1), 5, origin=(0, 3, 0), context=context)
        assert len(pieces) == 6
        assert [p.position for p in pieces[:3]] == [(0, 3, 0)] * 3
        assert [p.position for p in pieces[3:]] == [(5, 3, 0)] * 3
        assert len({p.rotation for p in pieces[:3]}) == 3
        assert len({p.id for p in pieces}) == 6

    def test_random_scatter_is_seeded(self):
        a = generate_random_scatter(["cube1", "plate"], 20, 10, context=GenerationContext(sequential_ids(), seed=7))
        b = generate_random_scatter(["cube1", "plate"], 20, 10, context=GenerationContext(sequential_ids(), seed=7))
        assert [(p.itemID, p.position, p.rotation) for p in a] == [(p.itemID, p.position, p.rotation) for p in b]

    def test_random_scatter_bounds(self, context):
        pieces = generate_random_scatter(["cube1"], 100, 10, max_angle=1, context=context)
        assert len(pieces) == 100
        for p in pieces:
            assert all(-10 <= c <= 10 for c in p.position)
            assert all(-1 <= a <= 1 for a in p.rotation)
