from __future__ import annotations

import math
import random

import pytest

from spacedetect.reconstruct.spaces_graph import Cycle, MinimalCycleDetector
from spacedetect.reconstruct.wall_graph import build_wall_graph
from tests.utils_walls import make_polygon, make_wall


def find_cycles(walls, **kwargs):
    graph = build_wall_graph(walls, prune_dangling=True)
    return MinimalCycleDetector(graph, **kwargs).find_cycles()


def test_rectangle_yields_single_counter_clockwise_cycle(rectangle_walls):
    cycles = find_cycles(rectangle_walls)
    assert len(cycles) == 1
    cycle = cycles[0]
    assert cycle.area == pytest.approx(12.0, abs=1e-3)
    assert cycle.signed_area > 0
    assert sorted(cycle.wall_ids) == ["bottom", "left", "right", "top"]
    assert cycle.canonical_key == "bottom,left,right,top"


def test_shared_wall_bounds_both_rooms(diagonal_split_walls):
    cycles = find_cycles(diagonal_split_walls)
    assert len(cycles) == 2
    wall_sets = [set(c.wall_ids) for c in cycles]
    assert {"ab", "bc", "divider"} in wall_sets
    assert {"cd", "da", "divider"} in wall_sets
    assert not wall_sets[0] <= wall_sets[1]
    assert not wall_sets[1] <= wall_sets[0]
    for cycle in cycles:
        assert cycle.area == pytest.approx(8.0)


def test_outer_boundary_is_not_a_room(two_room_walls):
    cycles = find_cycles(two_room_walls)
    assert [round(c.area, 6) for c in cycles] == [12.0, 9.0]
    assert set(cycles[0].wall_ids) == {"b2", "r", "t2", "divider"}
    assert set(cycles[1].wall_ids) == {"b1", "divider", "t1", "l"}


def test_result_does_not_depend_on_wall_order(two_room_walls):
    expected = {c.canonical_key for c in find_cycles(two_room_walls)}
    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(two_room_walls)
        rng.shuffle(shuffled)
        assert {c.canonical_key for c in find_cycles(shuffled)} == expected


def test_result_does_not_depend_on_wall_direction(diagonal_split_walls):
    flipped = [make_wall(w.id, w.end.x, w.end.y, w.start.x, w.start.y) for w in diagonal_split_walls]
    expected = {c.canonical_key for c in find_cycles(diagonal_split_walls)}
    assert {c.canonical_key for c in find_cycles(flipped)} == expected


def test_small_cycles_are_dropped(rectangle_walls):
    closet = [
        make_wall("c1", 10.0, 0.0, 10.5, 0.0),
        make_wall("c2", 10.5, 0.0, 10.5, 0.5),
        make_wall("c3", 10.5, 0.5, 10.0, 0.5),
        make_wall("c4", 10.0, 0.5, 10.0, 0.0),
    ]
    cycles = find_cycles(rectangle_walls + closet)
    assert len(cycles) == 1
    assert cycles[0].area == pytest.approx(12.0)

    cycles = find_cycles(rectangle_walls + closet, min_area=0.1)
    assert [round(c.area, 6) for c in cycles] == [12.0, 0.25]


def test_open_polyline_has_no_cycles():
    walls = [
        make_wall("a", 0.0, 0.0, 4.0, 0.0),
        make_wall("b", 4.0, 0.0, 4.0, 3.0),
        make_wall("c", 4.0, 3.0, 0.0, 3.0),
    ]
    assert find_cycles(walls) == []


def test_trace_gives_up_after_step_limit():
    # Regular 12-gon needs 12 steps to close
    corners = [(5 * math.cos(2 * math.pi * i / 12), 5 * math.sin(2 * math.pi * i / 12)) for i in range(12)]
    walls = [
        make_wall(f"w{i}", *corners[i], *corners[(i + 1) % 12])
        for i in range(12)
    ]
    assert len(find_cycles(walls)) == 1
    assert find_cycles(walls, max_steps=11) == []


def test_leftmost_edge_prefers_shorter_wall_on_equal_turn():
    # bm and bc leave B in the same direction
    walls = [
        make_wall("ab", 0.0, 0.0, 4.0, 0.0),
        make_wall("bc", 4.0, 0.0, 4.0, 4.0),
        make_wall("bm", 4.0, 0.0, 4.0, 2.0),
        make_wall("mc", 4.0, 2.0, 4.0, 4.0),
        make_wall("cd", 4.0, 4.0, 0.0, 4.0),
        make_wall("da", 0.0, 4.0, 0.0, 0.0),
    ]
    graph = build_wall_graph(walls)
    detector = MinimalCycleDetector(graph)
    a = graph.nodes["0.00_0.00"]
    b = graph.nodes["4.00_0.00"]
    incoming = next(e for e in a.edges if e.wall_id == "ab")
    chosen = detector.leftmost_edge(a, b, incoming, set())
    assert chosen.wall_id == "bm"


def test_leftmost_edge_prefers_smaller_id_for_identical_walls():
    walls = [
        make_wall("ab", 0.0, 0.0, 4.0, 0.0),
        make_wall("w2", 4.0, 0.0, 4.0, 4.0),
        make_wall("w1", 4.0, 0.0, 4.0, 4.0),
    ]
    graph = build_wall_graph(walls)
    detector = MinimalCycleDetector(graph)
    a = graph.nodes["0.00_0.00"]
    b = graph.nodes["4.00_0.00"]
    chosen = detector.leftmost_edge(a, b, a.edges[0], set())
    assert chosen.wall_id == "w1"


def test_visited_state_is_fresh_per_call(two_room_walls):
    graph = build_wall_graph(two_room_walls)
    detector = MinimalCycleDetector(graph)
    first = [c.canonical_key for c in detector.find_cycles()]
    second = [c.canonical_key for c in detector.find_cycles()]
    assert first == second
    assert len(first) == 2


def test_cycle_properties():
    cycle = Cycle(points=make_polygon((0, 0), (0, 2), (2, 2), (2, 0)), wall_ids=["d", "c", "b", "a"])
    assert cycle.signed_area == pytest.approx(-4.0)
    assert cycle.area == pytest.approx(4.0)
    assert cycle.canonical_key == "a,b,c,d"
