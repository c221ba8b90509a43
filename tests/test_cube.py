# CubeTwist, copyright 2021 Zach Wegner
#
# This file is part of CubeTwist.
#
# CubeTwist is free software: you can redistribute it and/or modify it under the
# terms of the GNU Affero General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# CubeTwist is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU Affero General Public License for more
# details.
#
# You should have received a copy of the GNU Affero General Public License
# along with CubeTwist.  If not, see <https://www.gnu.org/licenses/>.

import random
import threading

import pytest

import cube as cube_mod
import puzzle
from cube import Cube, CubeEvent, InvalidArgument, InvalidConfiguration, four_cycle
from puzzle import CORNER, EDGE, SIDE, R, U, F, L, D, B
from util import perm_parity

def random_twists(cube, count, outer_only=False):
    n = cube.n
    for i in range(count):
        axis = random.randrange(3)
        if outer_only:
            mask = random.choice([1, 1 << (n - 1)])
        else:
            mask = random.randrange(1, 1 << n)
        cube.transform(axis, mask, random.choice([-2, -1, 1, 2]))

def test_four_cycle():
    loc = [0, 1, 2, 3, 4]
    orient = [0, 0, 0, 0, 2]
    four_cycle(loc, 0, 1, 2, 3, orient, 1, 2, 0, 0, 3)
    assert loc == [3, 0, 1, 2, 4]
    assert orient == [1, 2, 0, 0, 2]

def test_solved_on_creation():
    cube = Cube()
    assert cube.n == 3
    assert cube.is_solved()
    assert cube.corner_loc == list(range(8))
    assert cube.edge_orient == [0] * 12
    assert cube.side_loc == list(range(6))
    assert cube.get_unsolved_parts() == []

def test_kind_by_name():
    assert Cube('RevengeCube').layer_count == 4
    assert Cube(puzzle.CubeKind.POCKET).get_part_count() == 9
    with pytest.raises(ValueError):
        Cube('Pyraminx')

@pytest.mark.parametrize('args', [(3, 1, 1), (-1, 1, 1), (0, 8, 1), (0, -1, 1),
        (0, 1, 3), (0, 1, -3), (0, 1.0, 1), (0, 1, 'x')])
def test_transform_rejects_bad_arguments(args):
    cube = Cube()
    with pytest.raises(InvalidArgument):
        cube.transform(*args)
    assert cube.is_solved()

def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        Cube().transform(0, 1, 5)

def test_zero_angle_and_empty_mask_do_nothing():
    cube = Cube()
    events = []
    cube.add_listener(events.append)
    cube.transform(0, 7, 0)
    assert events == []
    cube.transform(1, 0, 1)
    assert cube.is_solved()

@pytest.mark.parametrize('n', range(2, 8))
def test_quarter_turn_has_order_four(n):
    cube = Cube(puzzle.kind_for_layers(n))
    solved = cube.get_state()
    for axis in range(3):
        for layer in range(n):
            for i in range(4):
                cube.transform(axis, 1 << layer, 1)
                assert (cube.get_state() == solved) == (i == 3)

@pytest.mark.parametrize('n', range(2, 8))
def test_inverse_twists(n):
    cube = Cube(puzzle.kind_for_layers(n))
    random_twists(cube, 20)
    state = cube.get_state()
    for [axis, mask] in [(0, 1), (1, 3), (2, cube.puzzle.all_layers)]:
        cube.transform(axis, mask, 1)
        cube.transform(axis, mask, -1)
        assert cube.get_state() == state
        cube.transform(axis, mask, 2)
        cube.transform(axis, mask, -2)
        assert cube.get_state() == state

def test_half_turn_is_two_quarter_turns():
    a = Cube('ProfessorCube')
    b = Cube('ProfessorCube')
    a.transform(1, 0b10011, 2)
    b.transform(1, 0b10011, 1)
    b.transform(1, 0b10011, 1)
    assert a == b

def test_sexy_move_order_six():
    cube = Cube()
    for i in range(6):
        assert i == 0 or not cube.is_solved()
        cube.transform(0, 4, 1)
        cube.transform(1, 4, 1)
        cube.transform(0, 4, -1)
        cube.transform(1, 4, -1)
    assert cube.is_solved()
    assert cube.get_state() == Cube().get_state()

def test_r_turn_stickers():
    cube = Cube()
    cube.transform(0, 4, 1)
    grid = cube.to_stickers()
    assert grid[R] == [R] * 9
    assert [grid[U][i] for i in (2, 5, 8)] == [F] * 3
    assert [grid[F][i] for i in (2, 5, 8)] == [D] * 3
    assert [grid[D][i] for i in (2, 5, 8)] == [B] * 3
    assert [grid[B][i] for i in (0, 3, 6)] == [U] * 3
    assert grid[L] == [L] * 9

def test_r_turn_parts():
    cube = Cube()
    cube.transform(0, 4, 1)
    # dfr goes up to urf, with its F sticker now facing up
    assert cube.get_part_at(0) == 1
    assert cube.get_part_location(1) == 0
    assert cube.get_corner_location(1) == 0
    assert cube.get_corner_at(0) == 1
    assert cube.get_part_orientation(1) == 1
    assert cube.get_part_face(1, 0) == F
    assert cube.get_part_face(1, 1) == U
    # The R center spins
    assert cube.get_side_orientation(R) == 3
    assert cube.get_part_type(20) == puzzle.PartType.SIDE
    assert cube.get_part_type(26) == puzzle.PartType.CENTER

def test_event():
    cube = Cube()
    events = []
    cube.add_listener(events.append)
    cube.transform(0, 4, 1)
    [event] = events
    assert isinstance(event, CubeEvent)
    assert event.is_twist()
    assert (event.axis, event.layer_mask, event.angle) == (0, 4, 1)
    # Four corners, four edges and the spinning center
    assert event.affected == [0, 1, 2, 3, 8, 9, 10, 12, 20]
    assert event.cube is cube

def test_listeners_called_in_reverse_order_after_mutation():
    cube = Cube()
    calls = []
    cube.add_listener(lambda e: calls.append(('first', cube.is_solved())))
    cube.add_listener(lambda e: calls.append(('second', cube.is_solved())))
    cube.transform(2, 4, 1)
    assert calls == [('second', False), ('first', False)]

def test_remove_listener():
    cube = Cube()
    events = []
    cube.add_listener(events.append)
    cube.remove_listener(events.append)
    cube.transform(2, 4, 1)
    assert events == []

def test_raising_listener_leaves_consistent_state():
    cube = Cube()
    def listener(event):
        raise RuntimeError('boom')
    cube.add_listener(listener)
    with pytest.raises(RuntimeError):
        cube.transform(0, 4, 1)
    reference = Cube()
    reference.transform(0, 4, 1)
    assert cube.get_state() == reference.get_state()
    cube.remove_listener(listener)
    cube.transform(0, 4, -1)
    assert cube.is_solved()

@pytest.mark.parametrize('n', range(2, 8))
def test_invariants_hold_after_random_twists(n):
    cube = Cube(puzzle.kind_for_layers(n))
    random_twists(cube, 60)
    [cl, co, el, eo, sl, so] = cube.get_state()
    assert sorted(cl) == list(range(8))
    assert sorted(el) == list(range(len(el)))
    assert sorted(sl) == list(range(len(sl)))
    assert sum(co) % 3 == 0
    assert sum(eo) % 2 == 0
    assert all(0 <= o < 4 for o in so)

def test_outer_twist_parity():
    cube = Cube()
    for i in range(30):
        random_twists(cube, 1, outer_only=True)
        assert perm_parity(cube.corner_loc) == perm_parity(cube.edge_loc)

def test_slice_twist_parity():
    cube = Cube()
    random_twists(cube, 50)
    assert (perm_parity(cube.corner_loc) ^ perm_parity(cube.edge_loc) ^
            perm_parity(cube.side_loc)) == 0

def test_reset():
    cube = Cube('RevengeCube')
    random_twists(cube, 10)
    events = []
    cube.add_listener(events.append)
    cube.reset()
    assert cube.get_state() == Cube('RevengeCube').get_state()
    [event] = events
    assert not event.is_twist()
    assert event.affected

def test_copy_and_equality():
    cube = Cube()
    random_twists(cube, 10)
    other = cube.copy()
    assert other == cube
    other.transform(0, 1, 1)
    assert other != cube
    assert Cube('PocketCube') != Cube()

def test_get_set_state():
    cube = Cube()
    random_twists(cube, 15)
    other = Cube()
    events = []
    other.add_listener(events.append)
    other.set_state(cube.get_state())
    assert other == cube
    assert len(events) == 1

def test_set_state_rejects_bad_states():
    cube = Cube()
    solved = [list(a) for a in cube.get_state()]
    bad = []
    # Wrong number of arrays
    bad.append(solved[:4])
    # Wrong length
    state = [list(a) for a in solved]
    state[0] = state[0][:7]
    bad.append(state)
    # Not a permutation
    state = [list(a) for a in solved]
    state[2][0] = 1
    bad.append(state)
    # Orientation out of range
    state = [list(a) for a in solved]
    state[5][0] = 4
    bad.append(state)
    # Twisted corner
    state = [list(a) for a in solved]
    state[1][0] = 1
    bad.append(state)
    # Flipped edge
    state = [list(a) for a in solved]
    state[3][0] = 1
    bad.append(state)
    # Two corners swapped
    state = [list(a) for a in solved]
    state[0][:2] = [1, 0]
    bad.append(state)
    for state in bad:
        with pytest.raises(InvalidConfiguration):
            cube.set_state(state)
        assert cube.is_solved()

def test_big_cube_allows_odd_corner_permutation():
    cube = Cube('RevengeCube')
    state = [list(a) for a in cube.get_state()]
    state[0][:2] = [1, 0]
    cube.set_state(state)
    assert cube.corner_loc[:2] == [1, 0]

def swapped(state, cls, a, b):
    state = [list(s) for s in state]
    loc = state[2 * cls]
    [loc[a], loc[b]] = [loc[b], loc[a]]
    return state

@pytest.mark.parametrize('n', [3, 5, 7])
def test_odd_cube_rejects_swapped_middle_edges(n):
    cube = Cube(puzzle.kind_for_layers(n))
    middle = cube.puzzle.middle_edges
    state = swapped(cube.get_state(), EDGE, middle[0], middle[6])
    with pytest.raises(InvalidConfiguration, match='parity'):
        cube.set_state(state)
    assert cube.is_solved()
    # Swapping two corners as well makes it reachable again
    state = swapped(state, CORNER, 0, 1)
    cube.set_state(state)
    assert cube.edge_loc[middle[0]] == middle[6]

def test_odd_cube_rejects_centers_out_of_place():
    cube = Cube('ProfessorCube')
    p = cube.puzzle
    other = min(set(range(p.side_count)) - set(p.center_sides))
    state = swapped(cube.get_state(), SIDE, p.center_sides[U], other)
    with pytest.raises(InvalidConfiguration, match='orbit'):
        cube.set_state(state)
    assert cube.get_state() == Cube('ProfessorCube').get_state()

@pytest.mark.parametrize('n', [3, 5, 7])
def test_odd_cube_parity_after_random_twists(n):
    cube = Cube(puzzle.kind_for_layers(n))
    p = cube.puzzle
    for i in range(10):
        random_twists(cube, 30)
        assert (perm_parity(cube.corner_loc) ^
                perm_parity(cube_mod.orbit_perm(cube.edge_loc, p.middle_edges)) ^
                perm_parity(cube_mod.orbit_perm(cube.side_loc, p.center_sides))) == 0
        other = Cube(cube.kind)
        other.set_state(cube.get_state())
        assert other == cube

def test_cube_orientation():
    cube = Cube()
    assert cube.get_cube_orientation() == 0
    # x: the D center comes to the front
    cube.transform(0, 7, 1)
    assert cube.get_cube_orientation() == 1
    assert cube.get_center_side(D) == F
    assert cube.is_solved()
    assert cube.get_unsolved_parts()
    seen = set()
    cube.reset()
    for axis_moves in range(4):
        for y in range(4):
            seen.add(cube.get_cube_orientation())
            cube.transform(1, 7, 1)
        cube.transform(0, 7, 1)
    cube.transform(2, 7, 1)
    for y in range(4):
        seen.add(cube.get_cube_orientation())
        cube.transform(1, 7, 1)
    cube.transform(2, 7, 2)
    for y in range(4):
        seen.add(cube.get_cube_orientation())
        cube.transform(1, 7, 1)
    assert seen == set(range(24))

def test_even_cube_has_no_orientation():
    cube = Cube('RevengeCube')
    assert cube.get_cube_orientation() == -1
    assert cube.get_center_side(U) == U
    assert cube.get_part_orientation(cube.get_part_count() - 1) == -1

def test_split_index():
    cube = Cube()
    assert cube.split_index(0) == (CORNER, 0)
    assert cube.split_index(8) == (EDGE, 0)
    assert cube.split_index(25) == (SIDE, 5)
    assert cube.split_index(26) == (puzzle.CENTER, 0)
    assert cube.join_index(SIDE, 5) == 25
    with pytest.raises(InvalidArgument):
        cube.split_index(27)
    with pytest.raises(InvalidArgument):
        cube.split_index(-1)

@pytest.mark.parametrize('call', [
    lambda cube: cube.get_part_at(-1),
    lambda cube: cube.get_part_location(-1),
    lambda cube: cube.get_part_orientation(-8),
    lambda cube: cube.get_corner_at(-1),
    lambda cube: cube.get_corner_at(8),
    lambda cube: cube.get_edge_at(-1),
    lambda cube: cube.get_edge_at(12),
    lambda cube: cube.get_side_at(6),
    lambda cube: cube.get_corner_location(-1),
    lambda cube: cube.get_edge_location(12),
])
def test_accessors_reject_bad_indexes(call):
    with pytest.raises(InvalidArgument):
        call(Cube())

def test_concurrent_twists(debug_output):
    cube = Cube('ProfessorCube')
    def worker(seed):
        rng = random.Random(seed)
        for i in range(50):
            cube.transform(rng.randrange(3), rng.randrange(32), rng.choice([-1, 1, 2]))
    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sum(cube.corner_orient) % 3 == 0
    assert sum(cube.edge_orient) % 2 == 0
    assert sorted(cube.side_loc) == list(range(cube.puzzle.side_count))
