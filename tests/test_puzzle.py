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

import pytest

import puzzle
from puzzle import CORNER, EDGE, SIDE, MODULUS, R, U, F, L, D, B

@pytest.mark.parametrize('n', range(2, 8))
def test_part_counts(n):
    p = puzzle.get_puzzle(n)
    assert p.counts == [8, 12 * (n - 2), 6 * (n - 2) ** 2]
    assert p.part_count == sum(p.counts) + 1
    assert p.has_center == (n % 2 == 1)
    assert len(p.sticker_cells) == 6 * n * n

def test_puzzles_are_cached():
    assert puzzle.get_puzzle(4) is puzzle.get_puzzle(4)

def test_kinds():
    assert puzzle.kind_by_name('Rubik') == puzzle.CubeKind.RUBIK
    assert puzzle.kind_by_name("3x3 Rubik's Cube") == puzzle.CubeKind.RUBIK
    assert puzzle.kind_by_name('REVENGE') == puzzle.CubeKind.REVENGE
    assert puzzle.kind_layer_count(puzzle.CubeKind.BARREL) == 3
    assert puzzle.kind_layer_count(puzzle.CubeKind.CUBE_7) == 7
    assert puzzle.kind_id(puzzle.CubeKind.POCKET) == 'PocketCube'
    assert puzzle.kind_for_layers(4) == puzzle.CubeKind.REVENGE
    with pytest.raises(ValueError):
        puzzle.kind_by_name('Megaminx')
    with pytest.raises(ValueError):
        puzzle.kind_for_layers(9)

def test_rotations():
    assert len(set(puzzle.ROTATIONS)) == 24
    for axis in range(3):
        v = (1, 2, 3)
        assert puzzle.rotate_vec(v, axis, 4) == v
        assert puzzle.rotate_vec(puzzle.rotate_vec(v, axis), axis, 3) == v

def test_net_layout_3x3():
    p = puzzle.get_puzzle(3)
    # urf corner: U in the bottom right of U, R top left, F top right
    assert p.facelets[CORNER][0] == [(U, 8), (R, 0), (F, 2)]
    assert p.facelets[EDGE][0] == [(U, 5), (R, 1)]
    assert p.facelets[SIDE] == [[(f, 4)] for f in range(6)]
    assert p.center_sides == list(range(6))

@pytest.mark.parametrize('n', range(2, 8))
def test_primitive_structure(n):
    p = puzzle.get_puzzle(n)
    for axis in range(3):
        for layer in range(n):
            prim = p.primitives[axis][layer]
            outer = layer in (0, n - 1)
            assert len(prim.cycles[CORNER]) == (1 if outer else 0)
            assert len(prim.cycles[EDGE]) == ((n - 2) if outer else 1) * (n > 2)
            for [cls, cycles] in enumerate(prim.cycles):
                for [slots, deltas] in cycles:
                    assert len(set(slots)) == 4
                    assert sum(deltas) % MODULUS[cls] == 0
                    for s in slots:
                        assert p.layer_of(cls, s, axis) == layer
            # Only the middle sides of odd cubes spin in place
            if outer and n % 2 == 1:
                assert prim.spins == [(p.center_sides[axis if layer else axis + 3], 3 if layer else 1)]
            else:
                assert prim.spins == []
            locs = list(prim.locations())
            assert len(locs) == len(set(locs))

def test_r_primitive_3x3():
    p = puzzle.get_puzzle(3)
    prim = p.primitives[0][2]
    [[slots, deltas]] = prim.cycles[CORNER]
    assert set(slots) == {0, 1, 2, 3}
    [[slots, deltas]] = prim.cycles[EDGE]
    assert set(slots) == {0, 1, 2, 4}
    assert prim.cycles[SIDE] == []
    assert prim.spins == [(R, 3)]

def test_middle_slice_3x3():
    p = puzzle.get_puzzle(3)
    prim = p.primitives[0][1]
    assert prim.cycles[CORNER] == []
    [[slots, deltas]] = prim.cycles[SIDE]
    assert set(slots) == {U, F, D, B}
    assert prim.spins == []

def test_poses_cover_all_orientations():
    p = puzzle.get_puzzle(3)
    for loc in range(8):
        entries = [e for es in p.poses[CORNER][loc].values() for e in es]
        assert sorted(entries) == [(part, o) for part in range(8) for o in range(3)]
    for loc in range(12):
        entries = [e for es in p.poses[EDGE][loc].values() for e in es]
        assert sorted(entries) == [(part, o) for part in range(12) for o in range(2)]
