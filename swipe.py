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

from puzzle import CORNER, EDGE, SIDE, CENTER, EDGE_AXIS, get_puzzle

# Swipe tables. A swipe is a drag in one of four directions on one facelet of
# a part. Each entry is (axis, layer mask, angle) of the resulting twist.
# Layer masks are written for a 3x3: 1 is the near layer, 4 the far layer and
# 2 the layer holding the part itself, and get mapped to the real layers of
# the cube at lookup time.

# Indexed by corner location, facelet slot (as in puzzle.CORNER_FACES) and
# swipe direction
CORNER_SWIPE_TABLE = [
    # urf: u, r, f
    [[(2, 4, 1), (0, 4, -1), (2, 4, -1), (0, 4, 1)],
     [(1, 4, 1), (2, 4, -1), (1, 4, -1), (2, 4, 1)],
     [(0, 4, -1), (1, 4, 1), (0, 4, 1), (1, 4, -1)]],
    # dfr: d, f, r
    [[(0, 4, 1), (2, 4, -1), (0, 4, -1), (2, 4, 1)],
     [(1, 1, -1), (0, 4, -1), (1, 1, 1), (0, 4, 1)],
     [(2, 4, -1), (1, 1, -1), (2, 4, 1), (1, 1, 1)]],
    # ubr: u, b, r
    [[(0, 4, 1), (2, 1, 1), (0, 4, -1), (2, 1, -1)],
     [(1, 4, 1), (0, 4, -1), (1, 4, -1), (0, 4, 1)],
     [(2, 1, 1), (1, 4, 1), (2, 1, -1), (1, 4, -1)]],
    # drb: d, r, b
    [[(2, 1, -1), (0, 4, -1), (2, 1, 1), (0, 4, 1)],
     [(1, 1, -1), (2, 1, 1), (1, 1, 1), (2, 1, -1)],
     [(0, 4, -1), (1, 1, -1), (0, 4, 1), (1, 1, 1)]],
    # ulb: u, l, b
    [[(2, 1, -1), (0, 1, 1), (2, 1, 1), (0, 1, -1)],
     [(1, 4, 1), (2, 1, 1), (1, 4, -1), (2, 1, -1)],
     [(0, 1, 1), (1, 4, 1), (0, 1, -1), (1, 4, -1)]],
    # dbl: d, b, l
    [[(0, 1, -1), (2, 1, 1), (0, 1, 1), (2, 1, -1)],
     [(1, 1, -1), (0, 1, 1), (1, 1, 1), (0, 1, -1)],
     [(2, 1, 1), (1, 1, -1), (2, 1, -1), (1, 1, 1)]],
    # ufl: u, f, l
    [[(0, 1, -1), (2, 4, -1), (0, 1, 1), (2, 4, 1)],
     [(1, 4, 1), (0, 1, 1), (1, 4, -1), (0, 1, -1)],
     [(2, 4, -1), (1, 4, 1), (2, 4, 1), (1, 4, -1)]],
    # dlf: d, l, f
    [[(2, 4, 1), (0, 1, 1), (2, 4, -1), (0, 1, -1)],
     [(1, 1, -1), (2, 4, -1), (1, 1, 1), (2, 4, 1)],
     [(0, 1, 1), (1, 1, -1), (0, 1, -1), (1, 1, 1)]],
]

# Indexed by edge location within its ring, facelet slot (as in
# puzzle.EDGE_FACES) and swipe direction
EDGE_SWIPE_TABLE = [
    # ur
    [[(2, 2, 1), (0, 4, -1), (2, 2, -1), (0, 4, 1)],
     [(2, 2, -1), (1, 4, -1), (2, 2, 1), (1, 4, 1)]],
    # rf
    [[(1, 2, 1), (2, 4, -1), (1, 2, -1), (2, 4, 1)],
     [(1, 2, -1), (0, 4, -1), (1, 2, 1), (0, 4, 1)]],
    # dr
    [[(2, 2, -1), (0, 4, -1), (2, 2, 1), (0, 4, 1)],
     [(2, 2, 1), (1, 1, 1), (2, 2, -1), (1, 1, -1)]],
    # bu
    [[(0, 2, -1), (1, 4, -1), (0, 2, 1), (1, 4, 1)],
     [(0, 2, 1), (2, 1, 1), (0, 2, -1), (2, 1, -1)]],
    # rb
    [[(1, 2, -1), (2, 1, 1), (1, 2, 1), (2, 1, -1)],
     [(1, 2, 1), (0, 4, -1), (1, 2, -1), (0, 4, 1)]],
    # bd
    [[(0, 2, 1), (1, 1, 1), (0, 2, -1), (1, 1, -1)],
     [(0, 2, -1), (2, 1, 1), (0, 2, 1), (2, 1, -1)]],
    # ul
    [[(2, 2, -1), (0, 1, 1), (2, 2, 1), (0, 1, -1)],
     [(2, 2, 1), (1, 4, -1), (2, 2, -1), (1, 4, 1)]],
    # lb
    [[(1, 2, 1), (2, 1, 1), (1, 2, -1), (2, 1, -1)],
     [(1, 2, -1), (0, 1, 1), (1, 2, 1), (0, 1, -1)]],
    # dl
    [[(2, 2, 1), (0, 1, 1), (2, 2, -1), (0, 1, -1)],
     [(2, 2, -1), (1, 1, 1), (2, 2, 1), (1, 1, -1)]],
    # fu
    [[(0, 2, 1), (1, 4, -1), (0, 2, -1), (1, 4, 1)],
     [(0, 2, -1), (2, 4, -1), (0, 2, 1), (2, 4, 1)]],
    # lf
    [[(1, 2, -1), (2, 4, -1), (1, 2, 1), (2, 4, 1)],
     [(1, 2, 1), (0, 1, 1), (1, 2, -1), (0, 1, -1)]],
    # fd
    [[(0, 2, -1), (1, 1, 1), (0, 2, 1), (1, 1, -1)],
     [(0, 2, 1), (2, 4, -1), (0, 2, -1), (2, 4, 1)]],
]

# Indexed by face and swipe direction, relative to the side's mark
SIDE_SWIPE_TABLE = [
    [(1, 2, -1), (2, 2, 1), (1, 2, 1), (2, 2, -1)],
    [(2, 2, -1), (0, 2, 1), (2, 2, 1), (0, 2, -1)],
    [(0, 2, -1), (1, 2, 1), (0, 2, 1), (1, 2, -1)],
    [(2, 2, 1), (1, 2, -1), (2, 2, -1), (1, 2, 1)],
    [(0, 2, 1), (2, 2, -1), (0, 2, -1), (2, 2, 1)],
    [(1, 2, 1), (0, 2, -1), (1, 2, -1), (0, 2, 1)],
]

# Angle of the slice twist when clicking an edge, by edge location within its
# ring and facelet slot
EDGE_ANGLE = [(1, -1), (1, -1), (-1, 1), (-1, 1), (-1, 1), (1, -1),
        (-1, 1), (1, -1), (1, -1), (1, -1), (-1, 1), (-1, 1)]

def table_mask(puzzle, mask):
    if mask == 4:
        return puzzle.far
    assert mask == 1, mask
    return mask

# Resolve a swipe on facelet <orientation> of <part> in <direction> to a
# (axis, layer mask, angle) twist. The tables are written for parts in their
# home orientation, so the facelet (or for sides, the direction) is first
# rebased by the part's current orientation.
def swipe_twist(cube, part, orientation, direction):
    if not 0 <= direction < 4:
        raise ValueError('swipe direction must be 0..3: %r' % (direction,))
    p = cube.puzzle
    [cls, index] = cube.split_index(part)
    if cls == CENTER:
        return (0, 0, 0)
    with cube.lock:
        loc = cube.locs[cls].index(index)
        o = cube.orients[cls][loc]

    if cls == CORNER:
        sori = (3 - o + orientation) % 3
        [axis, mask, angle] = CORNER_SWIPE_TABLE[loc][sori][direction]
        # A corner's facelets aren't mirror images of each other, so twisted
        # corners see some swipes reversed
        if o == 2 and sori in (0, 2):
            angle = -angle
        elif o == 1 and sori in (1, 2):
            angle = -angle
        return (axis, table_mask(p, mask), angle)

    elif cls == EDGE:
        sori = (2 - o + orientation) % 2
        [axis, mask, angle] = EDGE_SWIPE_TABLE[loc % 12][sori][direction]
        if mask == 2:
            mask = 1 << p.layer_of(EDGE, loc, axis)
        else:
            mask = table_mask(p, mask)
        return (axis, mask, angle)

    else:
        sori = (4 - o + direction) % 4
        [axis, _, angle] = SIDE_SWIPE_TABLE[loc % 6][sori]
        return (axis, 1 << p.layer_of(SIDE, loc, axis), angle)

def swipe_axis(cube, part, orientation, direction):
    return swipe_twist(cube, part, orientation, direction)[0]

def swipe_layer_mask(cube, part, orientation, direction):
    return swipe_twist(cube, part, orientation, direction)[1]

def swipe_angle(cube, part, orientation, direction):
    return swipe_twist(cube, part, orientation, direction)[2]

# Twist for a plain click on a facelet: corners and sides turn the face they
# were clicked on, edges turn the slice they sit in
def part_twist(cube, part, orientation):
    p = cube.puzzle
    [cls, index] = cube.split_index(part)
    if cls == CENTER:
        return (0, 0, 0)
    if cls == EDGE:
        with cube.lock:
            loc = cube.locs[EDGE].index(index)
            o = cube.orients[EDGE][loc]
        axis = EDGE_AXIS[loc % 12]
        return (axis, 1 << p.layer_of(EDGE, loc, axis),
                EDGE_ANGLE[loc % 12][(o + orientation) % 2])
    face = cube.get_part_face(part, orientation)
    if face < 3:
        return (face, p.far, 1)
    return (face - 3, 1, -1)

def part_axis(cube, part, orientation):
    return part_twist(cube, part, orientation)[0]

def part_layer_mask(cube, part, orientation):
    return part_twist(cube, part, orientation)[1]

def part_angle(cube, part, orientation):
    return part_twist(cube, part, orientation)[2]

# Gesture modifiers. These are applied on top of the table lookups by
# whatever handles the gesture.

# Double layer for swipes: add the neighboring layer toward the middle. A
# swipe on the middle layer of an odd cube takes all the inner layers.
def widen_swipe_mask(n, mask):
    if n % 2 == 1 and mask == 1 << (n // 2):
        mask = get_puzzle(n).inner_layers
    elif mask < n:
        mask |= mask << 1
    else:
        mask |= mask >> 1
    return mask & ((1 << n) - 1)

# Double layer for clicks: an outer layer takes its neighbor, anything else
# takes all the inner layers
def widen_click_mask(n, mask):
    if mask == 1 or mask == 1 << (n - 1):
        mask |= (mask << 1) | (mask >> 1)
        return mask & ((1 << n) - 1)
    return get_puzzle(n).inner_layers

def apply_modifiers(twist, widen, n, inverse=False, double_layer=False,
        double_angle=False):
    [axis, mask, angle] = twist
    if double_layer:
        mask = widen(n, mask)
    if double_angle:
        angle *= 2
    if inverse:
        angle = -angle
    return (axis, mask, angle)

def resolve_swipe(cube, part, orientation, direction, **modifiers):
    twist = swipe_twist(cube, part, orientation, direction)
    return apply_modifiers(twist, widen_swipe_mask, cube.n, **modifiers)

def resolve_click(cube, part, orientation, **modifiers):
    twist = part_twist(cube, part, orientation)
    return apply_modifiers(twist, widen_click_mask, cube.n, **modifiers)
