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

import threading

import puzzle
import swipe
from puzzle import CORNER, EDGE, SIDE, CENTER, MODULUS
from util import *

class InvalidArgument(ValueError):
    pass

class InvalidConfiguration(ValueError):
    pass

# The basic permutation operator: the part at s3 moves to s0, s0 to s1, s1 to
# s2, s2 to s3. The orientation travels with the part, and then the delta of
# each destination slot is added to it.
def four_cycle(loc, s0, s1, s2, s3, orient, d0, d1, d2, d3, modulus):
    [loc[s0], loc[s1], loc[s2], loc[s3]] = [loc[s3], loc[s0], loc[s1], loc[s2]]
    [orient[s0], orient[s1], orient[s2], orient[s3]] = [
            (orient[s3] + d0) % modulus, (orient[s0] + d1) % modulus,
            (orient[s1] + d2) % modulus, (orient[s2] + d3) % modulus]

# Number of primitive applications for each signed angle. There's no inverse
# primitive, a counterclockwise quarter turn is three clockwise ones.
ANGLE_REPEAT = {1: 1, 2: 2, -2: 2, -1: 3}

# The parts found at the given locations, numbered by their home's position in
# that same list. Parts from elsewhere can never get there.
def orbit_perm(loc, locations):
    index = {l: i for [i, l] in enumerate(locations)}
    perm = [index.get(loc[l]) for l in locations]
    if None in perm:
        raise InvalidConfiguration('part outside of its orbit')
    return perm

# Change notification. For twists this has the twist parameters, for resets
# and state replacements axis is None. affected lists the locations (in the
# combined corner/edge/side numbering) whose part or orientation changed.
class CubeEvent:
    def __init__(self, cube, axis=None, layer_mask=0, angle=0, affected=()):
        self.cube = cube
        self.axis = axis
        self.layer_mask = layer_mask
        self.angle = angle
        self.affected = list(affected)

    def is_twist(self):
        return self.axis is not None

    def __repr__(self):
        return 'CubeEvent(axis=%s, layer_mask=%s, angle=%s, affected=%s)' % (
                self.axis, self.layer_mask, self.angle, self.affected)

class Cube:
    def __init__(self, kind=puzzle.CubeKind.RUBIK):
        if isinstance(kind, str):
            kind = puzzle.kind_by_name(kind)
        self.kind = puzzle.CubeKind(kind)
        self.n = puzzle.kind_layer_count(self.kind)
        self.puzzle = puzzle.get_puzzle(self.n)
        # One lock for the whole state. Reentrant, so listeners can read the
        # cube while they're being notified.
        self.lock = threading.RLock()
        self.listeners = []
        self.init_state()

    def init_state(self):
        self.locs = [list(range(c)) for c in self.puzzle.counts]
        self.orients = [[0] * c for c in self.puzzle.counts]

    @property
    def layer_count(self):
        return self.n

    @property
    def corner_loc(self):
        return self.locs[CORNER]

    @property
    def corner_orient(self):
        return self.orients[CORNER]

    @property
    def edge_loc(self):
        return self.locs[EDGE]

    @property
    def edge_orient(self):
        return self.orients[EDGE]

    @property
    def side_loc(self):
        return self.locs[SIDE]

    @property
    def side_orient(self):
        return self.orients[SIDE]

    ############################################################################
    ## Observers ###############################################################
    ############################################################################

    def add_listener(self, fn):
        with self.lock:
            self.listeners.append(fn)

    def remove_listener(self, fn):
        with self.lock:
            self.listeners.remove(fn)

    # Listeners are called last registered first, after all the state changes
    # are done
    def fire(self, event):
        for fn in reversed(list(self.listeners)):
            fn(event)

    ############################################################################
    ## Twisting ################################################################
    ############################################################################

    def transform(self, axis, layer_mask, angle):
        with self.lock:
            if axis not in (0, 1, 2):
                raise InvalidArgument('axis must be 0, 1 or 2: %r' % (axis,))
            if not isinstance(layer_mask, int) or not 0 <= layer_mask <= self.puzzle.all_layers:
                raise InvalidArgument('layer mask out of range for %s layers: %r' %
                        (self.n, layer_mask))
            if not isinstance(angle, int) or not -2 <= angle <= 2:
                raise InvalidArgument('angle must be in -2..2: %r' % (angle,))
            if angle == 0:
                return

            before = self.get_state()
            repeat = ANGLE_REPEAT[angle]
            for layer in range(self.n):
                if layer_mask >> layer & 1:
                    primitive = self.puzzle.primitives[axis][layer]
                    for i in range(repeat):
                        self.apply_primitive(primitive)

            affected = self.changed_locations(before)
            debug('transform %s %s %s: %s', puzzle.AXIS_STR[axis], layer_mask,
                    angle, affected)
            self.fire(CubeEvent(self, axis, layer_mask, angle, affected))

    def apply_primitive(self, primitive):
        for [cls, cycles] in enumerate(primitive.cycles):
            loc = self.locs[cls]
            orient = self.orients[cls]
            modulus = MODULUS[cls]
            for [slots, deltas] in cycles:
                four_cycle(loc, *slots, orient, *deltas, modulus)
        orient = self.orients[SIDE]
        for [s, delta] in primitive.spins:
            orient[s] = (orient[s] + delta) % 4

    # Combined location numbers that differ from a previous get_state() result
    def changed_locations(self, before):
        result = []
        base = 0
        for cls in range(3):
            [old_loc, old_orient] = before[2*cls:2*cls+2]
            for [i, [a, b, c, d]] in enumerate(zip(old_loc, old_orient,
                    self.locs[cls], self.orients[cls])):
                if a != c or b != d:
                    result.append(base + i)
            base += self.puzzle.counts[cls]
        return result

    def reset(self):
        with self.lock:
            before = self.get_state()
            self.init_state()
            self.fire(CubeEvent(self, affected=self.changed_locations(before)))

    ############################################################################
    ## Whole state access ######################################################
    ############################################################################

    # Snapshot of the state as (corner_loc, corner_orient, edge_loc,
    # edge_orient, side_loc, side_orient) tuples
    def get_state(self):
        with self.lock:
            return tuple(tuple(a) for cls in range(3)
                    for a in [self.locs[cls], self.orients[cls]])

    # Replace the whole state at once. The arrays are checked for the
    # invariants every reachable state has, and nothing changes if they fail.
    def set_state(self, state):
        state = [list(a) for a in state]
        if len(state) != 6:
            raise InvalidConfiguration('expected 6 arrays, got %s' % len(state))
        locs = state[0::2]
        orients = state[1::2]
        for cls in range(3):
            name = puzzle.PartType(cls).name.lower()
            count = self.puzzle.counts[cls]
            if len(locs[cls]) != count or len(orients[cls]) != count:
                raise InvalidConfiguration('expected %s %s parts' % (count, name))
            if not is_perm(locs[cls]):
                raise InvalidConfiguration('%s locations are not a permutation' % name)
            if any(not 0 <= o < MODULUS[cls] for o in orients[cls]):
                raise InvalidConfiguration('%s orientation out of range' % name)
        self.check_invariants(locs, orients)

        with self.lock:
            before = self.get_state()
            self.locs = locs
            self.orients = orients
            self.fire(CubeEvent(self, affected=self.changed_locations(before)))

    def check_invariants(self, locs, orients):
        if sum(orients[CORNER]) % 3:
            raise InvalidConfiguration('corner orientations do not add up')
        if sum(orients[EDGE]) % 2:
            raise InvalidConfiguration('edge orientations do not add up')
        # On odd cubes the corners, the middle edge ring and the face centers
        # are tied together: every twist permutes them as a whole evenly. The
        # other rings and side groups move independently.
        if self.puzzle.has_center:
            p = self.puzzle
            parity = (perm_parity(locs[CORNER]) ^
                    perm_parity(orbit_perm(locs[EDGE], p.middle_edges)) ^
                    perm_parity(orbit_perm(locs[SIDE], p.center_sides)))
            if parity:
                raise InvalidConfiguration('permutation parity mismatch')

    def copy(self):
        with self.lock:
            cube = Cube(self.kind)
            cube.locs = [list(l) for l in self.locs]
            cube.orients = [list(o) for o in self.orients]
        return cube

    def __eq__(self, other):
        if not isinstance(other, Cube):
            return NotImplemented
        return self.n == other.n and self.get_state() == other.get_state()

    def __repr__(self):
        return 'Cube(%s)' % puzzle.kind_id(self.kind)

    def is_solved(self):
        return all(len(set(face)) == 1 for face in self.to_stickers())

    # Parts that are not in their home location and orientation
    def get_unsolved_parts(self):
        with self.lock:
            result = []
            base = 0
            for cls in range(3):
                for [i, [l, o]] in enumerate(zip(self.locs[cls], self.orients[cls])):
                    if l != i or o != 0:
                        result.append(base + l)
                base += self.puzzle.counts[cls]
            return sorted(result)

    ############################################################################
    ## Part accessors ##########################################################
    ############################################################################

    # Parts and locations share one numbering: corners first, then edges,
    # sides, and the center part last
    def split_index(self, index):
        if index < 0:
            raise InvalidArgument('part index out of range')
        for cls in range(3):
            count = self.puzzle.counts[cls]
            if index < count:
                return (cls, index)
            index -= count
        if index == 0:
            return (CENTER, 0)
        raise InvalidArgument('part index out of range')

    def join_index(self, cls, index):
        return sum(self.puzzle.counts[:cls]) + index

    def get_part_count(self):
        return self.puzzle.part_count

    def get_part_type(self, part):
        return puzzle.PartType(self.split_index(part)[0])

    def get_part_at(self, location):
        [cls, loc] = self.split_index(location)
        if cls == CENTER:
            return location
        with self.lock:
            return self.join_index(cls, self.locs[cls][loc])

    def get_part_location(self, part):
        [cls, p] = self.split_index(part)
        if cls == CENTER:
            return part
        return self.join_index(cls, self.class_location(cls, p))

    def check_class_index(self, cls, index):
        if not 0 <= index < self.puzzle.counts[cls]:
            raise InvalidArgument('%s index out of range: %s' %
                    (puzzle.PartType(cls).name.lower(), index))

    def class_location(self, cls, part):
        self.check_class_index(cls, part)
        with self.lock:
            return self.locs[cls].index(part)

    def class_at(self, cls, location):
        self.check_class_index(cls, location)
        with self.lock:
            return self.locs[cls][location]

    def get_part_orientation(self, part):
        [cls, p] = self.split_index(part)
        if cls == CENTER:
            return self.get_cube_orientation()
        with self.lock:
            return self.orients[cls][self.locs[cls].index(p)]

    def get_corner_location(self, corner):
        return self.class_location(CORNER, corner)

    def get_edge_location(self, edge):
        return self.class_location(EDGE, edge)

    def get_side_location(self, side):
        return self.class_location(SIDE, side)

    def get_corner_at(self, location):
        return self.class_at(CORNER, location)

    def get_edge_at(self, location):
        return self.class_at(EDGE, location)

    def get_side_at(self, location):
        return self.class_at(SIDE, location)

    def get_corner_orientation(self, corner):
        return self.get_part_orientation(corner)

    def get_edge_orientation(self, edge):
        return self.get_part_orientation(self.join_index(EDGE, edge))

    def get_side_orientation(self, side):
        return self.get_part_orientation(self.join_index(SIDE, side))

    # Face on which the given facelet of a part is currently seen
    def get_part_face(self, part, orientation):
        [cls, p] = self.split_index(part)
        if cls == CENTER:
            return self.get_center_side(orientation)
        with self.lock:
            loc = self.locs[cls].index(p)
            faces = self.puzzle.slot_faces[cls][loc]
            slot = (orientation - self.orients[cls][loc]) % len(faces)
            return faces[slot]

    # Orientation of the whole cube as a number 0..23, from the centers at the
    # F and R locations. Cubes without a center part have no orientation.
    def get_cube_orientation(self):
        if not self.puzzle.has_center:
            return -1
        with self.lock:
            sides = self.puzzle.center_sides
            key = tuple(self.puzzle.slot_faces[SIDE][self.locs[SIDE][sides[f]]][0]
                    for f in [puzzle.F, puzzle.R])
        return puzzle.CUBE_ORIENTATIONS.index(key)

    # Face on which the center of the given home face is now. Without a center
    # part, faces never move.
    def get_center_side(self, face):
        if not self.puzzle.has_center:
            return face
        sides = self.puzzle.center_sides
        loc = self.get_side_location(sides[face])
        return self.puzzle.slot_faces[SIDE][loc][0]

    ############################################################################
    ## Swipes ##################################################################
    ############################################################################

    def get_part_swipe_axis(self, part, orientation, direction):
        return swipe.swipe_axis(self, part, orientation, direction)

    def get_part_swipe_layer_mask(self, part, orientation, direction):
        return swipe.swipe_layer_mask(self, part, orientation, direction)

    def get_part_swipe_angle(self, part, orientation, direction):
        return swipe.swipe_angle(self, part, orientation, direction)

    def get_part_axis(self, part, orientation):
        return swipe.part_axis(self, part, orientation)

    def get_part_layer_mask(self, part, orientation):
        return swipe.part_layer_mask(self, part, orientation)

    def get_part_angle(self, part, orientation):
        return swipe.part_angle(self, part, orientation)

    ############################################################################
    ## Stickers ################################################################
    ############################################################################

    # Project the state onto a sticker grid: six faces in RUFLDB order, each
    # a row-major list of N*N face indices
    def to_stickers(self):
        n = self.n
        grid = [[None] * (n * n) for f in range(6)]
        with self.lock:
            for cls in range(3):
                for [loc, cells] in enumerate(self.puzzle.facelets[cls]):
                    colors = self.puzzle.part_colors(cls, self.locs[cls][loc],
                            self.orients[cls][loc])
                    for [[face, index], color] in zip(cells, colors):
                        grid[face][index] = color
        return grid

    # Inverse of to_stickers(). Every location's stickers are looked up in the
    # signature table for that location. Parts that look alike (centers of one
    # color on big cubes) are handed out in order, and side orientations,
    # which can't be seen, come out as the lowest possible value.
    def set_to_stickers(self, grid):
        n = self.n
        if len(grid) != 6 or any(len(face) != n * n for face in grid):
            raise InvalidConfiguration('sticker grid must be 6 faces of %s '
                    'stickers' % (n * n))
        locs = []
        orients = []
        for cls in range(3):
            used = set()
            loc_array = []
            orient_array = []
            poses = self.puzzle.poses[cls]
            for [loc, cells] in enumerate(self.puzzle.facelets[cls]):
                key = tuple(grid[face][index] for [face, index] in cells)
                candidates = poses[loc].get(key)
                if not candidates:
                    raise InvalidConfiguration('no %s matches stickers %s at '
                            'location %s' % (puzzle.PartType(cls).name.lower(),
                            key, loc))
                for [part, orient] in candidates:
                    if part not in used:
                        break
                else:
                    if cls == SIDE and loc in (self.puzzle.center_sides or ()):
                        raise InvalidConfiguration('duplicate center %s' % (key,))
                    raise InvalidConfiguration('%s %s appears more than once' %
                            (puzzle.PartType(cls).name.lower(), key))
                used.add(part)
                loc_array.append(part)
                orient_array.append(orient)
            locs.append(loc_array)
            orients.append(orient_array)

        self.check_invariants(locs, orients)
        self.set_state([a for cls in range(3) for a in [locs[cls], orients[cls]]])
