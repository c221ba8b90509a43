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

import enum
import threading

import config
from util import *

################################################################################
## Cube kinds ##################################################################
################################################################################

CubeKind = enum.IntEnum('CubeKind', 'POCKET RUBIK REVENGE PROFESSOR VCUBE_6 '
        'VCUBE_7 BARREL DIAMOND CUBOCTAHEDRON CUBE_6 CUBE_7', start=0)

# Layer count, display name and alternative names of each kind. The first
# alternative name is the kind's id. Barrel, diamond and cuboctahedron are all
# 3x3 cubes in a different shape, so they share the 3x3 tables.
KIND_INFO = [
    [2, '2x2 Pocket Cube', ['PocketCube', 'Pocket', '2x2 Cube']],
    [3, "3x3 Rubik's Cube", ['RubiksCube', 'Rubik', '3x3 Cube', 'Cube']],
    [4, '4x4 Revenge Cube', ['RevengeCube', 'Revenge', '4x4 Cube']],
    [5, '5x5 Professor Cube', ['ProfessorCube', 'Professor', '5x5 Cube']],
    [6, '6x6 V-Cube', ['V-Cube 6', 'VCube6', '6x6 V-Cube']],
    [7, '7x7 V-Cube', ['V-Cube 7', 'VCube7', '7x7 V-Cube']],
    [3, "3x3 Rubik's Barrel", ['RubiksBarrel', 'Barrel', '3x3 Barrel']],
    [3, "3x3 Rubik's Diamond", ['RubiksDiamond', 'Diamond', '3x3 Diamond']],
    [3, "3x3 Rubik's Cuboctahedron", ['RubiksCuboctahedron', 'Cuboctahedron',
            'Octahedron', '3x3 Octahedron']],
    [6, '6x6 Cube', ['Cube 6', 'Cube6', '6x6 Cube']],
    [7, '7x7 Cube', ['Cube 7', 'Cube7', '7x7 Cube']],
]

KIND_MAP = {}
for [kind, [_, kind_str, alt_names]] in zip(CubeKind, KIND_INFO):
    for s in [kind_str, kind.name, *alt_names]:
        KIND_MAP[s] = kind

def kind_by_name(name):
    if name not in KIND_MAP:
        raise ValueError('unknown cube kind: %r' % name)
    return KIND_MAP[name]

def kind_layer_count(kind):
    return KIND_INFO[kind][0]

def kind_name(kind):
    return KIND_INFO[kind][1]

def kind_id(kind):
    return KIND_INFO[kind][2][0]

# First kind with the given layer count, for when only the size is known
def kind_for_layers(n):
    for kind in CubeKind:
        if KIND_INFO[kind][0] == n:
            return kind
    raise ValueError('no cube kind with %s layers' % n)

################################################################################
## Geometry ####################################################################
################################################################################

# Faces in the order used everywhere: sticker grids, part tables, etc.
[R, U, F, L, D, B] = range(6)
FACE_STR = 'RUFLDB'
AXIS_STR = 'xyz'

# Part classes. Each class has its own location/orientation arrays.
PartType = enum.IntEnum('PartType', 'CORNER EDGE SIDE CENTER', start=0)
[CORNER, EDGE, SIDE, CENTER] = PartType
# Number of distinct orientations for each class
MODULUS = [3, 2, 4]

# Coordinates are doubled integers centered on the core, so for an N-layer
# cube, layer i along an axis sits at 2*i - (N-1). Axis x points from L to R,
# y from D to U, z from B to F.
FACE_NORMAL = [(1, 0, 0), (0, 1, 0), (0, 0, 1), (-1, 0, 0), (0, -1, 0), (0, 0, -1)]

# Which way is up for each face in the unfolded net: U is seen with B on top,
# D with F on top, and the side faces with U on top. Right is up x normal.
FACE_UP = [(0, 1, 0), (0, 0, -1), (0, 1, 0), (0, 1, 0), (0, 0, 1), (0, 1, 0)]
FACE_RIGHT = [vec_cross_prod(u, n) for [u, n] in zip(FACE_UP, FACE_NORMAL)]

# Direction of a side part's mark when it has orientation 0. Orientation
# counts counterclockwise quarter turns of the mark, seen from outside.
SIDE_MARK = [(0, 0, -1), (-1, 0, 0), (0, -1, 0), (0, 1, 0), (0, 0, 1), (1, 0, 0)]

# Corner and edge locations, with their facelets in slot order
CORNER_FACES = [(U, R, F), (D, F, R), (U, B, R), (D, R, B),
        (U, L, B), (D, B, L), (U, F, L), (D, L, F)]
EDGE_FACES = [(U, R), (R, F), (D, R), (B, U), (R, B), (B, D),
        (U, L), (L, B), (D, L), (F, U), (L, F), (F, D)]
# Axis an edge runs along: the one not used by its two faces
EDGE_AXIS = [3 - a % 3 - b % 3 for [a, b] in EDGE_FACES]

# Orientation of the whole cube, identified by which center parts sit at the
# F and R locations. Index i is the orientation number.
CUBE_ORIENTATIONS = [(F, R), (D, R), (B, R), (U, R), (R, B), (B, L), (L, F),
        (F, U), (F, L), (F, D), (R, U), (U, L), (L, D), (R, F), (L, B), (R, D),
        (D, L), (L, U), (D, F), (D, B), (B, D), (B, U), (U, B), (U, F)]
assert len(set(CUBE_ORIENTATIONS)) == 24

def face_of(normal):
    return FACE_NORMAL.index(tuple(normal))

# Quarter turn of a vector, clockwise seen from the positive end of the axis
def rotate_vec(v, axis, n=1):
    [x, y, z] = v
    for i in range(n % 4):
        if axis == 0:
            [x, y, z] = [x, z, -y]
        elif axis == 1:
            [x, y, z] = [-z, y, x]
        else:
            [x, y, z] = [y, -x, z]
    return (x, y, z)

# Quarter turn of a vector lying in a face, counterclockwise seen from outside
def spin_vec(v, face, n=1):
    for i in range(n % 4):
        v = vec_cross_prod(FACE_NORMAL[face], v)
    return v

# The 24 rotations of the cube, as the images of the three unit vectors
def gen_rotations():
    identity = ((1, 0, 0), (0, 1, 0), (0, 0, 1))
    rotations = [identity]
    for rot in rotations:
        for axis in range(2):
            new = tuple(rotate_vec(v, axis) for v in rot)
            if new not in rotations:
                rotations.append(new)
    assert len(rotations) == 24
    return rotations

ROTATIONS = gen_rotations()

def apply_rotation(rot, v):
    return vec_add(*(vec_scale(r, c) for [r, c] in zip(rot, v)))

################################################################################
## Puzzle tables ###############################################################
################################################################################

# One elementary quarter turn of a single layer, clockwise seen from the
# positive end of the axis. For each part class, a list of four-cycles
# (slots, deltas): the part at slots[3] moves to slots[0], slots[0] to
# slots[1] and so on, then deltas[i] is added to the orientation at slots[i].
# Spins are side parts on the axis that only change orientation.
class Primitive:
    def __init__(self, axis, layer, cycles, spins):
        self.axis = axis
        self.layer = layer
        self.cycles = cycles
        self.spins = spins

    def locations(self):
        for [cls, cycles] in enumerate(self.cycles):
            for [slots, _] in cycles:
                for s in slots:
                    yield (cls, s)
        for [s, _] in self.spins:
            yield (SIDE, s)

    def __repr__(self):
        return 'Primitive(%s, %s)' % (AXIS_STR[self.axis], self.layer)

# Everything that is fixed for a given layer count: where every location is,
# which stickers it shows, the twist primitives and the decoding tables for
# sticker grids. Built once per layer count by get_puzzle().
class Puzzle:
    def __init__(self, n):
        assert 2 <= n <= 7, n
        self.n = n
        self.far = 1 << (n - 1)
        self.all_layers = (1 << n) - 1
        self.inner_layers = ((1 << (n - 2)) - 1) << 1
        self.has_center = n % 2 == 1

        # Per class: location positions, and the faces of each slot
        self.positions = [[], [], []]
        self.slot_faces = [[], [], []]
        self.gen_locations()

        self.counts = [len(p) for p in self.positions]
        [self.corner_count, self.edge_count, self.side_count] = self.counts
        self.part_count = sum(self.counts) + 1
        self.position_index = [{p: i for [i, p] in enumerate(positions)}
                for positions in self.positions]

        # Sticker translation: per class and location, the (face, index)
        # cell of each slot
        self.facelets = [[[(f, self.sticker_index(f, pos)) for f in faces]
                for [pos, faces] in zip(positions, slot_faces)]
                for [positions, slot_faces] in zip(self.positions, self.slot_faces)]
        # ...and the reverse: which (class, location, slot) shows each cell
        self.sticker_cells = {}
        for [cls, locations] in enumerate(self.facelets):
            for [loc, cells] in enumerate(locations):
                for [slot, cell] in enumerate(cells):
                    assert cell not in self.sticker_cells, cell
                    self.sticker_cells[cell] = (cls, loc, slot)
        assert len(self.sticker_cells) == 6 * n * n

        # For odd layer counts: the side location showing the middle of each
        # face, and the edge locations of the middle ring. Parts at these
        # locations always stay among them.
        self.center_sides = None
        self.middle_edges = None
        if self.has_center:
            self.center_sides = [self.position_index[SIDE][vec_scale(normal, n - 1)]
                    for normal in FACE_NORMAL]
            ring = (n - 3) // 2
            self.middle_edges = list(range(12 * ring, 12 * ring + 12))

        self.primitives = [[self.gen_primitive(axis, layer) for layer in range(n)]
                for axis in range(3)]
        self.poses = [self.gen_poses(cls) for cls in range(3)]

    def gen_locations(self):
        n = self.n
        m = n - 1
        for faces in CORNER_FACES:
            pos = vec_add(*(vec_scale(FACE_NORMAL[f], m) for f in faces))
            self.positions[CORNER].append(pos)
            self.slot_faces[CORNER].append(faces)

        # Edges come in rings of 12. Ring k holds the edge cubies at layer
        # k+1 along each edge's own axis.
        for ring in range(n - 2):
            for [faces, axis] in zip(EDGE_FACES, EDGE_AXIS):
                pos = list(vec_add(*(vec_scale(FACE_NORMAL[f], m) for f in faces)))
                pos[axis] = 2 * (ring + 1) - m
                self.positions[EDGE].append(tuple(pos))
                self.slot_faces[EDGE].append(faces)

        # Sides come in groups of 6, one per face. Group k is the k-th inner
        # cell of each face in row-major net order.
        for row in range(1, n - 1):
            for col in range(1, n - 1):
                for face in range(6):
                    pos = vec_add(vec_scale(FACE_NORMAL[face], m),
                            vec_scale(FACE_UP[face], m - 2 * row),
                            vec_scale(FACE_RIGHT[face], 2 * col - m))
                    self.positions[SIDE].append(pos)
                    self.slot_faces[SIDE].append((face,))

    def sticker_index(self, face, pos):
        m = self.n - 1
        row = (m - vec_dot_prod(pos, FACE_UP[face])) // 2
        col = (vec_dot_prod(pos, FACE_RIGHT[face]) + m) // 2
        return row * self.n + col

    # Layer holding a location along the given axis
    def layer_of(self, cls, loc, axis):
        return (self.positions[cls][loc][axis] + self.n - 1) // 2

    # Where a part goes under a quarter turn about the axis, and how much its
    # orientation changes
    def move_part(self, cls, loc, axis):
        pos = self.positions[cls][loc]
        dest = self.position_index[cls][rotate_vec(pos, axis)]
        if cls == SIDE:
            [face] = self.slot_faces[SIDE][loc]
            mark = rotate_vec(SIDE_MARK[face], axis)
            delta = self.side_orientation(dest, mark)
        else:
            deltas = set()
            for [slot, face] in enumerate(self.slot_faces[cls][loc]):
                new_face = face_of(rotate_vec(FACE_NORMAL[face], axis))
                new_slot = self.slot_faces[cls][dest].index(new_face)
                deltas.add((slot - new_slot) % MODULUS[cls])
            [delta] = deltas
        return (dest, delta)

    # Orientation of a side part at the given location whose mark points in
    # the given direction
    def side_orientation(self, loc, mark):
        [face] = self.slot_faces[SIDE][loc]
        for k in range(4):
            if spin_vec(SIDE_MARK[face], face, k) == tuple(mark):
                return k
        assert 0, (loc, mark)

    def gen_primitive(self, axis, layer):
        coord = 2 * layer - (self.n - 1)
        cycles = [[], [], []]
        spins = []
        for cls in range(3):
            moves = {}
            for [loc, pos] in enumerate(self.positions[cls]):
                if pos[axis] == coord:
                    moves[loc] = self.move_part(cls, loc, axis)
            seen = set()
            for loc in sorted(moves):
                if loc in seen:
                    continue
                [dest, delta] = moves[loc]
                if dest == loc:
                    assert cls == SIDE
                    spins.append((loc, delta))
                    seen.add(loc)
                    continue
                slots = [loc]
                while len(slots) < 4:
                    slots.append(moves[slots[-1]][0])
                assert moves[slots[3]][0] == loc, slots
                seen.update(slots)
                # Slot i receives the part from slot i-1
                deltas = tuple(moves[slots[i - 1]][1] for i in range(4))
                # A full turn brings every part back unchanged
                assert sum(deltas) % MODULUS[cls] == 0, (slots, deltas)
                cycles[cls].append((tuple(slots), deltas))
        return Primitive(axis, layer, cycles, spins)

    # Orientation a part has when a rigid rotation carries it from its home
    # location to dest
    def rotated_orientation(self, cls, part, dest, rot):
        if cls == SIDE:
            [face] = self.slot_faces[SIDE][part]
            return self.side_orientation(dest, apply_rotation(rot, SIDE_MARK[face]))
        face = self.slot_faces[cls][part][0]
        new_face = face_of(apply_rotation(rot, FACE_NORMAL[face]))
        # Slot s shows facelet (s + o), so facelet 0 sits in slot -o
        return -self.slot_faces[cls][dest].index(new_face) % MODULUS[cls]

    # Colors shown by a part in slot order, when it has the given orientation
    def part_colors(self, cls, part, orient):
        faces = self.slot_faces[cls][part]
        if cls == SIDE:
            return faces
        m = MODULUS[cls]
        return tuple(faces[(s + orient) % m] for s in range(m))

    # Signature tables for decoding sticker grids: for each location, the
    # colors that can be seen there, mapped to the (part, orientation) pairs
    # showing them. Only poses reachable by rigid rotations are listed.
    def gen_poses(self, cls):
        table = [{} for _ in self.positions[cls]]
        for [part, pos] in enumerate(self.positions[cls]):
            for rot in ROTATIONS:
                dest = self.position_index[cls].get(apply_rotation(rot, pos))
                if dest is None:
                    continue
                orient = self.rotated_orientation(cls, part, dest, rot)
                key = self.part_colors(cls, part, orient)
                entries = table[dest].setdefault(key, [])
                if (part, orient) not in entries:
                    entries.append((part, orient))
        for entries in table:
            for e in entries.values():
                e.sort(key=lambda po: (po[1], po[0]))
        return table

PUZZLES = {}
PUZZLE_LOCK = threading.Lock()

def get_puzzle(n):
    with PUZZLE_LOCK:
        if n not in PUZZLES:
            if config.DEBUG:
                with time_execution('gen tables %sx%s' % (n, n)):
                    PUZZLES[n] = Puzzle(n)
            else:
                PUZZLES[n] = Puzzle(n)
        return PUZZLES[n]
