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
import re

from puzzle import F, L, D, FACE_STR, AXIS_STR

# Move notation. A move is parsed to an (axis, layer mask, angle) triple for
# Cube.transform(). Supported:
#   R U F L D B      outer layer of a face
#   2R               second layer from R only
#   Rw r 3Rw 3r      the given number of layers from R (two by default)
#   2-3Rw            layers 2 through 3 from R
#   M E S            all inner layers, turning like L, D and F
#   x y z            whole cube rotations, turning like R, U and F
# followed by nothing, ' (counterclockwise), 2 or 2' (half turn), or 3 (same
# as ').

MOVE_RE = re.compile(r"^(?:(\d+)(?:-(\d+))?)?([RUFLDBrufldbMESxyz])(w?)(2'|2|3|')?$")

TURN_STR = {-1: "'", 1: '', 2: '2', -2: '2', 3: "'"}
INV_TURN_STR = {"'": -1, '': 1, '2': 2, "2'": 2, '3': -1}

# Axis and direction of each face. Faces on the positive end of their axis
# turn with the axis, the others against it.
FACE_AXIS = [0, 1, 2, 0, 1, 2]
FACE_SIGN = [1, 1, 1, -1, -1, -1]

SLICE_STR = 'MES'
# The face each slice follows
SLICE_FACE = [L, D, F]

def face_layers(n, face, first, last):
    if not 1 <= first <= last <= n:
        raise ValueError('layers %s-%s out of range for %s layers' % (first,
                last, n))
    mask = 0
    for depth in range(first, last + 1):
        if FACE_SIGN[face] > 0:
            mask |= 1 << (n - depth)
        else:
            mask |= 1 << (depth - 1)
    return mask

def split_move(move):
    m = MOVE_RE.match(move)
    if not m:
        raise ValueError('bad move: %r' % move)
    return m.groups()

def parse_move(move, n=3):
    [first, last, letter, wide, suffix] = split_move(move)
    turn = INV_TURN_STR[suffix or '']

    if letter in AXIS_STR:
        if first or wide:
            raise ValueError('bad rotation: %r' % move)
        axis = AXIS_STR.index(letter)
        mask = (1 << n) - 1
        sign = 1
    elif letter in SLICE_STR:
        if first or wide:
            raise ValueError('bad slice move: %r' % move)
        if n < 3:
            raise ValueError('no slice moves on a %sx%s cube' % (n, n))
        face = SLICE_FACE[SLICE_STR.index(letter)]
        axis = FACE_AXIS[face]
        mask = ((1 << (n - 2)) - 1) << 1
        sign = FACE_SIGN[face]
    else:
        face = FACE_STR.index(letter.upper())
        axis = FACE_AXIS[face]
        sign = FACE_SIGN[face]
        if last:
            [first, last] = [int(first), int(last)]
        elif wide or letter.islower():
            [first, last] = [1, int(first or 2)]
        else:
            first = last = int(first or 1)
        mask = face_layers(n, face, first, last)

    angle = 2 if abs(turn) == 2 else turn * sign
    return (axis, mask, angle)

def parse_alg(alg, n=3):
    if isinstance(alg, list):
        alg = ' '.join(alg)
    return [parse_move(move, n) for move in alg.split()]

# Runs of consecutive set bits in a layer mask, as (low, high) bit pairs
def mask_runs(mask):
    runs = []
    bit = 0
    while mask >> bit:
        if mask >> bit & 1:
            low = bit
            while mask >> (bit + 1) & 1:
                bit += 1
            runs.append((low, bit))
        bit += 1
    return runs

def format_run(n, axis, low, high, angle):
    # Name the layers from whichever face is closer
    if low <= n - 1 - high:
        face = axis + 3
        [first, last] = [low + 1, high + 1]
    else:
        face = axis
        [first, last] = [n - high, n - low]
    s = FACE_STR[face]
    if first == last:
        s = s if first == 1 else '%s%s' % (first, s)
    elif first == 1:
        s = s + 'w' if last == 2 else '%s%sw' % (last, s)
    else:
        s = '%s-%s%sw' % (first, last, s)
    return s + TURN_STR[angle * FACE_SIGN[face]]

# Inverse of parse_move(). Masks with more than one run of layers come out as
# several moves separated by spaces.
def format_move(axis, mask, angle, n=3):
    if not mask or not angle:
        return ''
    if mask == (1 << n) - 1:
        return AXIS_STR[axis] + TURN_STR[angle]
    if n >= 3 and mask == ((1 << (n - 2)) - 1) << 1:
        face = SLICE_FACE[axis]
        return SLICE_STR[axis] + TURN_STR[angle * FACE_SIGN[face]]
    return ' '.join(format_run(n, axis, low, high, angle)
            for [low, high] in mask_runs(mask))

def format_alg(moves, n=3):
    return ' '.join(filter(None, (format_move(*m, n=n) for m in moves)))

def invert_alg(alg):
    if isinstance(alg, list):
        alg = ' '.join(alg)
    moves = []
    for move in reversed(alg.split()):
        suffix = split_move(move)[4] or ''
        turn = INV_TURN_STR[suffix]
        base = move[:len(move) - len(suffix)]
        moves.append(base + TURN_STR[-turn])
    return ' '.join(moves)

# Apply an alg to a cube, returning the parsed moves
def run_alg(cube, alg):
    moves = parse_alg(alg, cube.n)
    for move in moves:
        cube.transform(*move)
    return moves

SCRAMBLE_LENGTH = {2: 11, 3: 24, 4: 40, 5: 60, 6: 80, 7: 100}

def gen_random_move_scramble(n=3, length=None):
    if length is None:
        length = SCRAMBLE_LENGTH[n]
    scramble = []
    all_faces = set(range(6))
    blocked_faces = set()
    turns = [-1, 1, 2]
    for i in range(length):
        face = random.choice(list(all_faces - blocked_faces))
        # Only allow one turn of each of an opposing pair of faces in a row.
        # E.g. F B' is allowed, F B' F is not
        if (face + 3) % 6 not in blocked_faces:
            blocked_faces = set()
        blocked_faces.add(face)

        # Big cubes also get wide turns, up to half the cube
        depth = random.randint(1, max(1, n // 2))
        mask = face_layers(n, face, 1, depth)
        turn = random.choice(turns)
        scramble.append(format_move(FACE_AXIS[face], mask,
                turn * FACE_SIGN[face], n))
    return scramble
