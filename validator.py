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

import puzzle
from puzzle import CORNER, EDGE, MODULUS
from util import *

# Result codes of validate(). The numbers are stable, other tools branch on
# them.
Status = enum.IntEnum('Status', 'VALID INVALID_MARKER INVALID_FACELET_COUNT '
        'DUPLICATE_CENTER_MARKING INVALID_CORNER_MARKINGS INVALID_CORNER_PARITY '
        'INVALID_EDGE_MARKINGS INVALID_EDGE_PARITY INVALID_TOTAL_PARITY', start=0)

STATUS_MESSAGES = {
    Status.VALID: 'cube is solvable',
    Status.INVALID_MARKER: 'a facelet has a marker that no center has',
    Status.INVALID_FACELET_COUNT: 'a marker does not appear exactly 9 times',
    Status.DUPLICATE_CENTER_MARKING: 'two centers have the same marker',
    Status.INVALID_CORNER_MARKINGS: 'a corner has an impossible combination of '
        'markers, or appears twice',
    Status.INVALID_CORNER_PARITY: 'a corner is twisted',
    Status.INVALID_EDGE_MARKINGS: 'an edge has an impossible combination of '
        'markers, or appears twice',
    Status.INVALID_EDGE_PARITY: 'an edge is flipped',
    Status.INVALID_TOTAL_PARITY: 'two pieces are swapped',
}

def explain(status):
    return STATUS_MESSAGES[Status(status)]

# Read the parts at each location of one class from a grid of face numbers.
# Returns (locations, orientations), or None if some location shows a
# combination no part has, or a part shows up twice.
def read_parts(p, cls, faces):
    locs = []
    orients = []
    for [loc, cells] in enumerate(p.facelets[cls]):
        key = tuple(faces[f][i] for [f, i] in cells)
        match = p.poses[cls][loc].get(key)
        if not match:
            return None
        [[part, orient]] = match
        if part in locs:
            return None
        locs.append(part)
        orients.append(orient)
    return (locs, orients)

# Check whether a 3x3 sticker grid can be reached from a solved cube. The grid
# is six faces of nine markers each, in the same layout as Cube.to_stickers().
# Markers can be anything comparable: the marker on each center decides which
# face it stands for, so a cube in any whole-cube orientation is fine.
#
# Returns (status, state). state is None unless the status is VALID, in which
# case it's a tuple that Cube.set_state() accepts.
def validate(grid):
    p = puzzle.get_puzzle(3)
    if len(grid) != 6 or any(len(face) != 9 for face in grid):
        raise ValueError('only 3x3 sticker grids can be validated')

    centers = [face[4] for face in grid]
    if len(set(centers)) != 6:
        return (Status.DUPLICATE_CENTER_MARKING, None)
    face_of_marker = {m: f for [f, m] in enumerate(centers)}

    if any(m not in face_of_marker for face in grid for m in face):
        return (Status.INVALID_MARKER, None)
    faces = [[face_of_marker[m] for m in face] for face in grid]
    counts = [0] * 6
    for face in faces:
        for f in face:
            counts[f] += 1
    if any(c != 9 for c in counts):
        return (Status.INVALID_FACELET_COUNT, None)

    corners = read_parts(p, CORNER, faces)
    if corners is None:
        return (Status.INVALID_CORNER_MARKINGS, None)
    [corner_loc, corner_orient] = corners
    if sum(corner_orient) % MODULUS[CORNER]:
        return (Status.INVALID_CORNER_PARITY, None)

    edges = read_parts(p, EDGE, faces)
    if edges is None:
        return (Status.INVALID_EDGE_MARKINGS, None)
    [edge_loc, edge_orient] = edges
    if sum(edge_orient) % MODULUS[EDGE]:
        return (Status.INVALID_EDGE_PARITY, None)

    if perm_parity(corner_loc) != perm_parity(edge_loc):
        return (Status.INVALID_TOTAL_PARITY, None)

    debug('validated: corners %s edges %s', corner_loc, edge_loc)
    side_loc = tuple(range(p.side_count))
    return (Status.VALID, (tuple(corner_loc), tuple(corner_orient),
            tuple(edge_loc), tuple(edge_orient), side_loc, (0,) * p.side_count))
