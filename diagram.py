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

from puzzle import R, U, F, L, D, B

# Sticker colors by face, RUFLDB. Anything else shows up gray.
SVG_COLORS = ['#d00', '#fff', '#0b0', '#f92', '#ff0', '#00f']
UNKNOWN_COLOR = '#777'

# Position of each face in the unfolded net, in units of one face width:
#       U
#     L F R B
#       D
NET_OFFSETS = {U: (1, 0), L: (0, 1), F: (1, 1), R: (2, 1), B: (3, 1), D: (1, 2)}

# Render a flat net of a cube as SVG. Takes either a Cube or a sticker grid
# like Cube.to_stickers() returns, in which case the layer count comes from
# the grid size unless given.
def gen_cube_diagram(cube, n=None, use_svg_tag=True):
    if hasattr(cube, 'to_stickers'):
        n = cube.n
        grid = cube.to_stickers()
    else:
        grid = cube
        if n is None:
            n = round(len(grid[0]) ** .5)
    assert len(grid) == 6 and all(len(face) == n * n for face in grid), n

    def gen_face(face):
        [fx, fy] = NET_OFFSETS[face]
        for [i, c] in enumerate(grid[face]):
            [y, x] = divmod(i, n)
            color = SVG_COLORS[c] if c in range(6) else UNKNOWN_COLOR
            yield f'''<rect x="{fx * n + x}" y="{fy * n + y}" width="1" height="1"
                fill="{color}" stroke="black" stroke-width=".08" />'''

    stickers = [s for face in range(6) for s in gen_face(face)]
    diagram = ' '.join(stickers)
    if use_svg_tag:
        diagram = (f"<svg xmlns='http://www.w3.org/2000/svg' "
                f"viewBox='-.1 -.1 {4 * n + .2} {3 * n + .2}'>{diagram}</svg>")
    return diagram
