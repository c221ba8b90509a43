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

import argparse
import json
import sys

import config
import cube as cube_mod
import db
import diagram
import notation
import puzzle
import validator

# Sticker grids on the command line are strings of face letters, one face
# after another in RUFLDB order, each face row by row
def grid_to_str(grid):
    return ''.join(puzzle.FACE_STR[c] for face in grid for c in face)

def str_to_faces(s):
    size = len(s) // 6
    if len(s) != 6 * size or size == 0:
        raise ValueError('facelet string must have 6 equal faces: %r' % s)
    return [list(s[i:i + size]) for i in range(0, len(s), size)]

def print_grid(grid, n):
    for [face, stickers] in zip(puzzle.FACE_STR, grid):
        rows = [''.join(puzzle.FACE_STR[c] for c in stickers[i:i + n])
                for i in range(0, n * n, n)]
        print('%s: %s' % (face, ' '.join(rows)))

def cmd_apply(args):
    cube = cube_mod.Cube(args.kind)
    notation.run_alg(cube, ' '.join(args.moves))
    grid = cube.to_stickers()
    if args.svg:
        with open(args.svg, 'w') as f:
            f.write(diagram.gen_cube_diagram(cube))
    if args.json:
        print(json.dumps({'kind': puzzle.kind_id(cube.kind), 'stickers': grid,
                'solved': cube.is_solved()}))
    else:
        print_grid(grid, cube.n)
        print(grid_to_str(grid))
    return 0

def cmd_validate(args):
    [status, state] = validator.validate(str_to_faces(args.facelets))
    print('%s: %s' % (status.name, validator.explain(status)))
    return int(status)

def cmd_scramble(args):
    n = puzzle.kind_layer_count(puzzle.kind_by_name(args.kind))
    for i in range(args.count):
        print(' '.join(notation.gen_random_move_scramble(n, args.length)))
    return 0

def cmd_save(args):
    cube = cube_mod.Cube(args.kind)
    moves = ' '.join(args.moves)
    notation.run_alg(cube, moves)
    db.init_db(args.db)
    with db.get_session() as session:
        session.save_cube(args.name, cube, moves=moves, notes=args.notes)
    print('saved %s' % args.name)
    return 0

def cmd_list(args):
    db.init_db(args.db)
    with db.get_session() as session:
        for saved in session.query_all(db.SavedCube):
            cube = db.row_to_cube(saved)
            print('%-20s %-16s %-8s %s' % (saved.name, saved.kind,
                    'solved' if cube.is_solved() else '', saved.moves or ''))
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(description='Twist and check cubes from '
            'the command line')
    parser.add_argument('-k', '--kind', default=config.DEFAULT_KIND,
            help='cube kind, e.g. RubiksCube, RevengeCube, "2x2 Cube"')
    parser.add_argument('--db', default=config.DB_PATH,
            help='SQLAlchemy URL of the database for save/list')
    commands = parser.add_subparsers(dest='command', required=True)

    p = commands.add_parser('apply', help='apply moves to a solved cube and '
            'print the stickers')
    p.add_argument('moves', nargs='*', help="moves, e.g. R U R' U'")
    p.add_argument('--svg', help='also write a diagram to this file')
    p.add_argument('--json', action='store_true', help='print JSON')
    p.set_defaults(fn=cmd_apply)

    p = commands.add_parser('validate', help='check whether a 3x3 facelet '
            'string can be solved')
    p.add_argument('facelets', help='54 markers, 9 per face in RUFLDB order')
    p.set_defaults(fn=cmd_validate)

    p = commands.add_parser('scramble', help='print random move scrambles')
    p.add_argument('-c', '--count', type=int, default=1)
    p.add_argument('-l', '--length', type=int, default=None)
    p.set_defaults(fn=cmd_scramble)

    p = commands.add_parser('save', help='apply moves and save the result')
    p.add_argument('name')
    p.add_argument('moves', nargs='*')
    p.add_argument('--notes')
    p.set_defaults(fn=cmd_save)

    p = commands.add_parser('list', help='list saved cubes')
    p.set_defaults(fn=cmd_list)

    args = parser.parse_args(argv)
    try:
        return args.fn(args)
    except ValueError as e:
        print('error: %s' % e, file=sys.stderr)
        return 2

if __name__ == '__main__':
    sys.exit(main())
