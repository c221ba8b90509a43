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

import contextlib
import time

import config

# Debug output helpers

@contextlib.contextmanager
def time_execution(label):
    start = time.time()
    yield
    print('%s: %.3fs' % (label, time.time() - start))

def debug(fmt, *args):
    if config.DEBUG:
        print(fmt % args if args else fmt)

# List helpers

# Parity of a permutation given as a list, by counting the even-length cycles
def perm_parity(perm):
    seen = [False] * len(perm)
    parity = 0
    for i in range(len(perm)):
        if seen[i]:
            continue
        j = i
        length = 0
        while not seen[j]:
            seen[j] = True
            j = perm[j]
            length += 1
        parity ^= (length - 1) & 1
    return parity

def is_perm(l):
    return sorted(l) == list(range(len(l)))

# Vector helpers for the integer cube coordinates

def vec_cross_prod(v1, v2):
    [a, b, c] = v1
    [x, y, z] = v2
    return (b*z - c*y, c*x - a*z, a*y - b*x)

def vec_dot_prod(v1, v2):
    [a, b, c] = v1
    [x, y, z] = v2
    return a*x + b*y + c*z

def vec_scale(v, k):
    return tuple(k * c for c in v)

def vec_add(*vs):
    return tuple(sum(c) for c in zip(*vs))
