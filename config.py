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

# Local settings. Edit these in place; everything imports this module as
# `import config` and reads the values when it needs them.

# SQLAlchemy URL of the saved cube database
DB_PATH = 'sqlite:///cubetwist.db'

# Print table generation timings and twist traces
DEBUG = False

# Kind of cube the viewer and the command line tool start with
DEFAULT_KIND = 'RubiksCube'
