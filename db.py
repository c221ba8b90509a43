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
import threading

import sqlalchemy as sa
from sqlalchemy import text, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.sqlite import JSON as JSON_
from sqlalchemy.ext.mutable import Mutable
from sqlalchemy.orm import (declarative_base, Session as DBSession,
        sessionmaker)

import cube as cube_mod
import puzzle

SESSION_MAKER = None

# Set up default naming convention for indices/constraints/etc. so migrations
# can rename them later
SQL_NAMING_CONVENTION = {
    'ix': 'ix_%(column_0_label)s',
    'uq': 'uq_%(table_name)s_%(column_0_name)s',
    'ck': 'ck_%(table_name)s_%(constraint_name)s',
    'fk': 'fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s',
    'pk': 'pk_%(table_name)s',
}
metadata = sa.MetaData(naming_convention=SQL_NAMING_CONVENTION)

Base = declarative_base(metadata=metadata)

# Track in-place changes to a JSON dict, so that editing one key of a saved
# state gets written back
class MutableJSON(Mutable, dict):
    @classmethod
    def coerce(cls, attr, value):
        if value is None or isinstance(value, MutableJSON):
            return value
        if isinstance(value, dict):
            return MutableJSON(value)
        raise ValueError('expected a dict, got %r' % (value,))

    def __setitem__(self, key, value):
        self.changed()
        dict.__setitem__(self, key, value)

    def __delitem__(self, key):
        self.changed()
        dict.__delitem__(self, key)

JSON = MutableJSON.as_mutable(JSON_)

# Base class of DB tables to add id/created_at/updated_at columns everywhere
now = text("datetime('now', 'localtime')")
class NiceBase:
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=now)
    updated_at = Column(DateTime, default=now, onupdate=now)

    def __init__(self, **kwargs):
        for [k, v] in kwargs.items():
            assert k in self.__table__.columns, k
            setattr(self, k, v)

class SavedCube(Base, NiceBase):
    __tablename__ = 'saved_cubes'
    name = Column(String(128), unique=True)
    # Kind id, like RubiksCube
    kind = Column(String(64))
    # Moves that were applied since the last reset, if known
    moves = Column(Text)
    # Sticker grid, as Cube.to_stickers() gives it
    stickers = Column(JSON_)
    # Full part arrays, keyed by the names of the Cube properties. Stickers
    # can't show the orientation of sides, this can.
    state = Column(JSON)
    notes = Column(Text)

class Settings(Base, NiceBase):
    __tablename__ = 'settings'
    current_kind = Column(String(64))

STATE_KEYS = ['corner_loc', 'corner_orient', 'edge_loc', 'edge_orient',
        'side_loc', 'side_orient']

# Subclass of DBSession with some convenience functions
class NiceSession(DBSession):
    def query_first(self, table, *args, **kwargs):
        return self.query(table).filter_by(*args, **kwargs).first()

    def query_all(self, table, *args, **kwargs):
        return self.query(table).filter_by(*args, **kwargs).all()

    # Insert a new row in this table with the given column values
    def insert(self, table, **kwargs):
        row = table(**kwargs)
        self.add(row)
        # Flushing gets the row an ID from the db
        self.flush()
        return row

    # Update an existing row that matches match_args if one exists, otherwise
    # insert a new one
    def upsert(self, table, match_args, **kwargs):
        for row in self.query_all(table, **match_args):
            for [k, v] in kwargs.items():
                setattr(row, k, v)
            return row
        else:
            return self.insert(table, **match_args, **kwargs)

    # Store a cube under the given name, replacing any cube already saved
    # with that name
    def save_cube(self, name, cube, moves=None, notes=None):
        state = dict(zip(STATE_KEYS, map(list, cube.get_state())))
        return self.upsert(SavedCube, {'name': name},
                kind=puzzle.kind_id(cube.kind), moves=moves,
                stickers=cube.to_stickers(), state=state, notes=notes)

    def load_cube(self, name):
        row = self.query_first(SavedCube, name=name)
        if row is None:
            return None
        return row_to_cube(row)

THREAD_LOCALS = threading.local()

@contextlib.contextmanager
def get_session():
    if getattr(THREAD_LOCALS, 'session', None):
        yield THREAD_LOCALS.session
    else:
        THREAD_LOCALS.session = session = SESSION_MAKER()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            THREAD_LOCALS.session = None

def init_db(db_url):
    global SESSION_MAKER
    engine = sa.create_engine(db_url)
    SESSION_MAKER = sessionmaker(autoflush=False, bind=engine,
            class_=NiceSession)
    Base.metadata.create_all(bind=engine)

# Rebuild a Cube from a saved row. The part arrays are used when present,
# otherwise the stickers.
def row_to_cube(row):
    cube = cube_mod.Cube(puzzle.kind_by_name(row.kind))
    if row.state:
        cube.set_state([row.state[k] for k in STATE_KEYS])
    elif row.stickers:
        cube.set_to_stickers(row.stickers)
    return cube
