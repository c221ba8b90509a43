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
import sys

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (QApplication, QMainWindow, QWidget, QLabel,
        QLineEdit, QPushButton, QComboBox, QHBoxLayout, QVBoxLayout,
        QInputDialog, QMessageBox)
from PyQt5.QtSvg import QSvgWidget

import config
import cube as cube_mod
import db
import diagram
import notation
import puzzle

WINDOW_SIZE = [900, 760]

# UI helpers

def make_button(text, fn):
    button = QPushButton(text)
    button.clicked.connect(fn)
    return button

def make_hbox(parent, children):
    layout = QHBoxLayout(parent)
    for c in children:
        layout.addWidget(c)
    return layout

def make_vbox(parent, children, margin=None):
    layout = QVBoxLayout(parent)
    if margin is not None:
        layout.setContentsMargins(margin, margin, margin, margin)
    for c in children:
        layout.addWidget(c)
    return layout

@contextlib.contextmanager
def block_signals(obj):
    obj.blockSignals(True)
    yield
    obj.blockSignals(False)

def make_dropdown(items, change=None):
    combo = QComboBox()
    for t in items:
        combo.addItem(t)
    if change:
        combo.currentIndexChanged.connect(change)
    return combo

# Main window: a net of the current cube, a line to type moves into, and some
# buttons
class CubeWindow(QMainWindow):
    # Cube events can come from any thread, so they get passed through a
    # signal to update the view in the Qt thread
    cube_changed = pyqtSignal([object])

    def __init__(self):
        super().__init__()
        self.cube = None
        self.history = []

        # Initialize DB and get the last used kind
        db.init_db(config.DB_PATH)
        with db.get_session() as session:
            settings = session.upsert(db.Settings, {})
            if not settings.current_kind:
                settings.current_kind = config.DEFAULT_KIND
            kind = puzzle.kind_by_name(settings.current_kind)

        self.svg = QSvgWidget()
        self.svg.setMinimumSize(400, 300)

        self.kind_box = make_dropdown([puzzle.kind_name(k) for k in
                puzzle.CubeKind])
        self.move_entry = QLineEdit()
        self.move_entry.setPlaceholderText("Moves, e.g. R U R' U'")
        self.move_entry.returnPressed.connect(self.apply_moves)
        self.status = QLabel()
        self.status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status.setStyleSheet('font: 18px; padding: 4px;')

        buttons = QWidget()
        make_hbox(buttons, [self.kind_box,
                make_button('Reset', self.reset),
                make_button('Scramble', self.scramble),
                make_button('Undo', self.undo),
                make_button('Save', self.save),
                make_button('Load', self.load)])

        main = QWidget()
        make_vbox(main, [buttons, self.svg, self.move_entry, self.status])
        self.setCentralWidget(main)

        self.cube_changed.connect(self.update_view, type=Qt.QueuedConnection)

        with block_signals(self.kind_box):
            self.kind_box.setCurrentIndex(int(kind))
        self.kind_box.currentIndexChanged.connect(self.change_kind)
        self.change_kind(int(kind))

        self.setWindowTitle('CubeTwist')
        self.resize(*WINDOW_SIZE)

    def set_cube(self, cube):
        if self.cube is not None:
            self.cube.remove_listener(self.cube_event)
        self.cube = cube
        self.cube.add_listener(self.cube_event)
        self.history = []
        self.update_view()

    def cube_event(self, event):
        self.cube_changed.emit(event)

    def change_kind(self, index):
        kind = puzzle.CubeKind(index)
        with db.get_session() as session:
            settings = session.upsert(db.Settings, {})
            settings.current_kind = puzzle.kind_id(kind)
        self.set_cube(cube_mod.Cube(kind))

    def update_view(self, event=None):
        svg = diagram.gen_cube_diagram(self.cube)
        self.svg.load(svg.encode('ascii'))
        if self.cube.is_solved():
            self.status.setText('Solved')
        else:
            self.status.setText(' '.join(self.history[-20:]))
        self.update()

    def run_moves(self, moves):
        try:
            notation.run_alg(self.cube, moves)
        except ValueError as e:
            QMessageBox.warning(self, 'Bad moves', str(e))
            return False
        self.history.extend(moves.split())
        return True

    def apply_moves(self):
        if self.run_moves(self.move_entry.text()):
            self.move_entry.clear()

    def reset(self):
        self.cube.reset()
        self.history = []
        self.update_view()

    def scramble(self):
        self.reset()
        self.run_moves(' '.join(notation.gen_random_move_scramble(self.cube.n)))

    def undo(self):
        if not self.history:
            return
        move = self.history.pop()
        notation.run_alg(self.cube, notation.invert_alg(move))
        self.update_view()

    def save(self):
        [name, ok] = QInputDialog.getText(self, 'Save cube', 'Name:')
        if not ok or not name:
            return
        with db.get_session() as session:
            session.save_cube(name, self.cube, moves=' '.join(self.history))

    def load(self):
        with db.get_session() as session:
            names = [c.name for c in session.query_all(db.SavedCube)]
        if not names:
            QMessageBox.information(self, 'Load cube', 'No saved cubes')
            return
        [name, ok] = QInputDialog.getItem(self, 'Load cube', 'Name:', names,
                editable=False)
        if not ok:
            return
        with db.get_session() as session:
            cube = session.load_cube(name)
        with block_signals(self.kind_box):
            self.kind_box.setCurrentIndex(int(cube.kind))
        self.set_cube(cube)

if __name__ == '__main__':
    app = QApplication(sys.argv)
    app.setApplicationName('CubeTwist')
    window = CubeWindow()
    window.show()
    sys.exit(app.exec_())
