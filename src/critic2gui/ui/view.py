# vim: set expandtab shiftwidth=4 softtabstop=4:

# === UCSF ChimeraX Copyright ===
# Copyright 2022 Regents of the University of California. All rights reserved.
# This software is provided pursuant to the ChimeraX license agreement, which
# covers academic and commercial uses. For more information, see
# <http://www.rbvi.ucsf.edu/chimerax/docs/licensing.html>
#
# This file is part of the ChimeraX library. You can also redistribute and/or
# modify it under the GNU Lesser General Public License version 2.1 as
# published by the Free Software Foundation. For more details, see
# <https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html>
#
# This file is distributed WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. This notice
# must be embedded in or attached to all copies, including partial copies, of
# the software or any revisions or derivations thereof.
# === UCSF ChimeraX Copyright ===

"""
view: Structure view
====================

Draws the atoms, bonds, unit cell and critical points of the current
structure with QPainter, farthest first.  Mouse events are recorded in
the session input state and turned into camera motion by the key
bindings.
"""

from qtpy.QtCore import Qt, QPointF
from qtpy.QtGui import QPainter, QColor, QPen, QBrush
from qtpy.QtWidgets import QWidget

from .gui import qt_modifiers, button_name

element_colors = {
    'H': (255, 255, 255), 'C': (144, 144, 144), 'N': (48, 80, 248),
    'O': (255, 13, 13), 'F': (144, 224, 80), 'Na': (171, 92, 242),
    'Mg': (138, 255, 0), 'Al': (191, 166, 166), 'Si': (240, 200, 160),
    'P': (255, 128, 0), 'S': (255, 255, 48), 'Cl': (31, 240, 31),
    'K': (143, 64, 212), 'Ca': (61, 255, 0), 'Ti': (191, 194, 199),
    'Fe': (224, 102, 51), 'Ni': (80, 208, 80), 'Cu': (200, 128, 51),
    'Zn': (125, 128, 176), 'Br': (166, 41, 41), 'Ag': (192, 192, 192),
    'I': (148, 0, 148), 'Au': (255, 209, 35),
}
default_color = (255, 20, 147)

cp_colors = {-3: (110, 60, 20), -1: (30, 200, 30), 1: (220, 220, 20), 3: (60, 60, 230)}

background_color = (30, 30, 40)


class StructureView(QWidget):

    def __init__(self, parent, session):
        QWidget.__init__(self, parent)
        self.session = session
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(200, 200)
        session.triggers.add_handler('structure changed', lambda *args: self.update())

    def sizeHint(self):
        from qtpy.QtCore import QSize
        return QSize(800, 800)

    # Mouse input

    def _position(self, event):
        p = event.position()
        return (p.x(), p.y())

    def mousePressEvent(self, event):
        b = button_name(event.button())
        if b:
            self.session.input.mouse_press(b, self._position(event),
                                           qt_modifiers(event.modifiers()))

    def mouseDoubleClickEvent(self, event):
        b = button_name(event.button())
        if b:
            self.session.input.mouse_press(b, self._position(event),
                                           qt_modifiers(event.modifiers()), double=True)

    def mouseReleaseEvent(self, event):
        b = button_name(event.button())
        if b:
            self.session.input.mouse_release(b, self._position(event),
                                             qt_modifiers(event.modifiers()))

    def mouseMoveEvent(self, event):
        self.session.input.mouse_move(self._position(event))

    def wheelEvent(self, event):
        d = event.angleDelta().y()/120.0   # Usually one wheel click is delta of 120
        if d:
            self.session.input.scroll(d, qt_modifiers(event.modifiers()))

    # Drawing

    def paintEvent(self, event):
        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing)
            p.fillRect(self.rect(), QColor(*background_color))
            s = self.session.critic2.structure
            if s is not None:
                self.draw_structure(p, s)
        finally:
            p.end()

    def draw_structure(self, p, s):
        ui = self.session.ui_state
        cam = self.session.camera
        w, h = self.width(), self.height()
        psize = cam.pixel_size(w)

        if ui.show_cell and s.lattice is not None:
            p.setPen(QPen(QColor(220, 220, 220), 1.5))
            for a, b in s.cell_edges():
                (pa, pb), depth = cam.project((a, b), w, h)
                if (depth > 0).all():
                    p.drawLine(QPointF(*pa), QPointF(*pb))

        xy, depth = cam.project(s.coords, w, h) if s.num_atoms else (None, None)
        if ui.show_bonds and s.num_atoms:
            p.setPen(QPen(QColor(200, 200, 200), 3))
            for i, j in s.bonds():
                if depth[i] > 0 and depth[j] > 0:
                    p.drawLine(QPointF(*xy[i]), QPointF(*xy[j]))

        if ui.show_atoms and s.num_atoms:
            from ..structure import covalent_radii, DEFAULT_RADIUS
            cd = cam.distance
            p.setPen(QPen(QColor(0, 0, 0), 1))
            for i in depth.argsort()[::-1]:
                if depth[i] <= 0:
                    continue
                sym = s.symbols[i]
                r = 0.5*covalent_radii.get(sym, DEFAULT_RADIUS)/psize * cd/depth[i]
                p.setBrush(QBrush(QColor(*element_colors.get(sym, default_color))))
                p.drawEllipse(QPointF(*xy[i]), r, r)

        if ui.show_cps and s.critical_points:
            from numpy import array, dot
            pos = array([cp.position for cp in s.critical_points])
            if s.lattice is not None:
                pos = dot(pos, s.lattice)
            cxy, cdepth = cam.project(pos, w, h)
            p.setPen(QPen(QColor(0, 0, 0), 1))
            for cp, (x, y), d in zip(s.critical_points, cxy, cdepth):
                if d > 0:
                    p.setBrush(QBrush(QColor(*cp_colors[cp.signature])))
                    p.drawRect(int(x)-3, int(y)-3, 6, 6)
