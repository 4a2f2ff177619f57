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
preferences: Key binding editor
===============================

Lists the bind actions with their keys.  Choosing "Change" for an action
waits for the next key press, or for view actions also a mouse click or
wheel turn in the structure view, and assigns it to the action.
"""

from qtpy.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QTableWidget,
                            QTableWidgetItem, QPushButton, QLabel)

from .dialogs import FlagDock
from ..keybinding import BIND_MAX, NOKEY, NOMOD, bind_names, bind_groups, bind_descriptions

group_names = ('Global', 'Structure view')


class KeyBindingEditor(FlagDock):

    def __init__(self, main_window, session):
        FlagDock.__init__(self, main_window, session, 'Key bindings', 'keybinding_window')
        self.capturing = None	# bind waiting for a key

        w = QWidget(self)
        layout = QVBoxLayout(w)
        self.table = t = QTableWidget(BIND_MAX, 4, w)
        t.setHorizontalHeaderLabels(['Action', 'Key', 'Context', ''])
        t.verticalHeader().hide()
        for b in range(BIND_MAX):
            item = QTableWidgetItem(bind_names[b])
            item.setToolTip(bind_descriptions[b])
            t.setItem(b, 0, item)
            t.setItem(b, 2, QTableWidgetItem(group_names[bind_groups[b]]))
            buttons = QWidget(t)
            bl = QHBoxLayout(buttons)
            bl.setContentsMargins(0, 0, 0, 0)
            change = QPushButton('Change', buttons)
            change.clicked.connect(lambda checked=False, b=b: self.start_capture(b))
            bl.addWidget(change)
            unbind = QPushButton('Unbind', buttons)
            unbind.clicked.connect(lambda checked=False, b=b: self.unbind(b))
            bl.addWidget(unbind)
            t.setCellWidget(b, 3, buttons)
        layout.addWidget(t)

        self.message = QLabel('', w)
        layout.addWidget(self.message)

        row = QHBoxLayout()
        defaults = QPushButton('Defaults', w)
        defaults.clicked.connect(self.set_defaults)
        row.addWidget(defaults)
        save = QPushButton('Save', w)
        save.clicked.connect(self.save)
        row.addWidget(save)
        row.addStretch(1)
        layout.addLayout(row)
        self.setWidget(w)

        self._handler = session.triggers.add_handler('bind changed', self._bind_changed)
        self.fill_keys()

    def fill_keys(self):
        kb = self.session.keybindings
        for b in range(BIND_MAX):
            self.table.setItem(b, 1, QTableWidgetItem(kb.bind_key_name(b)))

    def _bind_changed(self, trigger_name, data):
        self.fill_keys()

    def start_capture(self, bind):
        self.capturing = bind
        where = ' or use the mouse in the structure view' if bind_groups[bind] > 0 else ''
        self.message.setText('Press a key for "%s"%s.' % (bind_names[bind], where))

    def poll(self):
        '''Called each frame while waiting for a key.'''
        bind = self.capturing
        if bind is None:
            return
        kb = self.session.keybindings
        if kb.set_bind_from_user_input(bind_groups[bind]):
            key, mod = kb.captured
            self.capturing = None
            kb.set_bind(bind, key, mod)
            self.message.setText('%s: %s' % (bind_names[bind], kb.bind_key_name(bind)))

    def unbind(self, bind):
        self.capturing = None
        self.session.keybindings.set_bind(bind, NOKEY, NOMOD)
        self.message.setText('')

    def set_defaults(self):
        self.capturing = None
        self.session.keybindings.set_default_key_bindings()
        self.message.setText('')

    def save(self):
        ses = self.session
        ses.main_menu.run_action(lambda: ses.keybindings.save(ses.settings))
