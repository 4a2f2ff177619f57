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
menubar: Qt rendering of the main menu
======================================

Menus are refilled from the :py:class:`~critic2gui.menu.MainMenu`
description each time they are about to be shown, so labels, enabled
state, check marks and library lists are always current.  Tooltips are
shown after the tooltip delay setting.
"""

from qtpy.QtCore import QTimer
from qtpy.QtGui import QAction, QCursor
from qtpy.QtWidgets import QMenuBar, QToolTip

from ..menu import Separator, SubMenu


class MenuBar(QMenuBar):

    def __init__(self, main_window, session):
        QMenuBar.__init__(self, main_window)
        self.main_window = main_window
        self.session = session

        self._tip_timer = t = QTimer(self)
        t.setSingleShot(True)
        t.timeout.connect(self._show_tooltip)
        self._tip_action = None
        self._dialog_timer = None

        for menu in session.main_menu.menus():
            qmenu = self.addMenu(menu.label)
            self._setup_menu(qmenu, menu)
            # fill now so keyboard navigation and tests see the entries
            self._fill_menu(qmenu, menu)

    def _setup_menu(self, qmenu, menu):
        qmenu.setToolTipsVisible(False)
        qmenu.aboutToShow.connect(lambda m=qmenu, d=menu: self._fill_menu(m, d))
        qmenu.aboutToHide.connect(self._hide_tooltip)
        qmenu.hovered.connect(self._hovered)

    def _fill_menu(self, qmenu, menu):
        qmenu.clear()
        for entry in menu.entries:
            if isinstance(entry, Separator):
                qmenu.addSeparator()
            elif isinstance(entry, SubMenu):
                sub = qmenu.addMenu(_escape(entry.label))
                sub.setEnabled(entry.enabled)
                sub.menuAction().setData(entry.tooltip)
                self._setup_menu(sub, entry)
            else:
                text = _escape(entry.label)
                shortcut = entry.shortcut
                if shortcut:
                    # text after the tab is only displayed, it does not bind the key
                    text += '\t' + shortcut
                a = QAction(text, qmenu)
                a.setEnabled(entry.enabled)
                if entry.checkable:
                    a.setCheckable(True)
                    a.setChecked(entry.checked)
                a.setData(entry.tooltip)
                a.triggered.connect(lambda checked=False, e=entry: self.activate(e))
                qmenu.addAction(a)

    def activate(self, entry):
        mm = self.session.main_menu
        mm.activate(entry)
        kind = mm.pending_library_request
        if kind is not None:
            self._dialog_timer = self.session.ui.timer(
                0, self.main_window.dialogs.library_file, kind)

    def _hovered(self, action):
        self._tip_timer.stop()
        QToolTip.hideText()
        self._tip_action = action
        if action.data():
            delay = self.session.settings.tooltip_delay
            self._tip_timer.start(int(1000*max(0.0, delay)))

    def _show_tooltip(self):
        a = self._tip_action
        if a is None:
            return
        try:
            tip = a.data()
        except RuntimeError:
            # menu was refilled and the action deleted
            self._tip_action = None
            return
        if tip:
            QToolTip.showText(QCursor.pos(), tip)

    def _hide_tooltip(self):
        self._tip_timer.stop()
        self._tip_action = None
        QToolTip.hideText()


def _escape(label):
    return label.replace('&', '&&')
