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
dialogs: Console, structure information and file dialogs
========================================================

The dock windows follow their UI state flags: closing a window clears
its flag and setting the flag shows the window.
"""

from qtpy.QtCore import Qt
from qtpy.QtWidgets import QDockWidget, QPlainTextEdit, QFileDialog

from ..logger import PlainTextLog, Log
from ..state import OPEN_NONE, OPEN_MOLECULE


class FlagDock(QDockWidget):
    '''Dock window shown while a UI state flag is true.'''

    def __init__(self, main_window, session, title, flag):
        QDockWidget.__init__(self, title, main_window)
        self.session = session
        self.flag = flag
        self.setObjectName(flag)
        main_window.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self)
        self.hide()

    def closeEvent(self, event):
        event.accept()
        setattr(self.session.ui_state, self.flag, False)


class ConsoleWindow(FlagDock, PlainTextLog):

    level_colors = {
        Log.LEVEL_INFO: None,
        Log.LEVEL_WARNING: 'darkorange',
        Log.LEVEL_ERROR: 'red',
        Log.LEVEL_BUG: 'red',
    }

    def __init__(self, main_window, session):
        FlagDock.__init__(self, main_window, session, 'Console', 'console_window')
        self.text = t = QPlainTextEdit(self)
        t.setReadOnly(True)
        self.setWidget(t)
        session.logger.add_log(self)

    def log(self, level, msg):
        color = self.level_colors.get(level)
        if level != Log.LEVEL_INFO:
            msg = "%s: %s" % (Log.LEVEL_DESCRIPTS[level], msg)
        if color is None:
            self.text.appendPlainText(msg.rstrip('\n'))
        else:
            import html
            self.text.appendHtml('<span style="color:%s">%s</span>'
                                 % (color, html.escape(msg.rstrip('\n')).replace('\n', '<br>')))
        if level >= Log.LEVEL_ERROR:
            self.session.ui_state.console_window = True
        return True


class StructureInfoWindow(FlagDock):

    def __init__(self, main_window, session):
        FlagDock.__init__(self, main_window, session, 'Structure information',
                          'structureinfo_window')
        self.text = t = QPlainTextEdit(self)
        t.setReadOnly(True)
        self.setWidget(t)
        session.triggers.add_handler('structure changed', self._structure_changed)
        self._structure_changed('structure changed', session.critic2.structure)

    def _structure_changed(self, trigger_name, structure):
        self.text.setPlainText('No structure loaded' if structure is None else structure.info())


molecule_file_filter = "Molecule files (*.xyz *.cri *.incritic *.lib);;All files (*)"
crystal_file_filter = "Crystal files (POSCAR* CONTCAR* *.vasp *.cri *.incritic *.lib);;All files (*)"

library_file_filter = "Library files (*.lib *.cri *.incritic);;All files (*)"


class Dialogs:
    '''Modal file and new structure dialogs.'''

    def __init__(self, main_window, session):
        self.main_window = main_window
        self.session = session
        self.directory = ''

    def open_structure(self, mode):
        ses = self.session
        ismol = (mode == OPEN_MOLECULE)
        title = 'Open molecule' if ismol else 'Open crystal'
        filt = molecule_file_filter if ismol else crystal_file_filter
        path, _ = QFileDialog.getOpenFileName(self.main_window, title, self.directory, filt)
        ses.ui_state.structureopen_window = OPEN_NONE
        if not path:
            return
        self._remember_directory(path)
        ses.main_menu.run_action(lambda: ses.main_menu.open_file(path, ismol))

    def new_structure(self):
        from qtpy.QtWidgets import QInputDialog
        ses = self.session
        kinds = ['Molecule', 'Crystal']
        kind, ok = QInputDialog.getItem(self.main_window, 'New structure',
                                        'Create an empty', kinds, 0, False)
        ses.ui_state.structurenew_window = False
        if not ok:
            return
        ismol = (kind == 'Molecule')
        ses.main_menu.run_action(lambda: ses.critic2.new_structure(ismol))

    def library_file(self, kind):
        '''Ask for the library file of a pending library request.'''
        mm = self.session.main_menu
        path, _ = QFileDialog.getOpenFileName(self.main_window, 'Choose %s library' % kind,
                                              self.directory, library_file_filter)
        if path:
            self._remember_directory(path)
        mm.library_file_chosen(path)

    def _remember_directory(self, path):
        import os.path
        self.directory = os.path.dirname(path)
