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
gui: Main critic2 user interface
================================

The :py:class:`UI` instance is session.ui.  A frame timer runs the key
bindings and redraws the structure view, so menu flags and bind events
are handled once per frame as in an immediate mode interface.
"""

from qtpy.QtCore import Qt, QEvent, QTimer
from qtpy.QtWidgets import QApplication, QMainWindow, QLabel

from ..logger import PlainTextLog
from ..inputstate import MOD_SHIFT, MOD_CONTROL, MOD_ALT, MOD_SUPER

FRAME_INTERVAL = 16	# milliseconds

_modifier_bits = (
    (Qt.KeyboardModifier.ShiftModifier, MOD_SHIFT),
    (Qt.KeyboardModifier.ControlModifier, MOD_CONTROL),
    (Qt.KeyboardModifier.AltModifier, MOD_ALT),
    (Qt.KeyboardModifier.MetaModifier, MOD_SUPER),
)

_buttons = {
    Qt.MouseButton.LeftButton: 'left',
    Qt.MouseButton.RightButton: 'right',
    Qt.MouseButton.MiddleButton: 'middle',
    Qt.MouseButton.BackButton: 'button3',
    Qt.MouseButton.ForwardButton: 'button4',
}


def qt_modifiers(qmods):
    '''Qt keyboard modifiers as a MOD_* mask.'''
    mod = 0
    for qbit, bit in _modifier_bits:
        if qmods & qbit:
            mod |= bit
    return mod


def button_name(qbutton):
    return _buttons.get(qbutton)


class UI(QApplication):
    """Main critic2 user interface, session.ui"""

    def __init__(self, session):
        self.is_gui = True
        self.already_quit = False
        self.session = session
        import sys
        QApplication.__init__(self, [sys.argv[0]])
        self.setApplicationName(session.app_name)
        self.redirect_qt_messages()

        self.main_window = mw = MainWindow(self, session)
        self.installEventFilter(self)
        self._frame_timer = t = QTimer()
        t.timeout.connect(self.frame)
        t.start(FRAME_INTERVAL)
        mw.show()

    def redirect_qt_messages(self):
        # redirect Qt log messages to our logger
        from ..logger import Log
        from qtpy.QtCore import QtMsgType, qInstallMessageHandler
        qt_to_log_level_map = {
            QtMsgType.QtDebugMsg: Log.LEVEL_INFO,
            QtMsgType.QtInfoMsg: Log.LEVEL_INFO,
            QtMsgType.QtWarningMsg: Log.LEVEL_WARNING,
            QtMsgType.QtCriticalMsg: Log.LEVEL_ERROR,
            QtMsgType.QtFatalMsg: Log.LEVEL_ERROR,
        }
        def qt_msg_handler(msg_type, msg_log_context, msg_string):
            log_level = qt_to_log_level_map.get(msg_type, Log.LEVEL_INFO)
            self.session.logger.method_map[log_level](msg_string)
        qInstallMessageHandler(qt_msg_handler)

    def eventFilter(self, obj, event):
        # Key events pass the filter once for the window and again for each
        # widget they propagate to, only record the first.
        from qtpy.QtGui import QWindow
        t = event.type()
        if t in (QEvent.Type.KeyPress, QEvent.Type.KeyRelease) and isinstance(obj, QWindow):
            inp = self.session.input
            mod = qt_modifiers(event.modifiers())
            if t == QEvent.Type.KeyPress:
                if not event.isAutoRepeat():
                    inp.key_press(event.key(), mod)
            elif not event.isAutoRepeat():
                inp.key_release(event.key(), mod)
        elif t == QEvent.Type.ApplicationDeactivate:
            self.session.input.release_all()
        return False

    def frame(self):
        '''Handle bind events and state changes, then redraw.'''
        ses = self.session
        mw = self.main_window
        kb = ses.keybindings
        view = mw.view
        try:
            editor = mw.keybinding_editor
            if editor is not None and editor.capturing is not None:
                editor.poll()
                ses.input.new_frame()
                return
            kb.set_bind_event_level(1 if view.underMouse() else 0)
            ses.process_frame(max(1, view.width()))
        except Exception:
            ses.logger.report_exception(preface = 'Error processing frame')
        if ses.ui_state.want_quit:
            self.quit()
            return
        if ses.camera.redraw_needed:
            ses.camera.redraw_needed = False
            view.update()

    def event_loop(self):
        if self.already_quit:
            return
        self.exec()
        self.session.logger.clear()

    def quit(self, confirm=True):
        if self.already_quit:
            return
        self.already_quit = True
        self._frame_timer.stop()
        ses = self.session
        ses.keybindings.save_if_changed(ses.settings)
        ses.logger.clear()
        self.closeAllWindows()
        QApplication.quit()

    def timer(self, millisec, callback, *args, **kw):
        t = QTimer()
        def cb(callback=callback, args=args, kw=kw):
            callback(*args, **kw)
        t.timeout.connect(cb)
        t.setSingleShot(True)
        t.start(int(millisec))
        return t


class MainWindow(QMainWindow, PlainTextLog):

    def __init__(self, ui, session):
        self.session = session
        QMainWindow.__init__(self)
        self.setWindowTitle("critic2")
        screen = ui.primaryScreen()
        if screen is not None:
            g = screen.availableGeometry()
            self.resize(int(g.width()*.67), int(g.height()*.67))

        from .view import StructureView
        self.view = StructureView(self, session)
        self.setCentralWidget(self.view)

        from .dialogs import ConsoleWindow, StructureInfoWindow, Dialogs
        self.console = ConsoleWindow(self, session)
        self.info_window = StructureInfoWindow(self, session)
        self.dialogs = Dialogs(self, session)
        self.keybinding_editor = None
        self._dialog_timer = None	# keeps the pending dialog timer alive

        self._build_status()
        from .menubar import MenuBar
        self.menu_bar = MenuBar(self, session)
        self.setMenuBar(self.menu_bar)

        session.triggers.add_handler('ui state changed', self._ui_state_changed)
        session.logger.add_log(self)

    def _build_status(self):
        sb = self.statusBar()
        self._status_label = QLabel(sb)
        sb.addWidget(self._status_label)
        self._status_label.setText("Welcome to critic2")

    def closeEvent(self, event):
        # the MainWindow close button has been clicked
        event.accept()
        self.session.ui.quit()

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event):
        paths = [url.toLocalFile() for url in event.mimeData().urls()]
        self.session.open_files(paths)

    def log(self, level, msg):
        # console window shows the messages
        return False

    def status(self, msg, color, secondary):
        if secondary:
            return False
        self._status_label.setText(msg)
        self._status_label.setStyleSheet("color: %s" % color)
        return True

    def _ui_state_changed(self, trigger_name, data):
        name, value = data
        if name == 'console_window':
            self.console.setVisible(bool(value))
        elif name == 'structureinfo_window':
            self.info_window.setVisible(bool(value))
        elif name == 'keybinding_window':
            self._show_keybinding_editor(bool(value))
        elif name == 'structureopen_window' and value:
            self._dialog_timer = self.session.ui.timer(0, self.dialogs.open_structure, value)
        elif name == 'structurenew_window' and value:
            self._dialog_timer = self.session.ui.timer(0, self.dialogs.new_structure)
        elif name in ('show_atoms', 'show_bonds', 'show_cell', 'show_cps'):
            self.view.update()

    def _show_keybinding_editor(self, show):
        ed = self.keybinding_editor
        if show and ed is None:
            from .preferences import KeyBindingEditor
            self.keybinding_editor = ed = KeyBindingEditor(self, self.session)
        if ed is not None:
            ed.setVisible(show)
