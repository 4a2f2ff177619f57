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
session: Application state
==========================

The :py:class:`Session` ties together the logger, triggers, settings,
shared UI flags, key bindings, the critic2 backend and the menu bar.
The window toolkit sets session.ui and calls :py:meth:`Session.process_frame`
once per frame.
"""


class Session:
    """
    Attributes
    ----------
    logger : :py:class:`~critic2gui.logger.Logger`
    triggers : :py:class:`~critic2gui.triggerset.TriggerSet`
    settings : :py:class:`~critic2gui.settings.GuiSettings`
    ui_state : :py:class:`~critic2gui.state.UIState`
    camera : :py:class:`~critic2gui.camera.Camera`
    input : :py:class:`~critic2gui.inputstate.InputState`
    keybindings : :py:class:`~critic2gui.keybinding.KeyBindings`
    critic2 : :py:class:`~critic2gui.critic2.Critic2`
    file_history : :py:class:`~critic2gui.filehistory.FileHistory`
    main_menu : :py:class:`~critic2gui.menu.MainMenu`
    ui : the graphical interface, None without one
    """

    def __init__(self, app_name, *, app_dirs=None, debug=False, silent=False, preview=False):
        self.app_name = app_name
        self.app_dirs = app_dirs
        self.debug = debug
        self.silent = silent
        self.ui = None
        from . import logger
        self.logger = logger.Logger(self)
        from . import triggerset
        self.triggers = triggerset.TriggerSet()
        self.triggers.add_trigger('frame')
        triggerset.set_exception_reporter(
            lambda preface: self.logger.report_exception(preface = preface))

        from .settings import GuiSettings
        self.settings = GuiSettings(self, 'gui')
        from .state import UIState
        self.ui_state = UIState(self)
        self.ui_state.preview_mode = preview
        from .camera import Camera
        self.camera = Camera()
        from .inputstate import InputState
        self.input = InputState()
        from .keybinding import KeyBindings
        self.keybindings = KeyBindings(self, self.input)
        self.keybindings.restore(self.settings)
        from .critic2 import Critic2
        self.critic2 = Critic2(self)
        from .filehistory import FileHistory
        self.file_history = FileHistory(self)
        from .menu import MainMenu
        self.main_menu = MainMenu(self)
        from .navigation import register_bind_actions
        register_bind_actions(self)

    def process_frame(self, view_width=500):
        '''Handle this frame's input events, then start a new frame.'''
        from .navigation import navigate
        ui = self.ui_state
        try:
            self.keybindings.process_callbacks()
            navigate(self, view_width)
            if ui.close_all_windows:
                ui.close_all_dialogs()
                ui.close_all_windows = False
            self.triggers.activate_trigger('frame', None)
        finally:
            self.input.new_frame()

    def open_files(self, paths):
        '''Open structure files, xyz files as molecules and others as crystals.'''
        for path in paths:
            ismol = path.lower().endswith('.xyz')
            self.main_menu.run_action(lambda p=path, m=ismol: self.main_menu.open_file(p, m))
