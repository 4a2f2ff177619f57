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
menu: The main menu bar
=======================

The menu bar is described here independently of the window toolkit.  The
Qt interface renders the :py:class:`Menu` trees from
:py:meth:`MainMenu.menus` and evaluates enabled state, check marks,
shortcut hints and dynamic submenus each time a menu is about to be shown.

Menu actions change the :py:class:`~critic2gui.state.UIState` flags or
call the :py:class:`~critic2gui.critic2.Critic2` backend, always through
:py:meth:`MainMenu.run_action` so that errors end up in the log.

Shortcut hints are only shown next to the menu item.  The keys themselves
are handled by the key bindings.
"""

from .keybinding import BIND_QUIT, BIND_CLOSE_ALL_DIALOGS
from .library import KIND_CRYSTAL, KIND_MOLECULE
from .state import OPEN_CRYSTAL, OPEN_MOLECULE


class MenuItem:
    '''
    A menu entry.  shortcut is the hint text or a function returning it,
    enabled and checked are functions returning bool, or None for an
    always enabled, not checkable item.
    '''
    def __init__(self, label, action, shortcut='', tooltip='', enabled=None, checked=None):
        self.label = label
        self.action = action
        self._shortcut = shortcut
        self.tooltip = tooltip
        self._enabled = enabled
        self._checked = checked

    @property
    def shortcut(self):
        s = self._shortcut
        return s() if callable(s) else s

    @property
    def enabled(self):
        return True if self._enabled is None else bool(self._enabled())

    @property
    def checkable(self):
        return self._checked is not None

    @property
    def checked(self):
        return self.checkable and bool(self._checked())


class Separator:
    label = None


class SubMenu:
    '''entries is a list or a function returning a list of entries.'''
    def __init__(self, label, entries, tooltip='', enabled=None):
        self.label = label
        self._entries = entries
        self.tooltip = tooltip
        self._enabled = enabled

    @property
    def entries(self):
        e = self._entries
        return list(e() if callable(e) else e)

    @property
    def enabled(self):
        return True if self._enabled is None else bool(self._enabled())


class Menu(SubMenu):
    '''A top level menu of the menu bar.'''
    pass


class MainMenu:

    def __init__(self, session):
        self.session = session
        self.pending_library_request = None	# KIND_CRYSTAL, KIND_MOLECULE or None

    def menus(self):
        return [self.file_menu(), self.calculate_menu(), self.view_menu()]

    def _not_preview(self):
        return not self.session.ui_state.preview_mode

    def _set_flag(self, name, value):
        return lambda: setattr(self.session.ui_state, name, value)

    def _toggle(self, label, flag, tooltip, shortcut=''):
        ui = self.session.ui_state
        return MenuItem(label, lambda: ui.toggle(flag), shortcut=shortcut, tooltip=tooltip,
                        checked=lambda: bool(getattr(ui, flag)))

    # File

    def file_menu(self):
        ses = self.session
        np = self._not_preview
        kb = ses.keybindings
        return Menu('File', [
            MenuItem('New', self._set_flag('structurenew_window', True),
                     shortcut='Ctrl+N', enabled=np,
                     tooltip='Create a structure from scratch.'),
            MenuItem('Open crystal', self._set_flag('structureopen_window', OPEN_CRYSTAL),
                     shortcut='Ctrl+O', enabled=np,
                     tooltip='Read the crystal structure from a file.'),
            MenuItem('Open molecule', self._set_flag('structureopen_window', OPEN_MOLECULE),
                     shortcut='Ctrl+Alt+O', enabled=np,
                     tooltip='Read the molecular structure from a file.'),
            SubMenu('Crystal library', lambda: self.library_entries(KIND_CRYSTAL), enabled=np,
                    tooltip='Read a crystal structure from the library file.'),
            SubMenu('Molecule library', lambda: self.library_entries(KIND_MOLECULE), enabled=np,
                    tooltip='Read a molecular structure from the library file.'),
            SubMenu('Open recent', self.recent_entries,
                    enabled=lambda: np() and len(ses.file_history) > 0,
                    tooltip='Read a recently opened structure file.'),
            Separator(),
            MenuItem('Close', lambda: ses.critic2.clear_scene(True),
                     shortcut='Ctrl+W', enabled=np,
                     tooltip='Clear the current structure.'),
            MenuItem('Quit', self._set_flag('want_quit', True),
                     shortcut=lambda: kb.bind_key_name(BIND_QUIT),
                     tooltip='Quit the program.'),
        ])

    def library_entries(self, kind):
        ismol = (kind == KIND_MOLECULE)
        entries = [MenuItem('Choose file', lambda: self.request_library_file(kind),
                            tooltip='Choose the %s library file.' % kind),
                   Separator()]
        for i, name in enumerate(self.session.critic2.lib_names(kind)):
            entries.append(MenuItem(name, lambda i=i: self.open_from_library(i+1, ismol),
                                    tooltip='Read %s from the library.' % name))
        return entries

    def recent_entries(self):
        entries = [MenuItem(f.short_name(), lambda f=f: self.open_recent(f), tooltip=f.path)
                   for f in self.session.file_history.files]
        entries.append(Separator())
        entries.append(MenuItem('Clear recent', self.session.file_history.clear,
                                tooltip='Forget the recently opened files.'))
        return entries

    def open_from_library(self, index, ismolecule):
        '''Open structure number index (1-based) of the library and frame it.'''
        c2 = self.session.critic2
        s = c2.open_structure_from_library(index, ismolecule)
        self.session.ui_state.set_flags_and_cam(ismolecule, s.box_xmaxlen, s.box_xmaxclen)

    def open_file(self, path, ismolecule):
        s = self.session.critic2.open_structure(path, ismolecule)
        self.session.ui_state.set_flags_and_cam(ismolecule, s.box_xmaxlen, s.box_xmaxclen)

    def open_recent(self, filespec):
        self.open_file(filespec.path, filespec.ismolecule)

    def request_library_file(self, kind):
        if kind not in (KIND_CRYSTAL, KIND_MOLECULE):
            raise ValueError('Unknown library kind "%s"' % kind)
        self.pending_library_request = kind

    def library_file_chosen(self, path):
        '''
        Answer to a library file request.  An empty path means the dialog
        was cancelled.  Returns True if a library was read.
        '''
        kind = self.pending_library_request
        self.pending_library_request = None
        if kind is None or not path:
            return False
        return self.run_action(lambda: self.session.critic2.set_library_file(path, kind))

    # Calculate

    def calculate_menu(self):
        c2 = self.session.critic2
        return Menu('Calculate', [
            MenuItem('Generate Critical Points', c2.call_auto, enabled=self._not_preview,
                     tooltip='Calculate the critical points.'),
        ])

    # View

    def view_menu(self):
        kb = self.session.keybindings
        return Menu('View', [
            self._toggle('Toggle bonds', 'show_bonds', 'Toggle show/hide bonds.'),
            self._toggle('Toggle critical points', 'show_cps', 'Toggle show/hide critical points.'),
            self._toggle('Toggle atoms', 'show_atoms', 'Toggle show/hide atoms.'),
            self._toggle('Toggle cell', 'show_cell', 'Toggle show/hide unit cell.'),
            self._toggle('Show structure information', 'structureinfo_window',
                         'Show information about the current structure.'),
            self._toggle('Console', 'console_window', 'Toggle the critic2 console.', shortcut='~'),
            Separator(),
            MenuItem('Key bindings', self._set_flag('keybinding_window', True),
                     tooltip='Change the keys and mouse buttons of the bind actions.'),
            MenuItem('Close all windows', self._set_flag('close_all_windows', True),
                     shortcut=lambda: kb.bind_key_name(BIND_CLOSE_ALL_DIALOGS),
                     tooltip='Close all open windows.'),
        ])

    # Actions

    def run_action(self, action):
        '''
        Call a menu action.  Errors that are not bugs are logged as errors,
        anything else is reported with its traceback.  Returns True if the
        action completed.
        '''
        from .errors import NotABug, CancelOperation
        logger = self.session.logger
        try:
            action()
        except CancelOperation:
            return False
        except NotABug as e:
            logger.error(str(e))
            stderr = getattr(e, 'stderr', '')
            if stderr:
                logger.info(stderr)
            return False
        except Exception:
            logger.report_exception(preface = 'Error in menu action')
            return False
        return True

    def activate(self, item):
        '''Run the action of a menu item if it is enabled.'''
        if not item.enabled:
            return False
        return self.run_action(item.action)
