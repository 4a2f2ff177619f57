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
state: Flags shared by the menus, windows and views
===================================================

The menu bar, the key bindings and the windows communicate through the
flags of a :py:class:`UIState`.  Setting a flag fires the
'ui state changed' trigger with data (name, value) when the value changes.
The structure view and the windows redraw from the flags every frame.
"""

OPEN_NONE = 0
OPEN_MOLECULE = 1
OPEN_CRYSTAL = 2

# flags whose true value means a window is open
WINDOW_FLAGS = ('structurenew_window', 'structureopen_window',
                'structureinfo_window', 'console_window', 'keybinding_window')

_defaults = {
    'show_bonds': True,
    'show_cps': True,
    'show_atoms': True,
    'show_cell': True,
    'preview_mode': False,
    'want_quit': False,
    'close_all_windows': False,
    'structurenew_window': False,
    'structureopen_window': OPEN_NONE,
    'structureinfo_window': False,
    'console_window': False,
    'keybinding_window': False,
}


class UIState:

    def __init__(self, session):
        object.__setattr__(self, '_session', session)
        object.__setattr__(self, '_flags', dict(_defaults))
        # window flags in opening order
        object.__setattr__(self, '_open_windows', [])
        session.triggers.add_trigger('ui state changed')

    def __getattr__(self, name):
        try:
            return self._flags[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        if name not in self._flags:
            raise AttributeError("Unknown UI state flag: %s" % name)
        if self._flags[name] == value:
            return
        self._flags[name] = value
        if name in WINDOW_FLAGS:
            w = self._open_windows
            if name in w:
                w.remove(name)
            if value:
                w.append(name)
        self._session.triggers.activate_trigger('ui state changed', (name, value))

    def toggle(self, name):
        setattr(self, name, not getattr(self, name))

    @property
    def open_windows(self):
        return tuple(self._open_windows)

    def close_last_dialog(self):
        '''Close the most recently opened window.  Returns its flag name or None.'''
        if not self._open_windows:
            return None
        name = self._open_windows[-1]
        setattr(self, name, OPEN_NONE if name == 'structureopen_window' else False)
        return name

    def close_all_dialogs(self):
        for name in reversed(self.open_windows):
            setattr(self, name, OPEN_NONE if name == 'structureopen_window' else False)

    def set_flags_and_cam(self, ismolecule, xmaxlen, xmaxclen):
        """Show a structure that was just loaded.

        Atoms and bonds are shown, the unit cell only for crystals, and the
        camera is reset to frame the structure.

        Parameters
        ----------
        ismolecule : bool
        xmaxlen : float
            Largest extent of the atoms.
        xmaxclen : float
            Largest extent of the unit cell.
        """
        self.show_atoms = True
        self.show_bonds = True
        self.show_cell = not ismolecule
        size = xmaxlen if ismolecule else max(xmaxlen, xmaxclen)
        s = self._session
        center = (0,0,0)
        c2 = getattr(s, 'critic2', None)
        if c2 is not None and c2.structure is not None:
            center = c2.structure.center
        s.camera.reset(center, size)
