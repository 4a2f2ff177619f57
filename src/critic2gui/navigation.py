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

'''
navigation: Actions run by the key bindings
===========================================

The global binds close windows and quit, the structure view binds move
the camera.  Rotation and panning follow the mouse while the bound button
is held down, the other binds act once per event.
'''

from .keybinding import (BIND_QUIT, BIND_CLOSE_LAST_DIALOG, BIND_CLOSE_ALL_DIALOGS,
                         BIND_NAV_ZOOM, BIND_NAV_RESET, BIND_NAV_ROTATE, BIND_NAV_TRANSLATE)


def register_bind_actions(session):
    kb = session.keybindings
    ui = session.ui_state
    kb.register_callback(BIND_QUIT, lambda d: setattr(ui, 'want_quit', True))
    kb.register_callback(BIND_CLOSE_LAST_DIALOG, lambda d: ui.close_last_dialog())
    kb.register_callback(BIND_CLOSE_ALL_DIALOGS, lambda d: ui.close_all_dialogs())
    kb.register_callback(BIND_NAV_ZOOM, wheel_zoom, session)
    kb.register_callback(BIND_NAV_RESET, reset_view, session)


def wheel_zoom(session):
    session.camera.zoom(session.input.wheel)


def reset_view(session):
    c = session.camera
    s = session.critic2.structure
    if s is None:
        c.reset((0,0,0), 10)
    else:
        c.reset(s.center, s.box_xmaxlen if s.ismolecule else max(s.box_xmaxlen, s.box_xmaxclen))


def navigate(session, width=500):
    '''Rotate or pan the camera by the mouse motion of this frame.'''
    kb = session.keybindings
    dx, dy = session.input.mouse_delta
    if dx == 0 and dy == 0:
        return
    if kb.is_bind_event(BIND_NAV_ROTATE, held=True):
        session.camera.rotate(dx, dy)
    elif kb.is_bind_event(BIND_NAV_TRANSLATE, held=True):
        session.camera.translate(dx, dy, width)
