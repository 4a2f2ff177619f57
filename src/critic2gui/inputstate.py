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
inputstate: Keyboard and mouse state for one frame
==================================================

The window toolkit reports key and mouse events as they happen.  They are
accumulated here and read by the key bindings once per frame, after which
:py:meth:`InputState.new_frame` forgets the one-frame events (presses,
clicks, wheel motion) and keeps the held keys and buttons.

Key codes are Qt key codes.  Mouse buttons are 'left', 'right', 'middle',
'button3' and 'button4'.
'''

MOD_SHIFT = 0x1
MOD_CONTROL = 0x2
MOD_ALT = 0x4
MOD_SUPER = 0x8

# Qt codes of keys that only change the modifier state
KEY_SHIFT = 0x01000020
KEY_CONTROL = 0x01000021
KEY_META = 0x01000022
KEY_ALT = 0x01000023
KEY_SUPER_L = 0x01000053
KEY_SUPER_R = 0x01000054
KEY_ALTGR = 0x01001103
MODIFIER_KEYS = {
    KEY_SHIFT: MOD_SHIFT,
    KEY_CONTROL: MOD_CONTROL,
    KEY_META: MOD_SUPER,
    KEY_ALT: MOD_ALT,
    KEY_SUPER_L: MOD_SUPER,
    KEY_SUPER_R: MOD_SUPER,
    KEY_ALTGR: MOD_ALT,
}

MOUSE_BUTTONS = ('left', 'right', 'middle', 'button3', 'button4')


class InputState:

    def __init__(self):
        self.modifiers = 0
        self.keys_down = set()
        self.keys_pressed = set()
        self.buttons_down = set()
        self.buttons_clicked = set()
        self.buttons_double_clicked = set()
        self.wheel = 0.0
        self.mouse_position = None
        self._frame_start_position = None

    def key_press(self, key, modifiers=None):
        '''Auto-repeated key presses should not be reported.'''
        if modifiers is not None:
            self.modifiers = modifiers
        if key in MODIFIER_KEYS:
            self.modifiers |= MODIFIER_KEYS[key]
            return
        self.keys_down.add(key)
        self.keys_pressed.add(key)

    def key_release(self, key, modifiers=None):
        if modifiers is not None:
            self.modifiers = modifiers
        if key in MODIFIER_KEYS:
            self.modifiers &= ~MODIFIER_KEYS[key]
            return
        self.keys_down.discard(key)

    def mouse_press(self, button, position=None, modifiers=None, double=False):
        if modifiers is not None:
            self.modifiers = modifiers
        if position is not None:
            self.mouse_move(position)
        self.buttons_down.add(button)
        if double:
            self.buttons_double_clicked.add(button)
        else:
            self.buttons_clicked.add(button)

    def mouse_release(self, button, position=None, modifiers=None):
        if modifiers is not None:
            self.modifiers = modifiers
        if position is not None:
            self.mouse_move(position)
        self.buttons_down.discard(button)

    def mouse_move(self, position):
        if self._frame_start_position is None:
            self._frame_start_position = self.mouse_position or position
        self.mouse_position = position

    def scroll(self, delta, modifiers=None):
        '''Delta is in wheel steps, positive away from the user.'''
        if modifiers is not None:
            self.modifiers = modifiers
        self.wheel += delta

    @property
    def mouse_delta(self):
        '''Mouse motion (dx,dy) in pixels during this frame, dy > 0 is downward.'''
        p0, p = self._frame_start_position, self.mouse_position
        if p0 is None or p is None:
            return 0, 0
        return p[0] - p0[0], p[1] - p0[1]

    def release_all(self):
        '''Forget held keys and buttons, for instance when the window loses focus.'''
        self.keys_down.clear()
        self.buttons_down.clear()
        self.modifiers = 0

    def new_frame(self):
        self.keys_pressed.clear()
        self.buttons_clicked.clear()
        self.buttons_double_clicked.clear()
        self.wheel = 0.0
        self._frame_start_position = None
