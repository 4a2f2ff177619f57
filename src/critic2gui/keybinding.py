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
keybinding: Key and mouse bindings
==================================

A fixed set of bind actions (quit, close dialogs, camera navigation) is
assigned keys with modifiers.  Each bind belongs to a context group:
group 0 binds are global, group 1 binds only act in the structure view.
The key table maps (key, modifiers, group) to the bind, so two binds of
the same group can never share a key.

Mouse buttons, double clicks and the scroll wheel are handled as special
keys numbered after the last keyboard key.

The key bindings object for a session is session.keybindings.
'''

from .inputstate import MOD_SHIFT, MOD_CONTROL, MOD_ALT, MOD_SUPER, MODIFIER_KEYS

# No key
NOKEY = 0
NOMOD = 0x0000
ALL_MODS = MOD_SHIFT | MOD_CONTROL | MOD_ALT | MOD_SUPER

# Last Qt keyboard code (Qt.Key_unknown)
KEY_LAST = 0x01ffffff

# Mouse interactions as special keys
MOUSE_LEFT           = KEY_LAST+1
MOUSE_LEFT_DOUBLE    = KEY_LAST+2
MOUSE_RIGHT          = KEY_LAST+3
MOUSE_RIGHT_DOUBLE   = KEY_LAST+4
MOUSE_MIDDLE         = KEY_LAST+5
MOUSE_MIDDLE_DOUBLE  = KEY_LAST+6
MOUSE_BUTTON3        = KEY_LAST+7
MOUSE_BUTTON3_DOUBLE = KEY_LAST+8
MOUSE_BUTTON4        = KEY_LAST+9
MOUSE_BUTTON4_DOUBLE = KEY_LAST+10
MOUSE_SCROLL         = KEY_LAST+11

# special key -> (button, double click)
_mouse_keys = {
    MOUSE_LEFT: ('left', False),
    MOUSE_LEFT_DOUBLE: ('left', True),
    MOUSE_RIGHT: ('right', False),
    MOUSE_RIGHT_DOUBLE: ('right', True),
    MOUSE_MIDDLE: ('middle', False),
    MOUSE_MIDDLE_DOUBLE: ('middle', True),
    MOUSE_BUTTON3: ('button3', False),
    MOUSE_BUTTON3_DOUBLE: ('button3', True),
    MOUSE_BUTTON4: ('button4', False),
    MOUSE_BUTTON4_DOUBLE: ('button4', True),
}

BIND_QUIT              = 0 # Quit the program
BIND_CLOSE_LAST_DIALOG = 1 # Closes the last window
BIND_CLOSE_ALL_DIALOGS = 2 # Closes all windows
BIND_NAV_ROTATE        = 3 # Rotate the camera (navigation)
BIND_NAV_TRANSLATE     = 4 # Camera pan (navigation)
BIND_NAV_ZOOM          = 5 # Camera zoom (navigation)
BIND_NAV_RESET         = 6 # Reset the view (navigation)
BIND_MAX               = 7 # Total number of BIND actions

GROUP_GLOBAL = 0
GROUP_VIEW = 1

bind_names = (
    "Quit",
    "Close last dialog",
    "Close all dialogs",
    "Rotate",
    "Translate",
    "Zoom",
    "Reset view",
)

bind_descriptions = (
    "Quit the program",
    "Close the last opened window",
    "Close all windows",
    "Rotate the camera",
    "Pan the camera",
    "Zoom the camera",
    "Reset the view",
)

bind_groups = (
    GROUP_GLOBAL,
    GROUP_GLOBAL,
    GROUP_GLOBAL,
    GROUP_VIEW,
    GROUP_VIEW,
    GROUP_VIEW,
    GROUP_VIEW,
)

KEY_ESCAPE = 0x01000000
KEY_Q = 0x51

def default_key_bindings():
    '''Return a list of (bind, key, modifiers).'''
    return [
        (BIND_QUIT, KEY_Q, MOD_CONTROL),
        (BIND_CLOSE_LAST_DIALOG, KEY_ESCAPE, NOMOD),
        (BIND_CLOSE_ALL_DIALOGS, KEY_ESCAPE, MOD_CONTROL),
        (BIND_NAV_ROTATE, MOUSE_LEFT, NOMOD),
        (BIND_NAV_TRANSLATE, MOUSE_RIGHT, NOMOD),
        (BIND_NAV_ZOOM, MOUSE_SCROLL, NOMOD),
        (BIND_NAV_RESET, MOUSE_LEFT_DOUBLE, NOMOD),
    ]


class KeyBindings:
    '''
    Keep the key assigned to each bind action, report whether a bind
    event happened in the current frame and run the callbacks registered
    for bind events.
    '''
    def __init__(self, session, input_state=None):
        self.session = session
        if input_state is None:
            from .inputstate import InputState
            input_state = InputState()
        self.input = input_state

        self.keybind = [NOKEY] * BIND_MAX	# bind -> key
        self.modbind = [NOMOD] * BIND_MAX	# bind -> modifiers
        self.keymap = {}			# (key, mod, group) -> bind

        self._callbacks = {}			# bind -> (func, data)
        self._level = 0
        self.captured = None			# (key, mod) from set_bind_from_user_input()

        session.triggers.add_trigger('bind changed')
        self.set_default_key_bindings()

    def set_default_key_bindings(self):
        for bind in range(BIND_MAX):
            self.set_bind(bind, NOKEY, NOMOD)
        for bind, key, mod in default_key_bindings():
            self.set_bind(bind, key, mod)

    def register_callback(self, bind, callback, data=None):
        '''
        Call callback(data) when the bind event happens.  There is one
        callback per bind, registering another replaces it and
        registering None removes it.
        '''
        _check_bind(bind)
        if callback is None:
            self._callbacks.pop(bind, None)
        else:
            self._callbacks[bind] = (callback, data)

    def process_callbacks(self):
        '''Run the callbacks of the bind events of this frame.  Returns the binds fired.'''
        fired = []
        for bind in range(BIND_MAX):
            cb = self._callbacks.get(bind)
            if cb is None or not self.is_bind_event(bind, held=False):
                continue
            func, data = cb
            fired.append(bind)
            func(data)
        return fired

    def is_bind_event(self, bind, held=False):
        '''
        Did the bind event happen in this frame?  If held is True, a
        key or mouse button that is being held down also counts.
        Modifier keys must match exactly.
        '''
        _check_bind(bind)
        key = self.keybind[bind]
        if key == NOKEY:
            return False
        if bind_groups[bind] > self._level:
            return False
        inp = self.input
        if inp.modifiers != self.modbind[bind]:
            return False

        if key <= KEY_LAST:
            return key in (inp.keys_down if held else inp.keys_pressed)
        elif key == MOUSE_SCROLL:
            return inp.wheel != 0
        button, double = _mouse_keys[key]
        if double:
            return button in inp.buttons_double_clicked
        return button in (inp.buttons_down if held else inp.buttons_clicked)

    def bind_key_name(self, bind):
        '''Key name with modifiers, for instance "Ctrl+Q".  Empty if not bound.'''
        _check_bind(bind)
        return key_name(self.keybind[bind], self.modbind[bind])

    def set_bind(self, bind, key, mod):
        '''
        Assign a key and modifiers to a bind.  A bind of the same group
        already using that key loses it.  NOKEY unbinds.
        '''
        _check_bind(bind)
        _check_key(key, mod)
        group = bind_groups[bind]

        # remove the old key from the table
        old = (self.keybind[bind], self.modbind[bind], group)
        if self.keymap.get(old) == bind:
            del self.keymap[old]

        if key == NOKEY:
            mod = NOMOD
        else:
            # unbind any other bind with the same key in this group
            other = self.keymap.get((key, mod, group))
            if other is not None and other != bind:
                self.keybind[other] = NOKEY
                self.modbind[other] = NOMOD
                del self.keymap[(key, mod, group)]
            self.keymap[(key, mod, group)] = bind

        self.keybind[bind] = key
        self.modbind[bind] = mod
        self.session.triggers.activate_trigger('bind changed', (bind, key, mod))

    def set_bind_event_level(self, level=0):
        '''Binds of groups above level do not fire.'''
        self._level = level

    def set_bind_from_user_input(self, level):
        '''
        Capture a key pressed in this frame, with the current modifiers,
        into self.captured and return True.  Mouse buttons and the
        scroll wheel are only captured when level is 1 or higher.
        '''
        inp = self.input
        mod = inp.modifiers
        key = NOKEY
        for k in sorted(inp.keys_pressed):
            if k not in MODIFIER_KEYS:
                key = k
                break
        if key == NOKEY and level >= GROUP_VIEW:
            for mkey, (button, double) in _mouse_keys.items():
                if button in (inp.buttons_double_clicked if double else inp.buttons_clicked):
                    key = mkey
                    break
            else:
                if inp.wheel != 0:
                    key = MOUSE_SCROLL
        if key == NOKEY:
            return False
        self.captured = (key, mod)
        return True

    def binding_table(self):
        '''Return list of (bind name, key name, group) for display.'''
        return [(bind_names[b], self.bind_key_name(b), bind_groups[b])
                for b in range(BIND_MAX)]

    def bindings_state(self):
        return {bind_names[b]: (self.keybind[b], self.modbind[b]) for b in range(BIND_MAX)}

    def save(self, settings):
        '''Remember the current bindings in the settings.'''
        settings.key_bindings = self.bindings_state()
        settings.save()

    def save_if_changed(self, settings):
        if settings._use_defaults():
            return
        if self.bindings_state() != settings.key_bindings:
            self.save(settings)

    def restore(self, settings):
        '''Use bindings remembered in settings.  Unknown bind names are ignored.'''
        saved = settings.key_bindings
        if not saved:
            return
        index = {name: b for b, name in enumerate(bind_names)}
        try:
            binds = [(index[name], int(key), int(mod))
                     for name, (key, mod) in saved.items() if name in index]
            for bind, key, mod in binds:
                _check_key(key, mod)
        except (AttributeError, TypeError, ValueError) as e:
            self.session.logger.warning('Invalid saved key bindings, using defaults: %s' % e)
            return
        for bind, key, mod in binds:
            self.set_bind(bind, NOKEY, NOMOD)
        for bind, key, mod in binds:
            self.set_bind(bind, key, mod)


def _check_bind(bind):
    if not 0 <= bind < BIND_MAX:
        raise ValueError('Unknown bind %d' % bind)


def _check_key(key, mod):
    if not (0 <= key <= MOUSE_SCROLL and 0 <= mod <= ALL_MODS):
        raise ValueError('bad key %d modifiers %d' % (key, mod))


_key_names = {
    0x01000000: 'Escape',
    0x01000001: 'Tab',
    0x01000002: 'Backtab',
    0x01000003: 'Backspace',
    0x01000004: 'Return',
    0x01000005: 'Enter',
    0x01000006: 'Insert',
    0x01000007: 'Delete',
    0x01000008: 'Pause',
    0x01000009: 'Print',
    0x01000010: 'Home',
    0x01000011: 'End',
    0x01000012: 'Left',
    0x01000013: 'Up',
    0x01000014: 'Right',
    0x01000015: 'Down',
    0x01000016: 'PageUp',
    0x01000017: 'PageDown',
    0x20: 'Space',
}

_mouse_key_names = {
    MOUSE_LEFT: 'Left Mouse',
    MOUSE_LEFT_DOUBLE: 'Double Left Mouse',
    MOUSE_RIGHT: 'Right Mouse',
    MOUSE_RIGHT_DOUBLE: 'Double Right Mouse',
    MOUSE_MIDDLE: 'Middle Mouse',
    MOUSE_MIDDLE_DOUBLE: 'Double Middle Mouse',
    MOUSE_BUTTON3: 'Button3 Mouse',
    MOUSE_BUTTON3_DOUBLE: 'Double Button3 Mouse',
    MOUSE_BUTTON4: 'Button4 Mouse',
    MOUSE_BUTTON4_DOUBLE: 'Double Button4 Mouse',
    MOUSE_SCROLL: 'Scroll',
}

def key_name(key, mod=NOMOD):
    if key == NOKEY:
        return ''
    if key in _mouse_key_names:
        name = _mouse_key_names[key]
    elif key in _key_names:
        name = _key_names[key]
    elif 0x01000030 <= key <= 0x01000052:
        name = 'F%d' % (key - 0x01000030 + 1)
    elif 0x20 < key < 0x7f:
        name = chr(key)
    else:
        name = 'Key %d' % key
    prefix = ''
    for bit, mname in ((MOD_SHIFT, 'Shift+'), (MOD_CONTROL, 'Ctrl+'),
                       (MOD_ALT, 'Alt+'), (MOD_SUPER, 'Super+')):
        if mod & bit:
            prefix += mname
    return prefix + name
