import pytest

from critic2gui import keybinding as kbm
from critic2gui.keybinding import (
    BIND_QUIT, BIND_CLOSE_LAST_DIALOG, BIND_CLOSE_ALL_DIALOGS, BIND_NAV_ROTATE,
    BIND_NAV_TRANSLATE, BIND_NAV_ZOOM, BIND_NAV_RESET, BIND_MAX, NOKEY, NOMOD,
    KEY_ESCAPE, KEY_Q, MOUSE_LEFT, MOUSE_LEFT_DOUBLE, MOUSE_SCROLL, KEY_LAST,
    key_name)
from critic2gui.inputstate import MOD_SHIFT, MOD_CONTROL, MOD_ALT, MOD_SUPER, KEY_SHIFT

KEY_A = 0x41
KEY_F5 = 0x01000034


def check_keymap(kb):
    expected = {}
    for b in range(BIND_MAX):
        if kb.keybind[b] != NOKEY:
            expected[(kb.keybind[b], kb.modbind[b], kbm.bind_groups[b])] = b
    assert kb.keymap == expected


def test_tables():
    assert BIND_MAX == 7
    assert len(kbm.bind_names) == BIND_MAX
    assert kbm.bind_groups == (0, 0, 0, 1, 1, 1, 1)
    assert MOUSE_LEFT == KEY_LAST + 1
    assert MOUSE_SCROLL == KEY_LAST + 11


def test_default_bindings(test_session):
    kb = test_session.keybindings
    names = [kb.bind_key_name(b) for b in range(BIND_MAX)]
    assert names == ['Ctrl+Q', 'Escape', 'Ctrl+Escape', 'Left Mouse',
                     'Right Mouse', 'Scroll', 'Double Left Mouse']
    check_keymap(kb)


def test_key_names():
    assert key_name(NOKEY) == ''
    assert key_name(KEY_A, MOD_SHIFT | MOD_CONTROL | MOD_ALT | MOD_SUPER) == 'Shift+Ctrl+Alt+Super+A'
    assert key_name(KEY_F5) == 'F5'
    assert key_name(0x20) == 'Space'
    assert key_name(MOUSE_LEFT_DOUBLE, MOD_CONTROL) == 'Ctrl+Double Left Mouse'


def test_set_bind_unbinds_conflict_in_group(test_session):
    kb = test_session.keybindings
    changes = []
    test_session.triggers.add_handler('bind changed', lambda name, data: changes.append(data))
    kb.set_bind(BIND_CLOSE_ALL_DIALOGS, KEY_Q, MOD_CONTROL)
    assert kb.bind_key_name(BIND_CLOSE_ALL_DIALOGS) == 'Ctrl+Q'
    assert kb.bind_key_name(BIND_QUIT) == ''
    assert changes == [(BIND_CLOSE_ALL_DIALOGS, KEY_Q, MOD_CONTROL)]
    check_keymap(kb)


def test_same_key_in_other_group(test_session):
    kb = test_session.keybindings
    kb.set_bind(BIND_NAV_RESET, KEY_ESCAPE, NOMOD)
    assert kb.bind_key_name(BIND_CLOSE_LAST_DIALOG) == 'Escape'
    assert kb.bind_key_name(BIND_NAV_RESET) == 'Escape'
    check_keymap(kb)


def test_unbind(test_session):
    kb = test_session.keybindings
    kb.set_bind(BIND_NAV_ZOOM, NOKEY, MOD_SHIFT)
    assert kb.keybind[BIND_NAV_ZOOM] == NOKEY
    assert kb.modbind[BIND_NAV_ZOOM] == NOMOD
    check_keymap(kb)
    assert not kb.is_bind_event(BIND_NAV_ZOOM)


def test_bad_bind(test_session):
    with pytest.raises(ValueError):
        test_session.keybindings.set_bind(BIND_MAX, KEY_Q, NOMOD)


def test_bad_key(test_session):
    kb = test_session.keybindings
    with pytest.raises(ValueError):
        kb.set_bind(BIND_QUIT, MOUSE_SCROLL + 1, NOMOD)
    with pytest.raises(ValueError):
        kb.set_bind(BIND_QUIT, KEY_Q, 0x10)
    assert kb.bind_key_name(BIND_QUIT) == 'Ctrl+Q'
    assert not kb.is_bind_event(BIND_QUIT)


def test_key_event(test_session):
    kb, inp = test_session.keybindings, test_session.input
    inp.key_press(KEY_Q, MOD_CONTROL)
    assert kb.is_bind_event(BIND_QUIT)
    assert not kb.is_bind_event(BIND_CLOSE_LAST_DIALOG)
    inp.new_frame()
    assert not kb.is_bind_event(BIND_QUIT, held=False)
    assert kb.is_bind_event(BIND_QUIT, held=True)
    inp.key_release(KEY_Q)
    assert not kb.is_bind_event(BIND_QUIT, held=True)


def test_modifiers_must_match_exactly(test_session):
    kb, inp = test_session.keybindings, test_session.input
    inp.key_press(KEY_SHIFT)
    inp.key_press(KEY_Q, MOD_CONTROL | MOD_SHIFT)
    assert not kb.is_bind_event(BIND_QUIT)
    inp.new_frame()
    inp.key_press(KEY_ESCAPE, MOD_CONTROL)
    assert kb.is_bind_event(BIND_CLOSE_ALL_DIALOGS)
    assert not kb.is_bind_event(BIND_CLOSE_LAST_DIALOG)


def test_view_binds_need_level(test_session):
    kb, inp = test_session.keybindings, test_session.input
    inp.mouse_press('left', (10, 10))
    kb.set_bind_event_level(0)
    assert not kb.is_bind_event(BIND_NAV_ROTATE)
    kb.set_bind_event_level(1)
    assert kb.is_bind_event(BIND_NAV_ROTATE)
    assert not kb.is_bind_event(BIND_NAV_RESET)
    assert not kb.is_bind_event(BIND_NAV_TRANSLATE)


def test_double_click_and_scroll(test_session):
    kb, inp = test_session.keybindings, test_session.input
    kb.set_bind_event_level(1)
    inp.mouse_press('left', double=True)
    inp.scroll(-1)
    assert kb.is_bind_event(BIND_NAV_RESET)
    assert kb.is_bind_event(BIND_NAV_ZOOM)
    inp.new_frame()
    assert not kb.is_bind_event(BIND_NAV_RESET)
    assert not kb.is_bind_event(BIND_NAV_ZOOM)


def test_process_callbacks(test_session):
    kb, inp = test_session.keybindings, test_session.input
    calls = []
    kb.register_callback(BIND_CLOSE_LAST_DIALOG, lambda d: calls.append(('last', d)), 'x')
    kb.register_callback(BIND_QUIT, lambda d: calls.append(('quit', d)), 1)
    inp.key_press(KEY_ESCAPE, NOMOD)
    assert kb.process_callbacks() == [BIND_CLOSE_LAST_DIALOG]
    assert calls == [('last', 'x')]

    # one callback per bind
    kb.register_callback(BIND_CLOSE_LAST_DIALOG, lambda d: calls.append(('new', d)))
    calls.clear()
    kb.process_callbacks()
    assert calls == [('new', None)]

    kb.register_callback(BIND_CLOSE_LAST_DIALOG, None)
    calls.clear()
    assert kb.process_callbacks() == []
    assert calls == []


def test_capture_key(test_session):
    kb, inp = test_session.keybindings, test_session.input
    inp.key_press(KEY_SHIFT)
    assert not kb.set_bind_from_user_input(0)
    inp.key_press(KEY_A)
    assert kb.set_bind_from_user_input(0)
    assert kb.captured == (KEY_A, MOD_SHIFT)


def test_capture_mouse_needs_level(test_session):
    kb, inp = test_session.keybindings, test_session.input
    inp.mouse_press('left', modifiers=MOD_ALT)
    assert not kb.set_bind_from_user_input(0)
    assert kb.set_bind_from_user_input(1)
    assert kb.captured == (MOUSE_LEFT, MOD_ALT)
    inp.new_frame()
    inp.modifiers = NOMOD
    inp.scroll(2)
    assert kb.set_bind_from_user_input(1)
    assert kb.captured == (MOUSE_SCROLL, NOMOD)


def test_save_restore(test_session, app_dirs):
    kb = test_session.keybindings
    kb.set_bind(BIND_QUIT, KEY_A, MOD_ALT)
    kb.save(test_session.settings)

    from critic2gui.session import Session
    s2 = Session('critic2', app_dirs=app_dirs)
    assert s2.keybindings.bind_key_name(BIND_QUIT) == 'Alt+A'
    assert s2.keybindings.bind_key_name(BIND_NAV_ROTATE) == 'Left Mouse'


def test_restore_bad_value(test_session, test_log):
    kb = test_session.keybindings
    settings = test_session.settings
    settings.key_bindings = {'Quit': ('Q', 'Ctrl')}
    kb.restore(settings)
    assert kb.bind_key_name(BIND_QUIT) == 'Ctrl+Q'
    assert 'Invalid saved key bindings' in test_log.text()

    settings.key_bindings = {'Quit': (-5, 0), 'No such bind': (KEY_A, 0)}
    kb.restore(settings)
    assert kb.bind_key_name(BIND_QUIT) == 'Ctrl+Q'
