import os

import pytest

os.environ.setdefault('QT_API', 'pyqt6')
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
pytest.importorskip('PyQt6.QtWidgets')


@pytest.fixture(scope="module")
def test_ui(tmp_path_factory):
    from types import SimpleNamespace
    from critic2gui.session import Session
    from critic2gui.ui import gui
    root = tmp_path_factory.mktemp('gui')
    dirs = SimpleNamespace(user_config_dir=str(root), user_data_dir=str(root))
    ses = Session('critic2', app_dirs=dirs)
    ui = ses.ui = gui.UI(ses)
    yield ui
    ui.quit()


def menu_texts(test_ui, title):
    for a in test_ui.main_window.menu_bar.actions():
        if a.text() == title:
            return [x.text() for x in a.menu().actions()]
    raise KeyError(title)


def test_menu_bar(test_ui):
    mb = test_ui.main_window.menu_bar
    assert [a.text() for a in mb.actions()] == ['File', 'Calculate', 'View']
    texts = menu_texts(test_ui, 'File')
    assert 'New\tCtrl+N' in texts
    assert 'Quit\tCtrl+Q' in texts
    assert 'Crystal library' in texts
    assert 'Close all windows\tCtrl+Escape' in menu_texts(test_ui, 'View')


def test_menu_refill_follows_bindings(test_ui):
    from critic2gui.keybinding import BIND_QUIT, KEY_Q, NOMOD
    ses = test_ui.session
    mb = test_ui.main_window.menu_bar
    file_action = mb.actions()[0]
    ses.keybindings.set_bind(BIND_QUIT, KEY_Q, NOMOD)
    try:
        file_action.menu().aboutToShow.emit()
        assert 'Quit\tQ' in [a.text() for a in file_action.menu().actions()]
    finally:
        ses.keybindings.set_default_key_bindings()


def test_tooltips_in_action_data(test_ui):
    mb = test_ui.main_window.menu_bar
    view = mb.actions()[2].menu()
    tips = [a.data() for a in view.actions() if not a.isSeparator()]
    assert 'Toggle show/hide bonds.' in tips


def test_toggle_action(test_ui):
    ses = test_ui.session
    mb = test_ui.main_window.menu_bar
    view = mb.actions()[2].menu()
    view.aboutToShow.emit()
    bonds = [a for a in view.actions() if a.text() == 'Toggle bonds'][0]
    assert bonds.isCheckable() and bonds.isChecked()
    bonds.trigger()
    assert not ses.ui_state.show_bonds
    ses.ui_state.show_bonds = True


def test_console_flag_shows_dock(test_ui):
    ses = test_ui.session
    mw = test_ui.main_window
    ses.ui_state.console_window = True
    assert mw.console.isVisible()
    mw.console.close()
    assert not ses.ui_state.console_window


def test_frame_quit_key(test_ui):
    from critic2gui.inputstate import MOD_CONTROL
    from critic2gui.keybinding import KEY_Q
    ses = test_ui.session
    calls = []
    ses.ui_state.want_quit = False
    ses.input.key_press(KEY_Q, MOD_CONTROL)
    orig = test_ui.quit
    test_ui.quit = lambda confirm=True: calls.append(True)
    try:
        test_ui.frame()
    finally:
        test_ui.quit = orig
        ses.input.key_release(KEY_Q, 0)
        ses.ui_state.want_quit = False
    assert calls == [True]


def test_qt_modifiers():
    from qtpy.QtCore import Qt
    from critic2gui.inputstate import MOD_SHIFT, MOD_CONTROL
    from critic2gui.ui.gui import qt_modifiers, button_name
    mods = Qt.KeyboardModifier.ShiftModifier | Qt.KeyboardModifier.ControlModifier
    assert qt_modifiers(mods) == MOD_SHIFT | MOD_CONTROL
    assert qt_modifiers(Qt.KeyboardModifier.NoModifier) == 0
    assert button_name(Qt.MouseButton.RightButton) == 'right'


def run_events(msec=200):
    from qtpy.QtCore import QEventLoop, QTimer
    loop = QEventLoop()
    QTimer.singleShot(msec, loop.quit)
    loop.exec()


class FakeFileDialog:

    def __init__(self, path):
        self.path = path
        self.titles = []

    def getOpenFileName(self, parent, title, directory, filt):
        self.titles.append(title)
        return self.path, filt


def test_open_crystal_shows_dialog(test_ui, monkeypatch):
    from critic2gui.state import OPEN_NONE
    from critic2gui.ui import dialogs
    ses = test_ui.session
    fake = FakeFileDialog('')
    monkeypatch.setattr(dialogs, 'QFileDialog', fake)
    file_menu = ses.main_menu.file_menu().entries
    item = [e for e in file_menu if e.label == 'Open crystal'][0]
    assert ses.main_menu.activate(item)
    run_events()
    assert fake.titles == ['Open crystal']
    assert ses.ui_state.structureopen_window == OPEN_NONE


def test_choose_library_file_shows_dialog(test_ui, monkeypatch, data_dir):
    from critic2gui.ui import dialogs
    ses = test_ui.session
    mm = ses.main_menu
    fake = FakeFileDialog(os.path.join(data_dir, 'mixed.cri'))
    monkeypatch.setattr(dialogs, 'QFileDialog', fake)
    lib = [e for e in mm.file_menu().entries if e.label == 'Molecule library'][0]
    test_ui.main_window.menu_bar.activate(lib.entries[0])
    assert mm.pending_library_request == 'molecule'
    run_events()
    assert fake.titles == ['Choose molecule library']
    assert mm.pending_library_request is None
    assert ses.critic2.lib_names('molecule') == ['hydrogen']
