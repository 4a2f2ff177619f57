import pytest

from critic2gui.camera import Camera
from critic2gui.state import OPEN_CRYSTAL, OPEN_NONE


def test_flag_changes_fire_trigger(test_session):
    ui = test_session.ui_state
    changes = []
    test_session.triggers.add_handler('ui state changed', lambda n, d: changes.append(d))
    ui.show_bonds = False
    ui.show_bonds = False
    ui.toggle('show_cell')
    assert changes == [('show_bonds', False), ('show_cell', False)]


def test_unknown_flag(test_session):
    with pytest.raises(AttributeError):
        test_session.ui_state.no_such_flag = True
    with pytest.raises(AttributeError):
        test_session.ui_state.no_such_flag


def test_dialog_stack(test_session):
    ui = test_session.ui_state
    ui.console_window = True
    ui.structureopen_window = OPEN_CRYSTAL
    ui.structureinfo_window = True
    assert ui.open_windows == ('console_window', 'structureopen_window', 'structureinfo_window')
    # reopening moves a window to the top
    ui.console_window = False
    ui.console_window = True
    assert ui.close_last_dialog() == 'console_window'
    assert ui.close_last_dialog() == 'structureinfo_window'
    assert ui.structureinfo_window is False
    ui.close_all_dialogs()
    assert ui.structureopen_window == OPEN_NONE
    assert ui.open_windows == ()
    assert ui.close_last_dialog() is None


def test_set_flags_and_cam_molecule(test_session):
    ui = test_session.ui_state
    ui.show_atoms = ui.show_bonds = False
    ui.set_flags_and_cam(True, 4.0, 12.0)
    assert ui.show_atoms and ui.show_bonds
    assert not ui.show_cell
    c = Camera()
    c.reset((0, 0, 0), 4.0)
    assert test_session.camera.distance == pytest.approx(c.distance)


def test_set_flags_and_cam_crystal(test_session):
    ui = test_session.ui_state
    ui.show_cell = False
    test_session.critic2.open_structure_from_library(1, False)
    s = test_session.critic2.structure
    ui.set_flags_and_cam(False, 4.0, 12.0)
    assert ui.show_cell
    c = Camera()
    c.reset(s.center, 12.0)
    assert test_session.camera.distance == pytest.approx(c.distance)
    assert test_session.camera.center == pytest.approx(s.center)
