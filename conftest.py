import os

import pytest

from critic2gui.logger import PlainTextLog


class RecordingLog(PlainTextLog):
    """Keep (level, message) of each logged message."""

    def __init__(self):
        self.messages = []
        self.status_messages = []

    def log(self, level, msg):
        self.messages.append((level, msg))
        return True

    def status(self, msg, color, secondary):
        self.status_messages.append(msg)
        return True

    def text(self, level=None):
        return ''.join(m for l, m in self.messages if level is None or l == level)


def make_app_dirs(root):
    from types import SimpleNamespace
    dirs = SimpleNamespace(
        user_config_dir=os.path.join(root, 'config'),
        user_data_dir=os.path.join(root, 'data'),
        user_cache_dir=os.path.join(root, 'cache'),
    )
    for d in vars(dirs).values():
        os.makedirs(d, exist_ok=True)
    return dirs


@pytest.fixture(autouse=True)
def reset_globals():
    yield
    from critic2gui import configfile, triggerset
    configfile.only_use_defaults = False
    triggerset.set_exception_reporter(None)


@pytest.fixture(scope="function")
def app_dirs(tmp_path):
    return make_app_dirs(str(tmp_path))


@pytest.fixture(scope="function")
def test_log():
    return RecordingLog()


@pytest.fixture(scope="function")
def test_session(app_dirs, test_log):
    from critic2gui.session import Session
    session = Session('critic2', app_dirs=app_dirs)
    session.logger.add_log(test_log)
    yield session
    session.logger.clear()


@pytest.fixture(scope="session")
def data_dir():
    return os.path.join(os.path.dirname(__file__), 'tests', 'data')
