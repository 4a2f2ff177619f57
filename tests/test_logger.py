import os

import pytest

from critic2gui.errors import UserError, CancelOperation
from critic2gui.logger import Log, StringPlainTextLog, NoGuiLog
from critic2gui.safesave import SaveTextFile


def test_levels(test_session, test_log):
    logger = test_session.logger
    logger.info('hello')
    logger.warning('careful')
    logger.error('broken')
    logger.bug('very broken', add_newline=False)
    assert test_log.messages == [
        (Log.LEVEL_INFO, 'hello\n'),
        (Log.LEVEL_WARNING, 'careful\n'),
        (Log.LEVEL_ERROR, 'broken\n'),
        (Log.LEVEL_BUG, 'very broken'),
    ]


def test_status(test_session, test_log):
    test_session.logger.status('busy', log=True)
    assert test_log.status_messages == ['busy']
    assert test_log.messages == [(Log.LEVEL_INFO, 'busy\n')]


def test_silent(app_dirs, test_log):
    from critic2gui.session import Session
    ses = Session('critic2', app_dirs=app_dirs, silent=True)
    ses.logger.add_log(test_log)
    ses.logger.info('hidden')
    ses.logger.warning('hidden')
    ses.logger.error('shown')
    assert test_log.messages == [(Log.LEVEL_ERROR, 'shown\n')]


def test_string_log_excludes_others(test_session, test_log):
    with StringPlainTextLog(test_session.logger) as log:
        test_session.logger.info('captured')
    test_session.logger.info('after')
    assert log.getvalue() == 'captured\n'
    assert test_log.messages == [(Log.LEVEL_INFO, 'after\n')]


def test_no_log_last_resort(test_session, monkeypatch):
    import io
    import sys
    err = io.StringIO()
    monkeypatch.setattr(sys, '__stderr__', err)
    test_session.logger.clear()
    test_session.logger.error('nobody listens')
    assert err.getvalue() == 'ERROR:\nnobody listens\n'


def test_add_non_log(test_session):
    with pytest.raises(ValueError):
        test_session.logger.add_log(object())


def test_report_exception(test_session, test_log):
    logger = test_session.logger
    try:
        raise UserError('bad input')
    except UserError:
        logger.report_exception(preface='Reading')
    assert test_log.messages[-1] == (Log.LEVEL_ERROR, 'Reading:\nbad input\n')
    try:
        raise CancelOperation('never mind')
    except CancelOperation:
        logger.report_exception()
    assert len(test_log.messages) == 1
    try:
        raise KeyError('x')
    except KeyError:
        logger.report_exception()
    level, msg = test_log.messages[-1]
    assert level == Log.LEVEL_BUG
    assert 'Traceback' in msg and 'KeyError' in msg


def test_nogui_log(test_session, capsys):
    test_session.logger.add_log(NoGuiLog())
    test_session.logger.info('out')
    test_session.logger.warning('err')
    test_session.logger.status('working')
    captured = capsys.readouterr()
    assert captured.out == 'out\nSTATUS:\nworking\n'
    assert captured.err == 'WARNING:\nerr\n'


def test_safe_save(tmp_path):
    name = str(tmp_path / 'sub' / 'out.txt')
    with SaveTextFile(name) as f:
        f.write('first')
    with pytest.raises(RuntimeError):
        with SaveTextFile(name) as f:
            f.write('second')
            raise RuntimeError('stop')
    with open(name) as f:
        assert f.read() == 'first'
    assert os.listdir(os.path.dirname(name)) == ['out.txt']
