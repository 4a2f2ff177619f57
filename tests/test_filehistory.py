import json
import os

from critic2gui.filehistory import FileHistory, FileSpec, ObjectCache
from critic2gui.logger import Log


def make_file(tmp_path, name):
    p = tmp_path / name
    p.write_text('1\n\nH 0 0 0\n')
    return str(p)


def test_remember_order(test_session, tmp_path):
    fh = test_session.file_history
    a = make_file(tmp_path, 'a.xyz')
    b = make_file(tmp_path, 'b.xyz')
    fh.remember_file(a, True)
    fh.remember_file(b, False)
    fh.remember_file(a, True)
    assert [f.short_name() for f in fh.files] == ['a.xyz', 'b.xyz']
    assert len(fh) == 2
    assert not fh.files[1].ismolecule


def test_max_files(test_session, tmp_path):
    fh = test_session.file_history
    for i in range(FileHistory.max_files + 3):
        fh.remember_file(make_file(tmp_path, 'f%d.xyz' % i), True)
    assert len(fh) == FileHistory.max_files
    assert fh.files[0].short_name() == 'f%d.xyz' % (FileHistory.max_files + 2)


def test_trigger(test_session, tmp_path):
    changes = []
    test_session.triggers.add_handler('file history changed',
                                      lambda name, files: changes.append(len(files)))
    fh = test_session.file_history
    fh.remember_file(make_file(tmp_path, 'a.xyz'), True)
    fh.clear()
    fh.clear()
    assert changes == [1, 0]


def test_history_persists(test_session, tmp_path):
    from critic2gui.session import Session
    a = make_file(tmp_path, 'a.xyz')
    b = make_file(tmp_path, 'b.xyz')
    test_session.file_history.remember_file(a, True)
    test_session.file_history.remember_file(b, False)
    os.remove(a)
    ses = Session('critic2', app_dirs=test_session.app_dirs)
    files = ses.file_history.files
    assert [f.path for f in files] == [b]
    assert not files[0].ismolecule


def test_file_spec_state():
    f = FileSpec('/data/water.xyz', True)
    g = FileSpec.from_state(json.loads(json.dumps(f.state())))
    assert (g.path, g.ismolecule, g.access_time) == (f.path, f.ismolecule, f.access_time)


def test_unreadable_cache(test_session, test_log):
    cache = ObjectCache(test_session, 'broken.json')
    with open(cache.filename, 'w') as f:
        f.write('{not json')
    assert cache.load() is None
    assert os.path.exists(cache.filename + '.bak')
    assert not os.path.exists(cache.filename)
    assert 'Could not read' in test_log.text(Log.LEVEL_WARNING)


def test_no_app_dirs():
    from critic2gui.session import Session
    ses = Session('critic2')
    fh = ses.file_history
    fh.remember_file('/nonexistent/a.xyz', True)
    assert len(fh) == 1
    assert ObjectCache(ses, 'x.json').load() is None


def test_bad_entry_keeps_others(test_session, tmp_path):
    from critic2gui.session import Session
    a = make_file(tmp_path, 'a.xyz')
    b = make_file(tmp_path, 'b.xyz')
    data = {'version': 1, 'files': [
        {'path': a, 'ismolecule': True, 'access_time': 2.0},
        {'path': 'broken.xyz'},
        {'path': b, 'ismolecule': False, 'access_time': 1.0},
    ]}
    with open(test_session.file_history._cache.filename, 'w') as f:
        json.dump(data, f)
    ses = Session('critic2', app_dirs=test_session.app_dirs)
    assert [f.path for f in ses.file_history.files] == [a, b]
