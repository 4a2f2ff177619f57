from critic2gui.triggerset import TriggerSet, DEREGISTER, set_exception_reporter

import pytest


def test_handlers_called_in_order():
    ts = TriggerSet()
    ts.add_trigger('changed')
    calls = []
    ts.add_handler('changed', lambda name, data: calls.append((1, name, data)))
    ts.add_handler('changed', lambda name, data: calls.append((2, name, data)))
    ts.activate_trigger('changed', 'x')
    assert calls == [(1, 'changed', 'x'), (2, 'changed', 'x')]


def test_duplicate_and_missing_triggers():
    ts = TriggerSet()
    ts.add_trigger('changed')
    with pytest.raises(KeyError):
        ts.add_trigger('changed')
    with pytest.raises(KeyError):
        ts.add_handler('other', lambda n, d: None)
    with pytest.raises(KeyError):
        ts.activate_trigger('other', None)
    ts.activate_trigger('other', None, absent_okay=True)


def test_deregister():
    ts = TriggerSet()
    ts.add_trigger('changed')
    calls = []

    def once(name, data):
        calls.append(data)
        return DEREGISTER
    ts.add_handler('changed', once)
    assert ts.has_handlers('changed')
    ts.activate_trigger('changed', 1)
    ts.activate_trigger('changed', 2)
    assert calls == [1]
    assert not ts.has_handlers('changed')


def test_remove_handler():
    ts = TriggerSet()
    ts.add_trigger('changed')
    calls = []
    h = ts.add_handler('changed', lambda n, d: calls.append(d))
    ts.remove_handler(h)
    ts.activate_trigger('changed', 1)
    assert calls == []


def test_handler_added_during_activation():
    ts = TriggerSet()
    ts.add_trigger('changed')
    calls = []

    def adder(name, data):
        ts.add_handler('changed', lambda n, d: calls.append(('new', d)))
        calls.append(('adder', data))
        return DEREGISTER
    ts.add_handler('changed', adder)
    ts.activate_trigger('changed', 1)
    assert calls == [('adder', 1)]
    ts.activate_trigger('changed', 2)
    assert calls == [('adder', 1), ('new', 2)]


def test_block_trigger():
    ts = TriggerSet()
    ts.add_trigger('changed')
    calls = []
    ts.add_handler('changed', lambda n, d: calls.append(d))
    data = object()
    with ts.block_trigger('changed'):
        ts.activate_trigger('changed', data)
        ts.activate_trigger('changed', data)
        assert calls == []
    assert calls == [data]


def test_handler_error_reported():
    ts = TriggerSet()
    ts.add_trigger('changed')
    reports = []
    set_exception_reporter(reports.append)
    calls = []

    def bad(name, data):
        raise RuntimeError('bad handler')
    ts.add_handler('changed', bad)
    ts.add_handler('changed', lambda n, d: calls.append(d))
    ts.activate_trigger('changed', 1)
    assert reports == ['Error processing trigger "changed"']
    assert calls == [1]
