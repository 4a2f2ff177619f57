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

"""
triggerset: Support for managing triggers and handlers
======================================================

A TriggerSet instance contains a set of named triggers, each of which
may have a number of handlers registered with it.  Activating a trigger
calls all its handlers, in the order of registration, as
``func(trigger_name, trigger_data)``.

Example
-------

::

    ts = TriggerSet()
    ts.add_trigger('structure changed')

    def report(trigger, structure):
        print(trigger, structure)

    h = ts.add_handler('structure changed', report)
    ts.activate_trigger('structure changed', s)
    ts.remove_handler(h)

If a handler returns the value DEREGISTER, then the handler will
be deregistered after it returns.
"""

from contextlib import contextmanager

DEREGISTER = "delete handler"
TRIGGER_ERROR = "Error processing trigger"


def _basic_report(msg):
    import sys
    import traceback
    sys.stdout.write(msg + "\n")
    traceback.print_exc(file=sys.stdout)


_report = _basic_report


def set_exception_reporter(f):
    global _report
    old = _report
    if f is None:
        _report = _basic_report
    else:
        _report = f
    return old


class _TriggerHandler:
    """Describes callback routine registered with _Trigger"""

    def __init__(self, name, func):
        self._name = name
        self._func = func

    def invoke(self, data):
        try:
            return self._func(self._name, data)
        except Exception:
            _report('%s "%s"' % (TRIGGER_ERROR, self._name))


class _Trigger:
    """Keep track of handlers to invoke when activated"""

    def __init__(self, name):
        self._name = name
        # dict keeps registration order
        self._handlers = {}
        self._pending_add = {}
        self._pending_del = set()
        self._locked = False
        self._blocked = 0
        self._need_activate = []

    def add(self, handler):
        if self._locked:
            self._pending_add[handler] = None
        else:
            self._handlers[handler] = None

    def delete(self, handler):
        if self._locked:
            if self._pending_add.pop(handler, False) is False:
                self._pending_del.add(handler)
        else:
            self._handlers.pop(handler, None)

    def activate(self, data):
        if self._blocked:
            # don't raise trigger multiple times for identical data
            if not any(d is data for d in self._need_activate):
                self._need_activate.append(data)
            return
        locked = self._locked
        self._locked = True
        try:
            for handler in list(self._handlers):
                if handler in self._pending_del:
                    continue
                ret = handler.invoke(data)
                if ret == DEREGISTER:
                    self._pending_del.add(handler)
        finally:
            self._locked = locked
        if not self._locked:
            for handler in self._pending_del:
                self._handlers.pop(handler, None)
            self._pending_del.clear()
            self._handlers.update(self._pending_add)
            self._pending_add.clear()

    def block(self):
        self._blocked += 1

    def release(self):
        if self._blocked <= 0:
            raise RuntimeError("more releases than blocks")
        self._blocked -= 1
        if self._blocked:
            return
        pending, self._need_activate = self._need_activate, []
        for data in pending:
            self.activate(data)

    def num_handlers(self):
        return (len(self._handlers) + len(self._pending_add)
                - len(self._pending_del))


class TriggerSet:
    """Keep track of related groups of triggers."""

    def __init__(self):
        self._triggers = {}

    def add_trigger(self, name):
        """Add a trigger with the given name.

        If a trigger by the same name already exists, an exception is raised.
        """
        if name in self._triggers:
            raise KeyError("Trigger '%s' already exists" % name)
        self._triggers[name] = _Trigger(name)

    def activate_trigger(self, name, data, absent_okay=False):
        """Invoke all handlers registered with the given name.

        During trigger activation, handlers may add new handlers or
        delete existing handlers.  These operations are deferred until
        after all handlers have been invoked.
        """
        try:
            trigger = self._triggers[name]
        except KeyError:
            if not absent_okay:
                raise
        else:
            trigger.activate(data)

    def add_handler(self, name, func):
        """Register a function with the trigger with the given name.

        Returns a handler for use with remove_handler.
        """
        if name not in self._triggers:
            raise KeyError("No trigger named '%s'" % name)
        handler = _TriggerHandler(name, func)
        self._triggers[name].add(handler)
        return handler

    def remove_handler(self, handler):
        self._triggers[handler._name].delete(handler)

    def has_handlers(self, name):
        return self._triggers[name].num_handlers() != 0

    @contextmanager
    def block_trigger(self, name):
        """Context manager to hold back activations of a trigger.

        Activations made while blocked are delivered, once per distinct
        data object, when the outermost block exits.
        """
        self._triggers[name].block()
        try:
            yield
        finally:
            self._triggers[name].release()
