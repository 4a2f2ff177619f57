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
logger: application log support
===============================

Support classes for logging messages.  Producers call the
:py:class:`Logger` methods; consumers derive from :py:class:`PlainTextLog`
and add themselves to the logger.
"""


class Log:
    """Base class for logs.

    Attributes
    ----------
    LEVEL_BUG : for bugs
    LEVEL_ERROR : for other error messages
    LEVEL_INFO : for informational messages
    LEVEL_WARNING : for warning messages
    """

    # log levels
    LEVEL_INFO = 0
    LEVEL_WARNING = 1
    LEVEL_ERROR = 2
    LEVEL_BUG = 3

    LEVEL_DESCRIPTS = ["note", "warning", "error", "bug"]

    # if excludes_other_logs is True, then if this log consumed the
    # message (log() returned True) downstream logs will not get
    # the message
    excludes_other_logs = False

    def status(self, msg, color, secondary):
        """Show a status message.

        Returns True if the routine displayed/handled the status,
        False otherwise.  A log is free to ignore status messages.
        """
        return False

    def log(self, level, msg):
        """Log a message.

        Must be overriden by subclass.

        Parameters
        ----------
        level : LEVEL_XXX constant from :py:class:`Log` base class
            How important the message is (*e.g.*, error, warning, info)
        msg : text
            Message to log

        Returns
        -------
        True if the routine displayed/handled the log message, False otherwise.
        """
        raise NotImplementedError


class PlainTextLog(Log):
    """Base class for logs that support only plain text output"""

    def log(self, level, msg):
        return False


class StringPlainTextLog(PlainTextLog):
    """Capture plain text messages in a string

    Used as a context manager::

        with StringPlainTextLog(session.logger) as log:
            ...
            text = log.getvalue()
    """

    excludes_other_logs = True

    def __init__(self, logger):
        super().__init__()
        self._msgs = []
        self.logger = logger

    def __enter__(self):
        self.logger.add_log(self)
        return self

    def __exit__(self, *exc_info):
        self.logger.remove_log(self)

    def log(self, level, msg):
        self._msgs.append(msg)
        return True

    def getvalue(self):
        return ''.join(self._msgs)


class NoGuiLog(PlainTextLog):
    """Log to stdout/stderr when running without a graphical interface."""

    def log(self, level, msg):
        import sys
        f = sys.stdout if level == Log.LEVEL_INFO else sys.stderr
        if level == Log.LEVEL_INFO:
            print(msg, end='', file=f, flush=True)
        else:
            print("%s:\n%s" % (Log.LEVEL_DESCRIPTS[level].upper(), msg),
                  end='', file=f, flush=True)
        return True

    def status(self, msg, color, secondary):
        if secondary:
            return False
        if msg:
            print("STATUS:\n%s" % msg, flush=True)
        return True


class Logger:
    """Log/status message dispatcher

    Log/status message producers use the
    :py:meth:`error`/
    :py:meth:`warning`/
    :py:meth:`info`/
    :py:meth:`status` methods
    to send messages to a log.  The message will be sent to the log at the
    top of the log stack and then each other log in order.

    Message consumers must inherit from :py:class:`PlainTextLog` and
    register themselves with the Logger's :py:meth:`add_log` method,
    which will put them at the top of the log stack.  When no longer
    interested in receiving log messages they should deregister themselves
    with the :py:meth:`remove_log` method.
    """

    def __init__(self, session):
        self.session = session
        self.logs = []
        self.method_map = {
            Log.LEVEL_BUG: self.bug,
            Log.LEVEL_ERROR: self.error,
            Log.LEVEL_WARNING: self.warning,
            Log.LEVEL_INFO: self.info
        }

    def add_log(self, log):
        """Add a log to the top of the log stack"""
        if not isinstance(log, PlainTextLog):
            raise ValueError("Cannot add log that is not instance of PlainTextLog")
        if log in self.logs:
            self.logs.remove(log)
        self.logs.append(log)

    def remove_log(self, log):
        """Remove a log"""
        if log in self.logs:
            self.logs.remove(log)

    def clear(self):
        """Remove all logs"""
        self.logs.clear()

    def bug(self, msg, add_newline=True):
        """Log a bug"""
        import sys
        self._log(Log.LEVEL_BUG, msg, add_newline, last_resort=sys.__stderr__)

    def error(self, msg, add_newline=True):
        """Log an error message

        Parameters
        ----------
        msg : text
            Message to log
        add_newline : boolean
            Whether to add a newline to the message before logging it
        """
        import sys
        self._log(Log.LEVEL_ERROR, msg, add_newline, last_resort=sys.__stderr__)

    def warning(self, msg, add_newline=True):
        """Log a warning message

        The parameters are the same as for the :py:meth:`error` method.
        """
        if self.session.silent:
            return
        import sys
        self._log(Log.LEVEL_WARNING, msg, add_newline, last_resort=sys.__stderr__)

    def info(self, msg, add_newline=True):
        """Log an info message

        The parameters are the same as for the :py:meth:`error` method.
        """
        if self.session.silent:
            return
        import sys
        self._log(Log.LEVEL_INFO, msg, add_newline, last_resort=sys.__stdout__)

    def status(self, msg, color="black", log=False, secondary=False):
        """Show status."""
        if self.session.silent:
            return
        if log:
            self.info(msg)
        for l in reversed(self.logs):
            if l.status(msg, color, secondary) and l.excludes_other_logs:
                break

    def report_exception(self, preface=None, exc_info=None):
        """Report the current exception (without changing execution context)

        Errors derived from NotABug are logged as plain errors; anything
        else is reported as a bug with its traceback.
        """
        from .errors import NotABug, CancelOperation
        from traceback import format_exception
        if exc_info is not None:
            ei = exc_info
        else:
            import sys
            ei = sys.exc_info()
        preface = "%s:\n" % preface if preface else ""

        exception_value = ei[1]
        if isinstance(exception_value, NotABug):
            self.error("%s%s" % (preface, exception_value))
        elif isinstance(exception_value, CancelOperation):
            pass  # Cancelled operations are not reported
        else:
            tb = "".join(format_exception(ei[0], ei[1], ei[2]))
            self.bug("%s%s" % (preface, tb))

    def _log(self, level, msg, add_newline, last_resort=None):
        if add_newline:
            msg += "\n"
        consumed = False
        for log in reversed(self.logs):
            if log.log(level, msg):
                consumed = True
                if log.excludes_other_logs:
                    break
        if not consumed and last_resort:
            msg = "%s:\n%s" % (Log.LEVEL_DESCRIPTS[level].upper(), msg)
            last_resort.write(msg)
