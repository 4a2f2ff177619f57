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
safesave: write settings and history files without clobbering them
===================================================================

Usage::

    with SaveTextFile(filename) as f:
        f.write(...)

The text goes to a temporary file next to *filename*, which replaces
*filename* only when the ``with`` block finishes without an exception.
"""
import os


class SaveTextFile:
    """Text file that replaces *filename* when closed without error.

    Parameters
    ----------
    filename : str
        Name of file.  Missing parent directories are created.
    encoding : str, optional
        Text file encoding (default is UTF-8)
    """

    def __init__(self, filename, encoding='utf-8'):
        save_dir = os.path.dirname(filename)
        if save_dir:
            os.makedirs(save_dir, exist_ok=True)
        self.name = filename
        # two GUIs saving at the same time must not share a temporary file
        self._tmp_filename = filename + "." + str(os.getpid()) + ".tmp"
        self._f = open(self._tmp_filename, 'w', encoding=encoding)

    def __enter__(self):
        return self._f

    def __exit__(self, exc_type, exc_value, traceback):
        if not self._f.closed:
            self._f.close()

        if self._tmp_filename is None:
            return

        if exc_type is not None:
            if os.path.exists(self._tmp_filename):
                os.unlink(self._tmp_filename)
            self._tmp_filename = None
            return

        try:
            os.replace(self._tmp_filename, self.name)
        except Exception:
            os.remove(self._tmp_filename)
            raise
        finally:
            self._tmp_filename = None

    def close(self, exception=None):
        """Close temporary file and rename it to desired filename

        If there is an exception, don't overwrite the file."""
        if exception is None:
            self.__exit__(None, None, None)
        else:
            self.__exit__(type(exception), exception, None)
