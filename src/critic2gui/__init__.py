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
critic2gui: graphical front-end for critic2
===========================================

Menu bar, key bindings and structure viewer for the critic2 program
for the analysis of crystal and molecular structures.
"""

__version__ = "0.3.0"

app_name = "critic2"
app_author = "critic2"

# Set by __main__.init() (or by tests) to appdirs.AppDirs instances.
app_dirs = None
app_dirs_unversioned = None


def data_path(filename):
    """Return the path of a data file shipped with the package."""
    import os.path
    return os.path.join(os.path.dirname(__file__), 'data', filename)
