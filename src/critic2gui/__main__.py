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
Start the critic2 GUI.

Usage: critic2-gui [--nogui] [--preview] [--usedefaults] [--debug] [--exit]
                   [--help] [--version] [structure files]
"""

import logging
import os
import sys

from critic2gui import app_name, app_author, __version__


class Opts:

    def __init__(self):
        self.help = False
        self.debug = False
        self.event_loop = True
        self.gui = True
        self.preview = False
        self.silent = False
        self.use_defaults = False
        self.version = False


arguments = [
    "--debug",
    "--exit",   # No event loop
    "--nogui",
    "--help",
    "--preview",
    "--silent",
    "--usedefaults",
    "--version",
]


def parse_arguments(argv):
    import getopt
    usage = '[' + "] [".join(arguments) + '] [structure files]'
    longopts = [a[2:] for a in arguments] + ["nodebug", "noexit", "gui", "nosilent"]
    try:
        options, args = getopt.getopt(argv[1:], "", longopts)
    except getopt.error as message:
        print("%s: %s" % (argv[0], message), file=sys.stderr)
        print("usage: %s %s\n" % (argv[0], usage), file=sys.stderr)
        raise SystemExit(os.EX_USAGE)

    opts = Opts()
    for opt, optarg in options:
        if opt in ("--debug", "--nodebug"):
            opts.debug = opt[2] == 'd'
        elif opt in ("--exit", "--noexit"):
            opts.event_loop = opt[2] != 'e'
        elif opt == "--help":
            opts.help = True
        elif opt in ("--gui", "--nogui"):
            opts.gui = opt[2] == 'g'
        elif opt == "--preview":
            opts.preview = True
        elif opt in ("--silent", "--nosilent"):
            opts.silent = opt[2] == 's'
        elif opt == "--usedefaults":
            opts.use_defaults = True
        elif opt == "--version":
            opts.version = True
    if opts.help:
        print("usage: %s %s\n" % (argv[0], usage))
        raise SystemExit(os.EX_USAGE)
    if opts.version:
        opts.gui = False
    return opts, args


def make_app_dirs():
    """Create the per-user directories, returns the AppDirs instance."""
    from packaging.version import Version
    import appdirs
    import critic2gui
    ver = Version(__version__)
    partial_version = "%d.%d" % (ver.major, ver.minor)
    critic2gui.app_dirs = ad = appdirs.AppDirs(app_name, appauthor=app_author,
                                                version=partial_version)
    critic2gui.app_dirs_unversioned = appdirs.AppDirs(app_name, appauthor=app_author)
    for var, name in (
            ('user_data_dir', "user's data"),
            ('user_config_dir', "user's configuration")):
        directory = getattr(ad, var)
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            print("Unable to make %s directory: %s: %s" % (
                name, e.strerror, e.filename), file=sys.stderr)
            return None
    return ad


def init(argv, event_loop=True):
    opts, args = parse_arguments(argv)

    if opts.version:
        print("%s %s" % (app_name, __version__))
        return os.EX_OK

    if opts.use_defaults:
        from critic2gui import configfile
        configfile.only_use_defaults = True

    ad = make_app_dirs()
    if ad is None:
        return os.EX_CANTCREAT

    if bool(os.getenv("DEBUG")) or opts.debug:
        logging.basicConfig(
            level=logging.INFO,
            format="%(levelname)s:%(message)s",
            handlers=[logging.StreamHandler(sys.stdout)]
        )

    from critic2gui import session
    sess = session.Session(app_name, app_dirs=ad, debug=opts.debug,
                           silent=opts.silent, preview=opts.preview)

    # initialize the user interface
    # sets up logging
    if opts.gui:
        from critic2gui.ui import gui
        sess.ui = gui.UI(sess)
    else:
        from critic2gui.logger import NoGuiLog
        sess.logger.add_log(NoGuiLog())

    if args:
        sess.open_files(args)
        if not opts.gui and sess.critic2.structure is not None:
            sess.logger.info(sess.critic2.structure.info())

    if opts.gui and event_loop and opts.event_loop:
        try:
            return sess.ui.event_loop()
        except SystemExit as e:
            return e.code
        except Exception:
            import traceback
            traceback.print_exc()
            return os.EX_SOFTWARE
    elif opts.gui:
        sess.ui.quit()  # Clean up gui to avoid errors at exit.
    return os.EX_OK


def main():
    raise SystemExit(init(sys.argv))


if __name__ == '__main__':
    main()
