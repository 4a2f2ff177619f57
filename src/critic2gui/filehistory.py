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
filehistory: Recently opened structure files
============================================

The history is kept as JSON in the user's data directory so that it
survives between sessions.  It can be removed and the application will
still work.
"""


class ObjectCache:
    """Maintain an object in a JSON file in the application data directory.

    Parameters
    ----------
    session : :py:class:`~critic2gui.session.Session` instance
    tag : str, a unique tag to identify the cache
    """

    def __init__(self, session, tag):
        import os
        self.session = session
        dirs = getattr(session, 'app_dirs', None)
        self.filename = None if dirs is None else os.path.join(dirs.user_data_dir, tag)

    def load(self):
        """Return deserialized object from cache file, None if there is none.

        An unreadable file is renamed with a .bak suffix and reported.
        """
        import json
        import os
        if self.filename is None or not os.path.exists(self.filename):
            return None
        try:
            with open(self.filename, encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            backup = self.filename + '.bak'
            os.replace(self.filename, backup)
            self.session.logger.warning('Could not read %s (%s), moved it to %s'
                                        % (self.filename, e, backup))
            return None

    def save(self, obj):
        if self.filename is None:
            return
        import json
        from .safesave import SaveTextFile
        with SaveTextFile(self.filename) as f:
            json.dump(obj, f, ensure_ascii=False)


class FileSpec:
    def __init__(self, path, ismolecule):
        self.path = path
        self.ismolecule = ismolecule
        self.access_time = None
        self.set_access_time()

    def set_access_time(self):
        from time import time
        self.access_time = time()

    def short_name(self):
        from os.path import basename
        return basename(self.path)

    def state(self):
        return {k:getattr(self,k) for k in ('path', 'ismolecule', 'access_time')}

    @classmethod
    def from_state(cls, state):
        f = cls(state['path'], bool(state['ismolecule']))
        f.access_time = float(state['access_time'])
        return f


class FileHistory:
    '''Most recently opened files first.  Fires 'file history changed'.'''

    version = 1
    max_files = 10

    def __init__(self, session):
        self.session = session
        self._cache = ObjectCache(session, 'file_history.json')
        session.triggers.add_trigger('file history changed')
        self._files = self.load_history()

    @property
    def files(self):
        return list(self._files)

    def __len__(self):
        return len(self._files)

    def remember_file(self, path, ismolecule):
        from os.path import abspath
        apath = abspath(path)
        self._files = [f for f in self._files if f.path != apath]
        self._files.insert(0, FileSpec(apath, ismolecule))
        del self._files[self.max_files:]
        self._changed()

    def clear(self):
        if self._files:
            self._files = []
            self._changed()

    def load_history(self):
        from os.path import isfile
        data = self._cache.load()
        if not isinstance(data, dict):
            return []
        files = []
        for state in data.get('files', []):
            try:
                fs = FileSpec.from_state(state)
            except (KeyError, TypeError, ValueError) as e:
                self.session.logger.warning('Ignoring bad file history entry: %s' % e)
                continue
            if isfile(fs.path):
                files.append(fs)
        files.sort(key = lambda f: f.access_time, reverse = True)
        return files[:self.max_files]

    def save_history(self):
        data = {
            'version': self.version,
            'files': [f.state() for f in self._files],
        }
        self._cache.save(data)

    def _changed(self):
        self.save_history()
        self.session.triggers.activate_trigger('file history changed', self.files)
