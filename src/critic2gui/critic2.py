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
critic2: Structures in the scene and calls to the critic2 program
=================================================================

The menus and windows load structures and run calculations through the
session's :py:class:`Critic2` instance, session.critic2.  Calculations run
the critic2 executable on an input file written from the current
structure.  Loading or changing the structure fires the
'structure changed' trigger with the new structure (None when cleared).
"""

import re

from .errors import UserError, LimitationError, ExternalProgramError
from .library import Library, KIND_CRYSTAL, KIND_MOLECULE

cp_types = {-3: 'nucleus', -1: 'bond', 1: 'ring', 3: 'cage'}

_signature = re.compile(r'\(\s*3\s*,\s*([+-]?[13])\s*\)')
_float = re.compile(r'^[-+]?(\d+\.\d*|\.\d+|\d+)([eEdD][-+]?\d+)?$')


class CriticalPoint:
    def __init__(self, index, signature, position):
        self.index = index
        self.signature = signature	# -3, -1, 1 or 3
        self.position = tuple(position)	# crystallographic (crystal) or angstrom

    @property
    def type(self):
        return cp_types[self.signature]

    def __str__(self):
        return '%d %s (3,%+d) %.5f %.5f %.5f' % ((self.index, self.type, self.signature)
                                                + self.position)

    def __repr__(self):
        return 'CriticalPoint(%d, %d, %r)' % (self.index, self.signature, self.position)


def parse_critical_points(output):
    '''
    Critical points in the final report of the critic2 automatic search
    output.  The position is the first three numbers after the (3,s)
    signature of each line.
    '''
    start = output.find('final report')
    if start < 0:
        return []
    cps = []
    for line in output[start:].splitlines()[1:]:
        if not line.strip():
            if cps:
                break
            continue
        m = _signature.search(line)
        if m is None:
            continue
        nums = [float(f.replace('d', 'e').replace('D', 'e'))
                for f in line[m.end():].split() if _float.match(f)]
        if len(nums) < 3:
            continue
        cps.append(CriticalPoint(len(cps)+1, int(m.group(1)), nums[:3]))
    return cps


class Critic2:

    def __init__(self, session):
        self.session = session
        self.structure = None
        self._libraries = {}	# kind -> (path, Library or None)
        session.triggers.add_trigger('structure changed')

    # Libraries

    def library_path(self, kind):
        path = getattr(self.session.settings, '%s_library' % kind, '')
        if not path:
            from . import data_path
            path = data_path('%s.lib' % kind)
        return path

    def library(self, kind):
        '''The library of this kind, None if it cannot be read.'''
        path = self.library_path(kind)
        cached = self._libraries.get(kind)
        if cached is not None and cached[0] == path:
            return cached[1]
        try:
            lib = Library(path, kind)
        except UserError as e:
            self.session.logger.warning(str(e))
            lib = None
        self._libraries[kind] = (path, lib)
        return lib

    def lib_names(self, kind):
        lib = self.library(kind)
        return [] if lib is None else lib.names()

    def set_library_file(self, path, kind):
        lib = Library(path, kind)
        self._libraries[kind] = (path, lib)
        s = self.session.settings
        if not s._use_defaults():
            setattr(s, '%s_library' % kind, path)
        self.session.logger.info('%s library %s: %d structures'
                                 % (kind.capitalize(), path, len(lib)))

    # Structures

    def open_structure_from_library(self, index, ismolecule):
        '''Index is 1-based, in library order.'''
        kind = KIND_MOLECULE if ismolecule else KIND_CRYSTAL
        lib = self.library(kind)
        if lib is None:
            raise UserError('No %s library is available' % kind)
        from copy import deepcopy
        s = deepcopy(lib.structure(index))
        s.source_path = lib.path
        self._set_structure(s)
        return s

    def open_structure(self, path, ismolecule):
        from .readers import read_structure
        s = read_structure(path, ismolecule)
        self._set_structure(s)
        fh = getattr(self.session, 'file_history', None)
        if fh is not None:
            fh.remember_file(path, ismolecule)
        return s

    def new_structure(self, ismolecule, name=None):
        '''An empty molecule, or an empty crystal with a 10 angstrom cubic cell.'''
        from .structure import Structure
        if ismolecule:
            s = Structure(name or 'New molecule', True)
        else:
            from numpy import identity
            s = Structure(name or 'New crystal', False, lattice=10*identity(3))
        self._set_structure(s)
        return s

    def clear_scene(self, reset):
        '''Remove the structure.  If reset, also restore the default view.'''
        self.structure = None
        if reset:
            ui = self.session.ui_state
            for flag in ('show_atoms', 'show_bonds', 'show_cell', 'show_cps'):
                setattr(ui, flag, True)
            self.session.camera.reset((0,0,0), 10)
        self.session.triggers.activate_trigger('structure changed', None)

    def _set_structure(self, s):
        self.structure = s
        self.session.logger.status('Loaded %s (%d atoms)' % (s.name, s.num_atoms))
        self.session.triggers.activate_trigger('structure changed', s)

    # Calculations

    def executable(self):
        exe = self.session.settings.critic2_executable
        if exe:
            import os
            if not os.access(exe, os.X_OK):
                raise LimitationError('critic2 executable %s cannot be run' % exe)
            return exe
        import shutil
        exe = shutil.which('critic2')
        if exe is None:
            raise LimitationError('The critic2 program was not found.  Install it'
                                  ' or set its location in the settings.')
        return exe

    def call_auto(self):
        '''Find the critical points of the current structure.'''
        s = self.structure
        if s is None:
            raise UserError('No structure loaded')
        if s.num_atoms == 0:
            raise UserError('Structure %s has no atoms' % s.name)
        exe = self.executable()
        output = self.run_critic2(exe, s.critic2_block() + 'auto\n')
        cps = parse_critical_points(output)
        if not cps:
            raise ExternalProgramError('No critical points found in critic2 output')
        s.critical_points = cps
        self.session.ui_state.show_cps = True
        self.session.logger.info('Found %d non-equivalent critical points' % len(cps))
        self.session.triggers.activate_trigger('structure changed', s)
        return cps

    def run_critic2(self, exe, input_text):
        '''Run critic2 on input_text in a temporary directory, return its output.'''
        import os
        import subprocess
        from tempfile import TemporaryDirectory
        logger = self.session.logger
        with TemporaryDirectory(prefix = 'critic2gui_') as temp_dir:
            input_path = os.path.join(temp_dir, 'input.cri')
            with open(input_path, 'w', encoding='utf-8') as f:
                f.write(input_text)
            args = [exe, input_path]
            logger.status('Running %s in directory %s' % (exe, temp_dir))
            try:
                p = subprocess.run(args, capture_output = True, cwd = temp_dir)
            except OSError as e:
                raise ExternalProgramError('Could not run %s: %s' % (exe, e))
        out = p.stdout.decode('utf-8', errors='replace')
        err = p.stderr.decode('utf-8', errors='replace')
        if p.returncode != 0:
            msg = ('critic2 exited with error code %d\n\nCommand: %s\n\nstdout:\n%s'
                   % (p.returncode, ' '.join(args), out[-2000:]))
            raise ExternalProgramError(msg, stderr = err)
        return out
