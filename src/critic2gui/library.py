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
library: Structure libraries
============================

A library file holds structures in critic2 input syntax::

    # comment
    crystal diamond
      cell 3.5668 3.5668 3.5668 90 90 90
      neq 0.00 0.00 0.00 C
      neq 0.25 0.25 0.25 C
    endcrystal

    molecule water
      O  0.000  0.000  0.117
      H  0.000  0.757 -0.469
      H  0.000 -0.757 -0.469
    endmolecule

Crystal atoms are given in fractional coordinates, molecule atoms in
angstroms.  Structures are listed in file order.
"""

from .errors import UserError
from .structure import Structure, element_symbol, lattice_from_parameters

KIND_CRYSTAL = 'crystal'
KIND_MOLECULE = 'molecule'
KINDS = (KIND_CRYSTAL, KIND_MOLECULE)


def parse_library(text, filename='<string>'):
    """Return the list of :py:class:`~critic2gui.structure.Structure` in text.

    Raises :py:class:`~critic2gui.errors.UserError` naming the file and line
    for malformed input.
    """
    structures = []
    block = None	# (kind, name, start line, cell, atom lines)

    def error(lnum, msg):
        return UserError('%s:%d: %s' % (filename, lnum, msg))

    def floats(fields, lnum):
        try:
            return [float(f) for f in fields]
        except ValueError:
            raise error(lnum, 'expected numbers, got "%s"' % ' '.join(fields))

    lnum = 0
    for lnum, line in enumerate(text.splitlines(), start=1):
        line = line.split('#', 1)[0].strip()
        if not line:
            continue
        fields = line.split()
        word = fields[0].lower()
        if block is None:
            if word not in KINDS:
                raise error(lnum, 'expected "crystal" or "molecule", got "%s"' % fields[0])
            name = ' '.join(fields[1:]) or '%s %d' % (word, len(structures)+1)
            block = (word, name, lnum, [], [])
            continue

        kind, name, start, cell, atoms = block
        if word == 'end' + kind:
            if kind == KIND_CRYSTAL:
                if not cell:
                    raise error(lnum, 'crystal "%s" has no cell line' % name)
                try:
                    lattice = lattice_from_parameters(*cell)
                except ValueError as e:
                    raise error(start, str(e))
                symbols = [a[0] for a in atoms]
                frac = [a[1] for a in atoms]
                s = Structure.from_fractional(name, symbols, frac, lattice)
            else:
                s = Structure(name, True, [a[0] for a in atoms], [a[1] for a in atoms])
            structures.append(s)
            block = None
        elif word in KINDS or word.startswith('end'):
            raise error(lnum, 'unexpected "%s" inside %s "%s"' % (fields[0], kind, name))
        elif kind == KIND_CRYSTAL and word == 'cell':
            if len(fields) != 7:
                raise error(lnum, 'cell needs 3 lengths and 3 angles')
            cell[:] = floats(fields[1:], lnum)
        elif kind == KIND_CRYSTAL and word == 'neq':
            if len(fields) < 5:
                raise error(lnum, 'neq needs x y z and an element')
            atoms.append((_element(fields[4], lnum, error), floats(fields[1:4], lnum)))
        elif kind == KIND_MOLECULE:
            if len(fields) < 4:
                raise error(lnum, 'atom needs an element and x y z')
            atoms.append((_element(fields[0], lnum, error), floats(fields[1:4], lnum)))
        else:
            raise error(lnum, 'unknown keyword "%s"' % fields[0])

    if block is not None:
        raise error(lnum, 'missing "end%s" for %s "%s" started on line %d'
                    % (block[0], block[0], block[1], block[2]))
    return structures


def _element(name, lnum, error):
    try:
        return element_symbol(name)
    except ValueError as e:
        raise error(lnum, str(e))


class Library:
    '''The structures of one kind in a library file.'''

    def __init__(self, path, kind):
        if kind not in KINDS:
            raise ValueError('Unknown library kind "%s"' % kind)
        self.path = path
        self.kind = kind
        try:
            with open(path, encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise UserError('Cannot read library file %s: %s' % (path, e.strerror))
        except UnicodeDecodeError as e:
            raise UserError('Library file %s is not UTF-8 text: %s' % (path, e.reason))
        ismol = (kind == KIND_MOLECULE)
        self.structures = [s for s in parse_library(text, path) if s.ismolecule == ismol]

    def names(self):
        return [s.name for s in self.structures]

    def __len__(self):
        return len(self.structures)

    def structure(self, index):
        '''Structure by 1-based index.'''
        if not 1 <= index <= len(self.structures):
            raise UserError('No structure %d in %s library %s'
                            % (index, self.kind, self.path))
        return self.structures[index-1]
