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

'''
readers: Read structure files
=============================

Formats are chosen from the file name suffix:

    .xyz                        molecule, XYZ format
    POSCAR, CONTCAR, .vasp      crystal, VASP format
    .cri, .incritic, .lib       critic2 input syntax, first structure

A crystal file can be read as a molecule, dropping the unit cell.
'''

import os

from .errors import UserError
from .structure import Structure, element_symbol


def structure_format(path):
    base = os.path.basename(path)
    suffix = os.path.splitext(base)[1].lower()
    if suffix == '.xyz':
        return 'xyz'
    if base.upper().startswith(('POSCAR', 'CONTCAR')) or suffix == '.vasp':
        return 'vasp'
    if suffix in ('.cri', '.incritic', '.lib'):
        return 'critic2'
    return None


def read_structure(path, ismolecule):
    fmt = structure_format(path)
    if fmt is None:
        raise UserError('Unrecognized structure file format: %s' % path)
    if fmt == 'xyz' and not ismolecule:
        raise UserError('A crystal cannot be read from an xyz file: %s' % path)
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise UserError('Cannot read %s: %s' % (path, e.strerror))
    except UnicodeDecodeError as e:
        raise UserError('%s is not UTF-8 text: %s' % (path, e.reason))

    name = os.path.basename(path)
    if fmt == 'xyz':
        s = read_xyz(text, name)
    elif fmt == 'vasp':
        s = read_vasp(text, name)
    else:
        from .library import parse_library
        structures = parse_library(text, path)
        if not structures:
            raise UserError('No structures in %s' % path)
        choice = [st for st in structures if st.ismolecule == ismolecule]
        s = choice[0] if choice else structures[0]
    if ismolecule and not s.ismolecule:
        s = s.as_molecule()
    if not ismolecule and s.ismolecule:
        raise UserError('No crystal structure in %s' % path)
    s.source_path = path
    return s


def read_xyz(text, name):
    lines = text.splitlines()
    try:
        n = int(lines[0].split()[0])
    except (IndexError, ValueError):
        raise UserError('%s: first line must be the number of atoms' % name)
    if len(lines) < n + 2:
        raise UserError('%s: expected %d atoms, file has %d lines' % (name, n, len(lines)))
    symbols, xyz = [], []
    for lnum in range(2, n+2):
        fields = lines[lnum].split()
        try:
            symbols.append(element_symbol(fields[0]))
            xyz.append([float(f) for f in fields[1:4]])
        except (IndexError, ValueError):
            raise UserError('%s:%d: bad atom line "%s"' % (name, lnum+1, lines[lnum]))
        if len(xyz[-1]) != 3:
            raise UserError('%s:%d: bad atom line "%s"' % (name, lnum+1, lines[lnum]))
    title = lines[1].strip()
    return Structure(title or name, True, symbols, xyz)


def read_vasp(text, name):
    from numpy import array, float64, dot
    lines = [l.strip() for l in text.splitlines()]

    def bad(lnum, what):
        return UserError('%s:%d: %s' % (name, lnum+1, what))

    try:
        scale = float(lines[1].split()[0])
        lattice = array([[float(f) for f in lines[i].split()[:3]] for i in (2,3,4)], float64)
    except (IndexError, ValueError):
        raise bad(1, 'bad scale factor or lattice vectors')
    if lattice.shape != (3,3):
        raise bad(2, 'bad lattice vectors')
    if scale < 0:
        # negative scale is the cell volume
        from numpy.linalg import det
        scale = (-scale/abs(det(lattice)))**(1/3)
    lattice *= scale

    i = 5
    fields = lines[i].split() if i < len(lines) else []
    if fields and not fields[0].isdigit():
        elements = fields
        i += 1
    else:
        # vasp 4, element names may be on the title line
        elements = lines[0].split()
    try:
        counts = [int(f) for f in lines[i].split()]
    except (IndexError, ValueError):
        raise bad(i, 'bad atom counts')
    if len(elements) < len(counts):
        raise bad(i, 'element names are missing')
    i += 1
    if i < len(lines) and lines[i][:1] in ('s', 'S'):
        i += 1	# selective dynamics
    if i >= len(lines):
        raise bad(i, 'missing coordinates')
    cartesian = lines[i][:1] in ('c', 'C', 'k', 'K')
    i += 1

    symbols = []
    for e, c in zip(elements, counts):
        try:
            symbols.extend([element_symbol(e)] * c)
        except ValueError as err:
            raise bad(5, str(err))
    n = len(symbols)
    if n == 0:
        raise bad(i, 'no atoms')
    try:
        pos = array([[float(f) for f in lines[i+k].split()[:3]] for k in range(n)], float64)
    except (IndexError, ValueError):
        raise bad(i, 'expected %d atom positions' % n)
    if cartesian:
        xyz = pos*scale
    else:
        xyz = dot(pos, lattice)
    title = lines[0] or name
    return Structure(title, False, symbols, xyz, lattice)
