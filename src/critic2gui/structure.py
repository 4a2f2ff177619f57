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
structure: Atoms and unit cell of the current scene
===================================================

Coordinates are Cartesian, in angstroms.  A crystal also has lattice
vectors (rows of a 3 by 3 matrix); a molecule has none.
'''

from numpy import array, zeros, float64, dot

# Covalent radii (angstroms) used to find bonds
covalent_radii = {
    'H': 0.31, 'He': 0.28, 'Li': 1.28, 'Be': 0.96, 'B': 0.84, 'C': 0.76,
    'N': 0.71, 'O': 0.66, 'F': 0.57, 'Ne': 0.58, 'Na': 1.66, 'Mg': 1.41,
    'Al': 1.21, 'Si': 1.11, 'P': 1.07, 'S': 1.05, 'Cl': 1.02, 'Ar': 1.06,
    'K': 2.03, 'Ca': 1.76, 'Ti': 1.60, 'V': 1.53, 'Cr': 1.39, 'Mn': 1.39,
    'Fe': 1.32, 'Co': 1.26, 'Ni': 1.24, 'Cu': 1.32, 'Zn': 1.22, 'Ga': 1.22,
    'Ge': 1.20, 'As': 1.19, 'Se': 1.20, 'Br': 1.20, 'Kr': 1.16, 'Rb': 2.20,
    'Sr': 1.95, 'Zr': 1.75, 'Mo': 1.54, 'Ag': 1.45, 'Cd': 1.44, 'In': 1.42,
    'Sn': 1.39, 'Sb': 1.39, 'Te': 1.38, 'I': 1.39, 'Xe': 1.40, 'Cs': 2.44,
    'Ba': 2.15, 'Pt': 1.36, 'Au': 1.36, 'Hg': 1.32, 'Pb': 1.46, 'Bi': 1.48,
}
DEFAULT_RADIUS = 1.5
BOND_FACTOR = 1.2


def element_symbol(name):
    '''Normalize an element name such as "CL", "cl1" or "Cl" to "Cl".'''
    letters = ''.join(c for c in name if c.isalpha())[:2]
    if not letters:
        raise ValueError('Bad element name "%s"' % name)
    sym = letters[0].upper() + letters[1:].lower()
    if sym not in covalent_radii and sym[0] in covalent_radii:
        sym = sym[0]
    return sym


def lattice_from_parameters(a, b, c, alpha, beta, gamma):
    '''Lattice vectors (rows) from cell lengths and angles in degrees.'''
    from math import cos, sin, sqrt, radians
    if min(a, b, c) <= 0:
        raise ValueError('Cell lengths must be positive: %g %g %g' % (a, b, c))
    ca, cb, cg = cos(radians(alpha)), cos(radians(beta)), cos(radians(gamma))
    sg = sin(radians(gamma))
    v = 1 - ca*ca - cb*cb - cg*cg + 2*ca*cb*cg
    if v <= 0 or sg == 0:
        raise ValueError('Impossible cell angles %g %g %g' % (alpha, beta, gamma))
    return array(((a, 0, 0),
                  (b*cg, b*sg, 0),
                  (c*cb, c*(ca - cb*cg)/sg, c*sqrt(v)/sg)), float64)


def lattice_parameters(lattice):
    '''Cell lengths and angles (degrees) of lattice vectors (rows).'''
    from numpy.linalg import norm
    from math import acos, degrees
    a, b, c = (norm(v) for v in lattice)
    def angle(u, v):
        return degrees(acos(max(-1.0, min(1.0, dot(u, v)/(norm(u)*norm(v))))))
    return (a, b, c, angle(lattice[1], lattice[2]),
            angle(lattice[0], lattice[2]), angle(lattice[0], lattice[1]))


class Structure:

    def __init__(self, name, ismolecule, symbols=(), coords=None, lattice=None):
        self.name = name
        self.ismolecule = ismolecule
        self.symbols = list(symbols)
        if coords is None:
            coords = zeros((0,3), float64)
        self.coords = array(coords, float64).reshape((-1,3))
        if len(self.symbols) != len(self.coords):
            raise ValueError('%d element symbols for %d atoms'
                             % (len(self.symbols), len(self.coords)))
        if ismolecule:
            self.lattice = None
        else:
            if lattice is None:
                raise ValueError('Crystal %s has no unit cell' % name)
            self.lattice = array(lattice, float64).reshape((3,3))
        self.source_path = None
        self.critical_points = []

    @classmethod
    def from_fractional(cls, name, symbols, fractional, lattice):
        lattice = array(lattice, float64)
        xyz = dot(array(fractional, float64).reshape((-1,3)), lattice)
        return cls(name, False, symbols, xyz, lattice)

    @property
    def num_atoms(self):
        return len(self.symbols)

    @property
    def fractional(self):
        from numpy.linalg import inv
        if self.lattice is None:
            return None
        return dot(self.coords, inv(self.lattice))

    def as_molecule(self):
        '''Same atoms without the unit cell.'''
        return Structure(self.name, True, self.symbols, self.coords)

    def _cell_corners(self):
        l = self.lattice
        return array([i*l[0] + j*l[1] + k*l[2]
                      for i in (0,1) for j in (0,1) for k in (0,1)])

    @property
    def center(self):
        if self.lattice is not None:
            return 0.5*self.lattice.sum(axis=0)
        if self.num_atoms == 0:
            return zeros((3,), float64)
        return 0.5*(self.coords.min(axis=0) + self.coords.max(axis=0))

    @property
    def box_xmaxlen(self):
        '''Largest extent of the atoms along x, y or z.'''
        if self.num_atoms == 0:
            return 0.0
        return float((self.coords.max(axis=0) - self.coords.min(axis=0)).max())

    @property
    def box_xmaxclen(self):
        '''Largest extent of the unit cell along x, y or z.'''
        if self.lattice is None:
            return self.box_xmaxlen
        c = self._cell_corners()
        return float((c.max(axis=0) - c.min(axis=0)).max())

    def bonds(self):
        '''
        Pairs of atom indices (i < j) closer than 1.2 times the sum of their
        covalent radii.  Bonds across cell boundaries are not included.
        '''
        n = self.num_atoms
        if n < 2:
            return []
        from numpy import triu, nonzero, sqrt
        r = array([covalent_radii.get(s, DEFAULT_RADIUS) for s in self.symbols])
        d = self.coords[:,None,:] - self.coords[None,:,:]
        dist = sqrt((d*d).sum(axis=2))
        bonded = triu((dist > 1e-3) & (dist < BOND_FACTOR*(r[:,None] + r[None,:])), 1)
        i, j = nonzero(bonded)
        return list(zip(i.tolist(), j.tolist()))

    def cell_edges(self):
        '''The 12 unit cell edges as pairs of points, empty for molecules.'''
        if self.lattice is None:
            return []
        l = self.lattice
        o = zeros((3,), float64)
        edges = []
        for axis in range(3):
            others = [l[k] for k in range(3) if k != axis]
            for shift in (o, others[0], others[1], others[0] + others[1]):
                edges.append((shift, shift + l[axis]))
        return edges

    def formula(self):
        counts = {}
        for s in self.symbols:
            counts[s] = counts.get(s, 0) + 1
        return ''.join(s if n == 1 else '%s%d' % (s, n) for s, n in counts.items())

    def info(self):
        '''Text for the structure information window.'''
        lines = ['Name: %s' % self.name,
                 'Type: %s' % ('molecule' if self.ismolecule else 'crystal'),
                 'Formula: %s' % self.formula(),
                 'Number of atoms: %d' % self.num_atoms]
        if self.source_path:
            lines.append('File: %s' % self.source_path)
        if self.lattice is not None:
            a, b, c, al, be, ga = lattice_parameters(self.lattice)
            from numpy.linalg import det
            lines.append('Cell lengths (ang): %.5f %.5f %.5f' % (a, b, c))
            lines.append('Cell angles (deg): %.3f %.3f %.3f' % (al, be, ga))
            lines.append('Cell volume (ang^3): %.5f' % abs(det(self.lattice)))
        if self.critical_points:
            lines.append('Critical points: %d' % len(self.critical_points))
            for cp in self.critical_points:
                lines.append('  %s' % str(cp))
        return '\n'.join(lines)

    def critic2_block(self):
        '''The structure in critic2 input syntax.'''
        if self.lattice is None:
            lines = ['molecule']
            lines.extend('  %s %.8f %.8f %.8f' % (s, x, y, z)
                         for s, (x, y, z) in zip(self.symbols, self.coords))
            lines.append('endmolecule')
        else:
            lines = ['crystal',
                     '  cell %.8f %.8f %.8f %.6f %.6f %.6f'
                     % lattice_parameters(self.lattice)]
            lines.extend('  neq %.8f %.8f %.8f %s' % (x, y, z, s)
                         for s, (x, y, z) in zip(self.symbols, self.fractional))
            lines.append('endcrystal')
        return '\n'.join(lines) + '\n'
