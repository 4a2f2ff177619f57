import os

import pytest

from critic2gui import data_path
from critic2gui.errors import UserError
from critic2gui.library import Library, parse_library


def test_parse(data_dir):
    with open(os.path.join(data_dir, 'mixed.cri')) as f:
        structures = parse_library(f.read(), 'mixed.cri')
    assert [s.name for s in structures] == ['hydrogen', 'cesium chloride']
    h2, cscl = structures
    assert h2.ismolecule and h2.symbols == ['H', 'H']
    assert not cscl.ismolecule
    assert cscl.symbols == ['Cs', 'Cl']
    assert cscl.coords[1] == pytest.approx((2.0615, 2.0615, 2.0615))


def test_unnamed_block():
    s = parse_library('molecule\n He 0 0 0\nendmolecule\n')
    assert s[0].name == 'molecule 1'


@pytest.mark.parametrize("text, line, message", [
    ("atom 1 2 3\n", 1, 'expected "crystal" or "molecule"'),
    ("crystal x\n  neq 0 0 0 C\nendcrystal\n", 3, 'has no cell line'),
    ("crystal x\n  cell 1 1 1 90 90\nendcrystal\n", 2, 'cell needs 3 lengths'),
    ("molecule m\n  C 0 0 zero\nendmolecule\n", 2, 'expected numbers'),
    ("molecule m\n  C 0 0 0\n", 2, 'missing "endmolecule"'),
    ("molecule m\n  C 0 0 0\nendcrystal\n", 3, 'unexpected "endcrystal"'),
    ("crystal c\n  cell 1 1 1 90 90 90\n  spg Fm-3m\nendcrystal\n", 3, 'unknown keyword'),
    ("crystal x\n  cell 0 0 0 90 90 90\nendcrystal\n", 1, 'Cell lengths must be positive'),
    ("crystal x\n  cell 4 -4 4 90 90 90\nendcrystal\n", 1, 'Cell lengths must be positive'),
])
def test_parse_errors(text, line, message):
    with pytest.raises(UserError) as e:
        parse_library(text, 'test.lib')
    assert str(e.value).startswith('test.lib:%d:' % line)
    assert message in str(e.value)


def test_bundled_libraries():
    crystals = Library(data_path('crystal.lib'), 'crystal')
    assert crystals.names() == ['diamond', 'silicon', 'NaCl', 'copper', 'graphite']
    molecules = Library(data_path('molecule.lib'), 'molecule')
    assert molecules.names() == ['water', 'ammonia', 'methane', 'benzene']
    assert molecules.structure(1).name == 'water'
    assert len(molecules.structure(4).bonds()) == 12


def test_library_index(data_dir):
    lib = Library(os.path.join(data_dir, 'mixed.cri'), 'crystal')
    assert len(lib) == 1
    with pytest.raises(UserError):
        lib.structure(0)
    with pytest.raises(UserError):
        lib.structure(2)


def test_missing_library(tmp_path):
    with pytest.raises(UserError):
        Library(str(tmp_path / 'none.lib'), 'crystal')
    with pytest.raises(ValueError):
        Library(data_path('crystal.lib'), 'polymer')


def test_library_not_utf8(tmp_path):
    p = tmp_path / 'binary.lib'
    p.write_bytes(b'\xff\xfe\x00crystal')
    with pytest.raises(UserError) as e:
        Library(str(p), 'crystal')
    assert 'not UTF-8 text' in str(e.value)
