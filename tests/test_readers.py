import os

import pytest
from numpy import allclose

from critic2gui.errors import UserError
from critic2gui.readers import read_structure, structure_format


def test_formats():
    assert structure_format('/a/b/water.XYZ') == 'xyz'
    assert structure_format('POSCAR') == 'vasp'
    assert structure_format('CONTCAR_relaxed') == 'vasp'
    assert structure_format('si.vasp') == 'vasp'
    assert structure_format('x.incritic') == 'critic2'
    assert structure_format('x.pdb') is None


def test_read_xyz(data_dir):
    path = os.path.join(data_dir, 'water.xyz')
    s = read_structure(path, True)
    assert s.ismolecule
    assert s.name == 'water'
    assert s.symbols == ['O', 'H', 'H']
    assert s.source_path == path
    with pytest.raises(UserError):
        read_structure(path, False)


def test_read_poscar(data_dir):
    path = os.path.join(data_dir, 'POSCAR')
    s = read_structure(path, False)
    assert not s.ismolecule
    assert s.num_atoms == 8
    assert s.box_xmaxclen == pytest.approx(5.43095)
    assert allclose(s.coords[4], (0.25*5.43095,)*3)
    m = read_structure(path, True)
    assert m.ismolecule and m.lattice is None


def test_read_critic2_file(data_dir):
    path = os.path.join(data_dir, 'mixed.cri')
    assert read_structure(path, True).name == 'hydrogen'
    assert read_structure(path, False).name == 'cesium chloride'


def test_bad_files(tmp_path):
    p = tmp_path / 'bad.xyz'
    p.write_text('2\ncomment\nC 0 0 0\n')
    with pytest.raises(UserError):
        read_structure(str(p), True)
    p = tmp_path / 'bad.vasp'
    p.write_text('title\n1.0\n1 0 0\n0 1 0\n')
    with pytest.raises(UserError):
        read_structure(str(p), False)
    with pytest.raises(UserError):
        read_structure(str(tmp_path / 'missing.xyz'), True)
    with pytest.raises(UserError):
        read_structure(str(tmp_path / 'x.pdb'), True)
    p = tmp_path / 'latin.xyz'
    p.write_bytes(b'1\n\xe9t\xe9\nH 0 0 0\n')
    with pytest.raises(UserError):
        read_structure(str(p), True)


def test_molecule_only_file_as_crystal(tmp_path):
    p = tmp_path / 'm.cri'
    p.write_text('molecule m\n He 0 0 0\nendmolecule\n')
    with pytest.raises(UserError):
        read_structure(str(p), False)
