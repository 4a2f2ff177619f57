from math import tan, pi

import pytest
from numpy import allclose, dot, identity, array

from critic2gui.camera import Camera, rotation_matrix


def test_reset_frames_center():
    c = Camera()
    c.reset((1, 2, 3), 10)
    xy, depth = c.project([(1, 2, 3)], 400, 300)
    assert allclose(xy[0], (200, 150))
    assert depth[0] == pytest.approx(c.distance)
    fov = 45*pi/180
    assert c.distance == pytest.approx(5 + 5/tan(0.5*fov))


def test_zoom():
    c = Camera()
    c.reset((0, 0, 0), 10)
    d = c.distance
    c.zoom(1)
    assert c.distance == pytest.approx(0.9*d)
    c.zoom(-2)
    assert c.distance == pytest.approx(0.9*1.21*d)
    c.zoom(0)
    assert c.distance == pytest.approx(0.9*1.21*d)


def test_rotation_matrix():
    r = rotation_matrix((0, 1, 0), 90)
    assert allclose(dot(r, (0, 0, 1)), (1, 0, 0))
    assert allclose(dot(r, r.T), identity(3))
    assert allclose(rotation_matrix((0, 0, 0), 30), identity(3))


def test_rotate_drag():
    c = Camera()
    c.reset((0, 0, 0), 10)
    c.rotate(0, 0)
    assert allclose(c.rotation, identity(3))
    # horizontal drag of 180 pixels turns 90 degrees about the vertical axis
    c.rotate(180, 0)
    assert allclose(c.rotation, rotation_matrix((0, 1, 0), 90))


def test_translate():
    c = Camera()
    c.reset((0, 0, 0), 10)
    ps = c.pixel_size(500)
    c.translate(10, 20, 500)
    assert allclose(c.pan, (10*ps, -20*ps))
    xy, depth = c.project(array([(0, 0, 0)]), 500, 500)
    assert allclose(xy[0], (260, 270))


def test_point_behind_camera():
    c = Camera()
    c.reset((0, 0, 0), 10)
    xy, depth = c.project([(0, 0, 2*c.distance)], 100, 100)
    assert depth[0] < 0
