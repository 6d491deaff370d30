import math

import numpy as np
import pytest

from kiwi.camera import Camera, look_at_rh, perspective_rh


def _project(matrix, point):
    clip = matrix @ np.append(np.asarray(point, dtype=float), 1.0)
    return clip[:3] / clip[3]


def test_perspective_depth_range():
    m = perspective_rh(math.pi / 2, 1.5, 0.1, 100.0)
    assert _project(m, [0.0, 0.0, -0.1])[2] == pytest.approx(0.0, abs=1e-9)
    assert _project(m, [0.0, 0.0, -100.0])[2] == pytest.approx(1.0)


def test_perspective_square_aspect_is_symmetric():
    m = perspective_rh(math.pi / 2, 1.0, 0.5, 10.0)
    x = _project(m, [3.0, 0.0, -3.0])[0]
    y = _project(m, [0.0, 3.0, -3.0])[1]
    assert x == pytest.approx(y)


def test_perspective_aspect_scales_x_only():
    narrow = perspective_rh(math.pi / 3, 1.0, 0.1, 10.0)
    wide = perspective_rh(math.pi / 3, 2.0, 0.1, 10.0)
    assert wide[0, 0] * 2 == pytest.approx(narrow[0, 0])
    assert wide[1, 1] == pytest.approx(narrow[1, 1])


def test_look_at_maps_eye_and_target():
    eye = np.array([1.0, 2.0, 3.0])
    target = np.array([4.0, 5.0, -1.0])
    v = look_at_rh(eye, target, [0.0, 1.0, 0.0])
    assert np.allclose(_project(v, eye), np.zeros(3))
    mapped = _project(v, target)
    assert mapped[2] == pytest.approx(-np.linalg.norm(target - eye))
    assert np.allclose(mapped[:2], np.zeros(2))
    rotation = v[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.eye(3))


def test_new_camera_defaults():
    cam = Camera(1.5, 0.1, 100.0)
    assert np.array_equal(cam.rot, np.zeros(2))
    assert np.array_equal(cam.position, np.zeros(3))
    assert np.allclose(cam.front(), [1.0, 0.0, 0.0])
    assert np.allclose(cam.projection(), perspective_rh(math.pi / 2, 1.5, 0.1, 100.0))
    assert np.isnan(cam.view()[:3]).all()


def test_resize_rebuilds_projection():
    cam = Camera(1.0, 0.1, 100.0)
    cam.resize(2.0, 1.0, 50.0)
    assert np.allclose(cam.projection(), perspective_rh(math.pi / 2, 2.0, 1.0, 50.0))


def test_set_orientation_orbits_origin():
    cam = Camera(1.0, 0.1, 100.0)
    cam.set_orientation(0.7, -0.3)
    assert np.allclose(cam.rot, [0.7, -0.3])
    assert np.linalg.norm(cam.front()) == pytest.approx(1.0)
    assert np.allclose(cam.position, -2 * cam.front())
    origin_in_view = _project(cam.view(), np.zeros(3))
    assert origin_in_view[2] == pytest.approx(-2.0)


def test_look_at_rotation_matches_flush():
    cam = Camera(1.0, 0.1, 100.0)
    cam.pos([1.0, 2.0, 3.0])
    target = np.array([-2.0, 0.5, 7.0])
    cam.look_at(target)
    expected = (target - cam.position) / np.linalg.norm(target - cam.position)
    assert np.allclose(cam.front(), expected)
    before = cam.view()
    cam.flush()
    assert np.allclose(cam.front(), expected)
    assert np.allclose(cam.view(), before)


def test_pos_keeps_direction():
    cam = Camera(1.0, 0.1, 100.0)
    cam.set_orientation(0.2, 0.4)
    front = cam.front()
    new_position = np.array([5.0, -1.0, 2.0])
    cam.pos(new_position)
    assert np.allclose(cam.front(), front)
    assert np.allclose(_project(cam.view(), new_position), np.zeros(3))
    ahead = _project(cam.view(), new_position + front)
    assert np.allclose(ahead[:2], np.zeros(2))


def test_projection_view_depth_increases_along_front():
    cam = Camera(1.0, 0.1, 100.0)
    cam.set_orientation(0.3, 0.2)
    cam.pos(np.zeros(3))
    m = cam.projection_view_matrix()
    near = _project(m, cam.front() * 0.1)
    far = _project(m, cam.front() * 100.0)
    assert near[2] < far[2]
    assert far[2] == pytest.approx(1.0)
    assert np.allclose(far[:2], np.zeros(2), atol=1e-9)