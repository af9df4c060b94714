import numpy as np
import pytest

from sambhav.geometry import Point3, as_landmarks, distance, distance_2d, distance_3d


def test_planar_distance_ignores_depth():
    assert distance_2d(Point3(0, 0, 5), Point3(3, 4, -5)) == pytest.approx(5.0)
    assert distance(Point3(0, 0, 0), Point3(0, 0, 1)) == 0.0


def test_spatial_distance_includes_depth():
    assert distance_3d((0, 0, 0), (1, 2, 2)) == pytest.approx(3.0)
    assert distance((0, 0, 0), (1, 2, 2), use_z=True) == pytest.approx(3.0)


def test_spatial_distance_on_planar_points():
    assert distance_3d((0, 0), (3, 4)) == pytest.approx(5.0)


def test_as_landmarks_copies():
    src = np.ones((21, 3), dtype=np.float32)
    arr = as_landmarks(src)
    arr[0, 0] = 9.0
    assert src[0, 0] == 1.0


def test_as_landmarks_rejects_non_tables():
    assert as_landmarks(None) is None
    assert as_landmarks([1.0, 2.0]) is None
    assert as_landmarks([[1.0, 2.0], [3.0]]) is None
