import numpy as np
import pytest

from kiwi.directions import CardinalDirection as D


def test_iteration_order():
    assert list(D.iter()) == [D.NORTH, D.SOUTH, D.EAST, D.WEST, D.UP, D.DOWN]


@pytest.mark.parametrize("direction", list(D))
def test_bits_round_trip(direction):
    assert D.from_bits(direction.to_bits()) is direction


@pytest.mark.parametrize("bits", [6, 7, 255])
def test_unused_bits_give_none(bits):
    assert D.from_bits(bits) is None


def test_bits_are_distinct():
    assert len({d.to_bits() for d in D.iter()}) == 6


@pytest.mark.parametrize("bits", range(6))
def test_normal_matches_integer_normal(bits):
    direction = D.from_bits(bits)
    normal = direction.normal()
    integer_normal = direction.normal_i64()
    assert np.array_equal(normal, np.array(integer_normal, dtype=float))
    assert np.linalg.norm(normal) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "a, b", [(D.NORTH, D.SOUTH), (D.EAST, D.WEST), (D.UP, D.DOWN)]
)
def test_opposites_cancel(a, b):
    assert np.array_equal(a.normal() + b.normal(), np.zeros(3))


def test_pinned_normals():
    assert D.EAST.normal_i64() == (1, 0, 0)
    assert D.NORTH.normal_i64() == (0, 0, -1)


def test_normals_are_all_different():
    normals = [d.normal_i64() for d in D.iter()]
    assert len(set(normals)) == 6