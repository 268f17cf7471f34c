import math

import pytest

from gravity_core.vector import Vector, clamp


def test_construct_sets_dimension_and_components():
    v = Vector(1, 2.5)
    assert v.dimension == 2
    assert v.components == (1.0, 2.5)
    assert (v.x, v.y) == (1.0, 2.5)
    assert v[1] == 2.5
    assert list(v) == [1.0, 2.5]


def test_construct_without_components_is_rejected():
    with pytest.raises(ValueError):
        Vector()


def test_norm():
    assert Vector(3, 4).norm() == 5.0
    assert Vector(0, 0).norm() == 0.0
    assert Vector(-2).norm() == 2.0


def test_add_is_commutative():
    u = Vector(1.5, -2.25)
    v = Vector(-7.0, 0.125)
    assert Vector.add(u, v) == Vector.add(v, u)
    assert u + v == Vector(-5.5, -2.125)


def test_add_is_variadic():
    assert Vector.add(Vector(1, 1), Vector(2, 3), Vector(-1, 4)) == Vector(2, 8)


def test_add_requires_operands():
    with pytest.raises(ValueError):
        Vector.add()
    with pytest.raises(ValueError):
        Vector.sum(iter([]))


def test_add_rejects_mismatched_dimensions():
    with pytest.raises(ValueError):
        Vector.add(Vector(1, 2), Vector(1, 2, 3))


def test_sum_accepts_generators():
    assert Vector.sum(Vector(i, -i) for i in range(4)) == Vector(6, -6)


def test_scalar_product_by_one_is_identity():
    u = Vector(0.1, -3.7)
    assert u.scalar_product(1) == u


@pytest.mark.parametrize("k", [-3.5, -1.0, 0.0, 0.25, 2.0, 1e6])
def test_norm_scales_with_absolute_scalar(k):
    u = Vector(1.2, -0.7)
    assert u.scalar_product(k).norm() == pytest.approx(abs(k) * u.norm())


def test_negative_and_subtraction():
    u = Vector(1, -2)
    assert u.negative() == Vector(-1, 2)
    assert -u == u.negative()
    assert Vector(5, 5) - u == Vector(4, 7)
    assert 2 * u == u * 2 == Vector(2, -4)


def test_normalized_has_unit_length():
    n = Vector(10, -10).normalized()
    assert n.norm() == pytest.approx(1.0)
    assert n.x == pytest.approx(math.sqrt(0.5))


def test_normalized_zero_vector_is_nan():
    n = Vector(0.0, 0.0).normalized()
    assert all(math.isnan(c) for c in n)


def test_operations_return_new_vectors():
    u = Vector(1, 2)
    w = u.scalar_product(3)
    assert w is not u
    assert u == Vector(1, 2)
    with pytest.raises(AttributeError):
        u.foo = 1


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
