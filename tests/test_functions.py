import math

import pytest

from delaunay.functions import Function, QuadraticFunction


class Sin(Function):
    def __init__(self, altitude=1.0, frequency=1.0, offset=0.0):
        self.altitude = altitude
        self.frequency = frequency
        self.offset = offset

    def __call__(self, x):
        return self.offset + self.altitude * math.sin(self.frequency * x)


def test_function_is_abstract():
    with pytest.raises(TypeError):
        Function()


def test_subclass_is_callable_function():
    functions = [Sin(1.0, 10.0, 0.0), QuadraticFunction()]
    values = [f(math.pi / 20.0) for f in functions]
    assert values[0] == pytest.approx(1.0)
    assert values[1] == pytest.approx((math.pi / 20.0) ** 2)
    assert [f(0.0) for f in functions] == [0.0, 0.0]


def test_default_quadratic_is_square():
    f = QuadraticFunction()
    assert f.coefficients == (1.0, 0.0, 0.0)
    assert f(3.0) == 9.0
    assert f(-2.0) == 4.0
    assert f(0.0) == 0.0


def test_set_coefficients():
    f = QuadraticFunction()
    f.set_coefficients(2.0, 3.0, 4.0)
    assert f.coefficients == (2.0, 3.0, 4.0)
    assert f(0.0) == 4.0
    assert f(1.0) == 9.0
    assert f(-1.0) == 3.0


def test_constructor_coefficients():
    f = QuadraticFunction(0.0, 2.0, -1.0)
    assert f(5.0) == 9.0


@pytest.mark.parametrize("x", [-3.5, -1.0, 0.0, 0.25, 7.0])
def test_quadratic_is_symmetric_about_vertex(x):
    f = QuadraticFunction(1.0, -4.0, 1.0)
    # vertex at x = 2
    assert f(2.0 + x) == pytest.approx(f(2.0 - x))