import numpy as np
import pytest
from pytest import approx

from histpdf.math.splines import SmoothMethod, Spline, build_spline


def test_smooth_method_parse():
    assert SmoothMethod.parse(SmoothMethod.SPLINE1) is SmoothMethod.SPLINE1
    assert SmoothMethod.parse(2) is SmoothMethod.SPLINE2
    assert SmoothMethod.parse(np.int32(5)) is SmoothMethod.SPLINE5
    assert SmoothMethod.parse("spline3") is SmoothMethod.SPLINE3
    assert SmoothMethod.parse("kSpline5") is SmoothMethod.SPLINE5
    assert SmoothMethod.parse(4) is None
    assert SmoothMethod.parse("spline4") is None
    assert SmoothMethod.parse(None) is None
    assert SmoothMethod.parse(True) is None
    assert SmoothMethod.SPLINE5.label == "spline5"


@pytest.mark.parametrize("method", list(SmoothMethod))
def test_interpolates_control_points(method):
    x = np.linspace(0, 10, 12)
    y = np.cos(x) + 2
    spl = build_spline(x, y, method)
    assert spl.degree == method.value
    assert np.allclose(spl(x), y)
    assert spl.name == method.label
    assert spl.title == method.label


def test_linear():
    spl = Spline([0, 1, 2], [0, 2, 0], SmoothMethod.SPLINE1)
    assert spl.eval(0.5) == approx(1.0)
    assert spl.eval(1.5) == approx(1.0)
    assert isinstance(spl.eval(0.5), float)


def test_cubic_not_a_knot():
    x = np.linspace(0, 10, 11)
    spl = Spline(x, np.exp(-((x - 2) ** 2)), SmoothMethod.SPLINE3)
    # third derivative is continuous across the second and second-to-last knots
    for knot in [x[1], x[-2]]:
        left = spl._interp(knot - 1e-6, 3)
        right = spl._interp(knot + 1e-6, 3)
        assert left == approx(right, rel=1e-6, abs=1e-9)

    # a cubic is reproduced exactly, also outside the inner knots
    xs = np.linspace(0, 1, 6)
    cubic = Spline(xs, xs**3, SmoothMethod.SPLINE3)
    assert np.allclose(cubic([0.05, 0.5, 0.95]), [0.05**3, 0.5**3, 0.95**3])


def test_degree_lowered():
    spl = Spline([0, 1, 2], [1, 3, 2], SmoothMethod.SPLINE5)
    assert spl.degree == 2
    assert np.allclose(spl([0, 1, 2]), [1, 3, 2])


def test_invalid():
    with pytest.raises(ValueError):
        Spline([0, 1], [0, 1, 2])
    with pytest.raises(ValueError):
        Spline([0], [1])


def test_labels():
    spl = Spline([0, 1, 2], [0, 1, 0], SmoothMethod.SPLINE2, name="n", title="t")
    assert spl.name == "n"
    assert spl.title == "t"
