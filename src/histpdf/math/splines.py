"""
Interpolating splines through histogram control points.

The spline mathematics lives in :mod:`scipy.interpolate`; this module only
selects the variant and carries the labels.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union

import numpy as np
from scipy.interpolate import CubicSpline, make_interp_spline

log = logging.getLogger(__name__)


class SmoothMethod(IntEnum):
    """Interpolation variant used to turn a histogram into a curve.

    The value is the polynomial degree of the spline pieces.
    """

    SPLINE1 = 1
    SPLINE2 = 2
    SPLINE3 = 3
    SPLINE5 = 5

    @property
    def label(self) -> str:
        return f"spline{self.value}"

    @classmethod
    def parse(cls, method: Union[SmoothMethod, int, str]) -> SmoothMethod | None:
        """Convert `method` to a :class:`SmoothMethod`.

        Accepts members, their integer values and names in any case, with or
        without a leading ``k`` (``"spline3"``, ``"SPLINE3"``, ``"kSpline3"``).
        Returns None if `method` does not name a variant.
        """
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            key = method.strip().upper()
            if key.startswith("KSPLINE"):
                key = key[1:]
            return cls.__members__.get(key)
        if isinstance(method, (int, np.integer)) and not isinstance(method, bool):
            try:
                return cls(int(method))
            except ValueError:
                return None
        return None


class Spline:
    """Interpolating spline through the points (`x`, `y`).

    Parameters
    ----------
    x, y
        control points, `x` strictly increasing.
    method
        spline variant. :attr:`SmoothMethod.SPLINE3` uses not-a-knot end
        conditions; the others are interpolating B-splines of matching degree.
        If there are too few points for the requested degree, the degree is
        lowered to ``len(x) - 1``.
    name, title
        labels. Default to the method label.
    """

    def __init__(
        self,
        x: np.ndarray,
        y: np.ndarray,
        method: SmoothMethod = SmoothMethod.SPLINE3,
        name: str = None,
        title: str = None,
    ) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if len(x) != len(y):
            raise ValueError(f"x and y differ in length: {len(x)} != {len(y)}")
        if len(x) < 2:
            raise ValueError(f"need at least 2 control points, got {len(x)}")

        self.method = SmoothMethod(method)
        self.name = self.method.label if name is None else name
        self.title = self.method.label if title is None else title

        self.degree = min(self.method.value, len(x) - 1)
        if self.degree != self.method.value:
            log.debug(
                f"{self.name}: {len(x)} control points, "
                f"lowering degree from {self.method.value} to {self.degree}"
            )

        if self.degree == 3 and self.method == SmoothMethod.SPLINE3:
            self._interp = CubicSpline(x, y)
        else:
            self._interp = make_interp_spline(x, y, k=self.degree)

    def eval(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Evaluate the spline; extrapolates beyond the control points."""
        val = self._interp(x)
        if np.ndim(val) == 0:
            return float(val)
        return val

    def __call__(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        return self.eval(x)

    def __repr__(self) -> str:
        return f"Spline(name={self.name!r}, method={self.method.name}, degree={self.degree})"


def build_spline(
    x: np.ndarray,
    y: np.ndarray,
    method: SmoothMethod,
    name: str = None,
    title: str = None,
) -> Spline:
    """Build the :class:`Spline` of variant `method` through (`x`, `y`)."""
    return Spline(x, y, method=method, name=name, title=title)
