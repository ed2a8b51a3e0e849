"""
Running-median smoothing of binned data.

Implements the "353QH twice" smoother of J. Friedman: running medians of
three, five and three bins, quadratic interpolation across flat triplets,
Hanning (1/4, 1/2, 1/4) running mean, and a second pass on the residuals
which is added back to the first-pass result.
"""

from __future__ import annotations

import logging

import numba as nb
import numpy as np

from histpdf.utils import numba_defaults as nb_defaults

log = logging.getLogger(__name__)


@nb.njit(**nb_defaults(fastmath=False))
def _median3(a: float, b: float, c: float) -> float:
    return max(min(a, b), min(max(a, b), c))


@nb.njit(**nb_defaults(fastmath=False))
def _353qh(zz: np.ndarray) -> np.ndarray:
    """Single 353QH pass, returns a new array."""
    nn = len(zz)
    zz = zz.copy()
    yy = np.empty(nn)

    # running medians 3, 5, 3
    for kk in range(3):
        yy[:] = zz
        if kk != 1:
            for ii in range(1, nn - 1):
                zz[ii] = _median3(yy[ii - 1], yy[ii], yy[ii + 1])
        else:
            for ii in range(2, nn - 2):
                zz[ii] = np.median(yy[ii - 2 : ii + 3])

        if kk == 0:
            # end points from a linear extrapolation of their neighbours
            zz[0] = _median3(zz[1], zz[0], 3 * zz[1] - 2 * zz[2])
            zz[nn - 1] = _median3(zz[nn - 2], zz[nn - 1], 3 * zz[nn - 2] - 2 * zz[nn - 3])
        elif kk == 1:
            zz[1] = _median3(yy[0], yy[1], yy[2])
            zz[nn - 2] = _median3(yy[nn - 3], yy[nn - 2], yy[nn - 1])

    yy[:] = zz

    # quadratic interpolation for flat segments
    for ii in range(2, nn - 2):
        if zz[ii - 1] != zz[ii] or zz[ii] != zz[ii + 1]:
            continue
        h0 = zz[ii - 2] - zz[ii]
        h1 = zz[ii + 2] - zz[ii]
        if h0 * h1 <= 0:
            continue
        jk = 1
        if abs(h1) > abs(h0):
            jk = -1
        yy[ii] = -0.5 * zz[ii - 2 * jk] + zz[ii] / 0.75 + zz[ii + 2 * jk] / 6.0
        yy[ii + jk] = 0.5 * (zz[ii + 2 * jk] - zz[ii - 2 * jk]) + zz[ii]

    # hanning
    for ii in range(1, nn - 1):
        zz[ii] = 0.25 * yy[ii - 1] + 0.5 * yy[ii] + 0.25 * yy[ii + 1]
    zz[0] = yy[0]
    zz[nn - 1] = yy[nn - 1]
    return zz


@nb.njit(**nb_defaults(fastmath=False))
def _smooth_kernel(xx: np.ndarray, ntimes: int) -> np.ndarray:
    xx = xx.copy()
    for _ in range(ntimes):
        smoothed = _353qh(xx)
        residuals = _353qh(xx - smoothed)
        xx_min = np.min(xx)
        for ii in range(len(xx)):
            if xx_min < 0:
                xx[ii] = smoothed[ii] + residuals[ii]
            else:
                xx[ii] = max(smoothed[ii] + residuals[ii], 0.0)
    return xx


def smooth_array(xx: np.ndarray, ntimes: int = 1) -> np.ndarray:
    """Smooth an array with the 353QH-twice algorithm, `ntimes` times.

    Arrays that are non-negative stay non-negative. A new array is returned.

    Parameters
    ----------
    xx
        the array to smooth, e.g. histogram bin contents
    ntimes
        number of times the full algorithm is applied

    Returns
    -------
    smoothed
        the smoothed array. If `xx` has fewer than three elements it is
        returned unchanged (as a copy) and an error is logged.
    """
    xx = np.array(xx, dtype=np.float64)
    if len(xx) < 3:
        log.error(f"need at least 3 points for smoothing, got {len(xx)}")
        return xx
    if ntimes <= 0:
        return xx
    return _smooth_kernel(xx, ntimes)
