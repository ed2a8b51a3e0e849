"""
histpdf convenience functions and container for 1D histograms.

Binned data in histpdf is carried by :class:`Histogram`, a fixed-binning 1D
histogram over ``[xmin, xmax]``. Bins are numbered from 1 to `n_bins`; bin 0
is the underflow and bin ``n_bins + 1`` the overflow, so that coordinates
outside the axis range map to well defined (empty) bins.

The module-level helpers work on plain numpy arrays in the usual
``hist, bins, var`` form:
- hist: an array of histogram values
- bins: an array of bin edges
- var: an array of variances in each bin
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import hist as bh
import numba as nb
import numpy as np

from histpdf.math.smoothing import smooth_array
from histpdf.utils import numba_defaults_kwargs as nb_kwargs

log = logging.getLogger(__name__)


def get_hist(
    data: np.ndarray,
    bins: Optional[Union[int, np.ndarray]] = None,
    range: Optional[tuple[float, float]] = None,
    dx: Optional[float] = None,
    wts: Optional[Union[float, np.ndarray]] = None,
) -> tuple[np.ndarray, ...]:
    """return hist, bins, var after binning data

    Thin wrapper around :mod:`hist`, with optional weights for each element
    and proper computing of variances.

    Note: there are no overflow / underflow bins.

    Parameters
    ----------
    data
        The array of data to be histogrammed
    bins
        int: the number of bins to be used in the histogram (default 100)
        array: an array of bin edges to use
    range
        (x_lo, x_high) is the tuple of low and high x values to uses for the
        very ends of the bin range. If not provided, the data extremes are
        used
    dx
        Specifies the bin width. Overrides "bins" if both arguments are present
    wts
        Array of weights for each element, or a single weight for all of
        them. Variances account for the weighting.

    Returns
    -------
    hist
        the values in each bin of the histogram
    bins
        an array of bin edges, so ``len(bins) = len(hist) + 1``
    var
        array of variances in each bin of the histogram
    """
    if bins is None:
        bins = 100

    if range is None:
        range = [np.amin(data), np.amax(data)]

    if dx is not None:
        bins = int((range[1] - range[0]) / dx)

    # allow scalar weights
    if wts is not None and np.shape(wts) == ():
        wts = np.full_like(data, wts, dtype=np.float64)

    if isinstance(bins, (int, np.integer)):
        boost_histogram = bh.Hist(
            bh.axis.Regular(bins=int(bins), start=range[0], stop=range[1]),
            storage=bh.storage.Weight(),
        )
    else:
        # if bins are specified need to use variable
        boost_histogram = bh.Hist(bh.axis.Variable(bins), storage=bh.storage.Weight())
    boost_histogram.fill(data, weight=wts)
    hist, bins = boost_histogram.to_numpy()
    var = boost_histogram.variances()

    return hist, bins, var


@nb.njit(**nb_kwargs)
def get_bin_centers(bins: np.ndarray) -> np.ndarray:
    """
    Returns an array of bin centers from an input array of bin edges.
    Works for non-uniform binning. Note: a new array is allocated

    Parameters
    ----------
    bins
        The input array of bin-edges
    """
    return (bins[:-1] + bins[1:]) / 2.0


@nb.njit(**nb_kwargs)
def get_bin_widths(bins: np.ndarray) -> np.ndarray:
    """
    Returns an array of bin widths from an input array of bin edges.
    Works for non-uniform binning.

    Parameters
    ----------
    bins
        The input array of bin-edges
    """
    return bins[1:] - bins[:-1]


@nb.njit(**nb_kwargs)
def find_bin(x: float, xmin: float, xmax: float, n_bins: int) -> int:
    """
    Returns the 1-based number of the regular bin containing x.

    Returns 0 for underflow (``x < xmin``) and ``n_bins + 1`` for overflow
    (``x >= xmax``).

    Parameters
    ----------
    x
        The value to search for amongst the bins
    xmin, xmax
        Lower edge of the first bin and upper edge of the last bin
    n_bins
        Number of bins between xmin and xmax
    """
    if x < xmin:
        return 0
    if x >= xmax:
        return n_bins + 1
    index = 1 + int(n_bins * (x - xmin) / (xmax - xmin))
    # rounding can push values just below xmax past the last bin
    if index > n_bins:
        index = n_bins
    return index


@nb.njit(**nb_kwargs)
def find_bins(x: np.ndarray, xmin: float, xmax: float, n_bins: int) -> np.ndarray:
    """Vectorized :func:`find_bin`."""
    out = np.empty(len(x), dtype=np.int64)
    for i in range(len(x)):
        out[i] = find_bin(x[i], xmin, xmax, n_bins)
    return out


class Histogram:
    """Fixed-binning one dimensional histogram.

    Parameters
    ----------
    contents
        bin contents, one value per regular bin. The array is copied.
    xmin, xmax
        axis range. The bins are equally spaced over it.
    name, title
        labels, carried along for display and bookkeeping only.

    Examples
    --------
    >>> from histpdf import Histogram
    >>> h = Histogram([1, 2, 3, 2, 1], xmin=0, xmax=5, name="h")
    >>> h.find_bin(2.5)
    3
    >>> h.get_bin_content(3)
    3.0
    """

    def __init__(
        self,
        contents: np.ndarray,
        xmin: float,
        xmax: float,
        name: str = "",
        title: str = "",
    ) -> None:
        contents = np.array(contents, dtype=np.float64)
        if contents.ndim != 1:
            raise ValueError(f"contents must be one dimensional, got {contents.ndim}")
        if len(contents) == 0:
            raise ValueError("a histogram needs at least one bin")
        if not xmin < xmax:
            raise ValueError(f"invalid axis range xmin={xmin}, xmax={xmax}")

        self.contents = contents
        self.xmin = float(xmin)
        self.xmax = float(xmax)
        self.name = name
        self.title = title
        self.bins = np.linspace(self.xmin, self.xmax, len(contents) + 1)

    @classmethod
    def from_data(
        cls,
        data: np.ndarray,
        bins: int = 100,
        range: Optional[tuple[float, float]] = None,
        wts: Optional[Union[float, np.ndarray]] = None,
        name: str = "",
        title: str = "",
    ) -> Histogram:
        """Fill a new histogram with `data` (see :func:`get_hist`)."""
        if not isinstance(bins, (int, np.integer)):
            raise ValueError("only regular binning is supported, pass a bin count")
        hist, edges, _ = get_hist(data, bins=bins, range=range, wts=wts)
        return cls(hist, edges[0], edges[-1], name=name, title=title)

    @classmethod
    def from_numpy(
        cls, hist: np.ndarray, bins: np.ndarray, name: str = "", title: str = ""
    ) -> Histogram:
        """Wrap the output of :func:`numpy.histogram` or :func:`get_hist`.

        The bin edges must be equally spaced.
        """
        bins = np.asarray(bins, dtype=np.float64)
        if len(bins) != len(hist) + 1:
            raise ValueError(
                f"need len(bins) == len(hist) + 1, got {len(bins)} and {len(hist)}"
            )
        widths = get_bin_widths(bins)
        if not np.allclose(widths, widths[0], rtol=1e-6, atol=0):
            raise ValueError("only regular binning is supported")
        return cls(hist, bins[0], bins[-1], name=name, title=title)

    @property
    def n_bins(self) -> int:
        return len(self.contents)

    @property
    def bin_centers(self) -> np.ndarray:
        return get_bin_centers(self.bins)

    @property
    def bin_width(self) -> float:
        return (self.xmax - self.xmin) / self.n_bins

    def find_bin(self, x: float) -> int:
        """Bin number of `x`: 0 underflow, 1..n_bins, n_bins + 1 overflow."""
        return find_bin(float(x), self.xmin, self.xmax, self.n_bins)

    def get_bin_center(self, i: int) -> float:
        return self.xmin + (i - 0.5) * self.bin_width

    def get_bin_content(self, i: int) -> float:
        """Content of bin `i`; underflow, overflow and beyond are empty."""
        if 1 <= i <= self.n_bins:
            return float(self.contents[i - 1])
        return 0.0

    def set_bin_content(self, i: int, value: float) -> None:
        if not 1 <= i <= self.n_bins:
            raise IndexError(f"bin {i} out of range [1, {self.n_bins}]")
        self.contents[i - 1] = value

    def mean(self) -> float:
        """Content weighted mean of the bin centers, 0 for an empty histogram."""
        total = np.sum(self.contents)
        if total == 0:
            return 0.0
        return float(np.sum(self.contents * self.bin_centers) / total)

    def n_empty(self) -> int:
        """Number of regular bins with zero content."""
        return int(np.count_nonzero(self.contents == 0))

    def scale(self, factor: float) -> None:
        self.contents *= factor

    def smooth(self, ntimes: int = 1) -> None:
        """Smooth the bin contents in place `ntimes` times.

        See Also
        --------
        .smoothing.smooth_array
        """
        if ntimes < 0:
            raise ValueError(f"invalid number of smoothing passes {ntimes}")
        self.contents = smooth_array(self.contents, ntimes)

    def clone(self, name: str = None) -> Histogram:
        """Return an independent copy, optionally renamed."""
        return Histogram(
            self.contents,
            self.xmin,
            self.xmax,
            name=self.name if name is None else name,
            title=self.title,
        )

    def __len__(self) -> int:
        return self.n_bins

    def __repr__(self) -> str:
        return (
            f"Histogram(name={self.name!r}, n_bins={self.n_bins}, "
            f"xmin={self.xmin}, xmax={self.xmax})"
        )
