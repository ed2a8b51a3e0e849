"""
Probability density functions estimated from histograms.

A :class:`PDF` is built once from a histogram: the histogram is copied and
optionally smoothed, a spline is passed through its bin contents, and the
spline is rasterized into a finely binned reference histogram which is then
normalized to unit area. All later queries read the reference histogram
only, by linear interpolation between neighbouring bins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numba as nb
import numpy as np

from histpdf.errors import PDFConstructionError
from histpdf.math.histogram import Histogram, find_bin, find_bins
from histpdf.math.splines import SmoothMethod, Spline, build_spline
from histpdf.utils import PDFDefaults, load_dict, pdf_defaults
from histpdf.utils import numba_defaults as nb_defaults

log = logging.getLogger(__name__)


@nb.njit(**nb_defaults(fastmath=False))
def _interpolate_pdf_hist(
    x: np.ndarray,
    xmin: float,
    xmax: float,
    centers: np.ndarray,
    contents: np.ndarray,
    epsilon: float,
) -> np.ndarray:
    n_bins = len(contents)
    out = np.empty(len(x))
    for i in range(len(x)):
        if np.isnan(x[i]):
            out[i] = np.nan
            continue
        xi = min(max(x[i], xmin), xmax)

        ibin = find_bin(xi, xmin, xmax, n_bins)
        if ibin < 1:
            ibin = 1
        elif ibin > n_bins:
            ibin = n_bins

        # step towards x, except that the first bin always steps up
        if (xi > centers[ibin - 1] and ibin != n_bins) or ibin == 1:
            jbin = ibin + 1
        else:
            jbin = ibin - 1

        dx = centers[ibin - 1] - centers[jbin - 1]
        dy = contents[ibin - 1] - contents[jbin - 1]
        val = contents[ibin - 1] + (xi - centers[ibin - 1]) * dy / dx
        out[i] = max(val, epsilon)
    return out


class PDF:
    """Normalized density estimate built from a histogram.

    Parameters
    ----------
    hist
        the binned data. It is copied, so later changes to it do not affect
        the PDF.
    method
        spline variant used to interpolate the bin contents (see
        :class:`~.math.splines.SmoothMethod`). Values that do not name a
        variant fall back to cubic splines with a warning.
    n_smooth
        number of smoothing passes applied to the histogram copy before the
        spline is fitted. No smoothing by default.
    settings
        numerical settings, any subset of the fields of
        :class:`~.utils.PDFDefaults`. Missing fields are taken from
        :data:`~.utils.pdf_defaults`.
    name
        name used in log messages. Defaults to ``PDF_<hist name>``.

    Raises
    ------
    PDFConstructionError
        if `hist` is missing or invalid, or the settings are inconsistent.

    Examples
    --------
    >>> import numpy as np
    >>> from histpdf import PDF, Histogram, SmoothMethod
    >>> h = Histogram.from_data(np.random.normal(size=10000), bins=50, range=(-5, 5))
    >>> pdf = PDF(h, SmoothMethod.SPLINE3, n_smooth=1)
    >>> pdf.get_integral(-5, 5)
    1.0 # may vary
    >>> pdf.get_val([0, 1, 2])
    array([0.39, 0.24, 0.05]) # may vary
    """

    def __init__(
        self,
        hist: Histogram,
        method: Union[SmoothMethod, int, str] = SmoothMethod.SPLINE2,
        n_smooth: int = 0,
        settings: Union[PDFDefaults, dict] = None,
        name: str = None,
    ) -> None:
        if name is None:
            name = "PDF" if hist is None else f"PDF_{getattr(hist, 'name', '')}"
        self.name = name

        if hist is None:
            self._fail("called without valid histogram")
        if not isinstance(hist, Histogram):
            self._fail(f"expected a Histogram, got {type(hist).__name__}")
        if n_smooth < 0:
            self._fail(f"invalid number of smoothing passes {n_smooth}")

        try:
            self.settings = pdf_defaults(**(settings if settings is not None else {}))
            self.settings.validate()
        except (KeyError, ValueError) as e:
            raise PDFConstructionError(str(e), pdf_name=self.name) from e

        self.n_smooth = n_smooth
        self._integral = 1.0
        self._pdf_hist = None

        self._hist = hist.clone()
        self.check_hist()

        if self.n_smooth > 0:
            self._hist.smooth(self.n_smooth)

        self.method = self._parse_method(method)
        try:
            self._spline = build_spline(
                self._hist.bin_centers, self._hist.contents, self.method
            )
        except ValueError as e:
            raise PDFConstructionError(str(e), pdf_name=self.name) from e

        self.fill_spline_to_hist()

        self._spline.title = hist.title + self._spline.title
        self._spline.name = hist.name + self._spline.name

        integral = self.integral()
        if integral <= 0:
            log.debug(f"{self.name}: non-positive integral {integral}, using 1")
            integral = 1.0
        self._integral = integral
        self._pdf_hist.scale(1.0 / self._integral)
        self._pdf_hist.contents.flags.writeable = False
        log.debug(f"{self.name}: normalized by {self._integral}")

    @classmethod
    def from_config(cls, hist: Histogram, config: Union[dict, str, Path]) -> PDF:
        """Build a PDF from a configuration dictionary or JSON/YAML file.

        Recognized keys are ``method`` (variant name such as ``"spline3"`` or
        its degree), ``n_smooth``, ``settings`` (see
        :class:`~.utils.PDFDefaults`) and ``name``.

        Examples
        --------
        >>> PDF.from_config(h, {"method": "spline5", "n_smooth": 2})
        """
        if isinstance(config, (str, Path)):
            config = load_dict(config)
        return cls(
            hist,
            method=config.get("method", SmoothMethod.SPLINE2),
            n_smooth=config.get("n_smooth", 0),
            settings=config.get("settings"),
            name=config.get("name"),
        )

    def _fail(self, msg: str) -> None:
        log.error(f"{self.name}: {msg}")
        raise PDFConstructionError(msg, pdf_name=self.name)

    def _parse_method(self, method: Union[SmoothMethod, int, str]) -> SmoothMethod:
        parsed = SmoothMethod.parse(method)
        if parsed is None:
            log.warning(
                f"{self.name}: no valid interpolation method given ({method!r}), "
                "using spline3"
            )
            parsed = SmoothMethod.SPLINE3
        return parsed

    def check_hist(self) -> None:
        """Sanity checks on the histogram copy; records the axis range.

        Warns if more than half of the bins are empty.
        """
        if self._hist is None:
            self._fail("check_hist called without valid histogram")

        self.xmin = self._hist.xmin
        self.xmax = self._hist.xmax
        nbins = self._hist.n_bins

        empty_frac = self._hist.n_empty() / nbins
        if empty_frac > 0.5:
            log.warning(
                f"{self.name}: more than 50% ({empty_frac * 100:g}%) of the bins "
                f"in hist '{self._hist.name}' are empty!"
            )
            log.warning(
                f"{self.name}: X_min={self.xmin} mean={self._hist.mean()} "
                f"X_max={self.xmax}"
            )

        if self.settings.debug:
            log.debug(f"{self.name}: {self.xmin} < x < {self.xmax} in {nbins} bins")

    def fill_spline_to_hist(self) -> None:
        """Rasterize the spline into the finely binned reference histogram.

        Where the spline drops to epsilon or below, which happens next to
        steep slopes, the content of the smoothed histogram is used instead.
        All bins are floored at epsilon.
        """
        epsilon = self.settings.epsilon
        n_bins = int(self.settings.n_bins_pdf_hist)
        self._pdf_hist = Histogram(
            np.zeros(n_bins),
            self.xmin,
            self.xmax,
            name=f"{self._hist.name}_hist_from_{self._spline.title}",
            title=f"{self._hist.title}_hist from_{self._spline.title}",
        )

        x = self._pdf_hist.bin_centers
        y = np.asarray(self._spline.eval(x), dtype=np.float64)
        low = y <= epsilon
        if np.any(low):
            src_bins = find_bins(x[low], self.xmin, self.xmax, self._hist.n_bins)
            y[low] = [self._hist.get_bin_content(b) for b in src_bins]
        self._pdf_hist.contents[:] = np.maximum(y, epsilon)

    def get_val(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Value of the PDF at `x`.

        Linear interpolation between neighbouring bins of the reference
        histogram. Coordinates outside ``[xmin, xmax]`` are clamped to the
        range; the result is never below epsilon.
        """
        x = np.asarray(x, dtype=np.float64)
        vals = _interpolate_pdf_hist(
            np.atleast_1d(x).ravel(),
            self.xmin,
            self.xmax,
            self._pdf_hist.bin_centers,
            self._pdf_hist.contents,
            self.settings.epsilon,
        )
        if x.ndim == 0:
            return float(vals[0])
        return vals.reshape(x.shape)

    def __call__(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        return self.get_val(x)

    def get_integral(self, xmin: float, xmax: float) -> float:
        """Integral of the PDF between `xmin` and `xmax`.

        Midpoint sum of :meth:`get_val` over a fixed number of steps
        (``settings.n_int_steps``).
        """
        nsteps = int(self.settings.n_int_steps)
        step = (xmax - xmin) / nsteps
        x = (np.arange(nsteps) + 0.5) * step + xmin
        return float(np.sum(self.get_val(x)) * step)

    def integral(self) -> float:
        """Integral over the full range of the PDF."""
        return self.get_integral(self.xmin, self.xmax)

    @property
    def normalization(self) -> float:
        """Constant the reference histogram was divided by."""
        if self._integral <= 0:
            return 1.0
        return self._integral

    @property
    def hist(self) -> Histogram:
        """The (smoothed) copy of the input histogram."""
        return self._hist

    @property
    def spline(self) -> Spline:
        return self._spline

    @property
    def pdf_hist(self) -> Histogram:
        """The normalized reference histogram used for all queries."""
        return self._pdf_hist

    def __repr__(self) -> str:
        return (
            f"PDF(name={self.name!r}, method={self.method.name}, "
            f"n_smooth={self.n_smooth}, xmin={self.xmin}, xmax={self.xmax})"
        )
