"""
Numerical building blocks: histograms, smoothing and splines.
"""

from histpdf.math.histogram import Histogram
from histpdf.math.smoothing import smooth_array
from histpdf.math.splines import SmoothMethod, Spline, build_spline

__all__ = ["Histogram", "SmoothMethod", "Spline", "build_spline", "smooth_array"]
