"""
histpdf: probability density estimates from binned data.

Smooths a histogram, interpolates it with a spline, rasterizes the spline
into a fine reference histogram and normalizes it, so that it can be used as
a fast PDF lookup in likelihood-based classifiers.
"""

from ._version import version as __version__
from .errors import HistPDFError, PDFConstructionError
from .math.histogram import Histogram
from .math.splines import SmoothMethod
from .pdf import PDF

__all__ = [
    "__version__",
    "Histogram",
    "HistPDFError",
    "PDF",
    "PDFConstructionError",
    "SmoothMethod",
]
