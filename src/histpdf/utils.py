from __future__ import annotations

import json
import logging
import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Iterator

import yaml

log = logging.getLogger(__name__)


def getenv_bool(name: str, default: bool = False) -> bool:
    """Get environment value as a boolean, returning True for 1, t and true
    (caps-insensitive), and False for any other value and default if undefined.
    """
    val = os.getenv(name)
    if not val:
        return default
    elif val.lower() in ("1", "t", "true"):
        return True
    else:
        return False


def getenv_number(name: str, default: float, dtype: type = float) -> float:
    """Get environment value converted with `dtype`, or `default` if undefined.

    An unparsable value is reported and the default is used instead.
    """
    val = os.getenv(name)
    if not val:
        return default
    try:
        return dtype(val)
    except ValueError:
        log.warning(f"ignoring {name}={val!r}: not a valid {dtype.__name__}")
        return default


class _Defaults(MutableMapping):
    """Attribute-backed mapping of default options."""

    def __getitem__(self, item: str) -> Any:
        return self.__dict__[item]

    def __setitem__(self, item: str, val: Any) -> None:
        self.__dict__[item] = val

    def __delitem__(self, item: str) -> None:
        del self.__dict__[item]

    def __iter__(self) -> Iterator:
        return self.__dict__.__iter__()

    def __len__(self) -> int:
        return len(self.__dict__)

    def __call__(self, **kwargs) -> dict:
        mapping = self.__dict__.copy()
        mapping.update(**kwargs)
        return mapping

    def __str__(self) -> str:
        return str(self.__dict__)

    def __repr__(self) -> str:
        return str(self.__dict__)


class NumbaDefaults(_Defaults):
    """Bare-bones class to store some Numba default options. Defaults values
    are set from environment variables.

    Examples
    --------
    Set all default option values for a numba wrapped function at once by expanding the
    provided dictionary:

    >>> from numba import njit
    >>> from histpdf.utils import numba_defaults_kwargs as nb_kwargs
    >>> @njit(**nb_kwargs) # def kernel(...): ...

    Customize one argument but still set defaults for the others:

    >>> from histpdf.utils import numba_defaults as nb_defaults
    >>> @njit(**nb_defaults(fastmath=False)) # def kernel(...): ...
    """

    def __init__(self) -> None:
        self.parallel: bool = getenv_bool("HISTPDF_PARALLEL", default=False)
        self.fastmath: bool = getenv_bool("HISTPDF_FASTMATH", default=True)


numba_defaults = NumbaDefaults()
numba_defaults_kwargs = numba_defaults


class PDFDefaults(_Defaults):
    """Numerical settings of a :class:`~histpdf.pdf.PDF`.

    Attributes
    ----------
    epsilon
        floor applied to every density value, so that consumers never take
        the log of (or divide by) zero. Env: ``HISTPDF_EPSILON``.
    n_bins_pdf_hist
        number of bins of the dense lookup histogram. Env: ``HISTPDF_NBINS``.
    n_int_steps
        number of midpoint steps used by numerical integration. Env:
        ``HISTPDF_NSTEPS``.
    debug
        log extra information on the input histogram. Env: ``HISTPDF_DEBUG``.

    Examples
    --------
    Get a modified copy, leaving the defaults untouched:

    >>> from histpdf.utils import pdf_defaults
    >>> settings = pdf_defaults(epsilon=1e-3)

    Override global options at runtime:

    >>> pdf_defaults.n_bins_pdf_hist = 20000
    """

    def __init__(self, **kwargs) -> None:
        self.epsilon: float = getenv_number("HISTPDF_EPSILON", 1.0e-2)
        self.n_bins_pdf_hist: int = getenv_number("HISTPDF_NBINS", 10000, int)
        self.n_int_steps: int = getenv_number("HISTPDF_NSTEPS", 10000, int)
        self.debug: bool = getenv_bool("HISTPDF_DEBUG", default=False)
        for key, val in kwargs.items():
            if key not in self.__dict__:
                raise KeyError(f"unknown PDF setting '{key}'")
            self.__dict__[key] = val

    def __call__(self, **kwargs) -> PDFDefaults:
        return PDFDefaults(**super().__call__(**kwargs))

    def validate(self) -> None:
        """Raise :class:`ValueError` if the settings cannot describe a PDF."""
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if int(self.n_bins_pdf_hist) < 2:
            raise ValueError(
                f"n_bins_pdf_hist must be at least 2, got {self.n_bins_pdf_hist}"
            )
        if int(self.n_int_steps) < 1:
            raise ValueError(f"n_int_steps must be positive, got {self.n_int_steps}")


pdf_defaults = PDFDefaults()

__file_extensions__ = {"json": [".json"], "yaml": [".yaml", ".yml"]}


def load_dict(fname: str, ftype: str | None = None) -> dict:
    """Load a text file as a Python dict."""
    fname = Path(fname)

    # determine file type from extension
    if ftype is None:
        for _ftype, exts in __file_extensions__.items():
            if fname.suffix in exts:
                ftype = _ftype

    msg = f"loading {ftype} dict from: {fname}"
    log.debug(msg)

    with fname.open() as f:
        if ftype == "json":
            return json.load(f)
        if ftype == "yaml":
            return yaml.safe_load(f)

        msg = f"unsupported file format {ftype}"
        raise NotImplementedError(msg)
