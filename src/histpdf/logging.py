"""This module implements some helpers for setting up logging."""

import logging

import colorlog

from histpdf.utils import pdf_defaults

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
FATAL = logging.FATAL
CRITICAL = logging.CRITICAL


def setup(level: int = None, logger: logging.Logger = None) -> None:
    """Setup a colorful logging output.

    If `logger` is None, sets up only the ``histpdf`` logger. Calling this
    again on the same logger only updates the level.

    Parameters
    ----------
    level
        logging level (see :mod:`logging` module). If None, ``DEBUG`` when
        the ``debug`` PDF setting is on (``HISTPDF_DEBUG``), ``INFO``
        otherwise.
    logger
        if not `None`, setup this logger.

    Examples
    --------
    >>> from histpdf import logging
    >>> logging.setup(level=logging.DEBUG)
    """
    if level is None:
        level = DEBUG if pdf_defaults.debug else INFO

    if logger is None:
        logger = colorlog.getLogger("histpdf")

    logger.setLevel(level)
    if any(getattr(h, "_histpdf", False) for h in logger.handlers):
        return

    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter("%(log_color)s%(name)s [%(levelname)s] %(message)s")
    )
    handler._histpdf = True
    logger.addHandler(handler)
