import logging

import histpdf.logging
from histpdf.utils import pdf_defaults


def test_setup():
    logger = logging.getLogger("histpdf.test_setup")
    histpdf.logging.setup(level=histpdf.logging.DEBUG, logger=logger)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    histpdf.logging.setup(level=histpdf.logging.WARNING, logger=logger)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_setup_default_level(monkeypatch):
    logger = logging.getLogger("histpdf.test_setup_default_level")
    monkeypatch.setattr(pdf_defaults, "debug", False)
    histpdf.logging.setup(logger=logger)
    assert logger.level == logging.INFO

    monkeypatch.setattr(pdf_defaults, "debug", True)
    histpdf.logging.setup(logger=logger)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
