import numpy as np
import pytest

from histpdf.math.histogram import Histogram


@pytest.fixture
def gap_hist():
    # flat, with bins 40 to 60 emptied
    contents = np.ones(100)
    contents[39:60] = 0
    return Histogram(contents, 0, 10, name="gap", title="gap")


@pytest.fixture
def wave_hist():
    x = np.linspace(0, 2 * np.pi, 51)
    centers = (x[1:] + x[:-1]) / 2
    return Histogram(
        100 * (2 + np.sin(centers)), 0, 2 * np.pi, name="wave", title="wave"
    )


@pytest.fixture
def gauss_hist():
    rng = np.random.default_rng(42)
    return Histogram.from_data(
        rng.normal(size=20000), bins=60, range=(-6, 6), name="gauss"
    )
