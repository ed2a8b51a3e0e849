#!/usr/bin/env python3
import os
import re

from setuptools import find_packages, setup


def read_version():
    here = os.path.dirname(os.path.realpath(__file__))
    with open(os.path.join(here, "src", "histpdf", "_version.py")) as f:
        match = re.search(r"^version = \"([^\"]+)\"", f.read(), re.M)
    if match is None:
        raise RuntimeError("unable to find version string in _version.py")
    return match.group(1)


setup(
    name="histpdf",
    version=read_version(),
    author="histpdf developers",
    description="Spline-interpolated probability density functions from histograms",
    long_description="",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "colorlog",
        "hist",
        "numba",
        "numpy",
        "pyyaml",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
)
