import re
from pathlib import Path

import histpdf


def test_version_string():
    assert re.fullmatch(r"\d+\.\d+\.\d+", histpdf.__version__)

    # setup.py reads the version with the same pattern
    source = (Path(histpdf.__file__).parent / "_version.py").read_text()
    match = re.search(r'^version = "([^"]+)"', source, re.M)
    assert match is not None
    assert match.group(1) == histpdf.__version__
