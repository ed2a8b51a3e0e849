import json

import pytest

import histpdf.utils as hpu


def test_numba_defaults():
    assert hpu.numba_defaults_kwargs.fastmath
    assert not hpu.numba_defaults_kwargs.parallel
    assert hpu.numba_defaults(fastmath=False)["fastmath"] is False
    assert hpu.numba_defaults.fastmath


def test_getenv_bool(monkeypatch):
    monkeypatch.setenv("HISTPDF_TEST_FLAG", "True")
    assert hpu.getenv_bool("HISTPDF_TEST_FLAG")
    monkeypatch.setenv("HISTPDF_TEST_FLAG", "no")
    assert not hpu.getenv_bool("HISTPDF_TEST_FLAG", default=True)
    monkeypatch.delenv("HISTPDF_TEST_FLAG")
    assert hpu.getenv_bool("HISTPDF_TEST_FLAG", default=True)


def test_pdf_defaults(monkeypatch):
    settings = hpu.PDFDefaults()
    assert settings.epsilon == 0.01
    assert settings.n_bins_pdf_hist == 10000
    assert settings.n_int_steps == 10000
    assert not settings.debug

    monkeypatch.setenv("HISTPDF_NBINS", "500")
    monkeypatch.setenv("HISTPDF_EPSILON", "not-a-number")
    settings = hpu.PDFDefaults()
    assert settings.n_bins_pdf_hist == 500
    assert settings.epsilon == 0.01


def test_pdf_defaults_copy():
    settings = hpu.pdf_defaults(epsilon=1e-3)
    assert isinstance(settings, hpu.PDFDefaults)
    assert settings.epsilon == 1e-3
    assert hpu.pdf_defaults.epsilon == 0.01
    assert dict(settings)["n_int_steps"] == hpu.pdf_defaults.n_int_steps

    with pytest.raises(KeyError):
        hpu.pdf_defaults(bogus=1)


def test_pdf_defaults_validate():
    hpu.PDFDefaults().validate()
    with pytest.raises(ValueError):
        hpu.PDFDefaults(epsilon=0).validate()
    with pytest.raises(ValueError):
        hpu.PDFDefaults(n_bins_pdf_hist=1).validate()
    with pytest.raises(ValueError):
        hpu.PDFDefaults(n_int_steps=0).validate()


def test_load_dict(tmp_path):
    fjson = tmp_path / "conf.json"
    fjson.write_text(json.dumps({"method": "spline1", "n_smooth": 2}))
    assert hpu.load_dict(fjson) == {"method": "spline1", "n_smooth": 2}

    fyaml = tmp_path / "conf.yaml"
    fyaml.write_text("method: spline5\nsettings:\n  epsilon: 0.001\n")
    assert hpu.load_dict(fyaml) == {"method": "spline5", "settings": {"epsilon": 0.001}}

    ftxt = tmp_path / "conf.txt"
    ftxt.write_text("")
    with pytest.raises(NotImplementedError):
        hpu.load_dict(ftxt)
