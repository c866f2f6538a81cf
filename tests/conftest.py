"""Shared fixtures: sample resource files, database paths and config isolation."""

import pytest

from samples import RESX_EN, RESX_GREETING_ONLY, XLIFF_DE


@pytest.fixture
def resx_file(tmp_path):
    path = tmp_path / "Strings.resx"
    path.write_text(RESX_EN, encoding="utf-8")
    return path


@pytest.fixture
def greeting_resx(tmp_path):
    path = tmp_path / "Greeting.resx"
    path.write_text(RESX_GREETING_ONLY, encoding="utf-8")
    return path


@pytest.fixture
def xliff_file(tmp_path):
    path = tmp_path / "Strings.de.xlf"
    path.write_text(XLIFF_DE, encoding="utf-8")
    return path


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "strings.muidb"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep a developer's MUIDB_CONFIG or ./muidb.yaml out of the tests."""
    monkeypatch.delenv("MUIDB_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
