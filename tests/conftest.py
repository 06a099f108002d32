from __future__ import annotations

import importlib.util
import warnings

import pytest

from grahabala.chart import VedicChart
from tests.helpers.charts import FixedEphemeris, make_chart

if importlib.util.find_spec("swisseph") is None:
    warnings.warn(
        "pyswisseph not installed; Swiss Ephemeris tests will be skipped.",
        RuntimeWarning,
        stacklevel=1,
    )


@pytest.fixture
def sample_chart() -> VedicChart:
    """Delhi, 20 March 2024 around local noon, whole-sign houses from Gemini."""

    return make_chart()


@pytest.fixture
def fixed_ephemeris() -> FixedEphemeris:
    return FixedEphemeris()


@pytest.fixture(autouse=True)
def _isolated_config_home(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GRAHABALA_HOME", str(tmp_path / "grahabala-home"))
