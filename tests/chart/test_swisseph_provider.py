from __future__ import annotations

import math
from datetime import UTC, date, datetime

import pytest

pytest.importorskip("swisseph")

from grahabala.chart import compute_vedic_chart  # noqa: E402
from grahabala.core import ALL_PLANETS, Planet  # noqa: E402
from grahabala.engine.vedic import calculate_divisional_chart, calculate_shadbala  # noqa: E402
from grahabala.ephemeris import (  # noqa: E402
    EphemerisProvider,
    SwissEphemerisProvider,
    from_julian_day,
    julian_day,
)
from grahabala.utils import norm360  # noqa: E402
from tests.helpers.charts import DELHI, MOMENT  # noqa: E402


@pytest.fixture(scope="module")
def provider() -> SwissEphemerisProvider:
    return SwissEphemerisProvider()


def test_julian_day_round_trip() -> None:
    jd = julian_day(MOMENT)
    assert jd == pytest.approx(2460389.770833, abs=1e-5)
    back = from_julian_day(jd)
    assert abs((back - MOMENT).total_seconds()) < 1.0


def test_julian_day_requires_timezone() -> None:
    with pytest.raises(ValueError):
        julian_day(datetime(2024, 3, 20, 6, 30))


def test_unknown_ayanamsa_is_rejected() -> None:
    with pytest.raises(ValueError):
        SwissEphemerisProvider(ayanamsa="unknown")


def test_provider_satisfies_protocol(provider) -> None:
    assert isinstance(provider, EphemerisProvider)


def test_sidereal_sun_near_vernal_equinox(provider) -> None:
    sun = provider.position_of(Planet.SUN, MOMENT, DELHI)
    # Lahiri ayanamsa is roughly 24°10' in 2024.
    assert 335.0 < sun.longitude < 337.0
    assert sun.sign_index == 11
    assert sun.speed_longitude > 0.9
    assert abs(sun.declination) < 1.0


def test_ketu_is_not_an_ephemeris_body(provider) -> None:
    with pytest.raises(ValueError):
        provider.position_of(Planet.KETU, MOMENT, DELHI)


def test_sunrise_precedes_sunset(provider) -> None:
    cycle = provider.sunrise_sunset(date(2024, 3, 20), DELHI)
    assert cycle.is_complete
    assert datetime(2024, 3, 20, 0, 0, tzinfo=UTC) < cycle.sunrise < datetime(2024, 3, 20, 2, 0, tzinfo=UTC)
    assert datetime(2024, 3, 20, 12, 0, tzinfo=UTC) < cycle.sunset < datetime(2024, 3, 20, 14, 0, tzinfo=UTC)


def test_unknown_house_system(provider) -> None:
    with pytest.raises(ValueError):
        provider.angles(MOMENT, DELHI, "campanus-ish")


def test_full_pipeline(provider) -> None:
    chart = compute_vedic_chart(MOMENT, DELHI, provider)
    assert set(chart.planets) == set(ALL_PLANETS)
    assert chart.solar_cycle is not None and chart.solar_cycle.is_complete
    assert norm360(chart.ketu.longitude - chart.rahu.longitude) == pytest.approx(180.0)

    d9 = calculate_divisional_chart(chart, "D9")
    assert norm360(d9.ketu.longitude - d9.rahu.longitude) == pytest.approx(180.0)

    results = calculate_shadbala(chart)
    assert results[Planet.SUN].factors["natonnata_bala"].value == 60.0
    assert all(math.isfinite(result.total) for result in results.values())
