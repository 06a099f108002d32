from __future__ import annotations

import logging
from datetime import UTC, date, datetime

import pytest

from grahabala.core import Planet
from grahabala.engine.vedic import DayNightContext, day_night_context, maasa_lord, varsha_lord, weekday_lord
from grahabala.engine.vedic.kala import (
    FALLBACK_SOLAR_CYCLE_INVERTED,
    FALLBACK_SOLAR_CYCLE_MISSING,
    FALLBACK_SUNRISE_MISSING,
    FALLBACK_SUNSET_MISSING,
)
from grahabala.ephemeris import SolarCycle
from tests.helpers.charts import DELHI, DELHI_SOLAR_CYCLE, MOMENT, make_chart


def test_weekday_lords() -> None:
    assert weekday_lord(date(2024, 3, 24)) is Planet.SUN
    assert weekday_lord(date(2024, 3, 25)) is Planet.MOON
    assert weekday_lord(date(2024, 3, 20)) is Planet.MERCURY
    assert weekday_lord(date(2024, 3, 23)) is Planet.SATURN


def test_daytime_context(sample_chart) -> None:
    ctx = day_night_context(sample_chart)
    assert ctx.is_day
    assert not ctx.is_fallback
    assert ctx.vedic_day == date(2024, 3, 20)
    assert ctx.fraction == pytest.approx(340 / 730)
    assert ctx.period_start == DELHI_SOLAR_CYCLE.sunrise
    assert ctx.period_end == DELHI_SOLAR_CYCLE.sunset
    assert ctx.vara_lord is Planet.MERCURY
    assert ctx.tribhaga_lord is Planet.SUN
    assert ctx.hora_index == 5
    assert ctx.hora_lord is Planet.SUN


def test_before_sunrise_belongs_to_previous_vedic_day() -> None:
    chart = make_chart(moment=datetime(2024, 3, 20, 0, 0, tzinfo=UTC))
    ctx = day_night_context(chart)
    assert not ctx.is_day
    assert ctx.vedic_day == date(2024, 3, 19)
    assert ctx.vara_lord is Planet.MARS
    assert ctx.fraction == pytest.approx(660 / 710)
    assert ctx.tribhaga_lord is Planet.MARS
    assert ctx.hora_index == 23
    assert ctx.hora_lord is Planet.VENUS


def test_after_sunset_is_night_of_the_same_vedic_day() -> None:
    chart = make_chart(moment=datetime(2024, 3, 20, 14, 0, tzinfo=UTC))
    ctx = day_night_context(chart)
    assert not ctx.is_day
    assert ctx.vedic_day == date(2024, 3, 20)
    assert ctx.fraction == pytest.approx(60 / 710)
    assert ctx.tribhaga_lord is Planet.MOON
    assert ctx.hora_index == 12
    assert ctx.hora_lord is Planet.SUN


@pytest.mark.parametrize(
    ("cycle", "reason"),
    [
        (None, FALLBACK_SOLAR_CYCLE_MISSING),
        (SolarCycle(sunrise=None, sunset=DELHI_SOLAR_CYCLE.sunset), FALLBACK_SUNRISE_MISSING),
        (SolarCycle(sunrise=DELHI_SOLAR_CYCLE.sunrise, sunset=None), FALLBACK_SUNSET_MISSING),
        (
            SolarCycle(sunrise=DELHI_SOLAR_CYCLE.sunset, sunset=DELHI_SOLAR_CYCLE.sunrise),
            FALLBACK_SOLAR_CYCLE_INVERTED,
        ),
    ],
)
def test_fallback_reasons(cycle, reason: str) -> None:
    ctx = day_night_context(make_chart(solar_cycle=cycle))
    assert ctx.fallback_reason == reason
    assert ctx.is_fallback
    assert ctx.period_start is None and ctx.period_end is None
    # Sun in the 10th house: second sixth of the day.
    assert ctx.is_day
    assert ctx.fraction == pytest.approx(2.5 / 6)


def test_fallback_is_logged(caplog) -> None:
    chart = make_chart(solar_cycle=None)
    with caplog.at_level(logging.INFO, logger="grahabala.engine.vedic.kala"):
        day_night_context(chart)
    events = [r.msg for r in caplog.records if isinstance(r.msg, dict)]
    assert any(
        event["event"] == "kala_bala_fallback" and event["reason"] == FALLBACK_SOLAR_CYCLE_MISSING
        for event in events
    )


def test_house_heuristic_at_night_before_local_noon() -> None:
    moment = datetime(2024, 3, 20, 22, 0, tzinfo=UTC)
    ctx = DayNightContext.from_house_heuristic(moment, DELHI, 3, FALLBACK_SOLAR_CYCLE_MISSING)
    assert not ctx.is_day
    # 03:09 local mean time on the 21st still belongs to the 20th.
    assert ctx.vedic_day == date(2024, 3, 20)
    assert ctx.fraction == pytest.approx(3.5 / 6)
    assert ctx.tribhaga_lord is Planet.VENUS


def test_house_heuristic_without_the_sun_uses_local_hour() -> None:
    ctx = DayNightContext.from_house_heuristic(MOMENT, DELHI, None, FALLBACK_SOLAR_CYCLE_MISSING)
    assert ctx.is_day
    assert ctx.vedic_day == date(2024, 3, 20)
    assert 0.4 < ctx.fraction < 0.5


def test_from_solar_cycle_requires_a_complete_cycle() -> None:
    with pytest.raises(ValueError):
        DayNightContext.from_solar_cycle(MOMENT, SolarCycle(None, None), date(2024, 3, 20))
    inverted = SolarCycle(DELHI_SOLAR_CYCLE.sunset, DELHI_SOLAR_CYCLE.sunrise)
    with pytest.raises(ValueError, match="sunrise before sunset"):
        DayNightContext.from_solar_cycle(MOMENT, inverted, date(2024, 3, 20))


def test_maasa_and_varsha_lords(sample_chart) -> None:
    assert maasa_lord(sample_chart) is Planet.VENUS
    assert varsha_lord(sample_chart) is Planet.JUPITER


def test_time_lords_need_the_sun() -> None:
    chart = make_chart({Planet.MOON: 10.0})
    assert maasa_lord(chart) is None
    assert varsha_lord(chart) is None
