from __future__ import annotations

import pytest

from grahabala.config import Settings, ShadbalaCfg
from grahabala.core import ALL_PLANETS, CLASSICAL_PLANETS, Planet
from grahabala.engine.vedic import (
    SAPTAVARGAJA_POINTS,
    ShadbalaResult,
    ShadbalaStrength,
    calculate_shadbala,
    chesta_bala,
    dig_bala,
    drekkana_bala,
    drik_bala,
    kendra_bala,
    naisargika_bala,
    ojayugma_bala,
    saptavargaja_bala,
    uchcha_bala,
)
from grahabala.jyotish import Dignity
from tests.helpers.charts import make_chart

SAPTAVARGA = ("D1", "D2", "D3", "D7", "D9", "D12", "D30")


@pytest.mark.parametrize(
    ("longitude", "expected"),
    [(10.0, 60.0), (190.0, 0.0), (100.0, 30.0), (280.0, 30.0), (370.0, 60.0)],
)
def test_uchcha_bala_for_the_sun(longitude: float, expected: float) -> None:
    assert uchcha_bala(Planet.SUN, longitude) == pytest.approx(expected)


def test_uchcha_bala_is_zero_for_nodes() -> None:
    assert uchcha_bala(Planet.RAHU, 50.0) == 0.0


def test_saptavargaja_exalted_in_rasi_scores_sixty() -> None:
    chart = make_chart({Planet.SUN: 10.0})
    assert chart.planet(Planet.SUN).dignity is Dignity.EXALTED
    assert saptavargaja_bala(Planet.SUN, {"D1": chart}) == pytest.approx(60.0)


def test_saptavargaja_debilitated_everywhere_scores_zero() -> None:
    debilitated = make_chart({Planet.SUN: 190.0})
    vargas = {code: debilitated for code in SAPTAVARGA}
    assert saptavargaja_bala(Planet.SUN, vargas) == 0.0


def test_saptavargaja_points_table() -> None:
    assert SAPTAVARGAJA_POINTS[Dignity.EXALTED] == 60.0
    assert SAPTAVARGAJA_POINTS[Dignity.DEBILITATED] == 0.0
    ordered = [SAPTAVARGAJA_POINTS[d] for d in Dignity]
    assert ordered == sorted(ordered, reverse=True)


@pytest.mark.parametrize(
    ("planet", "speed", "expected"),
    [
        (Planet.JUPITER, -0.05, 60.0),
        (Planet.JUPITER, -3.0, 60.0),
        (Planet.JUPITER, -0.005, 60.0),
        (Planet.JUPITER, 0.005, 0.0),
        (Planet.JUPITER, 0.083, 60.0),
        (Planet.JUPITER, 0.0415, 30.0),
        (Planet.MARS, 2.0, 60.0),
        (Planet.SUN, 1.0, 0.0),
        (Planet.MOON, 13.0, 0.0),
        (Planet.RAHU, -0.05, 0.0),
    ],
)
def test_chesta_bala(planet: Planet, speed: float, expected: float) -> None:
    assert chesta_bala(planet, speed) == pytest.approx(expected)


def test_chesta_bala_stationary_threshold_applies_to_forward_motion_only() -> None:
    assert chesta_bala(Planet.SATURN, 0.02, stationary_speed=0.05) == 0.0
    assert chesta_bala(Planet.SATURN, -0.02, stationary_speed=0.05) == 60.0
    assert chesta_bala(Planet.SATURN, -0.02, stationary_speed=0.01) == 60.0


@pytest.mark.parametrize(
    ("planet", "house", "expected"),
    [
        (Planet.SUN, 10, 60.0),
        (Planet.SUN, 4, 0.0),
        (Planet.SUN, 1, 30.0),
        (Planet.JUPITER, 12, 50.0),
        (Planet.SATURN, 1, 0.0),
        (Planet.MOON, 4, 60.0),
        (Planet.KETU, 1, 0.0),
    ],
)
def test_dig_bala(planet: Planet, house: int, expected: float) -> None:
    assert dig_bala(planet, house) == pytest.approx(expected)


@pytest.mark.parametrize(("house", "expected"), [(1, 60.0), (2, 30.0), (3, 15.0), (10, 60.0), (12, 15.0)])
def test_kendra_bala(house: int, expected: float) -> None:
    assert kendra_bala(house) == expected


def test_drekkana_bala_by_gender() -> None:
    assert drekkana_bala(Planet.SUN, 5.0) == 15.0
    assert drekkana_bala(Planet.SUN, 15.0) == 0.0
    assert drekkana_bala(Planet.MERCURY, 15.0) == 15.0
    assert drekkana_bala(Planet.VENUS, 25.0) == 15.0
    assert drekkana_bala(Planet.RAHU, 5.0) == 0.0


def test_ojayugma_bala() -> None:
    assert ojayugma_bala(Planet.SUN, 0, 2) == 30.0
    assert ojayugma_bala(Planet.MOON, 1, 3) == 30.0
    assert ojayugma_bala(Planet.MOON, 0, 3) == 15.0
    assert ojayugma_bala(Planet.SUN, 1, None) == 0.0
    assert ojayugma_bala(Planet.MERCURY, 0, 0) == 0.0


def test_naisargika_scale() -> None:
    values = [naisargika_bala(p) for p in (
        Planet.SUN, Planet.MOON, Planet.VENUS, Planet.JUPITER,
        Planet.MERCURY, Planet.MARS, Planet.SATURN,
    )]
    assert values == sorted(values, reverse=True)
    assert values[0] == 60.0
    assert naisargika_bala(Planet.KETU) == 0.0


def test_drik_bala_signs_follow_benefic_polarity() -> None:
    chart = make_chart({Planet.JUPITER: 0.0, Planet.SUN: 180.0})
    assert drik_bala(Planet.SUN, chart) == pytest.approx(15.0)
    assert drik_bala(Planet.JUPITER, chart) == pytest.approx(-15.0)


def test_drik_bala_from_every_benefic_reaches_the_limit() -> None:
    chart = make_chart(
        {
            Planet.SUN: 0.0,
            Planet.MOON: 180.0,
            Planet.JUPITER: 180.0,
            Planet.VENUS: 180.0,
            Planet.MERCURY: 180.0,
        }
    )
    assert drik_bala(Planet.SUN, chart) == pytest.approx(60.0)


def test_calculate_shadbala_covers_every_planet(sample_chart) -> None:
    results = calculate_shadbala(sample_chart)
    assert set(results) == set(ALL_PLANETS)
    for planet, result in results.items():
        assert isinstance(result, ShadbalaResult)
        assert result.planet is planet
        assert result.total == pytest.approx(sum(result.components.values()))
        assert result.strength is ShadbalaStrength.from_total(result.total)
        assert result.rupas == pytest.approx(result.total / 60.0)


def test_node_results_only_carry_kendra_and_drik(sample_chart) -> None:
    results = calculate_shadbala(sample_chart)
    for node in (Planet.RAHU, Planet.KETU):
        result = results[node]
        assert result.dig_bala == 0.0
        assert result.kala_bala == 0.0
        assert result.chesta_bala == 0.0
        assert result.naisargika_bala == 0.0
        assert result.sthana_bala == kendra_bala(sample_chart.planet(node).house)
        assert set(result.factors) == {"kendra_bala"}


def test_nodes_can_be_excluded(sample_chart) -> None:
    settings = Settings(shadbala=ShadbalaCfg(include_nodes=False))
    results = calculate_shadbala(sample_chart, settings=settings)
    assert set(results) == set(CLASSICAL_PLANETS)


def test_missing_planets_are_skipped() -> None:
    chart = make_chart({Planet.SUN: 10.0, Planet.MOON: 200.0})
    results = calculate_shadbala(chart)
    assert set(results) == {Planet.SUN, Planet.MOON}


def test_shadbala_is_deterministic(sample_chart) -> None:
    first = calculate_shadbala(sample_chart)
    second = calculate_shadbala(sample_chart)
    assert {p: r.to_dict() for p, r in first.items()} == {
        p: r.to_dict() for p, r in second.items()
    }


def test_sample_chart_components(sample_chart) -> None:
    results = calculate_shadbala(sample_chart)
    mars = results[Planet.MARS]
    # Mars sits on its deep exaltation point in the 8th house.
    assert mars.factors["uchcha_bala"].value == pytest.approx(60.0)
    assert mars.factors["kendra_bala"].value == 30.0
    assert mars.dig_bala == pytest.approx(60.0 * (1 - 2 / 6))
    assert mars.naisargika_bala == pytest.approx(17.14)

    sun = results[Planet.SUN]
    # Sun in the 10th at midday: full Dig Bala and Natonnata Bala.
    assert sun.dig_bala == pytest.approx(60.0)
    assert sun.factors["natonnata_bala"].value == 60.0
    assert results[Planet.MOON].factors["natonnata_bala"].value == 0.0
    assert results[Planet.MERCURY].factors["natonnata_bala"].value == 60.0


def test_sample_chart_time_lords(sample_chart) -> None:
    results = calculate_shadbala(sample_chart)
    # Wednesday: Mercury rules the day; the 6th hora of the day falls to the Sun.
    assert results[Planet.MERCURY].factors["vara_bala"].value == 45.0
    assert results[Planet.SUN].factors["hora_bala"].value == 60.0
    assert results[Planet.SUN].factors["tribhaga_bala"].value == 60.0
    assert results[Planet.JUPITER].factors["tribhaga_bala"].value == 0.0
    # Ingress into Pisces on a Friday, Mesha Sankranti on a Thursday.
    assert results[Planet.VENUS].factors["maasa_bala"].value == 30.0
    assert results[Planet.JUPITER].factors["varsha_bala"].value == 15.0
    for planet in (Planet.MARS, Planet.SATURN, Planet.MOON):
        assert results[planet].factors["vara_bala"].value == 0.0


def test_paksha_bala_follows_the_lunar_phase() -> None:
    full_moon = make_chart(
        {Planet.SUN: 0.0, Planet.MOON: 180.0, Planet.JUPITER: 90.0, Planet.MERCURY: 20.0}
    )
    results = calculate_shadbala(full_moon)
    assert results[Planet.MOON].factors["paksha_bala"].value == pytest.approx(60.0)
    assert results[Planet.SUN].factors["paksha_bala"].value == pytest.approx(30.0)
    assert results[Planet.JUPITER].factors["paksha_bala"].value == pytest.approx(30.0)
    assert results[Planet.MERCURY].factors["paksha_bala"].value == pytest.approx(30.0)

    new_moon = make_chart({Planet.SUN: 0.0, Planet.MOON: 0.0})
    assert calculate_shadbala(new_moon)[Planet.MOON].factors["paksha_bala"].value == 0.0


def test_ayana_bala_uses_declination() -> None:
    chart = make_chart(
        {Planet.SUN: 0.0, Planet.MOON: 90.0, Planet.MERCURY: 20.0},
        declinations={Planet.SUN: 23.45, Planet.MOON: 23.45, Planet.MERCURY: -10.0},
    )
    results = calculate_shadbala(chart)
    assert results[Planet.SUN].factors["ayana_bala"].value == pytest.approx(60.0)
    assert results[Planet.MOON].factors["ayana_bala"].value == pytest.approx(0.0)
    assert results[Planet.MERCURY].factors["ayana_bala"].value == pytest.approx(
        60.0 * 33.45 / 46.9
    )


def test_equinoctial_sun_has_half_ayana_bala() -> None:
    chart = make_chart({Planet.SUN: 0.0})
    result = calculate_shadbala(chart)[Planet.SUN]
    assert result.factors["ayana_bala"].value == pytest.approx(30.0)


def test_kala_bala_without_solar_cycle_uses_house_fallback() -> None:
    chart = make_chart(solar_cycle=None)
    results = calculate_shadbala(chart)
    sun = results[Planet.SUN]
    # Sun in the 10th house: day, second third.
    assert sun.factors["natonnata_bala"].value == 60.0
    assert sun.factors["tribhaga_bala"].value == 60.0
    assert sun.kala_bala == pytest.approx(
        sum(
            sun.factors[name].value
            for name in (
                "natonnata_bala",
                "paksha_bala",
                "tribhaga_bala",
                "vara_bala",
                "hora_bala",
                "maasa_bala",
                "varsha_bala",
                "ayana_bala",
            )
        )
    )


def test_saptavarga_configuration_changes_the_maximum(sample_chart) -> None:
    settings = Settings(shadbala=ShadbalaCfg(saptavarga=("D1", "D9")))
    result = calculate_shadbala(sample_chart, settings=settings)[Planet.SUN]
    assert result.factors["saptavargaja_bala"].maximum == 120.0


def test_unknown_saptavarga_code_raises(sample_chart) -> None:
    settings = Settings(shadbala=ShadbalaCfg(saptavarga=("D1", "D13")))
    with pytest.raises(ValueError):
        calculate_shadbala(sample_chart, settings=settings)


def test_strength_categories() -> None:
    assert ShadbalaStrength.from_total(400.0) is ShadbalaStrength.VERY_STRONG
    assert ShadbalaStrength.from_total(330.0) is ShadbalaStrength.STRONG
    assert ShadbalaStrength.from_total(300.0) is ShadbalaStrength.MODERATE
    assert ShadbalaStrength.from_total(250.0) is ShadbalaStrength.WEAK
    assert ShadbalaStrength.from_total(100.0) is ShadbalaStrength.VERY_WEAK
