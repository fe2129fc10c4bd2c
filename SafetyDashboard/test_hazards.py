"""Tests for the hazard assessment rules."""
import pytest
from hazards import (
    COVID_ACTIVITY,
    EXTREME_HEAT,
    FREEZING,
    HEAT_HUMIDITY,
    HEAVY_RAIN,
    HIGH_HEAT,
    PRECAUTIONS,
    STORM,
    HazardAssessment,
    HazardSource,
    evaluate_health,
    evaluate_weather,
    merge_assessments,
)
from health_data import DiseaseSnapshot
from weather_data import WeatherReading


def reading(**kwargs):
    """Calm defaults, overridden per test."""
    values = dict(
        temperature_2m=20.0,
        relative_humidity_2m=40.0,
        precipitation=0.0,
        wind_speed_10m=5.0,
        weather_code=0,
    )
    values.update(kwargs)
    return WeatherReading(**values)


def test_calm_weather_has_no_hazards():
    result = evaluate_weather(reading())
    assert result.hazards == ()
    assert result.precautions == ()
    assert result.source is HazardSource.WEATHER


@pytest.mark.parametrize("temp", [38.0, 39.0, 45.5])
def test_extreme_heat_excludes_high_heat(temp):
    result = evaluate_weather(reading(temperature_2m=temp))
    assert EXTREME_HEAT in result.hazards
    assert HIGH_HEAT not in result.hazards


@pytest.mark.parametrize("temp", [32.0, 35.0, 37.9])
def test_high_heat_excludes_extreme_heat(temp):
    result = evaluate_weather(reading(temperature_2m=temp))
    assert HIGH_HEAT in result.hazards
    assert EXTREME_HEAT not in result.hazards


def test_extreme_heat_example():
    """39°C on a dry calm day yields only the extreme heat alert."""
    result = evaluate_weather(reading(temperature_2m=39))
    assert list(result.hazards) == [EXTREME_HEAT]
    assert set(result.precautions) == {
        "Stay indoors and keep hydrated",
        "Avoid strenuous outdoor activities",
        "Check on elderly and vulnerable people",
    }


def test_humid_rain_example():
    """31°C, 75% RH, 12 mm of rain with WMO 65: rain plus humid heat, no plain heat."""
    result = evaluate_weather(reading(
        temperature_2m=31,
        relative_humidity_2m=75,
        precipitation=12,
        weather_code=65,
        wind_speed_10m=3,
    ))
    assert set(result.hazards) == {HEAVY_RAIN, HEAT_HUMIDITY}
    assert HIGH_HEAT not in result.hazards
    expected = set(PRECAUTIONS[HEAVY_RAIN]) | set(PRECAUTIONS[HEAT_HUMIDITY])
    assert set(result.precautions) == expected
    assert len(result.precautions) == len(expected)


def test_high_heat_and_humidity_fire_together():
    result = evaluate_weather(reading(temperature_2m=33, relative_humidity_2m=80))
    assert set(result.hazards) == {HIGH_HEAT, HEAT_HUMIDITY}


@pytest.mark.parametrize("code", [65, 66, 67, 80, 81, 82])
def test_heavy_rain_from_weather_code(code):
    result = evaluate_weather(reading(weather_code=code))
    assert HEAVY_RAIN in result.hazards


def test_heavy_rain_threshold():
    assert HEAVY_RAIN in evaluate_weather(reading(precipitation=10.0)).hazards
    assert HEAVY_RAIN not in evaluate_weather(reading(precipitation=9.9)).hazards


@pytest.mark.parametrize("code", [95, 96, 99])
def test_storm_from_weather_code(code):
    result = evaluate_weather(reading(weather_code=code))
    assert STORM in result.hazards


def test_storm_wind_threshold():
    assert STORM in evaluate_weather(reading(wind_speed_10m=20)).hazards
    assert STORM not in evaluate_weather(reading(wind_speed_10m=19.9)).hazards


def test_freezing_threshold():
    assert FREEZING in evaluate_weather(reading(temperature_2m=0)).hazards
    assert FREEZING not in evaluate_weather(reading(temperature_2m=0.1)).hazards


def test_all_independent_rules_can_fire_at_once():
    result = evaluate_weather(reading(
        temperature_2m=40, relative_humidity_2m=90, precipitation=25, wind_speed_10m=60, weather_code=95,
    ))
    assert set(result.hazards) == {EXTREME_HEAT, HEAVY_RAIN, STORM, HEAT_HUMIDITY}


def test_repeated_hazard_listed_once():
    combined = HazardAssessment.build([HEAVY_RAIN, COVID_ACTIVITY, HEAVY_RAIN], HazardSource.WEATHER)
    assert combined.hazards == (HEAVY_RAIN, COVID_ACTIVITY)
    assert len(combined.precautions) == len(set(combined.precautions))


def test_shared_precaution_listed_once(monkeypatch):
    """Two rules whose precautions overlap must not repeat the shared one."""
    monkeypatch.setitem(
        PRECAUTIONS, HEAT_HUMIDITY, ("Drink water frequently", "Use fans/AC and take cool showers"),
    )
    result = evaluate_weather(reading(temperature_2m=33, relative_humidity_2m=80))
    assert set(result.hazards) == {HIGH_HEAT, HEAT_HUMIDITY}
    assert result.precautions.count("Drink water frequently") == 1
    assert len(result.precautions) == 3


def test_missing_fields_do_not_raise():
    result = evaluate_weather(WeatherReading())
    assert result.hazards == ()


def test_missing_weather_code_still_uses_thresholds():
    result = evaluate_weather(reading(weather_code=None, precipitation=15, wind_speed_10m=30))
    assert set(result.hazards) == {HEAVY_RAIN, STORM}


def test_missing_temperature_skips_temperature_rules():
    result = evaluate_weather(reading(temperature_2m=None, relative_humidity_2m=95, weather_code=99))
    assert list(result.hazards) == [STORM]


def test_none_reading_is_empty_assessment():
    result = evaluate_weather(None)
    assert result.hazards == ()
    assert result.source is HazardSource.WEATHER


def test_health_boundary_is_inclusive():
    at_threshold = DiseaseSnapshot(country="X", today_cases=500, population=10_000_000)
    assert at_threshold.incidence_per_million() == 50
    result = evaluate_health(at_threshold)
    assert result is not None
    assert result.hazards == (COVID_ACTIVITY,)
    assert result.source is HazardSource.HEALTH
    assert set(result.precautions) == {
        "Wear a mask in crowded indoor spaces",
        "Stay home if unwell",
        "Consider testing if symptomatic",
    }


def test_health_below_threshold_is_absent():
    below = DiseaseSnapshot(country="X", today_cases=490, population=10_000_000)
    assert below.incidence_per_million() == 49
    assert evaluate_health(below) is None


def test_health_zero_population_does_not_divide_by_zero():
    snapshot = DiseaseSnapshot(country="X", today_cases=1, population=0)
    assert snapshot.incidence_per_million() == 1_000_000
    assert evaluate_health(snapshot) is not None


def test_health_none_snapshot():
    assert evaluate_health(None) is None


def test_merge_deduplicates_hazards():
    a = HazardAssessment(hazards=("A",), precautions=("p1",), source=HazardSource.WEATHER)
    b = HazardAssessment(hazards=("A", "B"), precautions=("p1", "p2"), source=HazardSource.HEALTH)
    merged = merge_assessments(a, b)
    assert set(merged.hazards) == {"A", "B"}
    assert len(merged.hazards) == 2
    assert set(merged.precautions) == {"p1", "p2"}
    assert merged.has_alerts is True


def test_merge_skips_absent_assessments():
    weather = evaluate_weather(reading(temperature_2m=39))
    merged = merge_assessments(weather, None)
    assert merged.hazards == weather.hazards
    assert merged.precautions == weather.precautions


def test_merge_of_nothing_has_no_alerts():
    merged = merge_assessments()
    assert merged.hazards == ()
    assert merged.has_alerts is False
    assert merge_assessments(None, evaluate_weather(reading())).has_alerts is False
