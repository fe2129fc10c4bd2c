"""Hazard assessment rules - pure functions mapping readings to alerts and precautions."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from health_data import DiseaseSnapshot
from weather_data import WeatherReading


EXTREME_HEAT = "Extreme heat risk"
HIGH_HEAT = "High heat"
HEAVY_RAIN = "Heavy rain"
STORM = "Storm / high wind"
FREEZING = "Freezing conditions"
HEAT_HUMIDITY = "Heat + high humidity"
COVID_ACTIVITY = "Elevated COVID-19 activity"

# WMO codes: heavy rain, freezing rain and rain showers
HEAVY_RAIN_CODES = frozenset({65, 66, 67, 80, 81, 82})
# WMO codes: thunderstorm, with or without hail
STORM_CODES = frozenset({95, 96, 99})

EXTREME_HEAT_C = 38.0
HIGH_HEAT_C = 32.0
FREEZING_C = 0.0
HEAVY_RAIN_MM = 10.0
HIGH_WIND = 20.0
HUMID_HEAT_C = 30.0
HUMID_HEAT_RH = 70.0
COVID_RATE_PER_MILLION = 50

PRECAUTIONS = {
    EXTREME_HEAT: (
        "Stay indoors and keep hydrated",
        "Avoid strenuous outdoor activities",
        "Check on elderly and vulnerable people",
    ),
    HIGH_HEAT: (
        "Drink water frequently",
        "Wear light, breathable clothing",
    ),
    HEAVY_RAIN: (
        "Avoid driving through flooded areas",
        "Keep emergency kit ready",
        "Stay indoors if possible",
    ),
    STORM: (
        "Secure outdoor objects",
        "Stay away from trees and power lines",
        "Delay travel if possible",
    ),
    FREEZING: (
        "Wear layered, warm clothing",
        "Beware of ice on roads and pavements",
    ),
    HEAT_HUMIDITY: (
        "Use fans/AC and take cool showers",
    ),
    COVID_ACTIVITY: (
        "Wear a mask in crowded indoor spaces",
        "Stay home if unwell",
        "Consider testing if symptomatic",
    ),
}


class HazardSource(str, Enum):
    WEATHER = "weather"
    HEALTH = "health"


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    """Drop exact duplicates, keeping first-seen order for display."""
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class HazardAssessment:
    """Hazards detected by one source and the precautions they call for."""
    hazards: Tuple[str, ...]
    precautions: Tuple[str, ...]
    source: HazardSource

    @classmethod
    def build(cls, hazards: Iterable[str], source: HazardSource) -> "HazardAssessment":
        """Build an assessment from hazard labels, pulling in their precautions."""
        labels = _unique(hazards)
        precautions = _unique(p for label in labels for p in PRECAUTIONS[label])
        return cls(hazards=labels, precautions=precautions, source=source)


@dataclass(frozen=True)
class MergedAlerts:
    """Union of several assessments, ready for display."""
    hazards: Tuple[str, ...]
    precautions: Tuple[str, ...]

    @property
    def has_alerts(self) -> bool:
        return len(self.hazards) > 0


def _at_least(value: Optional[float], threshold: float) -> bool:
    return value is not None and value >= threshold


def _at_most(value: Optional[float], threshold: float) -> bool:
    return value is not None and value <= threshold


def evaluate_weather(reading: Optional[WeatherReading]) -> HazardAssessment:
    """
    Assess current weather for hazards.

    Each rule fires independently and the results are unioned. Only the two
    plain heat rules exclude each other. A rule whose input is missing from
    the reading does not fire.

    Args:
        reading: Current conditions, or None when nothing is known yet

    Returns:
        HazardAssessment with source WEATHER (empty when nothing fires)
    """
    if reading is None:
        return HazardAssessment.build([], HazardSource.WEATHER)

    t = reading.temperature_2m
    rh = reading.relative_humidity_2m
    code = reading.weather_code
    hazards: List[str] = []

    if _at_least(t, EXTREME_HEAT_C):
        hazards.append(EXTREME_HEAT)
    elif _at_least(t, HIGH_HEAT_C):
        hazards.append(HIGH_HEAT)

    if _at_least(reading.precipitation, HEAVY_RAIN_MM) or code in HEAVY_RAIN_CODES:
        hazards.append(HEAVY_RAIN)

    if _at_least(reading.wind_speed_10m, HIGH_WIND) or code in STORM_CODES:
        hazards.append(STORM)

    if _at_most(t, FREEZING_C):
        hazards.append(FREEZING)

    # Kept separate from the plain heat rules: 31°C at 75% RH is humid heat
    # without being "High heat".
    if _at_least(t, HUMID_HEAT_C) and _at_least(rh, HUMID_HEAT_RH):
        hazards.append(HEAT_HUMIDITY)

    return HazardAssessment.build(hazards, HazardSource.WEATHER)


def evaluate_health(snapshot: Optional[DiseaseSnapshot]) -> Optional[HazardAssessment]:
    """Return a health assessment when incidence reaches the alert rate, else None."""
    if snapshot is None:
        return None
    if snapshot.incidence_per_million() >= COVID_RATE_PER_MILLION:
        return HazardAssessment.build([COVID_ACTIVITY], HazardSource.HEALTH)
    return None


def merge_assessments(*assessments: Optional[HazardAssessment]) -> MergedAlerts:
    """Union hazards and precautions across sources; None entries contribute nothing."""
    present = [a for a in assessments if a is not None]
    return MergedAlerts(
        hazards=_unique(h for a in present for h in a.hazards),
        precautions=_unique(p for a in present for p in a.precautions),
    )
