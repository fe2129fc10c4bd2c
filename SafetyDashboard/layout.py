"""Text layout for the dashboard panels - pure functions for testability."""
from typing import List, Optional

from hazards import MergedAlerts
from health_data import DISCLAIMER, DiseaseSnapshot, HealthGuidance
from weather_data import Place, WeatherReading

DEFAULT_TITLE = "Weather & Health Safety"
NO_ALERTS_TEXT = "No active alerts for your area right now. Stay safe!"


def header_title(place: Optional[Place]) -> str:
    """
    Dashboard title for the resolved place.

    Examples:
        None -> "Weather & Health Safety"
        Pune, Maharashtra, India -> "Pune, Maharashtra · India"
    """
    if place is None:
        return DEFAULT_TITLE
    name = place.name or "Your area"
    if place.admin1:
        name = f"{name}, {place.admin1}"
    return f"{name} · {place.country or ''}".rstrip(" ·")


def _rounded(value: Optional[float], unit: str) -> str:
    return f"{round(value)}{unit}" if value is not None else "N/A"


def format_weather_lines(reading: WeatherReading) -> List[str]:
    """Format current readings as display lines (temperature, precipitation, wind, humidity)."""
    precip = f"{reading.precipitation:.1f} mm" if reading.precipitation is not None else "N/A"
    return [
        f"Temperature  {_rounded(reading.temperature_2m, '°C')}",
        f"Precipitation  {precip}",
        f"Wind  {_rounded(reading.wind_speed_10m, ' km/h')}",
        f"Humidity  {_rounded(reading.relative_humidity_2m, '%')}",
    ]


def render_weather_panel(
    reading: Optional[WeatherReading],
    place: Optional[Place] = None,
    error: str = "",
) -> List[str]:
    lines = ["Weather"]
    if place is not None:
        lines.append(header_title(place))
    if error:
        lines.append(f"! {error}")
    if reading is not None:
        lines.extend(format_weather_lines(reading))
    elif not error:
        lines.append("Enable location to load current conditions.")
    return lines


def _count(value: int) -> str:
    return f"{value:,}"


def render_health_panel(
    snapshot: Optional[DiseaseSnapshot],
    guidance: HealthGuidance,
    place: Optional[Place] = None,
    error: str = "",
) -> List[str]:
    lines = ["Health & Medicine"]
    if place is None:
        lines.append("Enable location to show relevant health advisories.")
    if error:
        lines.append(f"! {error}")
    if snapshot is not None:
        lines.append(f"Latest COVID-19 snapshot for {snapshot.country}:")
        lines.append(
            f"Today Cases {_count(snapshot.today_cases)} | Active {_count(snapshot.active)} | "
            f"Tests {_count(snapshot.tests)} | "
            f"Population {_count(snapshot.population) if snapshot.population else '-'}"
        )

    for heading, items in (
        ("Symptoms", guidance.symptoms),
        ("Preventive measures", guidance.prevention),
        ("Common medicines (info only)", guidance.medicines),
    ):
        lines.append(heading)
        lines.extend(f"  • {item}" for item in items)
    lines.append(DISCLAIMER)
    return lines


def render_alerts_panel(alerts: MergedAlerts) -> List[str]:
    """Alerts and precautions; a single reassurance line when nothing is active."""
    lines = ["Alerts & Precautions"]
    if not alerts.has_alerts:
        lines.append(NO_ALERTS_TEXT)
        return lines

    lines.append("Current Alerts")
    lines.extend(f"  - {hazard}" for hazard in alerts.hazards)
    lines.append("Safety Precautions")
    lines.extend(f"  - {precaution}" for precaution in alerts.precautions)
    return lines


def render_search_results(results: List[Place]) -> List[str]:
    if not results:
        return ["No matches. Try a different spelling."]
    return [f"{i}. {place.label}" for i, place in enumerate(results, start=1)]
