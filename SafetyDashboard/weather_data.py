"""Weather and location domain models - pure data structures independent of any API."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinates":
        """Build coordinates from a {"lat": .., "lon": ..} mapping.

        Raises:
            KeyError, TypeError, ValueError: If the mapping is incomplete or invalid
        """
        return cls(lat=float(data["lat"]), lon=float(data["lon"]))


@dataclass(frozen=True)
class WeatherReading:
    """
    Current conditions at a point.

    Every field is optional: forecast responses may omit any of them and the
    hazard rules must cope with the gaps.
    """
    temperature_2m: Optional[float] = None  # °C
    relative_humidity_2m: Optional[float] = None  # %
    precipitation: Optional[float] = None  # mm
    wind_speed_10m: Optional[float] = None  # km/h
    weather_code: Optional[int] = None  # WMO code

    @classmethod
    def from_current(cls, current: Dict[str, Any]) -> "WeatherReading":
        """
        Map a forecast ``current`` block onto a reading, ignoring unknown keys.

        Raises:
            TypeError, ValueError: If a present field is not numeric
        """
        def number(key: str) -> Optional[float]:
            value = current.get(key)
            return float(value) if value is not None else None

        code = current.get("weather_code")
        return cls(
            temperature_2m=number("temperature_2m"),
            relative_humidity_2m=number("relative_humidity_2m"),
            precipitation=number("precipitation"),
            wind_speed_10m=number("wind_speed_10m"),
            weather_code=int(code) if code is not None else None,
        )


@dataclass(frozen=True)
class Place:
    """A resolved place from reverse geocoding or a search result."""
    name: Optional[str]
    country: Optional[str]
    country_code: Optional[str]
    admin1: Optional[str] = None  # first-level region, e.g. a state
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def label(self) -> str:
        parts: List[str] = [p for p in (self.name, self.admin1, self.country) if p]
        return ", ".join(parts)

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(lat=self.latitude, lon=self.longitude)

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "Place":
        return cls(
            name=result.get("name"),
            admin1=result.get("admin1"),
            country=result.get("country"),
            country_code=result.get("country_code"),
            latitude=result.get("latitude"),
            longitude=result.get("longitude"),
        )
