"""Open-Meteo forecast and geocoding API providers."""
import logging
from typing import Any, Dict, List, Optional

from http_client import fetch_json
from weather_data import Coordinates, Place, WeatherReading
from weather_provider import (
    GeocoderBase,
    GeocodingError,
    WeatherProviderBase,
    WeatherProviderError,
)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
)


class OpenMeteoProvider(WeatherProviderBase):
    """
    Weather provider using the Open-Meteo forecast API.

    Free and keyless: https://open-meteo.com/en/docs
    Wind speed is reported in km/h (the API default).
    """

    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, timeout: float = 10):
        """
        Initialize Open-Meteo provider.

        Args:
            timeout: HTTP request timeout in seconds
        """
        self.timeout = timeout

    def get_current(self, coords: Coordinates) -> WeatherReading:
        """
        Fetch current conditions from the forecast endpoint.

        Raises:
            WeatherProviderError: If the request fails or has no 'current' block
        """
        params = {
            "latitude": coords.lat,
            "longitude": coords.lon,
            "timezone": "auto",
            "current": ",".join(CURRENT_FIELDS),
        }
        data = fetch_json(self.BASE_URL, params, self.timeout, WeatherProviderError, "Open-Meteo forecast")

        current = data.get("current") if isinstance(data, dict) else None
        if not current:
            logging.error("Response missing 'current' block")
            raise WeatherProviderError("Response missing 'current' block")
        if not isinstance(current, dict):
            logging.error(f"Unexpected 'current' block: {str(current)[:200]}")
            raise WeatherProviderError("Response 'current' block is not an object")

        try:
            reading = WeatherReading.from_current(current)
        except (TypeError, ValueError) as e:
            logging.error(f"Failed to parse forecast response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

        logging.info(
            f"Successfully parsed weather: {reading.temperature_2m}°C, code {reading.weather_code}"
        )
        return reading


class OpenMeteoGeocoder(GeocoderBase):
    """Reverse and forward geocoding using the Open-Meteo geocoding API."""

    REVERSE_URL = "https://geocoding-api.open-meteo.com/v1/reverse"
    SEARCH_URL = "https://geocoding-api.open-meteo.com/v1/search"
    MIN_QUERY_LENGTH = 2

    def __init__(self, language: str = "en", timeout: float = 10):
        self.language = language
        self.timeout = timeout

    def reverse(self, coords: Coordinates) -> Optional[Place]:
        params = {
            "latitude": coords.lat,
            "longitude": coords.lon,
            "language": self.language,
        }
        data = fetch_json(self.REVERSE_URL, params, self.timeout, GeocodingError, "Open-Meteo reverse geocoding")
        results = self._results(data)
        if not results:
            logging.info(f"No place found near {coords.lat},{coords.lon}")
            return None
        place = Place.from_result(results[0])
        logging.info(f"Resolved place: {place.label}")
        return place

    def search(self, name: str, country: Optional[str] = "IN", count: int = 10) -> List[Place]:
        query = (name or "").strip()
        if len(query) < self.MIN_QUERY_LENGTH:
            logging.debug(f"Search query too short: '{query}'")
            return []

        params = {
            "name": query,
            "count": str(count),
            "language": self.language,
            "format": "json",
        }
        if country:
            params["country"] = country
        data = fetch_json(self.SEARCH_URL, params, self.timeout, GeocodingError, "Open-Meteo search")

        places = [Place.from_result(r) for r in self._results(data)]
        if country:
            places = [p for p in places if p.country_code == country]
        logging.info(f"Search '{query}' returned {len(places)} place(s)")
        return places

    @staticmethod
    def _results(data: Any) -> List[Dict[str, Any]]:
        if not isinstance(data, dict):
            raise GeocodingError("Unexpected geocoding response")
        return data.get("results") or []
