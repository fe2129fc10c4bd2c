"""Provider abstractions - allow swapping the weather, geocoding and health APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional

from health_data import DiseaseSnapshot
from weather_data import Coordinates, Place, WeatherReading


class ProviderError(Exception):
    """Base exception for any remote data provider failure."""
    pass


class WeatherProviderError(ProviderError):
    """Exception raised when a weather provider fails."""
    pass


class GeocodingError(ProviderError):
    """Exception raised when reverse or forward geocoding fails."""
    pass


class HealthProviderError(ProviderError):
    """Exception raised when the disease incidence provider fails."""
    pass


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, coords: Coordinates) -> WeatherReading:
        """
        Fetch current conditions at a location.

        Returns:
            WeatherReading: Current weather readings

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class GeocoderBase(ABC):
    """Abstract base class for place lookups."""

    @abstractmethod
    def reverse(self, coords: Coordinates) -> Optional[Place]:
        """
        Resolve coordinates to the best-matching place.

        Returns:
            Place, or None when nothing matches

        Raises:
            GeocodingError: If the lookup fails
        """
        pass

    @abstractmethod
    def search(self, name: str, country: Optional[str] = None, count: int = 10) -> List[Place]:
        """
        Find candidate places by free-text name, best match first.

        Raises:
            GeocodingError: If the lookup fails
        """
        pass


class HealthProviderBase(ABC):
    """Abstract base class for disease incidence providers."""

    @abstractmethod
    def get_country(self, country_code: str) -> DiseaseSnapshot:
        """
        Fetch the latest snapshot for a country.

        Raises:
            HealthProviderError: If the provider fails to fetch data
        """
        pass
