"""Dashboard coordinator: owns location/place state and drives the fetch cycles."""
import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Optional, Tuple

from hazards import HazardAssessment, MergedAlerts, evaluate_health, evaluate_weather, merge_assessments
from health_data import DiseaseSnapshot
from notifications import NotifierBase, notify_hazards
from weather_data import Coordinates, Place, WeatherReading
from weather_provider import GeocoderBase, HealthProviderBase, ProviderError, WeatherProviderBase


class DashboardService:
    """
    Coordinates the weather, place and health lookups for one location.

    Forecast and reverse geocoding run concurrently and must both succeed
    before anything is published. Each fetch cycle carries a generation
    number; a response that finishes after a newer request was issued is
    dropped so it cannot overwrite fresher state.

    Errors are kept per panel (weather_error, health_error) and never
    raised to the caller.
    """

    def __init__(
        self,
        weather_provider: WeatherProviderBase,
        geocoder: GeocoderBase,
        health_provider: HealthProviderBase,
        notifier: Optional[NotifierBase] = None,
    ):
        """
        Initialize the dashboard service.

        Args:
            weather_provider: Source of current conditions
            geocoder: Reverse geocoder used to name the location
            health_provider: Source of disease incidence per country
            notifier: Optional sink for weather alert notifications
        """
        self.weather_provider = weather_provider
        self.geocoder = geocoder
        self.health_provider = health_provider
        self.notifier = notifier

        self.coords: Optional[Coordinates] = None
        self.place: Optional[Place] = None
        self.reading: Optional[WeatherReading] = None
        self.snapshot: Optional[DiseaseSnapshot] = None
        self.weather_assessment: Optional[HazardAssessment] = None
        self.health_assessment: Optional[HazardAssessment] = None
        self.weather_error = ""
        self.health_error = ""

        self._lock = threading.Lock()
        self._weather_generation = 0
        self._health_generation = 0
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="dashboard-fetch")

    def set_coordinates(self, coords: Coordinates) -> bool:
        """Adopt new coordinates and refresh everything that depends on them."""
        logging.info(f"Coordinates set to {coords.lat},{coords.lon}")
        self.coords = coords
        return self.refresh_weather()

    def refresh_weather(self) -> bool:
        """
        Fetch weather and place for the current coordinates.

        Returns:
            True if a fresh result was published
        """
        coords = self.coords
        if coords is None:
            logging.debug("No coordinates yet, skipping weather refresh")
            return False

        with self._lock:
            self._weather_generation += 1
            generation = self._weather_generation
            self.weather_error = ""

        try:
            reading, place = self._fetch_weather_and_place(coords)
        except ProviderError as e:
            logging.error(f"Weather refresh failed: {e}")
            with self._lock:
                if generation == self._weather_generation:
                    self.weather_error = str(e) or "Something went wrong"
            return False

        assessment = evaluate_weather(reading)
        with self._lock:
            if generation != self._weather_generation:
                logging.info(f"Discarding stale weather result (generation {generation})")
                return False
            self.reading = reading
            self.place = place
            self.weather_assessment = assessment
            hazards = assessment.hazards

        logging.info(f"Weather hazards: {list(hazards) or 'none'}")
        if self.notifier is not None:
            notify_hazards(self.notifier, hazards)

        self.refresh_health()
        return True

    def refresh_health(self) -> bool:
        """
        Fetch disease incidence for the resolved country.

        Without a resolved country code the lookup does not run and any
        previous health assessment is cleared.

        Returns:
            True if a fresh snapshot was published
        """
        place = self.place
        with self._lock:
            self._health_generation += 1
            generation = self._health_generation
            self.health_error = ""
            if place is None or not place.country_code:
                logging.info("Place unresolved, skipping health lookup")
                self.snapshot = None
                self.health_assessment = None
                return False

        try:
            snapshot = self.health_provider.get_country(place.country_code)
        except ProviderError as e:
            logging.error(f"Health refresh failed: {e}")
            with self._lock:
                if generation == self._health_generation:
                    self.health_error = str(e) or "Something went wrong"
            return False

        assessment = evaluate_health(snapshot)
        with self._lock:
            if generation != self._health_generation:
                logging.info(f"Discarding stale health result (generation {generation})")
                return False
            self.snapshot = snapshot
            self.health_assessment = assessment
        return True

    def alerts(self) -> MergedAlerts:
        """Merged hazards and precautions from all sources."""
        return merge_assessments(self.weather_assessment, self.health_assessment)

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def _fetch_weather_and_place(self, coords: Coordinates) -> Tuple[WeatherReading, Optional[Place]]:
        """Run both lookups concurrently; the first failure fails the whole fetch."""
        weather_future = self._executor.submit(self.weather_provider.get_current, coords)
        place_future = self._executor.submit(self.geocoder.reverse, coords)

        done, pending = wait([weather_future, place_future], return_when=FIRST_EXCEPTION)
        for future in done:
            error = future.exception()
            if error is not None:
                for other in pending:
                    other.cancel()
                raise error

        return weather_future.result(), place_future.result()
