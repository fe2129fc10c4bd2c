"""Search-as-you-type adapter over the forward geocoder."""
import logging
import threading
from typing import Callable, List, Optional

from weather_data import Place
from weather_provider import GeocoderBase, GeocodingError

DEBOUNCE_SECONDS = 0.35


class PlaceSearch:
    """Debounced place search restricted to one country."""

    def __init__(
        self,
        geocoder: GeocoderBase,
        country: str = "IN",
        count: int = 10,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ):
        self.geocoder = geocoder
        self.country = country
        self.count = count
        self.debounce_seconds = debounce_seconds
        self.results: List[Place] = []
        self.error = ""
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def search(self, query: str) -> List[Place]:
        """Run a search now. Failures leave an empty result list and set ``error``."""
        self.error = ""
        try:
            self.results = self.geocoder.search(query, country=self.country, count=self.count)
        except GeocodingError as e:
            logging.error(f"Place search failed: {e}")
            self.error = str(e) or "Something went wrong"
            self.results = []
        return self.results

    def schedule(self, query: str, callback: Callable[[List[Place]], None]) -> None:
        """Search after the debounce delay, replacing any pending search."""
        def run():
            callback(self.search(query))

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, run)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
