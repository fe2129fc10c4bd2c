"""Location access: permission provider, the saved-coordinates slot and the status machine."""
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, Optional

from weather_data import Coordinates

DEFAULT_TIMEOUT_S = 10
DEFAULT_MAX_AGE_S = 60


class LocationPermissionError(Exception):
    """Raised when location access is denied or unavailable."""
    pass


class LocationProviderBase(ABC):
    """Abstract source of the device position."""

    @abstractmethod
    def request_location(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        max_age_s: float = DEFAULT_MAX_AGE_S,
    ) -> Coordinates:
        """
        Ask for the current position.

        Args:
            timeout_s: How long the platform may take to answer
            max_age_s: Oldest cached fix the platform may return

        Raises:
            LocationPermissionError: If access is denied or unsupported
        """
        pass


class StaticLocationProvider(LocationProviderBase):
    """Serves a fixed position from configuration; denies when none is configured."""

    def __init__(self, coords: Optional[Coordinates] = None):
        self.coords = coords

    def request_location(self, timeout_s=DEFAULT_TIMEOUT_S, max_age_s=DEFAULT_MAX_AGE_S) -> Coordinates:
        if self.coords is None:
            raise LocationPermissionError("Geolocation is not supported on this device.")
        return self.coords


class LocationStore:
    """Single persistent slot holding the last accepted coordinates as JSON."""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def load(self) -> Optional[Coordinates]:
        """Return the saved coordinates, or None if absent or unreadable."""
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                return Coordinates.from_dict(json.load(fh))
        except (OSError, KeyError, TypeError, ValueError) as e:
            logging.warning(f"Ignoring saved location in {self.path}: {e}")
            return None

    def save(self, coords: Coordinates) -> None:
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(coords.to_dict(), fh)
        logging.debug(f"Saved location to {self.path}")


class LocationAccess:
    """
    Tracks location permission status: idle -> requesting -> granted | denied.

    Denial is recoverable; calling request() again retries.
    """

    IDLE = "idle"
    REQUESTING = "requesting"
    GRANTED = "granted"
    DENIED = "denied"

    def __init__(
        self,
        provider: LocationProviderBase,
        store: LocationStore,
        on_location: Callable[[Coordinates], None],
    ):
        self.provider = provider
        self.store = store
        self.on_location = on_location
        self.status = self.IDLE
        self.error = ""

    def restore(self) -> Optional[Coordinates]:
        """Emit previously saved coordinates, if any."""
        coords = self.store.load()
        if coords is not None:
            logging.info(f"Using saved location {coords.lat},{coords.lon}")
            self.status = self.GRANTED
            self.on_location(coords)
        return coords

    def request(self) -> Optional[Coordinates]:
        """Ask the provider for the position; save and emit it on success."""
        self.status = self.REQUESTING
        self.error = ""
        try:
            coords = self.provider.request_location(DEFAULT_TIMEOUT_S, DEFAULT_MAX_AGE_S)
        except LocationPermissionError as e:
            logging.warning(f"Location access denied: {e}")
            self.status = self.DENIED
            self.error = str(e) or "Location access denied"
            return None

        try:
            self.store.save(coords)
        except OSError as e:
            logging.warning(f"Could not save location: {e}")
        self.status = self.GRANTED
        self.on_location(coords)
        return coords
