"""Terminal weather and health safety dashboard."""
import argparse
import logging
import os
import signal
import sys
import time
from typing import Optional

from dotenv import load_dotenv

from dashboard_service import DashboardService
from disease_provider import DiseaseShProvider
from health_data import covid_guidance
from layout import header_title, render_alerts_panel, render_health_panel, render_search_results, render_weather_panel
from location import LocationAccess, LocationStore, StaticLocationProvider
from notifications import LogNotifier
from open_meteo_provider import OpenMeteoGeocoder, OpenMeteoProvider
from place_search import PlaceSearch
from weather_data import Coordinates

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "safety-dashboard.log")
DEFAULT_LOCATION_FILE = "~/.safety_dashboard.json"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather and health safety dashboard")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--lat", type=float, help="Latitude; overrides DASHBOARD_LAT")
    parser.add_argument("--lon", type=float, help="Longitude; overrides DASHBOARD_LON")
    parser.add_argument("--search", help="Search for a place by name and use the best match")
    parser.add_argument("--refresh", type=float, default=300.0, help="Seconds between refreshes")
    parser.add_argument("--once", action="store_true", help="Render once and exit")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config(args: argparse.Namespace) -> dict:
    """Merge .env/environment settings with command line overrides."""
    load_dotenv()
    lat = args.lat if args.lat is not None else os.getenv("DASHBOARD_LAT")
    lon = args.lon if args.lon is not None else os.getenv("DASHBOARD_LON")

    coords: Optional[Coordinates] = None
    if lat is not None and lon is not None:
        try:
            coords = Coordinates(lat=float(lat), lon=float(lon))
        except ValueError as exc:
            raise SystemExit(f"Invalid coordinates: {exc}") from exc
    elif (lat is None) != (lon is None):
        raise SystemExit("Set both DASHBOARD_LAT and DASHBOARD_LON, or neither")

    config = {
        "coords": coords,
        "search_country": os.getenv("DASHBOARD_SEARCH_COUNTRY", "IN"),
        "location_file": os.getenv("DASHBOARD_LOCATION_FILE", DEFAULT_LOCATION_FILE),
        "language": os.getenv("DASHBOARD_LANG", "en"),
    }
    logging.info(
        "Configuration loaded: coords=%s search_country=%s location_file=%s",
        coords, config["search_country"], config["location_file"],
    )
    return config


def build_dashboard(config: dict, args: argparse.Namespace) -> DashboardService:
    service = DashboardService(
        weather_provider=OpenMeteoProvider(timeout=args.timeout),
        geocoder=OpenMeteoGeocoder(language=config["language"], timeout=args.timeout),
        health_provider=DiseaseShProvider(timeout=args.timeout),
        notifier=LogNotifier(),
    )
    logging.info("Dashboard service ready")
    return service


def resolve_search(config: dict, args: argparse.Namespace, service: DashboardService) -> Optional[Coordinates]:
    """Print search candidates and return the best match's coordinates."""
    search = PlaceSearch(service.geocoder, country=config["search_country"])
    results = search.search(args.search)
    if search.error:
        print(f"! {search.error}")
        return None
    print("\n".join(render_search_results(results)))
    for place in results:
        if place.coordinates is not None:
            logging.info("Using search result: %s", place.label)
            return place.coordinates
    return None


def render(service: DashboardService) -> str:
    sections = [
        [header_title(service.place)],
        render_weather_panel(service.reading, service.place, service.weather_error),
        render_health_panel(service.snapshot, covid_guidance(), service.place, service.health_error),
        render_alerts_panel(service.alerts()),
    ]
    return "\n\n".join("\n".join(lines) for lines in sections)


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_file, args.verbose)
    config = load_config(args)
    service = build_dashboard(config, args)

    access = LocationAccess(
        provider=StaticLocationProvider(config["coords"]),
        store=LocationStore(config["location_file"]),
        on_location=service.set_coordinates,
    )

    if args.search:
        coords = resolve_search(config, args, service)
        if coords is not None:
            service.set_coordinates(coords)
    elif config["coords"] is not None or access.restore() is None:
        access.request()
        if access.status == LocationAccess.DENIED:
            print(f"! {access.error}")

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        while True:
            print(render(service), flush=True)
            if args.once:
                break
            time.sleep(max(args.refresh, 1.0))
            service.refresh_weather()
    except KeyboardInterrupt:
        logging.info("Stopping dashboard")
    finally:
        service.close()


if __name__ == "__main__":
    main()
