"""Integration tests - can optionally hit the real APIs (disabled by default)."""
import os
import pytest
from dashboard_service import DashboardService
from disease_provider import DiseaseShProvider
from open_meteo_provider import OpenMeteoGeocoder, OpenMeteoProvider
from weather_data import Coordinates

live = pytest.mark.skipif(
    not os.environ.get("SAFETY_DASHBOARD_LIVE"),
    reason="SAFETY_DASHBOARD_LIVE not set - skipping integration test"
)

PUNE = Coordinates(lat=18.52, lon=73.86)


@live
def test_open_meteo_integration():
    """
    Integration test that hits the real Open-Meteo APIs.

    Set SAFETY_DASHBOARD_LIVE=1 to run this test.
    """
    reading = OpenMeteoProvider().get_current(PUNE)
    assert reading.temperature_2m is not None

    place = OpenMeteoGeocoder().reverse(PUNE)
    assert place is not None
    assert place.country_code == "IN"

    results = OpenMeteoGeocoder().search("Karnataka", country="IN")
    assert all(p.country_code == "IN" for p in results)


@live
def test_dashboard_integration():
    """Full refresh cycle against the live services."""
    service = DashboardService(
        weather_provider=OpenMeteoProvider(),
        geocoder=OpenMeteoGeocoder(),
        health_provider=DiseaseShProvider(),
    )
    try:
        assert service.set_coordinates(PUNE) is True
        assert service.reading is not None
        assert service.health_error == ""
        assert service.snapshot.country == "India"
    finally:
        service.close()
