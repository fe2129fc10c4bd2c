"""disease.sh COVID-19 incidence provider."""
import logging

from health_data import DiseaseSnapshot
from http_client import fetch_json
from weather_provider import HealthProviderBase, HealthProviderError


class DiseaseShProvider(HealthProviderBase):
    """
    Health provider using the public disease.sh API.

    https://disease.sh/docs/ - no API key required.
    """

    BASE_URL = "https://disease.sh/v3/covid-19/countries"

    def __init__(self, timeout: float = 10):
        self.timeout = timeout

    def get_country(self, country_code: str) -> DiseaseSnapshot:
        """
        Fetch today's COVID-19 counts for an ISO country code.

        Raises:
            HealthProviderError: If the request fails or the country is unknown
        """
        if not country_code:
            raise HealthProviderError("Missing country code")

        url = f"{self.BASE_URL}/{country_code}"
        data = fetch_json(url, {"strict": "true"}, self.timeout, HealthProviderError, "disease.sh")
        if not isinstance(data, dict):
            raise HealthProviderError("Unexpected disease.sh response")

        try:
            snapshot = DiseaseSnapshot.from_response(data)
        except (TypeError, ValueError) as e:
            logging.error(f"Failed to parse disease.sh response: {e}", exc_info=True)
            raise HealthProviderError(f"Failed to parse response: {str(e)}")

        logging.info(
            f"Health snapshot for {snapshot.country}: {snapshot.today_cases} new cases, "
            f"{snapshot.incidence_per_million()} per million"
        )
        return snapshot
