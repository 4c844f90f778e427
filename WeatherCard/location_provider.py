"""IP geolocation lookup used to pick the starting city."""
import logging
import requests
from typing import Optional
from weather_provider import LocationProviderBase, LocationLookupFailed


class IpApiLocationProvider(LocationProviderBase):
    """Location provider backed by https://ipapi.co (no API key needed)."""

    BASE_URL = "https://ipapi.co/json/"

    def __init__(self, timeout: int = 5):
        self.timeout = timeout

    def get_city(self) -> Optional[str]:
        """
        Look up the caller's city from their public IP address.

        Returns:
            The city name, or None if the response carried no city

        Raises:
            LocationLookupFailed: On network, HTTP or decoding errors, or when
                ipapi.co answers with an error payload (e.g. rate limited)
        """
        try:
            logging.info(f"Making geolocation request: {self.BASE_URL}")
            response = requests.get(self.BASE_URL, timeout=self.timeout)
            logging.debug(f"Geolocation response status: {response.status_code}")
            response.raise_for_status()
            data = response.json()
        except ValueError as e:
            raise LocationLookupFailed(f"Failed to parse geolocation response: {e}")
        except requests.exceptions.RequestException as e:
            raise LocationLookupFailed(f"Geolocation request failed: {e}")

        if not isinstance(data, dict):
            raise LocationLookupFailed(f"Unexpected geolocation response: {str(data)[:200]}")
        # ipapi.co reports quota errors with a 200 and an error flag
        if data.get("error"):
            raise LocationLookupFailed(f"Geolocation error: {data.get('reason', 'unknown')}")

        city = data.get("city")
        if not isinstance(city, str) or not city.strip():
            logging.info("Geolocation response has no city")
            return None
        logging.info(f"Geolocated city: {city.strip()}")
        return city.strip()
