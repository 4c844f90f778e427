"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from weather_provider import WeatherProviderBase, WeatherFetchFailed
from weather_data import WeatherSnapshot

ICON_URL_TEMPLATE = "http://openweathermap.org/img/wn/{icon}@2x.png"


def icon_url(icon: str) -> str:
    """Build the OpenWeather icon URL for a condition icon code."""
    return ICON_URL_TEMPLATE.format(icon=icon)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    queried by city name.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.timeout = timeout

    def get_current(self, city: str) -> WeatherSnapshot:
        """
        Fetch current weather for a city from OpenWeather Current Weather API.

        Args:
            city: City name (e.g., "Pune", "Tokyo")

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            WeatherFetchFailed: If the request fails or a required field is missing
        """
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            logging.info(f"Making OpenWeather API request for '{city}': {self.BASE_URL}")
            logging.debug(f"Request parameters: q={city}, units={self.units}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")

            return self._parse(data)

        except ValueError as e:
            # requests raises a ValueError subclass for undecodable bodies
            logging.error(f"Failed to decode API response: {e}")
            raise WeatherFetchFailed(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherFetchFailed(f"Network error: {str(e)}")

    def _parse(self, data: dict) -> WeatherSnapshot:
        """Map the API payload to a snapshot; every field is required."""
        if not isinstance(data, dict):
            logging.error(f"Unexpected response type: {type(data).__name__}")
            raise WeatherFetchFailed(f"Unexpected response: {str(data)[:200]}")
        weather_array = data.get("weather")
        if not isinstance(weather_array, list) or not weather_array:
            logging.error("Response missing 'weather' array")
            raise WeatherFetchFailed("Response missing 'weather' array")
        for block in ("main", "wind", "sys"):
            if not data.get(block):
                logging.error(f"Response missing '{block}' block")
                raise WeatherFetchFailed(f"Response missing '{block}' block")

        try:
            weather = weather_array[0]
            main_data = data["main"]
            snapshot = WeatherSnapshot(
                city=data["name"],
                temp=float(main_data["temp"]),
                temp_min=float(main_data["temp_min"]),
                temp_max=float(main_data["temp_max"]),
                pressure=int(main_data["pressure"]),
                wind_speed=float(data["wind"]["speed"]),
                icon=weather["icon"],
                condition_main=weather["main"],
                condition_description=weather["description"],
                sunrise=int(data["sys"]["sunrise"]),
                sunset=int(data["sys"]["sunset"]),
            )
        except KeyError as e:
            logging.error(f"Response missing required field {e}")
            raise WeatherFetchFailed(f"Response missing required field {e}")
        except (AttributeError, TypeError, ValueError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherFetchFailed(f"Failed to parse response: {str(e)}")

        logging.info(f"Successfully parsed weather for {snapshot.city}: {snapshot.temp}°C, {snapshot.condition_main}")
        return snapshot

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherFetchFailed(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        if not isinstance(error_data, dict):
            logging.error(f"Unexpected error response: HTTP {response.status_code}, body: {str(error_data)[:500]}")
            raise WeatherFetchFailed(f"HTTP {response.status_code}: {str(error_data)[:200]}")

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise WeatherFetchFailed(f"OpenWeather API error {cod}: {message}")
