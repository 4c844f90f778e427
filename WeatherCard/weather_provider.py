"""Provider abstractions - allows swapping the weather and geolocation APIs."""
from abc import ABC, abstractmethod
from typing import Optional
from weather_data import WeatherSnapshot


class WeatherProviderBase(ABC):
    """Abstract base class for current-weather providers."""

    @abstractmethod
    def get_current(self, city: str) -> WeatherSnapshot:
        """
        Fetch current weather for a city.

        Args:
            city: City name as typed by the user or found by geolocation

        Returns:
            WeatherSnapshot: Current weather information

        Raises:
            WeatherFetchFailed: If the provider fails to fetch data
        """
        pass


class LocationProviderBase(ABC):
    """Abstract base class for caller-location lookups."""

    @abstractmethod
    def get_city(self) -> Optional[str]:
        """
        Look up the caller's city.

        Returns:
            The city name, or None if the lookup had no city

        Raises:
            LocationLookupFailed: If the lookup itself fails
        """
        pass


class WeatherProviderError(Exception):
    """Base exception for provider failures."""
    pass


class WeatherFetchFailed(WeatherProviderError):
    """Raised when current weather could not be fetched or parsed."""
    pass


class LocationLookupFailed(WeatherProviderError):
    """Raised when the caller's location could not be looked up."""
    pass
