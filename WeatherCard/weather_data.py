"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from enum import Enum


class TimeOfDay(str, Enum):
    """Coarse time-of-day bucket; the value doubles as the background asset name."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Result of one successful current-weather fetch."""
    city: str
    temp: float  # °C
    temp_min: float
    temp_max: float
    pressure: int  # hPa
    wind_speed: float  # m/s
    icon: str  # e.g., "04d"
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    condition_description: str  # e.g., "broken clouds", "light rain"
    sunrise: int  # UNIX timestamp (UTC)
    sunset: int  # UNIX timestamp (UTC)

    def daylight_seconds(self) -> int:
        """Length of the day between sunrise and sunset."""
        return self.sunset - self.sunrise
