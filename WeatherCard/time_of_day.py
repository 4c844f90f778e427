"""Time-of-day classification from sunrise/sunset timestamps."""
from weather_data import TimeOfDay, WeatherSnapshot

MORNING_WINDOW_SECONDS = 4 * 60 * 60
EVENING_WINDOW_SECONDS = 2 * 60 * 60


def classify_time_of_day(sunrise: int, sunset: int, now: float) -> TimeOfDay:
    """
    Assign a time-of-day bucket.

    The intervals are half-open and tested in order. On very short days the
    afternoon window is empty or inverted; anything not caught by the first
    three tests is night.

    Args:
        sunrise: Sunrise as UNIX seconds
        sunset: Sunset as UNIX seconds
        now: Current time as UNIX seconds

    Returns:
        TimeOfDay: The bucket for ``now``
    """
    if sunrise <= now < sunrise + MORNING_WINDOW_SECONDS:
        return TimeOfDay.MORNING
    elif sunrise + MORNING_WINDOW_SECONDS <= now < sunset - EVENING_WINDOW_SECONDS:
        return TimeOfDay.AFTERNOON
    elif sunset - EVENING_WINDOW_SECONDS <= now < sunset:
        return TimeOfDay.EVENING
    else:
        return TimeOfDay.NIGHT


def classify_snapshot(snapshot: WeatherSnapshot, now: float) -> TimeOfDay:
    return classify_time_of_day(snapshot.sunrise, snapshot.sunset, now)
