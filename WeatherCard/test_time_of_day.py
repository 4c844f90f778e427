"""Tests for time-of-day classification."""
import pytest
from weather_data import TimeOfDay, WeatherSnapshot
from time_of_day import (
    EVENING_WINDOW_SECONDS,
    MORNING_WINDOW_SECONDS,
    classify_snapshot,
    classify_time_of_day,
)

SUNRISE = 1700000000
SUNSET = 1700030000  # 8h20m of daylight
HOUR = 60 * 60


def test_window_constants():
    assert MORNING_WINDOW_SECONDS == 4 * HOUR
    assert EVENING_WINDOW_SECONDS == 2 * HOUR


@pytest.mark.parametrize("now, expected", [
    (SUNRISE, TimeOfDay.MORNING),
    (SUNRISE + 4 * HOUR - 1, TimeOfDay.MORNING),
    (SUNRISE + 4 * HOUR, TimeOfDay.AFTERNOON),
    (SUNSET - 2 * HOUR - 1, TimeOfDay.AFTERNOON),
    (SUNSET - 2 * HOUR, TimeOfDay.EVENING),
    (SUNSET - 1, TimeOfDay.EVENING),
    (SUNSET, TimeOfDay.NIGHT),
    (SUNSET + 6 * HOUR, TimeOfDay.NIGHT),
    (SUNRISE - 1, TimeOfDay.NIGHT),
])
def test_boundaries(now, expected):
    """Intervals are half-open: each window includes its start, excludes its end."""
    assert classify_time_of_day(SUNRISE, SUNSET, now) is expected


def test_fractional_now():
    """Wall-clock time is read as a float."""
    assert classify_time_of_day(SUNRISE, SUNSET, SUNRISE - 0.5) is TimeOfDay.NIGHT
    assert classify_time_of_day(SUNRISE, SUNSET, SUNSET - 0.001) is TimeOfDay.EVENING


def test_pure_function():
    """Same inputs always give the same bucket."""
    now = SUNRISE + 5 * HOUR
    results = {classify_time_of_day(SUNRISE, SUNSET, now) for _ in range(5)}
    assert results == {TimeOfDay.AFTERNOON}


def test_every_minute_of_a_day_has_a_bucket():
    for now in range(SUNRISE - 12 * HOUR, SUNSET + 12 * HOUR, 60):
        assert classify_time_of_day(SUNRISE, SUNSET, now) in set(TimeOfDay)


def test_short_day_never_afternoon():
    """When sunset - 2h falls before sunrise + 4h the afternoon window is empty."""
    sunrise = 1700000000
    sunset = sunrise + 5 * HOUR

    buckets = {
        classify_time_of_day(sunrise, sunset, now)
        for now in range(sunrise - HOUR, sunset + HOUR, 60)
    }

    assert TimeOfDay.AFTERNOON not in buckets


def test_short_day_overlap_goes_to_morning_first():
    """Overlapping morning and evening windows resolve by test order."""
    sunrise = 1700000000
    sunset = sunrise + 5 * HOUR
    # sunset - 2h = sunrise + 3h, still inside the morning window
    assert classify_time_of_day(sunrise, sunset, sunrise + 3 * HOUR) is TimeOfDay.MORNING
    # Past the morning window the evening test catches it
    assert classify_time_of_day(sunrise, sunset, sunrise + 4 * HOUR) is TimeOfDay.EVENING
    assert classify_time_of_day(sunrise, sunset, sunset) is TimeOfDay.NIGHT


def test_very_short_day_morning_then_night():
    """A day shorter than the evening window is morning until sunset, then night."""
    sunrise = 1700000000
    sunset = sunrise + HOUR
    assert classify_time_of_day(sunrise, sunset, sunrise + 30 * 60) is TimeOfDay.MORNING
    # Inside the morning window but after sunset: morning is tested first
    assert classify_time_of_day(sunrise, sunset, sunset + 60) is TimeOfDay.MORNING
    assert classify_time_of_day(sunrise, sunset, sunrise + 4 * HOUR) is TimeOfDay.NIGHT


def test_classify_snapshot():
    snapshot = WeatherSnapshot(
        city="Pune",
        temp=24.0,
        temp_min=22.0,
        temp_max=26.0,
        pressure=1012,
        wind_speed=3.1,
        icon="01d",
        condition_main="Clear",
        condition_description="clear sky",
        sunrise=SUNRISE,
        sunset=SUNSET,
    )
    assert classify_snapshot(snapshot, SUNRISE) is TimeOfDay.MORNING
